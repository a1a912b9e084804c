from __future__ import annotations

import base64
import binascii
import logging
import re
from dataclasses import dataclass, field
from io import BytesIO

from pypdf import PdfReader

from valueadd.errors import InvalidRequestError


logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r'^data:application/pdf;base64,', re.IGNORECASE)
_EMAIL = re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b')
_PHONE = re.compile(r'(?:\+\d{1,3}[-.\s]?)?\(?\b\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b')
_LINKEDIN = re.compile(r'linkedin\.com/in/[A-Za-z0-9_-]+', re.IGNORECASE)
_WEBSITE = re.compile(r'(?:https?://)?(?:www\.)?[A-Za-z0-9-]+\.[A-Za-z0-9.-]+', re.IGNORECASE)
_LOCATION = re.compile(
    r'\b(?:located in|location|address|city|country|region)[:\s]+([A-Za-z\s,.-]+?)(?:\.|\n|$)',
    re.IGNORECASE,
)
_SKILLS_SECTION = re.compile(
    r'\b(?:SKILLS|TECHNICAL SKILLS|CORE COMPETENCIES|KEY SKILLS|PROFESSIONAL SKILLS)\b'
    r'([\s\S]*?)(?=\b(?:EXPERIENCE|EDUCATION|PROJECTS|CERTIFICATIONS)\b|$)',
    re.IGNORECASE,
)
_LIST_ITEM = re.compile(r'(?:•|\*|-|,|\n)\s*([A-Za-z0-9 /+#]+?)\s*(?=•|\*|-|,|\n|$)')

_IGNORED_WEBSITE_DOMAINS = ('linkedin.com', 'gmail.com', 'yahoo.com', 'hotmail.com', 'outlook.com')

KNOWN_SKILLS = (
    'JavaScript', 'Python', 'Java', 'C++', 'C#', 'Ruby', 'PHP', 'Swift', 'Kotlin', 'Go', 'Rust', 'TypeScript',
    'HTML', 'CSS', 'React', 'Angular', 'Vue', 'Node.js', 'Express', 'Django', 'Flask', 'Spring', 'ASP.NET',
    'SQL', 'MySQL', 'PostgreSQL', 'MongoDB', 'Oracle', 'SQLite', 'Redis', 'Cassandra', 'DynamoDB',
    'AWS', 'Azure', 'Google Cloud', 'Docker', 'Kubernetes', 'Jenkins', 'Git', 'GitHub', 'GitLab', 'CI/CD',
    'Machine Learning', 'AI', 'Data Science', 'Big Data', 'Hadoop', 'Spark', 'TensorFlow', 'PyTorch',
    'Leadership', 'Communication', 'Teamwork', 'Problem Solving', 'Critical Thinking', 'Project Management',
)
_KNOWN_SKILL_PATTERN = re.compile(
    r'(?<![A-Za-z0-9])(' + '|'.join(re.escape(s) for s in KNOWN_SKILLS) + r')(?![A-Za-z0-9])',
    re.IGNORECASE,
)
_MIN_SECTION_SKILLS = 5


@dataclass
class ContactInfo:
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    website: str | None = None
    location: str | None = None


@dataclass
class ParsedResume:
    text: str
    pages: list[str] = field(default_factory=list)
    contact: ContactInfo = field(default_factory=ContactInfo)
    skills: list[str] = field(default_factory=list)


def decode_base64_pdf(data: str) -> bytes:
    cleaned = _DATA_URL_PREFIX.sub('', str(data or '').strip())
    try:
        content = base64.b64decode(cleaned, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise InvalidRequestError('resumePdf is not valid base64') from exc
    if not content.startswith(b'%PDF'):
        raise InvalidRequestError('resumePdf does not contain a PDF document')
    return content


def extract_text_from_pdf(pdf_bytes: bytes) -> list[str]:
    try:
        reader = PdfReader(BytesIO(pdf_bytes))
        pages = [(page.extract_text() or '').strip() for page in reader.pages]
    except Exception as exc:
        raise InvalidRequestError(f'Could not read resume PDF: {exc}') from exc
    return pages


def extract_contact_info(text: str) -> ContactInfo:
    info = ContactInfo()

    match = _EMAIL.search(text)
    if match:
        info.email = match.group(0)

    match = _PHONE.search(text)
    if match:
        info.phone = match.group(0).strip()

    match = _LINKEDIN.search(text)
    if match:
        info.linkedin = match.group(0)

    for match in _WEBSITE.finditer(text):
        candidate = match.group(0)
        if any(domain in candidate.lower() for domain in _IGNORED_WEBSITE_DOMAINS):
            continue
        # either half of an email address
        if text[match.end():match.end() + 1] == '@' or text[match.start() - 1:match.start()] == '@':
            continue
        info.website = candidate
        break

    match = _LOCATION.search(text)
    if match:
        info.location = match.group(1).strip(' ,') or None

    return info


def extract_skills(text: str) -> list[str]:
    found: dict[str, str] = {}

    def add(skill: str) -> None:
        value = skill.strip()
        if value and value.lower() not in found:
            found[value.lower()] = value

    section = _SKILLS_SECTION.search(text)
    if section:
        body = section.group(1)
        for match in _KNOWN_SKILL_PATTERN.finditer(body):
            add(match.group(1))
        for match in _LIST_ITEM.finditer(body):
            add(match.group(1))

    if len(found) < _MIN_SECTION_SKILLS:
        for match in _KNOWN_SKILL_PATTERN.finditer(text):
            add(match.group(1))

    return list(found.values())


def parse_resume(pdf_bytes: bytes) -> ParsedResume:
    pages = extract_text_from_pdf(pdf_bytes)
    text = '\n'.join(page for page in pages if page)
    parsed = ParsedResume(
        text=text,
        pages=pages,
        contact=extract_contact_info(text),
        skills=extract_skills(text),
    )
    logger.info('Parsed resume: %s pages, %s characters, %s skills', len(pages), len(text), len(parsed.skills))
    return parsed


def parse_resume_base64(data: str) -> ParsedResume:
    return parse_resume(decode_base64_pdf(data))
