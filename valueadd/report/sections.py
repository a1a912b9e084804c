from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Union


BULLET_MARKER = '*'

_BULLET_GLYPHS = ('•', '◦', '▪', '‣', '●', '■', '▸')
_LEADING_CAPTURE_PATTERN = re.compile(r'^(?:\*\*|__)?:?(?:\*\*|__)?[\s:]*')
_TRAILING_HEADING_MARKER_PATTERN = re.compile(
    r'\n[ \t]*(?=[#*_]|\d{1,2}[.)])'
    r'(?:#{1,6}[ \t]*(?:\d{1,2}[.)]?[ \t]*)?|\d{1,2}[.)][ \t]*)?'
    r'(?:\*{1,3}|__)?[ \t]*$'
)
_EMPHASIS_PATTERN = re.compile(r'(\*\*|__)(?=\S)(.+?)(?<=\S)\1')
_LIST_DASH_PATTERN = re.compile(r'(?m)^([ \t]*)[-+](?=[ \t]+\S)')
_INLINE_BULLET_PATTERN = re.compile(r'(?<=\S)[ \t]+\*[ \t]+(?=\S)')


@dataclass(frozen=True)
class ExtractedSection:
    title: str
    raw_content: str

    @property
    def is_introduction(self) -> bool:
        return self.title == ''


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class BulletItem:
    text: str


RenderBlock = Union[Paragraph, BulletItem]


def _clean_captured(value: str, *, after_title: bool = True) -> str:
    content = value
    if after_title:
        # colons and the closing '**' of a bold heading left on the title line
        content = _LEADING_CAPTURE_PATTERN.sub('', content, count=1)
    content = _TRAILING_HEADING_MARKER_PATTERN.sub('', content.rstrip())
    return content.strip()


def extract_sections(text: str, titles: Iterable[str]) -> list[ExtractedSection]:
    """Split report text into an introduction plus one entry per title.

    Titles are located with a plain, case-sensitive substring search that
    only moves forward through the text, so sections are expected in the
    declared order. A title that is not found yields empty content and the
    next title is searched from the same offset.
    """
    source = str(text or '')
    ordered = [str(title) for title in titles]

    intro = ''
    if ordered and ordered[0]:
        first_index = source.find(ordered[0])
        if first_index != -1:
            intro = _clean_captured(source[:first_index], after_title=False)

    extracted = [ExtractedSection(title='', raw_content=intro)]
    offset = 0
    for i, title in enumerate(ordered):
        start = source.find(title, offset) if title else -1
        if start == -1:
            extracted.append(ExtractedSection(title=title, raw_content=''))
            continue

        content_start = start + len(title)
        end = len(source)
        if i < len(ordered) - 1 and ordered[i + 1]:
            next_start = source.find(ordered[i + 1], content_start)
            if next_start != -1:
                end = next_start

        extracted.append(ExtractedSection(title=title, raw_content=_clean_captured(source[content_start:end])))
        offset = end
    return extracted


def strip_emphasis(text: str) -> str:
    return _EMPHASIS_PATTERN.sub(r'\2', str(text or ''))


def _normalize_bullets(raw: str) -> str:
    value = raw
    for glyph in _BULLET_GLYPHS:
        value = value.replace(glyph, BULLET_MARKER)
    value = _LIST_DASH_PATTERN.sub(r'\1' + BULLET_MARKER, value)
    value = strip_emphasis(value)
    return _INLINE_BULLET_PATTERN.sub('\n' + BULLET_MARKER + ' ', value)


def structure(raw_content: str) -> list[RenderBlock]:
    """Turn section content into ordered paragraphs and bullet items."""
    blocks: list[RenderBlock] = []
    for line in _normalize_bullets(str(raw_content or '')).split('\n'):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith(BULLET_MARKER):
            item = stripped[len(BULLET_MARKER):].strip()
            if item:
                blocks.append(BulletItem(item))
            continue
        blocks.append(Paragraph(stripped))
    return blocks
