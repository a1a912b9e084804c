from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from valueadd.adapters.drive import DriveConfig, GoogleDriveSink
from valueadd.adapters.hubspot import HubSpotConfig, HubSpotSink
from valueadd.adapters.llm import BasicLLMClient, BasicLLMConfig
from valueadd.adapters.resume import parse_resume_base64
from valueadd.config import Settings, get_settings
from valueadd.prompts import build_system_prompt, build_user_prompt
from valueadd.report.layout import layout_report
from valueadd.report.styles import build_styles
from valueadd.storage import report_filename, write_bytes_atomic
from valueadd.types import CrmUpload, DriveUpload, ReportRequest, ReportResult


logger = logging.getLogger(__name__)


class ContentGenerator(Protocol):
    async def generate(self, prompt: str, system_instructions: str) -> str: ...


class DriveSink(Protocol):
    async def upload(self, file_name: str, content: bytes) -> DriveUpload | None: ...


class CrmSink(Protocol):
    async def upload(
        self,
        file_name: str,
        content: bytes,
        *,
        email: str,
        name: str = '',
        drive_link: str | None = None,
    ) -> CrmUpload | None: ...


@dataclass
class ResolvedProfile:
    linkedin_url: str | None
    resume_text: str | None
    skills: list[str]


class ReportService:
    """Generate, lay out and distribute one value add report per request."""

    def __init__(
        self,
        generator: ContentGenerator,
        drive: DriveSink | None = None,
        crm: CrmSink | None = None,
        settings: Settings | None = None,
    ):
        self.generator = generator
        self.drive = drive
        self.crm = crm
        self.settings = settings or get_settings()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> 'ReportService':
        settings = settings or get_settings()
        generator = BasicLLMClient(
            BasicLLMConfig(
                base_url=settings.openai_base_url,
                api_key=settings.openai_api_key,
                model=settings.report_model,
                timeout_seconds=settings.llm_timeout_seconds,
                max_completion_tokens=settings.report_max_completion_tokens,
            )
        )
        drive = GoogleDriveSink(
            DriveConfig(
                access_token=settings.google_drive_access_token,
                folder_id=settings.google_drive_folder_id,
                timeout_seconds=settings.drive_timeout_seconds,
            )
        )
        crm = HubSpotSink(
            HubSpotConfig(
                access_token=settings.hubspot_access_token,
                base_url=settings.hubspot_base_url,
                folder_path=settings.hubspot_folder_path,
                create_missing_contact=settings.hubspot_create_missing_contact,
                timeout_seconds=settings.hubspot_timeout_seconds,
            )
        )
        return cls(generator, drive=drive, crm=crm, settings=settings)

    def resolve_profile(self, request: ReportRequest) -> ResolvedProfile:
        linkedin_url = request.linkedin_url
        resume_text = request.resume_text
        skills: list[str] = []

        if request.resume_pdf:
            parsed = parse_resume_base64(request.resume_pdf)
            resume_text = '\n\n'.join(part for part in (resume_text, parsed.text) if part) or None
            skills = parsed.skills
            if not linkedin_url and parsed.contact.linkedin:
                linkedin_url = f'https://www.{parsed.contact.linkedin}'
                logger.info('Using LinkedIn profile found in resume: %s', linkedin_url)

        return ResolvedProfile(linkedin_url=linkedin_url, resume_text=resume_text, skills=skills)

    async def generate_text(self, request: ReportRequest) -> str:
        profile = self.resolve_profile(request)
        prompt = build_user_prompt(
            name=request.name,
            email=request.email,
            section_titles=self.settings.section_titles(),
            linkedin_url=profile.linkedin_url,
            resume_text=profile.resume_text,
            skills=profile.skills,
            max_resume_chars=self.settings.max_resume_chars_to_model,
        )
        system = build_system_prompt(self.settings.brand_name)
        return await self.generator.generate(prompt, system)

    def render(self, name: str, email: str, report_text: str):
        settings = self.settings
        return layout_report(
            name,
            email,
            report_text,
            settings.section_titles(),
            build_styles(accent_color=settings.pdf_accent_color, text_color=settings.pdf_text_color),
            logo_path=settings.pdf_logo_path,
            background=settings.pdf_background_color,
            footer=settings.pdf_footer_enabled,
            producer=settings.pdf_producer,
        )

    async def generate(self, request: ReportRequest) -> ReportResult:
        logger.info('Generating value add report for %s', request.email)
        report_text = await self.generate_text(request)
        document = self.render(request.name, request.email, report_text)
        pdf_bytes = document.content
        file_name = report_filename(request.name)

        local_path = None
        if self.settings.output_dir is not None:
            local_path = str(write_bytes_atomic(Path(self.settings.output_dir) / file_name, pdf_bytes))
            logger.info('Saved local copy to %s', local_path)

        drive_upload = None
        if self.drive is not None:
            drive_upload = await self.drive.upload(file_name, pdf_bytes)

        crm_upload = None
        if self.crm is not None:
            crm_upload = await self.crm.upload(
                file_name,
                pdf_bytes,
                email=request.email,
                name=request.name,
                drive_link=drive_upload.link if drive_upload else None,
            )

        logger.info('Report %s ready (%s pages, %s bytes)', file_name, document.page_count, len(pdf_bytes))
        return ReportResult(
            file_name=file_name,
            pdf_bytes=pdf_bytes,
            page_count=document.page_count,
            drive=drive_upload,
            crm=crm_upload,
            local_path=local_path,
        )


def run_report(service: ReportService, request: ReportRequest) -> ReportResult:
    return asyncio.run(service.generate(request))
