from __future__ import annotations

import base64
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str
    email: str
    linkedin_url: str | None = Field(default=None, alias='linkedinURL')
    resume_text: str | None = Field(default=None, alias='resumeText')
    # base64 (or data URL) encoded resume PDF
    resume_pdf: str | None = Field(default=None, alias='resumePdf')

    @field_validator('name', 'email')
    @classmethod
    def _required(cls, value: str) -> str:
        if not value:
            raise ValueError('must not be empty')
        return value

    @field_validator('linkedin_url', 'resume_text', 'resume_pdf')
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode='after')
    def _profile_source(self) -> 'ReportRequest':
        if not (self.linkedin_url or self.resume_text or self.resume_pdf):
            raise ValueError('one of linkedinURL, resumeText or resumePdf is required')
        return self


class DriveUpload(BaseModel):
    id: str
    link: str | None = None


class CrmUpload(BaseModel):
    id: str
    contact_id: str | None = None
    note_id: str | None = None


class ReportResult(BaseModel):
    file_name: str
    pdf_bytes: bytes = Field(repr=False)
    page_count: int
    drive: DriveUpload | None = None
    crm: CrmUpload | None = None
    local_path: str | None = None
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def pdf_base64(self) -> str:
        return base64.b64encode(self.pdf_bytes).decode('ascii')

    def to_payload(self) -> dict:
        return {
            'message': 'Report generated successfully',
            'fileName': self.file_name,
            'pageCount': self.page_count,
            'driveFileId': self.drive.id if self.drive else None,
            'driveLink': self.drive.link if self.drive else None,
            'hubspotFileId': self.crm.id if self.crm else None,
            'base64PDF': self.pdf_base64,
        }
