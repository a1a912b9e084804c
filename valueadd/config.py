from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SECTION_TITLES = (
    'Key Commercial Strengths,'
    'Potential Markets & Sectors to Target,'
    'Ideal Company Profile,'
    'Where You Can Add Value,'
    'Example Outreach Message,'
    'LinkedIn Profile Feedback,'
    'Your Potential Impact,'
    'Final Thoughts'
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
        populate_by_name=True,
    )

    app_name: str = 'Value Add Report Service'
    brand_name: str = 'GetBoardwise'

    # Report content generation
    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices('OPENAI_API_KEY', 'API_KEY', 'LLM_API_KEY'),
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices('BASE_URL', 'OPENAI_BASE_URL', 'LLM_BASE_URL'),
    )
    report_model: str = 'o4-mini'
    report_max_completion_tokens: int | None = None
    llm_timeout_seconds: int = 120
    max_resume_chars_to_model: int = 20000

    # Comma-separated, in the order the sections must appear
    report_section_titles: str = DEFAULT_SECTION_TITLES

    # Google Drive upload
    google_drive_access_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices('GOOGLE_DRIVE_ACCESS_TOKEN', 'GOOGLE_ACCESS_TOKEN'),
    )
    google_drive_folder_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices('GOOGLE_DRIVE_FOLDER_ID', 'FOLDER_ID'),
    )
    drive_timeout_seconds: int = 60

    # HubSpot upload
    hubspot_access_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices('HUBSPOT_ACCESS_TOKEN', 'HUBSPOT_API_KEY'),
    )
    hubspot_base_url: str = 'https://api.hubapi.com'
    hubspot_folder_path: str = '/value-add-reports'
    hubspot_create_missing_contact: bool = True
    hubspot_timeout_seconds: int = 60

    # PDF export
    pdf_logo_path: Path | None = None
    pdf_background_color: str = '#0D4026'
    pdf_accent_color: str = '#F2CC33'
    pdf_text_color: str = '#FFFFFF'
    pdf_footer_enabled: bool = True
    pdf_producer: str = 'GetBoardwise Value Add Reports'

    # Optional local copy of every generated report
    output_dir: Path | None = None

    server_host: str = '0.0.0.0'
    server_port: int = 8888
    log_level: str = 'INFO'

    def section_titles(self) -> list[str]:
        titles: list[str] = []
        for item in self.report_section_titles.split(','):
            normalized = item.strip()
            if not normalized:
                continue
            titles.append(normalized)
        return titles

    @property
    def drive_configured(self) -> bool:
        return bool(self.google_drive_access_token and self.google_drive_folder_id)

    @property
    def hubspot_configured(self) -> bool:
        return bool(self.hubspot_access_token)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    if settings.output_dir is not None:
        settings.output_dir.mkdir(parents=True, exist_ok=True)
    return settings
