"""Shared fixtures for valueadd tests."""

from __future__ import annotations

import pytest

from valueadd.config import Settings
from valueadd.report.styles import LayoutGeometry, ReportStyles
from tests.fakes.fake_canvas import FakeCanvas


SECTION_TITLES = [
    'Key Commercial Strengths',
    'Potential Markets & Sectors to Target',
    'Ideal Company Profile',
    'Where You Can Add Value',
    'Example Outreach Message',
    'LinkedIn Profile Feedback',
    'Your Potential Impact',
    'Final Thoughts',
]


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with every integration switched off."""
    return Settings(
        openai_api_key=None,
        google_drive_access_token=None,
        google_drive_folder_id=None,
        hubspot_access_token=None,
        pdf_logo_path=None,
        output_dir=tmp_path / 'reports',
    )


@pytest.fixture
def section_titles() -> list[str]:
    return list(SECTION_TITLES)


@pytest.fixture
def fake_canvas() -> FakeCanvas:
    return FakeCanvas()


@pytest.fixture
def geometry() -> LayoutGeometry:
    return LayoutGeometry()


@pytest.fixture
def styles() -> ReportStyles:
    return ReportStyles()
