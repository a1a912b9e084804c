"""Tests for request and result models."""

from __future__ import annotations

import base64

import pytest
from pydantic import ValidationError

from valueadd.types import DriveUpload, ReportRequest, ReportResult


class TestReportRequest:
    def test_aliases_and_stripping(self) -> None:
        request = ReportRequest.model_validate(
            {'name': ' Jane Doe ', 'email': 'jane@example.com', 'linkedinURL': ' https://linkedin.com/in/jane '}
        )
        assert request.name == 'Jane Doe'
        assert request.linkedin_url == 'https://linkedin.com/in/jane'
        assert request.resume_text is None

    def test_requires_a_profile_source(self) -> None:
        with pytest.raises(ValidationError):
            ReportRequest.model_validate({'name': 'Jane', 'email': 'jane@example.com', 'linkedinURL': '  '})

    def test_field_names_are_accepted(self) -> None:
        request = ReportRequest(name='Jane', email='jane@example.com', resume_text='CRO')
        assert request.resume_text == 'CRO'


def test_result_payload() -> None:
    result = ReportResult(
        file_name='Jane_Value_Add_Report_1.pdf',
        pdf_bytes=b'%PDF-1.4',
        page_count=3,
        drive=DriveUpload(id='d1', link='https://drive.test/d1'),
    )
    payload = result.to_payload()

    assert payload['fileName'] == 'Jane_Value_Add_Report_1.pdf'
    assert payload['pageCount'] == 3
    assert payload['driveFileId'] == 'd1'
    assert payload['driveLink'] == 'https://drive.test/d1'
    assert payload['hubspotFileId'] is None
    assert base64.b64decode(payload['base64PDF']) == b'%PDF-1.4'
