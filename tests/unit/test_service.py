"""Tests for the report service pipeline."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from pypdf import PdfReader

from valueadd.errors import GenerationError, InvalidRequestError
from valueadd.service import ReportService, run_report
from valueadd.types import ReportRequest
from tests.fakes.fake_generator import FakeReportGenerator
from tests.fakes.fake_resume import make_pdf_base64
from tests.fakes.fake_sinks import FakeCrmSink, FakeDriveSink


def make_request(**overrides) -> ReportRequest:
    payload = {'name': 'Jane Doe', 'email': 'jane@example.com', 'linkedinURL': 'https://linkedin.com/in/jane'}
    payload.update(overrides)
    return ReportRequest.model_validate(payload)


class TestReportService:
    @pytest.mark.asyncio
    async def test_full_pipeline(self, settings) -> None:
        generator = FakeReportGenerator()
        drive = FakeDriveSink()
        crm = FakeCrmSink()
        service = ReportService(generator, drive=drive, crm=crm, settings=settings)

        result = await service.generate(make_request())

        assert result.file_name.startswith('Jane_Doe_Value_Add_Report_')
        assert result.file_name.endswith('.pdf')
        assert result.pdf_bytes.startswith(b'%PDF')
        assert len(PdfReader(BytesIO(result.pdf_bytes)).pages) == result.page_count

        assert drive.uploads == [(result.file_name, result.pdf_bytes)]
        assert crm.uploads[0]['email'] == 'jane@example.com'
        assert crm.uploads[0]['name'] == 'Jane Doe'
        assert crm.uploads[0]['drive_link'] == 'https://drive.test/drive-1'
        assert result.drive is not None and result.drive.id == 'drive-1'
        assert result.crm is not None and result.crm.id == 'file-9'

        assert result.local_path is not None
        assert Path(result.local_path).read_bytes() == result.pdf_bytes

    @pytest.mark.asyncio
    async def test_prompt_uses_configured_sections_and_profile(self, settings, section_titles) -> None:
        generator = FakeReportGenerator()
        service = ReportService(generator, settings=settings)

        await service.generate(make_request())

        call = generator.calls[0]
        assert 'https://linkedin.com/in/jane' in call['prompt']
        for title in section_titles:
            assert title in call['prompt']
        assert settings.brand_name in call['system']

    @pytest.mark.asyncio
    async def test_without_sinks(self, settings) -> None:
        settings.output_dir = None
        service = ReportService(FakeReportGenerator(), settings=settings)

        result = await service.generate(make_request())

        assert result.drive is None
        assert result.crm is None
        assert result.local_path is None
        payload = result.to_payload()
        assert payload['message'] == 'Report generated successfully'
        assert payload['driveLink'] is None
        assert payload['base64PDF'] == result.pdf_base64

    @pytest.mark.asyncio
    async def test_resume_pdf_is_parsed_into_the_prompt(self, settings) -> None:
        generator = FakeReportGenerator()
        service = ReportService(generator, settings=settings)
        resume = make_pdf_base64(
            ['Jane Doe', 'linkedin.com/in/jane-doe', 'Led Python and AWS teams'],
            data_url=True,
        )

        await service.generate(make_request(linkedinURL=None, resumePdf=resume))

        prompt = generator.calls[0]['prompt']
        assert 'Led Python and AWS teams' in prompt
        assert 'https://www.linkedin.com/in/jane-doe' in prompt
        assert 'Skills detected in the resume: Python, AWS' in prompt

    @pytest.mark.asyncio
    async def test_invalid_resume_pdf(self, settings) -> None:
        service = ReportService(FakeReportGenerator(), settings=settings)
        with pytest.raises(InvalidRequestError):
            await service.generate(make_request(resumePdf='bm90IGEgcGRm'))

    @pytest.mark.asyncio
    async def test_generation_failure_propagates(self, settings) -> None:
        drive = FakeDriveSink()
        service = ReportService(FakeReportGenerator(error=GenerationError('model down')), drive=drive, settings=settings)

        with pytest.raises(GenerationError):
            await service.generate(make_request())
        assert drive.uploads == []

    def test_render_without_model(self, settings) -> None:
        service = ReportService(FakeReportGenerator(), settings=settings)
        document = service.render('Jane Doe', 'jane@example.com', 'Intro only')
        assert document.content.startswith(b'%PDF')
        assert document.pages[0].first_text == 'Dear Jane Doe,'

    def test_run_report_blocks(self, settings) -> None:
        service = ReportService(FakeReportGenerator(), settings=settings)
        result = run_report(service, make_request())
        assert result.page_count >= 1

    def test_from_settings_wires_adapters(self, settings) -> None:
        service = ReportService.from_settings(settings)
        assert service.settings is settings
        assert service.drive is not None and service.drive.configured is False
        assert service.crm is not None and service.crm.configured is False
