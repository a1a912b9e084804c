from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from valueadd.errors import FatalConstructionError, MissingAssetError, RecoverableRenderError
from valueadd.report.canvas import PdfCanvas, ReportLabCanvas
from valueadd.report.flow import Page, PageFlow, ReportDocument
from valueadd.report.sanitize import sanitize
from valueadd.report.sections import BulletItem, ExtractedSection, extract_sections, strip_emphasis, structure
from valueadd.report.styles import (
    BACKGROUND_COLOR,
    BULLET_GLYPH,
    LOGO_BACKDROP_COLOR,
    PLACEHOLDER_TEXT,
    LayoutGeometry,
    ReportStyles,
    StyleSpec,
)
from valueadd.report.wrap import wrap_text


logger = logging.getLogger(__name__)


def _single_line(value: str) -> str:
    return ' '.join(sanitize(value).split())


class ReportLayout:
    def __init__(
        self,
        *,
        canvas: PdfCanvas,
        styles: ReportStyles,
        geometry: LayoutGeometry,
        client_name: str,
        client_email: str,
        logo_path: Path | None = None,
        background: str = BACKGROUND_COLOR,
        footer: bool = True,
    ):
        self.canvas = canvas
        self.styles = styles
        self.geometry = geometry
        self.client_name = client_name
        self.client_email = client_email
        self.logo_path = logo_path
        self.footer = footer
        self.flow = PageFlow(
            canvas,
            geometry,
            background=background,
            on_page_end=self._draw_footer if footer else None,
        )

    def _measure_for(self, style: StyleSpec):
        def measure(text: str, font_size: float) -> float:
            return self.canvas.measure(text, style.font_name, font_size)

        return measure

    def _wrap(self, text: str, style: StyleSpec, max_width: float) -> list[str]:
        return wrap_text(text, self._measure_for(style), style.font_size, max_width)

    def _draw_logo(self) -> bool:
        if self.logo_path is None:
            return False
        g = self.geometry
        logo_x = (self.flow.width - g.logo_width) / 2
        logo_y = self.flow.height - g.logo_top_offset
        try:
            image = self.canvas.load_image(Path(self.logo_path))
            self.canvas.draw_image(
                image,
                logo_x,
                logo_y,
                g.logo_width,
                g.logo_height,
                backdrop=LOGO_BACKDROP_COLOR,
                padding=g.logo_padding,
            )
        except MissingAssetError as exc:
            logger.warning('Proceeding without logo: %s', exc)
            return False
        self.flow.move_to(logo_y - g.logo_gap)
        return True

    def _draw_footer(self, flow: PageFlow, page: Page) -> None:
        text = _single_line(f'Prepared for {self.client_name} ({self.client_email}) | Page {page.number}')
        style = self.styles.footer
        try:
            text_width = self.canvas.measure(text, style.font_name, style.font_size)
            x = max(self.geometry.left_margin, (page.width - text_width) / 2)
        except RecoverableRenderError:
            x = self.geometry.left_margin
        flow.draw_text_at(text, x, self.geometry.footer_y, style)

    def _flow_text(self, text: str, style: StyleSpec, *, x: float | None = None, max_width: float | None = None) -> int:
        left = self.geometry.left_margin if x is None else x
        width = self.geometry.content_width - (left - self.geometry.left_margin) if max_width is None else max_width
        lines = self._wrap(text, style, width)
        for line in lines:
            self.flow.draw_line(line, style, x=left)
        return len(lines)

    def _draw_bullet(self, item: BulletItem) -> None:
        g = self.geometry
        body = self.styles.body
        self.flow.ensure_room(body.leading)
        self.flow.draw_text_at(BULLET_GLYPH, g.left_margin, self.flow.y, self.styles.bullet)
        self._flow_text(item.text, body, x=g.left_margin + g.bullet_indent)

    def _draw_section(self, section: ExtractedSection) -> None:
        g = self.geometry
        self._flow_text(section.title, self.styles.header)
        self.flow.advance(g.header_gap)

        blocks = structure(section.raw_content)
        if not blocks:
            logger.info('No content found for section %r; drawing placeholder', section.title)
            self.flow.draw_line(PLACEHOLDER_TEXT, self.styles.body)
            return

        for index, block in enumerate(blocks):
            if index > 0:
                self.flow.advance(g.paragraph_gap)
            if isinstance(block, BulletItem):
                self._draw_bullet(block)
            else:
                self._flow_text(block.text, self.styles.body)

    def build(self, report_text: str, section_titles: Sequence[str]) -> ReportDocument:
        g = self.geometry
        cleaned = sanitize(report_text)
        # titles are matched against sanitized text and drawn in the same form
        titles = [_single_line(title) for title in section_titles]
        sections = extract_sections(cleaned, titles)

        if not self._draw_logo():
            self.flow.move_to(self.flow.height - g.top_offset_without_logo)

        self._flow_text(f'Dear {self.client_name},', self.styles.title)
        self.flow.advance(g.salutation_gap)

        intro = ' '.join(strip_emphasis(sections[0].raw_content).split())
        if intro:
            self._flow_text(intro, self.styles.intro)
        self.flow.advance(g.intro_gap)

        declared = sections[1:]
        for i, section in enumerate(declared):
            self._draw_section(section)
            self.flow.advance(g.section_gap)
            if self.flow.y < g.section_break_y and i < len(declared) - 1:
                self.flow.new_page()

        pages = self.flow.finish()
        content = self.canvas.save()
        logger.info('Laid out report for %s: %s sections on %s pages', self.client_name, len(declared), len(pages))
        return ReportDocument(pages=pages, content=content)


def layout_report(
    client_name: str,
    client_email: str,
    report_text: str,
    section_titles: Iterable[str],
    styles: ReportStyles | None = None,
    *,
    canvas: PdfCanvas | None = None,
    geometry: LayoutGeometry | None = None,
    logo_path: Path | str | None = None,
    background: str = BACKGROUND_COLOR,
    footer: bool = True,
    producer: str | None = None,
) -> ReportDocument:
    """Lay out a generated report into a multi-page PDF document.

    Missing sections and unreadable logos degrade gracefully; any other
    failure is raised as a single ``FatalConstructionError``.
    """
    geometry = geometry or LayoutGeometry()
    name = _single_line(client_name)
    email = _single_line(client_email)
    try:
        if canvas is None:
            canvas = ReportLabCanvas(
                page_size=(geometry.page_width, geometry.page_height),
                title=f'Value Add Report - {name}',
                author=producer,
                subject=f'Prepared for {name} ({email})',
                producer=producer,
            )
        engine = ReportLayout(
            canvas=canvas,
            styles=styles or ReportStyles(),
            geometry=geometry,
            client_name=name,
            client_email=email,
            logo_path=Path(logo_path) if logo_path else None,
            background=background,
            footer=footer,
        )
        return engine.build(report_text, list(section_titles))
    except FatalConstructionError:
        logger.error('PDF construction failed for %s', name)
        raise
    except Exception as exc:
        logger.exception('Error generating PDF for %s', name)
        raise FatalConstructionError(f'Failed to generate PDF: {exc}') from exc


def build_value_add_pdf(
    client_name: str,
    client_email: str,
    report_text: str,
    section_titles: Iterable[str],
    styles: ReportStyles | None = None,
    **kwargs,
) -> bytes:
    return layout_report(client_name, client_email, report_text, section_titles, styles, **kwargs).content
