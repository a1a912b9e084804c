from __future__ import annotations

from dataclasses import dataclass, field


FONT_REGULAR = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'

# A4 in points
PAGE_WIDTH = 595.28
PAGE_HEIGHT = 841.89

BACKGROUND_COLOR = '#0D4026'
ACCENT_COLOR = '#F2CC33'
TEXT_COLOR = '#FFFFFF'
FOOTER_COLOR = '#A7C4B5'
LOGO_BACKDROP_COLOR = '#FFFFFF'

PLACEHOLDER_TEXT = 'Content for this section will be added.'
BULLET_GLYPH = '•'


@dataclass(frozen=True)
class StyleSpec:
    font_size: float
    bold: bool = False
    color: str = TEXT_COLOR
    line_height: float = 1.3

    @property
    def font_name(self) -> str:
        return FONT_BOLD if self.bold else FONT_REGULAR

    @property
    def leading(self) -> float:
        return self.font_size * self.line_height


@dataclass(frozen=True)
class ReportStyles:
    title: StyleSpec = field(default_factory=lambda: StyleSpec(16, bold=True, color=ACCENT_COLOR, line_height=1.5))
    header: StyleSpec = field(default_factory=lambda: StyleSpec(14, bold=True, color=ACCENT_COLOR, line_height=1.3))
    intro: StyleSpec = field(default_factory=lambda: StyleSpec(11, color=TEXT_COLOR, line_height=1.2))
    body: StyleSpec = field(default_factory=lambda: StyleSpec(11, color=TEXT_COLOR, line_height=1.3))
    bullet: StyleSpec = field(default_factory=lambda: StyleSpec(11, bold=True, color=ACCENT_COLOR, line_height=1.3))
    footer: StyleSpec = field(default_factory=lambda: StyleSpec(8, color=FOOTER_COLOR, line_height=1.0))


def build_styles(*, accent_color: str = ACCENT_COLOR, text_color: str = TEXT_COLOR) -> ReportStyles:
    return ReportStyles(
        title=StyleSpec(16, bold=True, color=accent_color, line_height=1.5),
        header=StyleSpec(14, bold=True, color=accent_color, line_height=1.3),
        intro=StyleSpec(11, color=text_color, line_height=1.2),
        body=StyleSpec(11, color=text_color, line_height=1.3),
        bullet=StyleSpec(11, bold=True, color=accent_color, line_height=1.3),
    )


@dataclass(frozen=True)
class LayoutGeometry:
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    left_margin: float = 60
    right_margin: float = 60
    top_margin: float = 60
    bottom_margin: float = 60

    salutation_gap: float = 20
    intro_gap: float = 30
    header_gap: float = 20
    section_gap: float = 40
    paragraph_gap: float = 6
    bullet_indent: float = 15
    # a cursor below this y after a section starts the next one on a new page
    section_break_y: float = 200

    logo_width: float = 150
    logo_height: float = 150
    logo_top_offset: float = 220
    logo_padding: float = 25
    logo_gap: float = 50
    top_offset_without_logo: float = 100
    footer_y: float = 30

    @property
    def content_width(self) -> float:
        return self.page_width - self.left_margin - self.right_margin

    @property
    def usable_height(self) -> float:
        return self.page_height - self.top_margin - self.bottom_margin
