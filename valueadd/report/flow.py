from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from valueadd.errors import RecoverableRenderError
from valueadd.report.canvas import PdfCanvas
from valueadd.report.styles import BACKGROUND_COLOR, LayoutGeometry, StyleSpec


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawnText:
    text: str
    x: float
    y: float
    font_name: str
    font_size: float
    color: str


@dataclass(frozen=True)
class Page:
    number: int
    width: float
    height: float
    background: str
    texts: tuple[DrawnText, ...] = ()

    @property
    def first_text(self) -> str | None:
        return self.texts[0].text if self.texts else None


@dataclass(frozen=True)
class ReportDocument:
    pages: tuple[Page, ...]
    content: bytes

    @property
    def page_count(self) -> int:
        return len(self.pages)


class PageFlow:
    """Moves a write cursor down the current page and opens new pages.

    Exactly one page is open at a time. When the next line would cross the
    bottom margin the open page is finalized and replaced by a fresh one
    with the same background, and the cursor returns to the top margin.
    """

    def __init__(
        self,
        canvas: PdfCanvas,
        geometry: LayoutGeometry | None = None,
        *,
        background: str = BACKGROUND_COLOR,
        on_page_end: Callable[['PageFlow', Page], None] | None = None,
    ):
        self.canvas = canvas
        self.geometry = geometry or LayoutGeometry()
        self.background = background
        self.on_page_end = on_page_end
        self.width, self.height = canvas.page_size
        self._finished: list[Page] = []
        self._texts: list[DrawnText] = []
        self._number = 0
        self._closed = False
        self._open_page()
        self.x = self.geometry.left_margin
        self.y = self.top_y

    @property
    def top_y(self) -> float:
        return self.height - self.geometry.top_margin

    @property
    def page_number(self) -> int:
        return self._number

    @property
    def page(self) -> Page:
        """Snapshot of the open page."""
        return Page(
            number=self._number,
            width=self.width,
            height=self.height,
            background=self.background,
            texts=tuple(self._texts),
        )

    def _open_page(self) -> None:
        self.canvas.start_page()
        self.canvas.draw_rect(0, 0, self.width, self.height, color=self.background)
        self._number = len(self._finished) + 1
        self._texts = []

    def _finalize_page(self) -> None:
        if self.on_page_end is not None:
            self.on_page_end(self, self.page)
        self._finished.append(self.page)

    def new_page(self) -> Page:
        if self._closed:
            raise RuntimeError('PageFlow is already finished')
        self._finalize_page()
        self._open_page()
        self.x = self.geometry.left_margin
        self.y = self.top_y
        logger.debug('Started page %s', self._number)
        return self.page

    def remaining(self) -> float:
        return self.y - self.geometry.bottom_margin

    def ensure_room(self, line_height: float) -> bool:
        """Start a new page if a line of ``line_height`` would not fit."""
        if self.y - line_height < self.geometry.bottom_margin:
            self.new_page()
            return True
        return False

    def advance(self, dy: float) -> None:
        self.y -= dy

    def move_to(self, y: float) -> None:
        self.y = y

    def draw_text_at(self, text: str, x: float, y: float, style: StyleSpec) -> bool:
        try:
            self.canvas.draw_text(
                text,
                x,
                y,
                font_name=style.font_name,
                font_size=style.font_size,
                color=style.color,
            )
        except RecoverableRenderError as exc:
            logger.warning('Skipping undrawable text %r on page %s: %s', text, self._number, exc)
            return False
        self._texts.append(
            DrawnText(
                text=text,
                x=x,
                y=y,
                font_name=style.font_name,
                font_size=style.font_size,
                color=style.color,
            )
        )
        return True

    def draw_line(self, line: str, style: StyleSpec, x: float | None = None) -> None:
        self.ensure_room(style.leading)
        self.draw_text_at(line, self.x if x is None else x, self.y, style)
        self.y -= style.leading

    def finish(self) -> tuple[Page, ...]:
        if not self._closed:
            self._finalize_page()
            self._closed = True
        return tuple(self._finished)
