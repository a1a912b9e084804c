from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from reportlab.lib.colors import HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas as pdf_canvas

from valueadd.errors import FatalConstructionError, MissingAssetError, RecoverableRenderError
from valueadd.report.styles import PAGE_HEIGHT, PAGE_WIDTH


logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_SUFFIXES = {'.png', '.jpg', '.jpeg'}


@runtime_checkable
class PdfCanvas(Protocol):
    """Drawing surface the layout engine writes to, one page at a time."""

    @property
    def page_size(self) -> tuple[float, float]: ...

    def start_page(self) -> None: ...

    def draw_rect(self, x: float, y: float, width: float, height: float, *, color: str) -> None: ...

    def load_image(self, path: Path) -> Any: ...

    def draw_image(
        self,
        image: Any,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        backdrop: str | None = None,
        padding: float = 0,
    ) -> None: ...

    def measure(self, text: str, font_name: str, font_size: float) -> float: ...

    def draw_text(self, text: str, x: float, y: float, *, font_name: str, font_size: float, color: str) -> None: ...

    def save(self) -> bytes: ...


def _hex(color: str) -> HexColor:
    try:
        return HexColor(color)
    except (TypeError, ValueError):
        return HexColor('#000000')


class ReportLabCanvas:
    """PdfCanvas backed by a reportlab canvas writing into memory."""

    def __init__(
        self,
        *,
        page_size: tuple[float, float] = (PAGE_WIDTH, PAGE_HEIGHT),
        title: str | None = None,
        author: str | None = None,
        subject: str | None = None,
        producer: str | None = None,
    ):
        self._page_size = (float(page_size[0]), float(page_size[1]))
        self._buffer = io.BytesIO()
        self._canvas = pdf_canvas.Canvas(self._buffer, pagesize=self._page_size)
        self._pages_started = 0
        self._saved = False
        if title:
            self._canvas.setTitle(title)
        if author:
            self._canvas.setAuthor(author)
        if subject:
            self._canvas.setSubject(subject)
        if producer:
            self._canvas.setProducer(producer)

    @property
    def page_size(self) -> tuple[float, float]:
        return self._page_size

    def start_page(self) -> None:
        # reportlab opens the first page on construction
        if self._pages_started > 0:
            self._canvas.showPage()
        self._pages_started += 1

    def draw_rect(self, x: float, y: float, width: float, height: float, *, color: str) -> None:
        self._canvas.setFillColor(_hex(color))
        self._canvas.rect(x, y, width, height, stroke=0, fill=1)

    def load_image(self, path: Path) -> ImageReader:
        image_path = Path(path)
        if image_path.suffix.lower() not in SUPPORTED_IMAGE_SUFFIXES:
            raise MissingAssetError(f'Logo file must be PNG or JPG format: {image_path}')
        if not image_path.is_file():
            raise MissingAssetError(f'Logo file not found: {image_path}')
        try:
            reader = ImageReader(str(image_path))
            reader.getSize()
        except Exception as exc:
            raise MissingAssetError(f'Logo file is unreadable: {image_path}: {exc}') from exc
        return reader

    def draw_image(
        self,
        image: Any,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        backdrop: str | None = None,
        padding: float = 0,
    ) -> None:
        """Draw an image, optionally over a filled backdrop.

        Pixel data is decoded before anything is drawn, so an image that
        fails to decode leaves the page untouched.
        """
        try:
            image.getRGBData()
        except Exception as exc:
            raise MissingAssetError(f'Failed to decode image: {exc}') from exc
        if backdrop is not None:
            self.draw_rect(x - padding, y - padding, width + 2 * padding, height + 2 * padding, color=backdrop)
        try:
            self._canvas.drawImage(image, x, y, width=width, height=height, preserveAspectRatio=True, mask='auto')
        except Exception as exc:
            raise MissingAssetError(f'Failed to draw image: {exc}') from exc

    def measure(self, text: str, font_name: str, font_size: float) -> float:
        try:
            return float(pdfmetrics.stringWidth(text, font_name, font_size))
        except Exception as exc:
            raise RecoverableRenderError(f'Cannot measure {text!r} in {font_name}: {exc}') from exc

    def draw_text(self, text: str, x: float, y: float, *, font_name: str, font_size: float, color: str) -> None:
        try:
            self._canvas.setFont(font_name, font_size)
            self._canvas.setFillColor(_hex(color))
            self._canvas.drawString(x, y, text)
        except Exception as exc:
            raise RecoverableRenderError(f'Cannot draw {text!r}: {exc}') from exc

    def save(self) -> bytes:
        if self._saved:
            return self._buffer.getvalue()
        try:
            self._canvas.save()
        except Exception as exc:
            raise FatalConstructionError(f'Failed to serialize PDF: {exc}') from exc
        self._saved = True
        content = self._buffer.getvalue()
        if not content:
            raise FatalConstructionError('PDF serialization produced no bytes')
        logger.debug('Serialized PDF with %s pages (%s bytes)', self._pages_started, len(content))
        return content
