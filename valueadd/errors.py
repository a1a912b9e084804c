from __future__ import annotations


class ValueAddError(Exception):
    """Base exception for report generation errors."""


class RecoverableRenderError(ValueAddError):
    """A single word or line could not be measured or drawn."""


class MissingAssetError(ValueAddError):
    """An optional asset (the logo) is absent or unreadable."""


class FatalConstructionError(ValueAddError):
    """The PDF could not be constructed or serialized."""


class GenerationError(ValueAddError):
    """The language model call failed or returned no content."""


class UploadError(ValueAddError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class InvalidRequestError(ValueAddError):
    """The report request is missing required fields."""
