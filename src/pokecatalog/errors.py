"""Error taxonomy for catalog acquisition.

Every failure the engine knows about is a ``CatalogError`` with a stable
``ErrorCode``. The presentation boundary decides how to render them; the
engine only exposes the code and a status flag.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    SOURCE_UNAVAILABLE = "SOURCE_UNAVAILABLE"
    DECORATION_FAILED = "DECORATION_FAILED"
    BULK_INCOMPLETE = "BULK_INCOMPLETE"


class CatalogError(Exception):
    """Failure raised by the catalog source, the name decorator, or the page fetcher."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable
