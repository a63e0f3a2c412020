"""Mutable per-session state containers.

Each container has exactly one writer: ``PagedViewState`` is written by the
paged view cache, ``BulkAccumulator`` by the bulk prefetcher and
``SearchState`` by the search synchronizer. Everything else only reads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

from pokecatalog.errors import CatalogError, ErrorCode

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pokecatalog.models.catalog import Entry, Page


class BulkStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    ABORTED = "aborted"
    DROPPED = "dropped"  # Session ended while the run was in flight


@dataclass
class PagedViewState:
    """Pages loaded on demand for infinite scroll, in fetch order."""

    pages: list[Page] = field(default_factory=list)
    next_offset: int = 0
    in_flight: bool = False
    has_more: bool = True
    error: CatalogError | None = None

    @property
    def status(self) -> Literal["idle", "loading", "error", "exhausted"]:
        if self.in_flight:
            return "loading"
        if self.error is not None:
            return "error"
        if not self.has_more:
            return "exhausted"
        return "idle"

    def iter_entries(self) -> Iterator[Entry]:
        for page in self.pages:
            yield from page.entries


@dataclass
class BulkAccumulator:
    """Background-fetched dataset used exclusively for search."""

    entries: list[Entry] = field(default_factory=list)
    total_target: int = 0
    status: BulkStatus = BulkStatus.PENDING
    error: CatalogError | None = None

    @property
    def complete(self) -> bool:
        return self.status is BulkStatus.COMPLETE

    def incomplete_error(self) -> CatalogError | None:
        """Describe a run that stopped short of its target, or ``None``."""
        if self.status not in (BulkStatus.ABORTED, BulkStatus.DROPPED):
            return None
        return CatalogError(
            code=ErrorCode.BULK_INCOMPLETE,
            message=(
                f"Background load stopped after {len(self.entries)} of "
                f"{self.total_target} entries"
            ),
            suggestion="Search results may be partial until the session is restarted.",
            recoverable=True,
        )


@dataclass
class SearchState:
    raw_text: str = ""
    committed_text: str = ""
    composing: bool = False
