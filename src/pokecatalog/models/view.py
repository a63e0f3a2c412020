from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pokecatalog.errors import ErrorCode
from pokecatalog.models.catalog import Entry
from pokecatalog.models.state import BulkStatus


class CatalogView(BaseModel):
    """Read-only snapshot the presentation layer renders from."""

    model_config = ConfigDict(frozen=True)

    entries: list[Entry]
    searching: bool
    committed_text: str
    match_count: int | None  # Only set while searching
    bulk_entry_count: int
    bulk_status: BulkStatus
    bulk_loading: bool  # Searching, but nothing has been prefetched yet
    has_more: bool
    is_fetching_next: bool
    is_initial_loading: bool
    show_sentinel: bool  # Infinite-scroll sentinel is only rendered outside search
    paged_error: ErrorCode | None = None
