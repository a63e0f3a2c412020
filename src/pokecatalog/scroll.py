"""Scroll-trigger controller: turns near-end signals into page loads."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pokecatalog.paging import PagedViewCache
    from pokecatalog.search import SearchSynchronizer

log = structlog.get_logger()


class ScrollState(StrEnum):
    IDLE = "idle"
    AWAITING_PAGE = "awaiting_page"


class ScrollTriggerController:
    """Requests the next page when the sentinel becomes fully visible.

    Suspended while a search is active: the search list is not cursor-based.
    """

    def __init__(self, cache: PagedViewCache, search: SearchSynchronizer) -> None:
        self._cache = cache
        self._search = search
        self.state = ScrollState.IDLE

    def can_trigger(self) -> bool:
        return (
            self.state is ScrollState.IDLE
            and not self._search.is_searching
            and self._cache.has_more
            and not self._cache.in_flight
        )

    async def on_near_end(self) -> bool:
        """Handle one intersection signal. Returns True if a fetch was issued."""
        if not self.can_trigger():
            return False

        self.state = ScrollState.AWAITING_PAGE
        try:
            await self._cache.fetch_next()
        finally:
            self.state = ScrollState.IDLE
        return True
