"""Append-only page cache backing infinite scroll."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from pokecatalog.errors import CatalogError
from pokecatalog.models.state import PagedViewState

if TYPE_CHECKING:
    from collections.abc import Callable

    from pokecatalog.fetcher import CatalogPageFetcher
    from pokecatalog.models.catalog import Entry

log = structlog.get_logger()


class PagedViewCache:
    """Sole writer of a ``PagedViewState``.

    ``fetch_next()`` is a no-op while a fetch is in flight, so a sentinel
    that reports visibility several times in a row loads one page, not many.
    """

    def __init__(
        self,
        fetcher: CatalogPageFetcher,
        page_size: int = 20,
        is_alive: Callable[[], bool] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._page_size = page_size
        self._is_alive = is_alive or (lambda: True)
        self._settled = asyncio.Event()
        self._settled.set()
        self.state = PagedViewState()

    @property
    def has_more(self) -> bool:
        return self.state.has_more

    @property
    def in_flight(self) -> bool:
        return self.state.in_flight

    def entries(self) -> list[Entry]:
        return list(self.state.iter_entries())

    async def wait_settled(self) -> None:
        """Return once no page fetch is in flight."""
        await self._settled.wait()

    async def fetch_next(self) -> bool:
        """Load the page at ``next_offset``. Returns True if a page was appended."""
        state = self.state
        if state.in_flight or not state.has_more:
            return False

        offset = state.next_offset
        state.in_flight = True
        self._settled.clear()
        try:
            page = await self._fetcher.fetch_page(offset, self._page_size)
        except CatalogError as exc:
            if not self._is_alive():
                log.debug("page_fetch_discarded", offset=offset, code=exc.code.value)
                return False
            state.error = exc
            log.warning("page_fetch_failed", offset=offset, code=exc.code.value, error=exc.message)
            return False
        finally:
            state.in_flight = False
            self._settled.set()

        if not self._is_alive():
            log.debug("page_fetch_discarded", offset=offset)
            return False

        state.pages.append(page)
        state.next_offset = offset + self._page_size
        state.has_more = page.has_more
        state.error = None
        log.info(
            "page_appended",
            offset=offset,
            received=len(page.entries),
            pages=len(state.pages),
            has_more=page.has_more,
        )
        return True
