"""Per-session wiring of the acquisition engine.

A ``CatalogSession`` owns both accumulators and the detached bulk prefetch
task. When the session closes, the task is not cancelled: its in-flight
request finishes, the result is dropped, and no further batch starts.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Self

import structlog

from pokecatalog.config import Settings
from pokecatalog.decorator import PokeApiNameDecorator
from pokecatalog.fetcher import CatalogPageFetcher
from pokecatalog.log_setup import configure_logging
from pokecatalog.models.view import CatalogView
from pokecatalog.paging import PagedViewCache
from pokecatalog.prefetch import BulkPrefetcher
from pokecatalog.scroll import ScrollTriggerController
from pokecatalog.search import SearchSynchronizer
from pokecatalog.source import PokeApiCatalogSource, build_http_client

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    import httpx

    from pokecatalog.models.catalog import Entry
    from pokecatalog.models.state import BulkAccumulator
    from pokecatalog.protocols import CatalogSourceProtocol, NameDecoratorProtocol

log = structlog.get_logger()


class CatalogSession:
    def __init__(
        self,
        settings: Settings,
        source: CatalogSourceProtocol,
        decorator: NameDecoratorProtocol,
        *,
        http_client: httpx.AsyncClient | None = None,
        on_scroll_reset: Callable[[], None] | None = None,
    ) -> None:
        self.settings = settings
        self._http_client = http_client  # Owned: closed with the session
        self._alive = True
        self._started = False
        self._bulk_task: asyncio.Task[BulkAccumulator] | None = None

        catalog = settings.catalog
        self.fetcher = CatalogPageFetcher(
            source, decorator, decoration_concurrency=catalog.decoration_concurrency
        )
        self.cache = PagedViewCache(
            self.fetcher, page_size=catalog.page_size, is_alive=self.is_alive
        )
        self.prefetcher = BulkPrefetcher(
            source,
            self.fetcher,
            batch_size=catalog.bulk_batch_size,
            max_total=catalog.bulk_max_total,
            is_alive=self.is_alive,
        )
        self.search = SearchSynchronizer(on_scroll_reset=on_scroll_reset)
        self.scroll = ScrollTriggerController(self.cache, self.search)

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        on_scroll_reset: Callable[[], None] | None = None,
    ) -> CatalogSession:
        """Build a session talking to PokeAPI over a session-owned HTTP client.

        Also configures structlog from ``settings.logging``.
        """
        settings = settings or Settings()
        configure_logging(settings.logging)
        client = build_http_client(settings.api)
        return cls(
            settings,
            PokeApiCatalogSource(client),
            PokeApiNameDecorator(
                client,
                language=settings.catalog.language,
                fallback_languages=settings.catalog.fallback_languages,
            ),
            http_client=client,
            on_scroll_reset=on_scroll_reset,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def is_alive(self) -> bool:
        return self._alive

    async def start(self) -> None:
        """Launch the bulk prefetch and load the first page. Idempotent."""
        if self._started:
            return
        if not self._alive:
            raise RuntimeError("Cannot start a closed CatalogSession")
        self._started = True
        log.info("session_started", page_size=self.settings.catalog.page_size)

        self._bulk_task = asyncio.create_task(self.prefetcher.run(), name="bulk-prefetch")
        self._bulk_task.add_done_callback(_log_bulk_crash)
        await self.cache.fetch_next()

    async def close(self) -> None:
        if not self._alive:
            return
        self._alive = False
        log.info("session_closed", pages=len(self.cache.state.pages))
        if self._http_client is not None:
            # In-flight fetches still need the client to settle.
            if self._bulk_task is not None:
                await asyncio.wait({self._bulk_task})
            await self.cache.wait_settled()
            await self._http_client.aclose()

    async def wait_for_bulk(self) -> BulkAccumulator:
        if self._bulk_task is None:
            raise RuntimeError("CatalogSession.start() has not been called")
        return await asyncio.shield(self._bulk_task)

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ------------------------------------------------------------------
    # Boundary signals
    # ------------------------------------------------------------------

    async def near_end(self) -> bool:
        """Viewport-intersection signal from the scroll sentinel."""
        return await self.scroll.on_near_end()

    def raw_input(self, text: str) -> None:
        self.search.on_raw_input(text)

    def composition_start(self) -> None:
        self.search.on_composition_start()

    def composition_end(self, text: str) -> None:
        self.search.on_composition_end(text)

    def commit(self, text: str) -> None:
        self.search.on_commit(text)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def bulk(self) -> BulkAccumulator:
        return self.prefetcher.accumulator

    def visible_entries(self) -> list[Entry]:
        return self.search.visible(self.cache.state, self.bulk)

    def view(self) -> CatalogView:
        paged = self.cache.state
        bulk = self.bulk
        searching = self.search.is_searching
        entries = self.visible_entries()
        return CatalogView(
            entries=entries,
            searching=searching,
            committed_text=self.search.committed_text,
            match_count=len(entries) if searching else None,
            bulk_entry_count=len(bulk.entries),
            bulk_status=bulk.status,
            bulk_loading=searching and not bulk.entries,
            has_more=paged.has_more,
            is_fetching_next=paged.in_flight and bool(paged.pages),
            is_initial_loading=paged.in_flight and not paged.pages,
            paged_error=paged.error.code if paged.error is not None else None,
            show_sentinel=not searching,
        )


def _log_bulk_crash(task: asyncio.Task[BulkAccumulator]) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        log.error("bulk_prefetch_crashed", exc_info=exc)
