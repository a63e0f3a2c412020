"""Catalog page fetcher: one listing call plus one decoration per entry."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from pokecatalog.errors import CatalogError, ErrorCode
from pokecatalog.models.catalog import Entry, Page

if TYPE_CHECKING:
    from collections.abc import Sequence

    from pokecatalog.models.catalog import ListingItem
    from pokecatalog.protocols import CatalogSourceProtocol, NameDecoratorProtocol

log = structlog.get_logger()


class CatalogPageFetcher:
    """Produces fully decorated pages.

    A page is all-or-nothing: if any entry fails to decorate, the whole page
    fails with ``DECORATION_FAILED`` and the outstanding decorations for that
    page are cancelled.
    """

    def __init__(
        self,
        source: CatalogSourceProtocol,
        decorator: NameDecoratorProtocol,
        decoration_concurrency: int = 10,
    ) -> None:
        self._source = source
        self._decorator = decorator
        self._concurrency = decoration_concurrency

    async def fetch_page(self, offset: int, limit: int) -> Page:
        listing = await self._source.list(offset, limit)
        names = await self._decorate_all(listing.results)

        entries: list[Entry] = []
        for item, display_name in zip(listing.results, names, strict=True):
            try:
                entries.append(Entry.from_listing_item(item, display_name))
            except ValueError as exc:
                raise CatalogError(
                    code=ErrorCode.SOURCE_UNAVAILABLE,
                    message=f"Malformed catalog entry {item.name!r}: {exc}",
                    recoverable=False,
                ) from exc

        page = Page(entries=tuple(entries), has_more=listing.next is not None, offset=offset)
        log.debug("page_fetched", offset=offset, limit=limit, entries=len(entries))
        return page

    async def _decorate_all(self, items: Sequence[ListingItem]) -> list[str]:
        semaphore = asyncio.Semaphore(self._concurrency)

        async def decorate_one(item: ListingItem) -> str:
            async with semaphore:
                return await self._decorator.decorate(item.name)

        tasks = [asyncio.ensure_future(decorate_one(item)) for item in items]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            # Drain so sibling failures are retrieved rather than reported as unhandled.
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
