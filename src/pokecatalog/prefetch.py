"""Background bulk prefetch of the whole catalog, used for search.

The run is one-shot and strictly sequential: batch N+1 is never requested
before batch N has been appended. Failures abort the run without raising;
search keeps working over whatever was accumulated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from pokecatalog.errors import CatalogError
from pokecatalog.models.state import BulkAccumulator, BulkStatus

if TYPE_CHECKING:
    from collections.abc import Callable

    from pokecatalog.fetcher import CatalogPageFetcher
    from pokecatalog.protocols import CatalogSourceProtocol

log = structlog.get_logger()


class BulkPrefetcher:
    """Sole writer of a ``BulkAccumulator``."""

    def __init__(
        self,
        source: CatalogSourceProtocol,
        fetcher: CatalogPageFetcher,
        batch_size: int = 100,
        max_total: int = 1025,
        is_alive: Callable[[], bool] | None = None,
    ) -> None:
        self._source = source
        self._fetcher = fetcher
        self._batch_size = batch_size
        self._max_total = max_total
        self._is_alive = is_alive or (lambda: True)
        self._started = False
        self.accumulator = BulkAccumulator()

    async def run(self) -> BulkAccumulator:
        """Fill the accumulator once.

        ``CatalogError`` aborts the run without raising. Anything else marks the
        run aborted and propagates.
        """
        if self._started:
            raise RuntimeError("BulkPrefetcher.run() may only be called once per session")
        self._started = True

        acc = self.accumulator
        acc.status = BulkStatus.RUNNING
        try:
            reported = await self._source.count()
            if not self._is_alive():
                return self._drop()
            acc.total_target = min(reported, self._max_total)
            log.info("bulk_prefetch_started", reported=reported, total_target=acc.total_target)

            offset = 0
            while len(acc.entries) < acc.total_target:
                limit = min(self._batch_size, acc.total_target - len(acc.entries))
                page = await self._fetcher.fetch_page(offset, limit)
                if not self._is_alive():
                    return self._drop()

                acc.entries.extend(page.entries)
                offset += limit
                log.debug(
                    "bulk_batch_appended",
                    offset=page.offset,
                    received=len(page.entries),
                    accumulated=len(acc.entries),
                )
                if not page.has_more or not page.entries:
                    break
        except CatalogError as exc:
            acc.status = BulkStatus.ABORTED
            acc.error = exc
            log.warning(
                "bulk_prefetch_aborted",
                code=exc.code.value,
                accumulated=len(acc.entries),
                total_target=acc.total_target,
                error=exc.message,
            )
            return acc
        except BaseException:
            acc.status = BulkStatus.ABORTED
            raise

        acc.status = BulkStatus.COMPLETE
        log.info("bulk_prefetch_complete", accumulated=len(acc.entries))
        return acc

    def _drop(self) -> BulkAccumulator:
        self.accumulator.status = BulkStatus.DROPPED
        log.info("bulk_prefetch_dropped", accumulated=len(self.accumulator.entries))
        return self.accumulator
