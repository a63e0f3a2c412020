"""Unit-specific fixtures (no network I/O)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from pokecatalog.paging import PagedViewCache

if TYPE_CHECKING:
    from pokecatalog.fetcher import CatalogPageFetcher


@pytest.fixture()
def cache(fetcher: CatalogPageFetcher) -> PagedViewCache:
    """Paged view cache over the in-memory fake source, 5 entries per page."""
    return PagedViewCache(fetcher, page_size=5)
