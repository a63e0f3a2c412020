from __future__ import annotations

from pokecatalog.models.catalog import Entry, Listing, ListingItem, Page
from pokecatalog.models.state import BulkAccumulator, BulkStatus, PagedViewState, SearchState
from pokecatalog.models.view import CatalogView

__all__ = [
    # catalog
    "Entry",
    "Page",
    "Listing",
    "ListingItem",
    # state
    "PagedViewState",
    "BulkAccumulator",
    "BulkStatus",
    "SearchState",
    # view
    "CatalogView",
]
