"""Search synchronization: which entries are visible for the committed text.

Two stages feed the filter. Raw input updates a transient buffer on every
keystroke; only a commit (a plain change, or the end of an IME composition)
promotes it to ``committed_text``, the value the filter observes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from pokecatalog.models.state import SearchState

if TYPE_CHECKING:
    from collections.abc import Callable

    from pokecatalog.models.catalog import Entry
    from pokecatalog.models.state import BulkAccumulator, PagedViewState

log = structlog.get_logger()


def is_search_active(committed_text: str) -> bool:
    return bool(committed_text.strip())


def derive_visible_list(
    committed_text: str,
    paged: PagedViewState,
    bulk: BulkAccumulator,
) -> list[Entry]:
    """Project the visible list from the two accumulators.

    Without a search the paged cache is shown as-is, in fetch order. With a
    search, bulk entries whose localized name contains the needle are shown,
    ordered by catalog number (stable for equal numbers).
    """
    needle = committed_text.strip().lower()
    if not needle:
        return list(paged.iter_entries())

    matches = [entry for entry in bulk.entries if needle in entry.display_name.lower()]
    # sorted() is stable, so equal numbers keep accumulator order.
    return sorted(matches, key=lambda entry: entry.sequence_value)


class SearchSynchronizer:
    """Owns the search input state and the scroll-reset transition."""

    def __init__(self, on_scroll_reset: Callable[[], None] | None = None) -> None:
        self.state = SearchState()
        self._on_scroll_reset = on_scroll_reset
        self._previous_committed = ""

    @property
    def committed_text(self) -> str:
        return self.state.committed_text

    @property
    def is_searching(self) -> bool:
        return is_search_active(self.state.committed_text)

    def on_raw_input(self, text: str) -> None:
        """Keystroke. Outside a composition this is a plain change and commits."""
        self.state.raw_text = text
        if not self.state.composing:
            self._commit(text)

    def on_composition_start(self) -> None:
        self.state.composing = True

    def on_composition_end(self, text: str) -> None:
        self.state.composing = False
        self.state.raw_text = text
        self._commit(text)

    def on_commit(self, text: str) -> None:
        self.state.raw_text = text
        self._commit(text)

    def visible(self, paged: PagedViewState, bulk: BulkAccumulator) -> list[Entry]:
        return derive_visible_list(self.state.committed_text, paged, bulk)

    def _commit(self, text: str) -> None:
        self.state.committed_text = text
        was_searching = is_search_active(self._previous_committed)
        self._previous_committed = text
        if is_search_active(text) and not was_searching:
            log.debug("search_started", text=text.strip())
            if self._on_scroll_reset is not None:
                self._on_scroll_reset()
