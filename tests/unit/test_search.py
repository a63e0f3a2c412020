"""Unit tests for pokecatalog.search."""

from __future__ import annotations

from fakes import make_entry

from pokecatalog.models.catalog import Page
from pokecatalog.models.state import BulkAccumulator, PagedViewState
from pokecatalog.search import SearchSynchronizer, derive_visible_list, is_search_active

# The two-page paged cache used throughout: ids 1, 2 | 3.
PAGED = PagedViewState(
    pages=[
        Page(entries=(make_entry(1, "Bulba"), make_entry(2, "Charmander")), has_more=True),
        Page(entries=(make_entry(3, "Squirtle"),), has_more=True, offset=2),
    ],
    next_offset=4,
)

BULK = BulkAccumulator(
    entries=[
        make_entry(1, "Bulba"),
        make_entry(2, "Charmander"),
        make_entry(3, "Squirtle"),
        make_entry(150, "Mewtwo"),
        make_entry(151, "Mew"),
    ],
    total_target=5,
)


def _ids(entries) -> list[str]:
    return [e.id for e in entries]


# ---------------------------------------------------------------------------
# derive_visible_list
# ---------------------------------------------------------------------------


class TestDeriveVisibleList:
    def test_empty_text_shows_paged_cache(self) -> None:
        assert _ids(derive_visible_list("", PAGED, BULK)) == ["1", "2", "3"]

    def test_whitespace_text_is_empty(self) -> None:
        assert _ids(derive_visible_list("   ", PAGED, BULK)) == ["1", "2", "3"]

    def test_search_draws_from_bulk(self) -> None:
        assert _ids(derive_visible_list("char", PAGED, BULK)) == ["2"]

    def test_search_finds_entries_not_yet_paged(self) -> None:
        assert _ids(derive_visible_list("mew", PAGED, BULK)) == ["150", "151"]

    def test_case_insensitive_and_trimmed(self) -> None:
        assert _ids(derive_visible_list("  CHAR ", PAGED, BULK)) == ["2"]

    def test_substring_anywhere(self) -> None:
        assert _ids(derive_visible_list("rtl", PAGED, BULK)) == ["3"]

    def test_canonical_name_not_matched(self) -> None:
        bulk = BulkAccumulator(entries=[make_entry(25, "ピカチュウ", canonical_name="pikachu")])
        assert derive_visible_list("pika", PAGED, bulk) == []

    def test_catalog_number_not_matched(self) -> None:
        assert derive_visible_list("150", PAGED, BULK) == []

    def test_japanese_substring(self) -> None:
        bulk = BulkAccumulator(
            entries=[
                make_entry(6, "リザードン"),
                make_entry(5, "リザード"),
                make_entry(4, "ヒトカゲ"),
            ]
        )
        assert _ids(derive_visible_list("リザ", PAGED, bulk)) == ["5", "6"]

    def test_sorted_by_numeric_value_not_string(self) -> None:
        bulk = BulkAccumulator(
            entries=[
                make_entry(1000, "Gholdengo"),
                make_entry(99, "Kingler"),
                make_entry(250, "Ho-Oh"),
            ]
        )
        # "1000" < "099" as strings, but numeric order wins.
        assert _ids(derive_visible_list("o", PAGED, bulk)) == ["250", "1000"]
        assert _ids(derive_visible_list("g", PAGED, bulk)) == ["99", "1000"]

    def test_equal_numbers_keep_accumulator_order(self) -> None:
        first = make_entry(7, "Squirtle", canonical_name="squirtle-a")
        second = make_entry(7, "Squirtle", canonical_name="squirtle-b")
        bulk = BulkAccumulator(entries=[make_entry(9, "Squirtle"), first, second])
        visible = derive_visible_list("squirt", PAGED, bulk)
        assert [e.canonical_name for e in visible] == ["squirtle-a", "squirtle-b", "mon-9"]

    def test_empty_bulk_while_searching(self) -> None:
        assert derive_visible_list("char", PAGED, BulkAccumulator()) == []

    def test_paged_duplicates_not_removed(self) -> None:
        dup = PagedViewState(
            pages=[
                Page(entries=(make_entry(1, "a"),), has_more=True),
                Page(entries=(make_entry(1, "a"),), has_more=False),
            ]
        )
        assert _ids(derive_visible_list("", dup, BULK)) == ["1", "1"]

    def test_membership_matches_predicate(self) -> None:
        for text in ["m", "ew", "SQ", "x", "a"]:
            needle = text.strip().lower()
            visible = derive_visible_list(text, PAGED, BULK)
            expected = {e.id for e in BULK.entries if needle in e.display_name.lower()}
            assert {e.id for e in visible} == expected
            values = [e.sequence_value for e in visible]
            assert values == sorted(values)


# ---------------------------------------------------------------------------
# SearchSynchronizer
# ---------------------------------------------------------------------------


class TestSearchSynchronizer:
    def test_scenario_mode_switch(self) -> None:
        sync = SearchSynchronizer()
        assert _ids(sync.visible(PAGED, BULK)) == ["1", "2", "3"]
        sync.on_commit("char")
        assert _ids(sync.visible(PAGED, BULK)) == ["2"]
        sync.on_commit("")
        assert _ids(sync.visible(PAGED, BULK)) == ["1", "2", "3"]

    def test_plain_input_commits(self) -> None:
        sync = SearchSynchronizer()
        sync.on_raw_input("mew")
        assert sync.state.raw_text == "mew"
        assert sync.committed_text == "mew"
        assert sync.is_searching is True

    def test_composition_does_not_commit_until_end(self) -> None:
        sync = SearchSynchronizer()
        sync.on_composition_start()
        sync.on_raw_input("り")
        sync.on_raw_input("りざ")
        assert sync.state.raw_text == "りざ"
        assert sync.committed_text == ""
        assert _ids(sync.visible(PAGED, BULK)) == ["1", "2", "3"]

        sync.on_composition_end("リザ")
        assert sync.state.composing is False
        assert sync.committed_text == "リザ"

    def test_scroll_reset_fires_once_per_new_search(self) -> None:
        resets: list[None] = []
        sync = SearchSynchronizer(on_scroll_reset=lambda: resets.append(None))

        sync.on_raw_input("c")
        sync.on_raw_input("ch")
        sync.on_raw_input("cha")
        assert len(resets) == 1

        sync.on_raw_input("")
        assert len(resets) == 1

        sync.on_raw_input("m")
        assert len(resets) == 2

    def test_whitespace_only_does_not_start_search(self) -> None:
        resets: list[None] = []
        sync = SearchSynchronizer(on_scroll_reset=lambda: resets.append(None))
        sync.on_commit("   ")
        assert sync.is_searching is False
        assert resets == []
        sync.on_commit("  a")
        assert len(resets) == 1

    def test_composition_end_starts_search(self) -> None:
        resets: list[None] = []
        sync = SearchSynchronizer(on_scroll_reset=lambda: resets.append(None))
        sync.on_composition_start()
        sync.on_raw_input("ぴ")
        assert resets == []
        sync.on_composition_end("ピ")
        assert len(resets) == 1


class TestIsSearchActive:
    def test_values(self) -> None:
        assert is_search_active("a") is True
        assert is_search_active(" a ") is True
        assert is_search_active("") is False
        assert is_search_active("\t ") is False
