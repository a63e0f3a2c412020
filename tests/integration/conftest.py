"""Integration test fixtures.

Provides a respx-mocked PokeAPI (listing and species endpoints) and a fully
wired ``CatalogSession`` talking to it over a real httpx client.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import respx
from fakes import MockPokeApi

from pokecatalog.config import Settings
from pokecatalog.session import CatalogSession

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture()
def pokeapi() -> Iterator[MockPokeApi]:
    with respx.mock(assert_all_called=False) as router:
        yield MockPokeApi(router)


@pytest.fixture()
def settings() -> Settings:
    return Settings(catalog={"page_size": 10, "bulk_batch_size": 8})


@pytest.fixture()
def scroll_resets() -> list[None]:
    return []


@pytest.fixture()
async def session(pokeapi: MockPokeApi, settings: Settings, scroll_resets: list[None]):
    s = CatalogSession.from_settings(settings, on_scroll_reset=lambda: scroll_resets.append(None))
    yield s
    await s.close()
