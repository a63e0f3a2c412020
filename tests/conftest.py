"""Shared fixtures built on the in-memory fakes in ``fakes.py``."""

from __future__ import annotations

import pytest
import structlog
from fakes import SAMPLE_CATALOG, FakeCatalogSource, FakeNameDecorator

from pokecatalog.fetcher import CatalogPageFetcher


@pytest.fixture()
def source() -> FakeCatalogSource:
    return FakeCatalogSource([name for name, _ in SAMPLE_CATALOG])


@pytest.fixture()
def decorator() -> FakeNameDecorator:
    return FakeNameDecorator(dict(SAMPLE_CATALOG))


@pytest.fixture()
def fetcher(source: FakeCatalogSource, decorator: FakeNameDecorator) -> CatalogPageFetcher:
    return CatalogPageFetcher(source, decorator, decoration_concurrency=4)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any ``configure_logging`` call made by the test."""
    yield
    structlog.reset_defaults()
