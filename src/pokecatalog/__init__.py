"""Searchable, infinitely-scrollable Pokémon catalog engine."""

from __future__ import annotations

from pokecatalog.errors import CatalogError, ErrorCode
from pokecatalog.session import CatalogSession

__all__ = ["CatalogError", "CatalogSession", "ErrorCode"]
