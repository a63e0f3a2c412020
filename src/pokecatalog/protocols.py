"""Interfaces of the external collaborators the engine consumes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pokecatalog.models.catalog import Listing


class CatalogSourceProtocol(Protocol):
    async def list(self, offset: int, limit: int) -> Listing: ...

    async def count(self) -> int: ...


class NameDecoratorProtocol(Protocol):
    async def decorate(self, canonical_name: str) -> str: ...
