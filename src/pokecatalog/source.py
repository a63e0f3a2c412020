"""PokeAPI-backed paged catalog source.

All failures cross this boundary as ``CatalogError(SOURCE_UNAVAILABLE)``.
Transport errors and 5xx responses are recoverable; other statuses and
malformed payloads are not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog
from pydantic import ValidationError

from pokecatalog.errors import CatalogError, ErrorCode
from pokecatalog.models.catalog import Listing

if TYPE_CHECKING:
    from pokecatalog.config import ApiSettings

log = structlog.get_logger()


def build_http_client(settings: ApiSettings | None = None) -> httpx.AsyncClient:
    """Create the shared AsyncClient used by the source and the decorator."""
    from pokecatalog.config import ApiSettings

    settings = settings or ApiSettings()
    return httpx.AsyncClient(
        base_url=settings.base_url,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
        follow_redirects=True,
    )


def _unavailable(message: str, recoverable: bool) -> CatalogError:
    return CatalogError(
        code=ErrorCode.SOURCE_UNAVAILABLE,
        message=message,
        suggestion="Check network connectivity and retry by scrolling again.",
        recoverable=recoverable,
    )


class PokeApiCatalogSource:
    """Lists ``/pokemon`` resources with offset/limit pagination."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def list(self, offset: int, limit: int) -> Listing:
        try:
            response = await self._client.get(
                "/pokemon", params={"offset": offset, "limit": limit}
            )
        except httpx.HTTPError as exc:
            log.warning("catalog_list_network_error", offset=offset, limit=limit, error=str(exc))
            raise _unavailable(f"Network error listing catalog: {exc}", recoverable=True) from exc

        if response.status_code >= 500:
            raise _unavailable(
                f"Catalog source returned HTTP {response.status_code}", recoverable=True
            )
        if response.status_code != 200:
            raise _unavailable(
                f"Catalog source returned HTTP {response.status_code}", recoverable=False
            )

        try:
            listing = Listing.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise _unavailable(f"Malformed catalog listing: {exc}", recoverable=False) from exc

        log.debug(
            "catalog_listed",
            offset=offset,
            limit=limit,
            received=len(listing.results),
            has_next=listing.next is not None,
        )
        return listing

    async def count(self) -> int:
        """Total size reported by the source, via a one-item listing."""
        listing = await self.list(0, 1)
        return listing.count
