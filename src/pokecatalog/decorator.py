"""Localized-name decoration backed by PokeAPI species records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx
import structlog

from pokecatalog.errors import CatalogError, ErrorCode

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


def _decoration_failed(name: str, message: str, recoverable: bool) -> CatalogError:
    return CatalogError(
        code=ErrorCode.DECORATION_FAILED,
        message=f"Could not decorate {name!r}: {message}",
        suggestion="The page will be retried on the next scroll.",
        recoverable=recoverable,
    )


def pick_localized_name(names: Sequence[dict[str, Any]], languages: Sequence[str]) -> str | None:
    """Return the first name whose language matches, in ``languages`` order."""
    by_language: dict[str, str] = {}
    for item in names:
        language = (item.get("language") or {}).get("name")
        if language and language not in by_language and item.get("name"):
            by_language[language] = item["name"]
    for language in languages:
        if language in by_language:
            return by_language[language]
    return None


class PokeApiNameDecorator:
    """Resolves a canonical Pokémon name to its localized species name.

    Names are memoized for the lifetime of the instance, so the paged and bulk
    paths share lookups. Failures are never memoized.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        language: str = "ja-Hrkt",
        fallback_languages: Sequence[str] = ("ja",),
    ) -> None:
        self._client = client
        self._languages = (language, *fallback_languages)
        self._memo: dict[str, str] = {}

    async def decorate(self, canonical_name: str) -> str:
        cached = self._memo.get(canonical_name)
        if cached is not None:
            return cached

        species = await self._get_json(f"/pokemon-species/{canonical_name}", canonical_name)
        if species is None:
            # Alternate forms (e.g. "deoxys-normal") are not species names.
            pokemon = await self._get_json(f"/pokemon/{canonical_name}", canonical_name)
            species_name = ((pokemon or {}).get("species") or {}).get("name")
            if not species_name:
                raise _decoration_failed(canonical_name, "no species record", recoverable=False)
            species = await self._get_json(f"/pokemon-species/{species_name}", canonical_name)
            if species is None:
                raise _decoration_failed(
                    canonical_name, f"species {species_name!r} not found", recoverable=False
                )

        localized = pick_localized_name(species.get("names") or [], self._languages)
        if localized is None:
            raise _decoration_failed(
                canonical_name,
                f"no name in languages {', '.join(self._languages)}",
                recoverable=False,
            )
        self._memo[canonical_name] = localized
        return localized

    async def _get_json(self, path: str, name: str) -> dict[str, Any] | None:
        """GET ``path``; ``None`` on 404, ``CatalogError`` on any other failure."""
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as exc:
            log.warning("decoration_network_error", name=name, path=path, error=str(exc))
            raise _decoration_failed(name, f"network error: {exc}", recoverable=True) from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise _decoration_failed(
                name,
                f"HTTP {response.status_code} from {path}",
                recoverable=response.status_code >= 500,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise _decoration_failed(name, "malformed response", recoverable=False) from exc
        if not isinstance(payload, dict):
            raise _decoration_failed(name, "malformed response", recoverable=False)
        return payload
