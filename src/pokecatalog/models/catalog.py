from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

_NUMBER_IN_URL = re.compile(r"/(\d+)/?$")


def catalog_number_from_url(url: str) -> str | None:
    """Return the trailing number of a resource URL: ``.../pokemon/25/`` gives ``"25"``."""
    match = _NUMBER_IN_URL.search(url)
    if match is None:
        return None
    return str(int(match.group(1)))


class ListingItem(BaseModel):
    """One named resource in a catalog listing."""

    name: str
    url: str


class Listing(BaseModel):
    """Wire shape of one paged catalog listing."""

    count: int
    next: str | None = None
    previous: str | None = None
    results: list[ListingItem] = []


class Entry(BaseModel):
    """One catalog item enriched with its localized display name."""

    model_config = ConfigDict(frozen=True)

    id: str
    canonical_name: str
    display_name: str
    sequence_number: str  # Zero-padded, sorted by numeric value

    @field_validator("sequence_number")
    @classmethod
    def validate_sequence_number(cls, v: str) -> str:
        if not v.isdigit():
            raise ValueError(f"sequence_number must be numeric: {v!r}")
        return v

    @property
    def sequence_value(self) -> int:
        return int(self.sequence_number)

    @classmethod
    def from_listing_item(cls, item: ListingItem, display_name: str) -> Entry:
        number = catalog_number_from_url(item.url)
        if number is None:
            raise ValueError(f"No catalog number in url: {item.url!r}")
        return cls(
            id=number,
            canonical_name=item.name,
            display_name=display_name,
            sequence_number=number.zfill(3),
        )


class Page(BaseModel):
    """One batch of decorated entries fetched at a given offset."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[Entry, ...] = ()
    has_more: bool = False
    offset: int = 0
