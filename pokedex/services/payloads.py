"""Mapping of raw PokeAPI payloads into catalog models.

All functions here are pure. Malformed payloads raise ``KeyError``,
``TypeError`` or ``ValueError``; the callers decide whether that drops a
single item or fails a detail page.
"""

import re
from collections.abc import Callable
from typing import Any

from ..models import NO_DESCRIPTION, Entry, EntryDetail, IndexRef, StatValue

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _dig(data: Any, *keys: str) -> Any:
    """Walk nested optional mappings, returning None at the first missing key."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


# Ordered fallback chain for entry artwork, best source first
ImageSource = Callable[[dict[str, Any]], Any]

IMAGE_SOURCES: tuple[ImageSource, ...] = (
    lambda sprites: _dig(sprites, "other", "official-artwork", "front_default"),
    lambda sprites: _dig(sprites, "other", "dream_world", "front_default"),
    lambda sprites: _dig(sprites, "front_default"),
)


def resolve_image(
    sprites: dict[str, Any] | None,
    sources: tuple[ImageSource, ...] = IMAGE_SOURCES,
) -> str | None:
    """Return the first non-empty image reference from the fallback chain."""
    if not isinstance(sprites, dict):
        return None
    for source in sources:
        value = source(sprites)
        if isinstance(value, str) and value:
            return value
    return None


def parse_entry_id(url: str, default: int) -> int:
    """Extract the trailing numeric path segment of a resource URL."""
    segment = url.rstrip("/").rsplit("/", 1)[-1]
    return int(segment) if segment.isdigit() else default


def parse_index(payload: dict[str, Any]) -> list[IndexRef]:
    """Parse the paginated index payload into lightweight references."""
    results = payload["results"]
    if not isinstance(results, list):
        raise TypeError("index results must be a list")

    refs = []
    for position, item in enumerate(results, start=1):
        url = str(item["url"])
        refs.append(IndexRef(
            id=parse_entry_id(url, default=position),
            name=str(item["name"]),
            url=url,
        ))
    return refs


def _types(payload: dict[str, Any]) -> list[str]:
    slots = sorted(payload["types"], key=lambda t: t.get("slot", 0))
    return [str(slot["type"]["name"]) for slot in slots]


def entry_from_payload(payload: dict[str, Any]) -> Entry:
    """Build a catalog Entry from a ``/pokemon/{id}`` payload."""
    entry = Entry(
        id=int(payload["id"]),
        name=str(payload["name"]),
        types=_types(payload),
        image=resolve_image(payload.get("sprites")),
        height=int(payload["height"]),
        weight=int(payload["weight"]),
    )
    # Reject identifiers outside the generation table up front
    _ = entry.generation
    return entry


def normalize_text(text: str) -> str:
    """Replace control characters (form feeds, newlines...) with spaces."""
    return _CONTROL_CHARS.sub(" ", text)


def pick_description(species: dict[str, Any], language: str = "en") -> str:
    """Return the first flavour text in the preferred language."""
    for item in species.get("flavor_text_entries") or []:
        if _dig(item, "language", "name") == language:
            text = item.get("flavor_text")
            if isinstance(text, str) and text:
                return normalize_text(text)
    return NO_DESCRIPTION


def detail_from_payloads(
    payload: dict[str, Any],
    species: dict[str, Any],
    language: str = "en",
) -> EntryDetail:
    """Build an EntryDetail from the ``/pokemon`` and ``/pokemon-species`` payloads."""
    entry = entry_from_payload(payload)
    stats = [
        StatValue(name=str(stat["stat"]["name"]), value=int(stat["base_stat"]))
        for stat in payload.get("stats") or []
    ]
    abilities = [
        str(ability["ability"]["name"])
        for ability in sorted(payload.get("abilities") or [], key=lambda a: a.get("slot", 0))
    ]
    return EntryDetail(
        id=entry.id,
        name=entry.name,
        types=entry.types,
        image=entry.image,
        height=entry.height,
        weight=entry.weight,
        stats=stats,
        abilities=abilities,
        description=pick_description(species, language),
    )
