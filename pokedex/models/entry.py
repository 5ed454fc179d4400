"""Catalog entry data models."""

from dataclasses import dataclass

from .generation import get_generation

PLACEHOLDER_IMAGE: str = "/placeholder.svg"
NO_DESCRIPTION: str = "No description available."
MAX_STAT_VALUE: int = 255


@dataclass(frozen=True)
class IndexRef:
    """Lightweight reference from the catalog index."""
    id: int
    name: str
    url: str


@dataclass(frozen=True)
class Entry:
    """Catalog-level entry shown in the grid and list views."""
    id: int
    name: str
    types: list[str]
    image: str | None  # None when no artwork source is available
    height: int  # Tenths of a metre
    weight: int  # Tenths of a kilogram

    @property
    def generation(self) -> int:
        """Generation band, derived from the identifier."""
        return get_generation(self.id)

    @property
    def display_number(self) -> str:
        return f"#{self.id:03d}"

    @property
    def image_or_placeholder(self) -> str:
        return self.image or PLACEHOLDER_IMAGE

    @property
    def height_m(self) -> float:
        return self.height / 10

    @property
    def weight_kg(self) -> float:
        return self.weight / 10


@dataclass(frozen=True)
class StatValue:
    """A single base stat."""
    name: str
    value: int  # 0-255


@dataclass(frozen=True)
class EntryDetail(Entry):
    """Detail-page entry with stats, abilities and description."""
    stats: list[StatValue]
    abilities: list[str]
    description: str

    @property
    def total_stats(self) -> int:
        return sum(stat.value for stat in self.stats)
