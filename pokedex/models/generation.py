"""Generation partition table.

Every national dex number belongs to exactly one generation. The bands are
closed, ascending and contiguous, covering 1..898.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Generation:
    """A generation band: a closed range of identifiers and its region."""
    id: int
    name: str
    first: int
    last: int
    color: str

    @property
    def range_label(self) -> str:
        """Range formatted for display, e.g. ``1-151``."""
        return f"{self.first}-{self.last}"

    def contains(self, entry_id: int) -> bool:
        return self.first <= entry_id <= self.last


GENERATIONS: tuple[Generation, ...] = (
    Generation(1, "Kanto", 1, 151, "#ef4444"),
    Generation(2, "Johto", 152, 251, "#eab308"),
    Generation(3, "Hoenn", 252, 386, "#22c55e"),
    Generation(4, "Sinnoh", 387, 493, "#3b82f6"),
    Generation(5, "Unova", 494, 649, "#a855f7"),
    Generation(6, "Kalos", 650, 721, "#ec4899"),
    Generation(7, "Alola", 722, 809, "#f97316"),
    Generation(8, "Galar", 810, 898, "#6366f1"),
)

MAX_ENTRY_ID: int = GENERATIONS[-1].last


def get_generation(entry_id: int) -> int:
    """Return the generation band number for an identifier.

    Args:
        entry_id: National dex number

    Returns:
        Band number (1-8)

    Raises:
        ValueError: If the identifier lies outside every band
    """
    for generation in GENERATIONS:
        if generation.contains(entry_id):
            return generation.id
    raise ValueError(f"Identifier {entry_id} is outside 1..{MAX_ENTRY_ID}")


def generation_info(band: int) -> Generation:
    """Return the table row for a band number.

    Raises:
        ValueError: If the band number is unknown
    """
    if 1 <= band <= len(GENERATIONS):
        return GENERATIONS[band - 1]
    raise ValueError(f"Unknown generation {band}")
