"""Progress tracking data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoadProgress:
    """Progress information for the catalog load."""
    percent: int  # 0-100, non-decreasing across a load
    batches_done: int
    total_batches: int
    entries_loaded: int
    entries_failed: int
    total_entries: int
    errors: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return self.total_batches > 0 and self.batches_done >= self.total_batches
