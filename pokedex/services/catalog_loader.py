"""Catalog loading service: batched detail fetches with progress reporting."""

import asyncio
import math
from collections.abc import Callable

import structlog

from ..models import Entry, IndexRef, LoadProgress
from .errors import CatalogLoadError
from .http_client import HttpClientService
from .payloads import entry_from_payload, parse_index

log = structlog.stdlib.get_logger()

ProgressCallback = Callable[[LoadProgress], None]


def batch_progress_percent(batches_done: int, total_batches: int, batch_size: int, total_entries: int) -> int:
    """Percentage reported after a batch completes.

    ``round(min(batches_done, total_batches) * batch_size / total_entries * 100)``,
    rounding halves up and clamped to 100. The last batch may be shorter
    than ``batch_size``, so the raw value can overshoot before clamping.
    """
    if total_entries <= 0:
        return 100
    raw = min(batches_done, total_batches) * batch_size / total_entries * 100
    return min(100, math.floor(raw + 0.5))


class CatalogLoaderService:
    """Service that builds the full in-memory catalog.

    The index is fetched once; detail records are then fetched in
    consecutive batches. Inside a batch all fetches run concurrently and
    the batch waits for every one of them to settle. Batches run one after
    another, so at most ``batch_size`` requests are in flight.

    A failed detail fetch drops that entry (it is logged and counted) and
    never stops the load. A failed index fetch fails the whole load.
    """

    def __init__(
        self,
        http_client: HttpClientService,
        base_url: str = "https://pokeapi.co/api/v2",
        universe_size: int = 898,
        batch_size: int = 50,
    ) -> None:
        """Initialize the catalog loader.

        Args:
            http_client: HTTP client service for making requests
            base_url: API root URL
            universe_size: Number of entries requested from the index
            batch_size: Detail fetches issued concurrently per batch
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.http_client: HttpClientService = http_client
        self.base_url: str = base_url.rstrip("/")
        self.universe_size: int = universe_size
        self.batch_size: int = batch_size

        self._percent: int = 0
        self._batches_done: int = 0
        self._total_batches: int = 0
        self._entries_loaded: int = 0
        self._total_entries: int = 0
        self._errors: list[str] = []

        log.info(
            "Catalog loader initialized",
            base_url=self.base_url,
            universe_size=universe_size,
            batch_size=batch_size,
        )

    @property
    def index_url(self) -> str:
        return f"{self.base_url}/pokemon"

    async def fetch_index(self) -> list[IndexRef]:
        """Fetch the index of lightweight references in one call.

        Raises:
            CatalogLoadError: If the index cannot be fetched or parsed
        """
        try:
            payload = await self.http_client.get_json(
                self.index_url,
                params={"limit": self.universe_size},
            )
            refs = parse_index(payload)
        except Exception as e:
            log.error("Catalog index fetch failed", url=self.index_url, error=str(e))
            raise CatalogLoadError(url=self.index_url, original_error=e) from e

        log.info("Catalog index fetched", entries=len(refs))
        return refs

    async def load_catalog(self, on_progress: ProgressCallback | None = None) -> list[Entry]:
        """Load every entry's detail record in batches.

        Args:
            on_progress: Called with a LoadProgress snapshot after each batch

        Returns:
            Successfully loaded entries sorted ascending by identifier

        Raises:
            CatalogLoadError: If the index fetch fails
        """
        self._reset()

        refs = await self.fetch_index()
        self._total_entries = len(refs)
        self._total_batches = math.ceil(len(refs) / self.batch_size)

        entries: list[Entry] = []
        for start in range(0, len(refs), self.batch_size):
            batch = refs[start:start + self.batch_size]
            results = await asyncio.gather(*(self._fetch_entry(ref) for ref in batch))

            loaded = [entry for entry in results if entry is not None]
            entries.extend(loaded)

            self._batches_done += 1
            self._entries_loaded = len(entries)
            self._percent = batch_progress_percent(
                self._batches_done,
                self._total_batches,
                self.batch_size,
                self._total_entries,
            )

            log.debug(
                "Catalog batch loaded",
                batch=self._batches_done,
                total_batches=self._total_batches,
                loaded=len(loaded),
                failed=len(batch) - len(loaded),
                percent=self._percent,
            )

            if on_progress is not None:
                on_progress(self.get_load_progress())

        entries.sort(key=lambda entry: entry.id)
        self._percent = 100

        log.info(
            "Catalog load completed",
            entries_loaded=len(entries),
            entries_failed=len(self._errors),
            total_entries=self._total_entries,
        )
        return entries

    async def _fetch_entry(self, ref: IndexRef) -> Entry | None:
        """Fetch and map one detail record; failures yield None."""
        try:
            payload = await self.http_client.get_json(ref.url)
            return entry_from_payload(payload)
        except Exception as e:
            error_msg = f"Failed to load '{ref.name}': {e}"
            log.error("Entry fetch failed", entry=ref.name, url=ref.url, error=str(e))
            self._errors.append(error_msg)
            return None

    def get_load_progress(self) -> LoadProgress:
        """Get a snapshot of the current load progress."""
        return LoadProgress(
            percent=self._percent,
            batches_done=self._batches_done,
            total_batches=self._total_batches,
            entries_loaded=self._entries_loaded,
            entries_failed=len(self._errors),
            total_entries=self._total_entries,
            errors=self._errors.copy(),
        )

    def _reset(self) -> None:
        self._percent = 0
        self._batches_done = 0
        self._total_batches = 0
        self._entries_loaded = 0
        self._total_entries = 0
        self._errors.clear()
