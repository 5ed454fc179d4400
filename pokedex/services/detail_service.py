"""Detail page service: one entry's full record plus its species text."""

import structlog

from ..models import EntryDetail
from .errors import EntryNotFoundError
from .http_client import HttpClientService
from .payloads import detail_from_payloads

log = structlog.stdlib.get_logger()


class DetailService:
    """Fetches entry details fresh on every visit; nothing is cached."""

    def __init__(
        self,
        http_client: HttpClientService,
        base_url: str = "https://pokeapi.co/api/v2",
        universe_size: int = 898,
        language: str = "en",
    ) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")
        self.universe_size = universe_size
        self.language = language

    async def fetch_entry_detail(self, entry_id: int) -> EntryDetail:
        """Fetch the ``/pokemon`` and ``/pokemon-species`` records for an entry.

        Raises:
            EntryNotFoundError: If either request fails or the payload is malformed
        """
        log.debug("Fetching entry detail", entry_id=entry_id)

        try:
            payload = await self.http_client.get_json(f"{self.base_url}/pokemon/{entry_id}")
            species = await self.http_client.get_json(f"{self.base_url}/pokemon-species/{entry_id}")
            detail = detail_from_payloads(payload, species, self.language)
        except Exception as e:
            log.warning("Entry detail unavailable", entry_id=entry_id, error=str(e))
            raise EntryNotFoundError(entry_id, original_error=e) from e

        log.info("Entry detail loaded", entry_id=detail.id, name=detail.name)
        return detail

    def previous_id(self, entry_id: int) -> int | None:
        """Identifier before this one, or None at the first entry."""
        return entry_id - 1 if entry_id > 1 else None

    def next_id(self, entry_id: int) -> int | None:
        """Identifier after this one, or None at the last entry."""
        return entry_id + 1 if entry_id < self.universe_size else None
