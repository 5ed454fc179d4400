"""Tests for the detail service."""

from typing import Any
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
from hypothesis import given, strategies as st

from pokedex.services import DetailService, EntryNotFoundError, HttpClientService

BASE_URL = "https://pokeapi.test/api/v2"

PIKACHU = {
    "id": 25,
    "name": "pikachu",
    "height": 4,
    "weight": 60,
    "types": [{"slot": 1, "type": {"name": "electric"}}],
    "sprites": {"front_default": "https://img.test/25.png"},
    "stats": [{"base_stat": 35, "stat": {"name": "hp"}}, {"base_stat": 90, "stat": {"name": "speed"}}],
    "abilities": [{"slot": 1, "ability": {"name": "static"}}, {"slot": 3, "ability": {"name": "lightning-rod"}}],
}

PIKACHU_SPECIES = {
    "flavor_text_entries": [
        {"flavor_text": "Il stocke l'électricité.", "language": {"name": "fr"}},
        {"flavor_text": "It keeps its tail\nraised to monitor\x0cits surroundings.", "language": {"name": "en"}},
    ]
}


def mock_client(responses: dict[str, Any]) -> AsyncMock:
    client = AsyncMock(spec=HttpClientService)

    async def get_json(url: str, params: dict[str, Any] | None = None) -> Any:
        result = responses[url]
        if isinstance(result, Exception):
            raise result
        return result

    client.get_json.side_effect = get_json
    return client


class TestFetchEntryDetail:
    """Tests for DetailService.fetch_entry_detail."""

    @pytest.mark.asyncio
    async def test_detail_is_assembled_from_both_records(self) -> None:
        client = mock_client({
            f"{BASE_URL}/pokemon/25": PIKACHU,
            f"{BASE_URL}/pokemon-species/25": PIKACHU_SPECIES,
        })
        service = DetailService(client, base_url=BASE_URL)

        detail = await service.fetch_entry_detail(25)

        assert detail.name == "pikachu"
        assert detail.generation == 1
        assert detail.abilities == ["static", "lightning-rod"]
        assert detail.description == "It keeps its tail raised to monitor its surroundings."
        assert detail.total_stats == 125
        assert client.get_json.await_count == 2

    @pytest.mark.asyncio
    async def test_language_preference(self) -> None:
        client = mock_client({
            f"{BASE_URL}/pokemon/25": PIKACHU,
            f"{BASE_URL}/pokemon-species/25": PIKACHU_SPECIES,
        })
        service = DetailService(client, base_url=BASE_URL, language="fr")

        detail = await service.fetch_entry_detail(25)

        assert detail.description == "Il stocke l'électricité."

    @pytest.mark.asyncio
    async def test_missing_entry_raises_not_found(self) -> None:
        response = Mock()
        response.status_code = 404
        error = httpx.HTTPStatusError("Not found", request=Mock(), response=response)
        client = mock_client({f"{BASE_URL}/pokemon/9999": error})
        service = DetailService(client, base_url=BASE_URL)

        with pytest.raises(EntryNotFoundError) as exc_info:
            await service.fetch_entry_detail(9999)

        assert exc_info.value.entry_id == 9999
        assert exc_info.value.message == "Entry not found."
        assert exc_info.value.original_error is error
        # The species record is never requested and nothing is retried
        assert client.get_json.await_count == 1

    @pytest.mark.asyncio
    async def test_species_failure_raises_not_found(self) -> None:
        client = mock_client({
            f"{BASE_URL}/pokemon/25": PIKACHU,
            f"{BASE_URL}/pokemon-species/25": httpx.ConnectError("connection refused"),
        })
        service = DetailService(client, base_url=BASE_URL)

        with pytest.raises(EntryNotFoundError):
            await service.fetch_entry_detail(25)

    @pytest.mark.asyncio
    async def test_malformed_payload_raises_not_found(self) -> None:
        client = mock_client({
            f"{BASE_URL}/pokemon/25": {"id": 25, "name": "pikachu"},
            f"{BASE_URL}/pokemon-species/25": PIKACHU_SPECIES,
        })
        service = DetailService(client, base_url=BASE_URL)

        with pytest.raises(EntryNotFoundError):
            await service.fetch_entry_detail(25)


class TestAdjacentEntries:
    """Previous and next navigation stays inside the universe."""

    def test_bounds(self) -> None:
        service = DetailService(AsyncMock(spec=HttpClientService), universe_size=898)
        assert service.previous_id(1) is None
        assert service.next_id(1) == 2
        assert service.previous_id(898) == 897
        assert service.next_id(898) is None

    @given(st.integers(min_value=1, max_value=898))
    def test_adjacent_ids_in_range(self, entry_id: int) -> None:
        service = DetailService(AsyncMock(spec=HttpClientService), universe_size=898)
        for adjacent in (service.previous_id(entry_id), service.next_id(entry_id)):
            if adjacent is not None:
                assert 1 <= adjacent <= 898
                assert abs(adjacent - entry_id) == 1
