"""Property-based tests for the generation table and entry models."""

import pytest
from hypothesis import given, strategies as st, settings

from pokedex.models import (
    FALLBACK_TYPE_COLOR,
    GENERATIONS,
    MAX_ENTRY_ID,
    PLACEHOLDER_IMAGE,
    Entry,
    EntryDetail,
    StatValue,
    generation_info,
    get_generation,
    type_color,
)
from pokedex.ui.screens.catalog import list_row
from pokedex.ui.widgets import generation_marker


def make_entry(entry_id: int, name: str = "bulbasaur", types: list[str] | None = None) -> Entry:
    return Entry(
        id=entry_id,
        name=name,
        types=types or ["grass"],
        image=None,
        height=7,
        weight=69,
    )


EXPECTED_BANDS = [
    (1, 1, 151),
    (2, 152, 251),
    (3, 252, 386),
    (4, 387, 493),
    (5, 494, 649),
    (6, 650, 721),
    (7, 722, 809),
    (8, 810, 898),
]


class TestGenerationTable:
    """Tests for the generation partition."""

    @pytest.mark.parametrize("band,first,last", EXPECTED_BANDS)
    def test_band_boundaries(self, band: int, first: int, last: int) -> None:
        assert get_generation(first) == band
        assert get_generation(last) == band
        assert get_generation((first + last) // 2) == band

    def test_bands_are_contiguous_and_cover_universe(self) -> None:
        assert GENERATIONS[0].first == 1
        assert GENERATIONS[-1].last == MAX_ENTRY_ID == 898
        for previous, current in zip(GENERATIONS, GENERATIONS[1:]):
            assert current.first == previous.last + 1
            assert current.id == previous.id + 1

    @given(st.integers(min_value=1, max_value=898))
    @settings(max_examples=200)
    def test_every_identifier_in_exactly_one_band(self, entry_id: int) -> None:
        containing = [g for g in GENERATIONS if g.contains(entry_id)]
        assert len(containing) == 1
        assert get_generation(entry_id) == containing[0].id

    @given(st.one_of(st.integers(max_value=0), st.integers(min_value=899)))
    def test_out_of_range_identifier_raises(self, entry_id: int) -> None:
        with pytest.raises(ValueError):
            get_generation(entry_id)

    def test_generation_info_lookup(self) -> None:
        kanto = generation_info(1)
        assert kanto.name == "Kanto"
        assert kanto.range_label == "1-151"
        assert generation_info(8).name == "Galar"

        with pytest.raises(ValueError):
            generation_info(9)
        with pytest.raises(ValueError):
            generation_info(0)


class TestGenerationRoundTrip:
    """The badge shown in the list view agrees with the detail view."""

    @given(st.integers(min_value=1, max_value=898))
    @settings(max_examples=100)
    def test_list_and_detail_generation_agree(self, entry_id: int) -> None:
        entry = make_entry(entry_id)
        detail = EntryDetail(
            id=entry.id,
            name=entry.name,
            types=entry.types,
            image=entry.image,
            height=entry.height,
            weight=entry.weight,
            stats=[StatValue("hp", 45)],
            abilities=["overgrow"],
            description="A strange seed was planted on its back at birth.",
        )

        list_generation_name = list_row(entry)[2]
        assert list_generation_name == generation_info(get_generation(entry_id)).name
        assert detail.generation == entry.generation == get_generation(entry_id)
        assert generation_marker(entry) == generation_marker(detail)


class TestEntryModel:
    """Tests for entry display helpers."""

    def test_display_number_is_zero_padded(self) -> None:
        assert make_entry(1).display_number == "#001"
        assert make_entry(25).display_number == "#025"
        assert make_entry(898).display_number == "#898"

    def test_units_are_converted(self) -> None:
        entry = make_entry(1)
        assert entry.height_m == pytest.approx(0.7)
        assert entry.weight_kg == pytest.approx(6.9)

    def test_missing_image_uses_placeholder(self) -> None:
        assert make_entry(1).image_or_placeholder == PLACEHOLDER_IMAGE

    def test_total_stats(self) -> None:
        detail = EntryDetail(
            id=1, name="bulbasaur", types=["grass", "poison"], image="a.png",
            height=7, weight=69,
            stats=[StatValue("hp", 45), StatValue("attack", 49), StatValue("defense", 49)],
            abilities=[], description="",
        )
        assert detail.total_stats == 143
        assert detail.image_or_placeholder == "a.png"


class TestTypeColors:
    """Tests for category colours."""

    def test_known_types_have_colours(self) -> None:
        assert type_color("fire") == "#EE8130"
        assert type_color("Water") == "#6390F0"

    @given(st.text(min_size=1, max_size=12).filter(lambda s: s.lower() not in {
        "normal", "fire", "water", "electric", "grass", "ice", "fighting", "poison", "ground",
        "flying", "psychic", "bug", "rock", "ghost", "dragon", "dark", "steel", "fairy",
    }))
    def test_unknown_types_use_fallback(self, tag: str) -> None:
        assert type_color(tag) == FALLBACK_TYPE_COLOR
