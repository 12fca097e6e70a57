"""Unit tests for the static game catalogue"""

import pytest

from game_data import (
    BEGINNER_RECOMMENDATIONS, EXPLORABLE_REGIONS, GAME_MODES, REGIONS, SUGGESTABLE_MODES,
    GameMode, Region, catalogue_entry, format_display_name, get_game_mode_info,
    get_rank_title, get_region_info, parse_game_mode, parse_region,
)


@pytest.mark.unit
class TestCatalogue:

    def test_every_mode_and_region_has_info(self):
        assert [info['id'] for info in GAME_MODES] == list(GameMode)
        assert [info['id'] for info in REGIONS] == list(Region)
        assert get_game_mode_info(GameMode.MYSTERY_MIX)['difficulty'] == "Expert"
        assert get_region_info(Region.AFRICA)['country_count'] == 54

    def test_catalogue_entry_is_json_ready(self):
        entry = catalogue_entry(get_region_info(Region.NORTH_AMERICA))

        assert entry['id'] == "north-america"
        assert get_region_info(Region.NORTH_AMERICA)['id'] is Region.NORTH_AMERICA

    def test_suggestion_pools_skip_custom_and_global(self):
        assert GameMode.CUSTOM not in SUGGESTABLE_MODES
        assert SUGGESTABLE_MODES[0] is GameMode.CAPITALS
        assert Region.GLOBAL not in EXPLORABLE_REGIONS
        assert Region.CUSTOM not in EXPLORABLE_REGIONS
        assert EXPLORABLE_REGIONS[0] is Region.EUROPE

    def test_beginner_table_shape(self):
        assert 0 < len(BEGINNER_RECOMMENDATIONS) <= 6
        assert len({entry['id'] for entry in BEGINNER_RECOMMENDATIONS}) == len(BEGINNER_RECOMMENDATIONS)
        assert any(entry['priority'] == "high" for entry in BEGINNER_RECOMMENDATIONS)


@pytest.mark.unit
class TestHelpers:

    @pytest.mark.parametrize("score,title", [
        (0, "Geography Novice"),
        (199, "Geography Novice"),
        (200, "Compass Cadet"),
        (500, "Map Navigator"),
        (1000, "Atlas Explorer"),
        (1500, "Geography Gladiator"),
        (2000, "Cartography Sorcerer"),
        (9999, "Cartography Sorcerer"),
    ])
    def test_rank_title(self, score, title):
        assert get_rank_title(score) == title

    def test_format_display_name(self):
        assert format_display_name("mispronounced-capitals") == "Mispronounced Capitals"
        assert format_display_name("europe") == "Europe"

    def test_parse_known_values(self):
        assert parse_game_mode("flag-quirks") is GameMode.FLAG_QUIRKS
        assert parse_region("south-america") is Region.SOUTH_AMERICA

    def test_parse_unknown_values(self):
        with pytest.raises(ValueError, match="Unknown game mode"):
            parse_game_mode("rivers")
        with pytest.raises(ValueError, match="Unknown region"):
            parse_region("antarctica")
