"""Tests for the scraped-player cleaning module."""

import math

import pytest

from src.data_pipeline.cleaning import PlayerDataCleaner, get_stat_key, get_stat_name
from src.data_pipeline.config import STATS_MAPPING, STATS_NAMES, STATS_ORDER


# ---------------------------------------------------------------------------
# Stat label mapping
# ---------------------------------------------------------------------------

class TestStatMapping:
    def test_known_label(self):
        assert get_stat_key("Tốc độ") == "speed"
        assert get_stat_key("TM đổ người") == "gkDiving"

    def test_unknown_label_passes_through(self):
        assert get_stat_key("Unknown") == "Unknown"

    def test_reverse_lookup(self):
        assert get_stat_name("finishing") == "Dứt điểm"
        assert get_stat_name("notAStat") == "notAStat"

    def test_mapping_is_one_to_one(self):
        assert len(STATS_NAMES) == len(STATS_MAPPING)

    def test_order_covers_every_key(self):
        assert sorted(STATS_ORDER) == sorted(STATS_NAMES)


# ---------------------------------------------------------------------------
# Number parsing
# ---------------------------------------------------------------------------

class TestParseStatValue:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (124, 124),
            ("124", 124),
            (" 98 ", 98),
            ("+3", 3),
            ("-2", -2),
            (98.0, 98),
        ],
    )
    def test_parses(self, raw, expected):
        assert PlayerDataCleaner.parse_stat_value(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "N/A", "12a", math.nan, True])
    def test_unparseable_is_none(self, raw):
        assert PlayerDataCleaner.parse_stat_value(raw) is None


# ---------------------------------------------------------------------------
# Stats dict
# ---------------------------------------------------------------------------

class TestTransformStats:
    def test_rekeys_vietnamese_labels(self, cleaner):
        result = cleaner.transform_stats(
            {"Tốc độ": {"value": "130", "baseValue": 125, "originalValue": "120"}}
        )
        assert result == {
            "speed": {
                "name": "Tốc độ",
                "value": 130,
                "base_value": 125,
                "original_value": 120,
            }
        }

    def test_canonical_keys_accepted(self, cleaner):
        result = cleaner.transform_stats({"finishing": {"value": 110, "base_value": 105}})
        assert result["finishing"]["name"] == "Dứt điểm"
        assert result["finishing"]["base_value"] == 105

    def test_bare_values_wrapped(self, cleaner):
        result = cleaner.transform_stats({"Dứt điểm": "131"})
        assert result["finishing"]["value"] == 131
        assert result["finishing"]["base_value"] is None

    def test_unknown_label_kept(self, cleaner):
        result = cleaner.transform_stats({"Mystery": {"value": 50}})
        assert result["Mystery"]["value"] == 50

    @pytest.mark.parametrize("raw", [None, [], "stats"])
    def test_non_dict_is_empty(self, cleaner, raw):
        assert cleaner.transform_stats(raw) == {}


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

class TestPositions:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("124|121", (124, 121)),
            ("124", (124, None)),
            (124, (124, None)),
            ("", (None, None)),
            (None, (None, None)),
            (math.nan, (None, None)),
        ],
    )
    def test_parse_position_rating(self, cleaner, raw, expected):
        assert cleaner.parse_position_rating(raw) == expected

    def test_clean_positions(self, cleaner):
        raw = [
            {"position": " st ", "rating": "124|121"},
            {"position": "CF", "rating": "122"},
            {"position": "", "rating": "100"},
            "garbage",
        ]
        assert cleaner.clean_positions(raw) == [
            {"position": "ST", "rating": 124, "alt_rating": 121},
            {"position": "CF", "rating": 122, "alt_rating": None},
        ]

    def test_clean_positions_non_list(self, cleaner):
        assert cleaner.clean_positions(None) == []

    @pytest.mark.parametrize("raw, expected", [("cam", "CAM"), ("  ", None), (None, None)])
    def test_normalize_position(self, raw, expected):
        assert PlayerDataCleaner.normalize_position(raw) == expected


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------

class TestNormalizePlayerName:
    def test_curly_apostrophe(self):
        assert PlayerDataCleaner.normalize_player_name("N’Golo Kanté") == "N'Golo Kanté"

    def test_dashes_and_whitespace(self):
        name = '  "Alexander–Arnold   Trent" '
        assert PlayerDataCleaner.normalize_player_name(name) == "Alexander-Arnold Trent"

    @pytest.mark.parametrize("raw", [None, "", '""', math.nan])
    def test_blank_is_none(self, raw):
        assert PlayerDataCleaner.normalize_player_name(raw) is None
