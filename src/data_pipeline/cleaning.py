"""Data cleaning for scraped player records.

Handles the quirks of the source site's player pages:
- Vietnamese stat labels (translated to canonical keys)
- Position ratings shown as "124|121" (main | alternate)
- Numbers scraped as text, sometimes with stray "+" or whitespace
- Curly quotes and dash variants in player names
"""

import logging
import re
from typing import Dict, Optional, Tuple

import pandas as pd

from src.data_pipeline.config import STATS_MAPPING, STATS_NAMES

logger = logging.getLogger(__name__)

# Optional sign, digits: "124", "+3", " 98 "
_INT_PATTERN = re.compile(r"^\+?(-?\d+)$")


def get_stat_key(label: str) -> str:
    """Canonical key for a Vietnamese stat label (unknown labels pass through)."""
    return STATS_MAPPING.get(label, label)


def get_stat_name(key: str) -> str:
    """Vietnamese label for a canonical key (unknown keys pass through)."""
    return STATS_NAMES.get(key, key)


class PlayerDataCleaner:
    """Cleans and standardizes scraped player fields."""

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------
    @staticmethod
    def parse_stat_value(value) -> Optional[int]:
        """Parse a scraped integer.

        Examples:
            124     -> 124
            "124"   -> 124
            " +3 "  -> 3
            "N/A"   -> None
        """
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return None if pd.isna(value) else int(value)

        m = _INT_PATTERN.match(str(value).strip())
        if not m:
            return None
        return int(m.group(1))

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------
    def transform_stats(self, raw_stats: Optional[Dict]) -> Dict[str, Dict]:
        """Re-key a stats dict from Vietnamese labels to canonical keys.

        The Vietnamese label is kept as ``name`` for display. Entries that
        are already keyed canonically keep their existing ``name`` or get
        the matching label.

        Example::

            {"Tốc độ": {"value": 130, "baseValue": 125}}
            -> {"speed": {"name": "Tốc độ", "value": 130,
                          "base_value": 125, "original_value": None}}
        """
        if not isinstance(raw_stats, dict):
            return {}

        transformed: Dict[str, Dict] = {}
        unknown = []

        for label, data in raw_stats.items():
            key = get_stat_key(label)
            if key == label and label not in STATS_NAMES:
                unknown.append(label)

            if not isinstance(data, dict):
                data = {"value": data}

            transformed[key] = {
                "name": data.get("name") or (label if key != label else get_stat_name(key)),
                "value": self.parse_stat_value(data.get("value")),
                "base_value": self.parse_stat_value(
                    data.get("base_value", data.get("baseValue"))
                ),
                "original_value": self.parse_stat_value(
                    data.get("original_value", data.get("originalValue"))
                ),
            }

        if unknown:
            logger.debug("Unmapped stat labels kept as-is: %s", unknown)
        return transformed

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------
    def parse_position_rating(self, rating) -> Tuple[Optional[int], Optional[int]]:
        """Split a position rating into main and alternate values.

        Examples:
            "124|121" -> (124, 121)
            "124"     -> (124, None)
            124       -> (124, None)
            ""        -> (None, None)
        """
        if rating is None or (isinstance(rating, float) and pd.isna(rating)):
            return None, None

        parts = str(rating).split("|")
        main = self.parse_stat_value(parts[0])
        alt = self.parse_stat_value(parts[1]) if len(parts) > 1 else None
        return main, alt

    def clean_positions(self, raw_positions) -> list:
        """Normalize the per-position rating list of a player card."""
        if not isinstance(raw_positions, list):
            return []

        positions = []
        for entry in raw_positions:
            if not isinstance(entry, dict):
                continue
            code = self.normalize_position(entry.get("position"))
            if code is None:
                continue
            main, alt = self.parse_position_rating(entry.get("rating"))
            positions.append({"position": code, "rating": main, "alt_rating": alt})
        return positions

    @staticmethod
    def normalize_position(position) -> Optional[str]:
        """Upper-case, trimmed position code; None for blanks."""
        if position is None or (isinstance(position, float) and pd.isna(position)):
            return None
        position = str(position).strip().upper()
        return position or None

    # ------------------------------------------------------------------
    # Names
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_player_name(name) -> Optional[str]:
        """Normalize a player name for display and matching.

        - Strips quotes and extra whitespace
        - Standardizes apostrophes and hyphens
        """
        if name is None or (isinstance(name, float) and pd.isna(name)):
            return None

        name = str(name).strip().strip('"')
        if name == "":
            return None

        name = name.replace("’", "'")   # right single curly '
        name = name.replace("‘", "'")   # left single curly '
        name = name.replace("–", "-")   # en dash
        name = name.replace("—", "-")   # em dash

        return " ".join(name.split())
