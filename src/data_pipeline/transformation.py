"""Data transformation for scraped player data.

Turns the ingested export into player records:
- Translates stat labels and parses stat values
- Parses per-position ratings
- Builds a per-position OVR table for every player
"""

import logging
import math
from typing import Dict, List, Optional

import pandas as pd

from src.data_pipeline.cleaning import PlayerDataCleaner
from src.rating_engine.coefficients import PositionCatalog, get_default_catalog
from src.rating_engine.ovr_calculator import floor_weighted_ovr

logger = logging.getLogger(__name__)

# Identity columns at the front of the OVR table
_TABLE_ID_COLUMNS = ["player_id", "season", "name", "position"]


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def ovr_column(group_key: str) -> str:
    """OVR table column name for a position group ('RW/LW' -> 'OVR_RW/LW')."""
    return f"OVR_{group_key}"


class PlayerTransformer:
    """Builds player records and rating tables from cleaned exports."""

    def __init__(self, cleaner: Optional[PlayerDataCleaner] = None):
        self.cleaner = cleaner or PlayerDataCleaner()

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def to_record(self, row: pd.Series) -> Dict:
        """Convert a single export row to the player record structure."""
        c = self.cleaner
        hidden_stats = _safe(row.get("hiddenStats"), [])
        if not isinstance(hidden_stats, list):
            hidden_stats = []

        scraped_at = _safe(row.get("scrapedAt"))

        return {
            "player_id": row["playerId"],
            "season": row["season"],
            "name": c.normalize_player_name(row.get("name")),
            "position": c.normalize_position(row.get("position")),
            "positions": c.clean_positions(_safe(row.get("positions"))),
            "overall_rating": c.parse_stat_value(_safe(row.get("overallRating"))),
            "overall_display": c.parse_stat_value(_safe(row.get("overallDisplay"))),
            "star_rating": c.parse_stat_value(_safe(row.get("starRating"))),
            "stats": c.transform_stats(_safe(row.get("stats"))),
            "hidden_stats": [
                {"name": trait.get("name"), "description": trait.get("description")}
                for trait in hidden_stats
                if isinstance(trait, dict) and trait.get("name")
            ],
            "scraped_at": str(scraped_at) if scraped_at is not None else None,
        }

    def transform(self, df: pd.DataFrame) -> List[Dict]:
        """Convert every export row to a player record."""
        records = [self.to_record(row) for _, row in df.iterrows()]

        no_stats = sum(1 for r in records if not r["stats"])
        if no_stats:
            logger.warning("%d players have no stats", no_stats)

        logger.info("Transformed %d player records", len(records))
        return records

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------
    def build_ovr_table(
        self,
        records: List[Dict],
        catalog: Optional[PositionCatalog] = None,
    ) -> pd.DataFrame:
        """Unbuffed OVR of every player in every position group.

        Uses the floored weighted average, so stats a player lacks are left
        out of that group's average.

        Returns:
            DataFrame with ``player_id``, ``season``, ``name``, ``position``
            and one ``OVR_<group>`` column per catalog group.
        """
        catalog = catalog or get_default_catalog()
        groups = catalog.as_dict()

        rows = []
        for record in records:
            row = {col: record.get(col) for col in _TABLE_ID_COLUMNS}
            stats = record.get("stats") or {}
            for group_key, coefficients in groups.items():
                row[ovr_column(group_key)] = floor_weighted_ovr(stats, coefficients)
            rows.append(row)

        columns = _TABLE_ID_COLUMNS + [ovr_column(k) for k in groups]
        table = pd.DataFrame(rows, columns=columns)
        logger.info(
            "Built OVR table: %d players x %d position groups",
            len(table), len(groups),
        )
        return table

    @staticmethod
    def best_positions(table: pd.DataFrame) -> pd.Series:
        """Group key with the highest OVR for each table row."""
        ovr_cols = [col for col in table.columns if col.startswith("OVR_")]
        if table.empty or not ovr_cols:
            return pd.Series(dtype=object)
        return table[ovr_cols].idxmax(axis=1).str.removeprefix("OVR_")
