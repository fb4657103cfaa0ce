"""Ingestion of scraped player exports.

The scraper writes one JSON object per line (``players_<season>.jsonl``),
using the source site's camelCase field names. Handles the quirks of that
export:
- Rows without a player id (failed detail pages)
- The same card scraped twice in one run (the later row wins)
- Player ids serialized as numbers in older exports
- Season missing on rows scraped from the global listing
"""

import logging
import math
from pathlib import Path

import pandas as pd

from src.data_pipeline.config import EXPORT_FILE_PATTERN

logger = logging.getLogger(__name__)

# Columns every downstream step may rely on
EXPORT_COLUMNS = [
    "playerId", "season", "name", "position", "positions",
    "overallRating", "overallDisplay", "starRating",
    "stats", "hiddenStats", "scrapedAt",
]


class IngestionError(Exception):
    """Raised when a scraped export cannot be read."""


def _normalize_id(value):
    """Render a player id as a string ('1001', not '1001.0')."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return str(int(value))
    value = str(value).strip()
    return value or None


class ScrapedPlayerIngester:
    """Reads a season's scraped player export into a DataFrame.

    The returned DataFrame has:
    - Every column in ``EXPORT_COLUMNS`` (missing ones filled with None)
    - ``playerId`` as a non-empty string
    - One row per ``(playerId, season)``
    """

    def __init__(self, data_dir: Path, season: str):
        self.data_dir = Path(data_dir)
        self.season = season

    def _resolve_path(self) -> Path:
        """Build the export path for this season, raising if missing."""
        filepath = self.data_dir / EXPORT_FILE_PATTERN.format(season=self.season)
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    def read_players(self) -> pd.DataFrame:
        """Read, de-duplicate and tidy the export.

        Raises:
            FileNotFoundError: If the export file does not exist.
            IngestionError: If the file is not valid JSON lines.
        """
        filepath = self._resolve_path()
        logger.info("Reading scraped players: %s", filepath.name)

        try:
            df = pd.read_json(filepath, lines=True, dtype=False, convert_dates=False)
        except ValueError as e:
            raise IngestionError(f"Failed to read {filepath.name}: {e}") from e

        return self._clean_export_df(df)

    def _clean_export_df(self, df: pd.DataFrame) -> pd.DataFrame:
        """Common cleanup for export DataFrames."""
        for col in EXPORT_COLUMNS:
            if col not in df.columns:
                df[col] = None

        df["playerId"] = df["playerId"].apply(_normalize_id)
        df["season"] = df["season"].apply(
            lambda s: self.season if s is None or (isinstance(s, float) and math.isnan(s)) else str(s)
        )

        missing_id = df["playerId"].isna()
        if missing_id.any():
            logger.warning("Dropping %d rows with no player id", int(missing_id.sum()))
            df = df[~missing_id]

        before = len(df)
        df = df.drop_duplicates(subset=["playerId", "season"], keep="last")
        if len(df) < before:
            logger.info("Dropped %d duplicate player rows", before - len(df))

        df = df.reset_index(drop=True)
        logger.info("Loaded %d players for season %s", len(df), self.season)
        return df
