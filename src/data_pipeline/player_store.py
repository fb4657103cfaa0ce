"""Player store - save and load player records to/from JSON files."""

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from src.data_pipeline.config import PLAYERS_DIR

logger = logging.getLogger(__name__)

# Characters allowed in a file name component
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class PlayerStore:
    """One JSON file per ``(player_id, season)`` player card."""

    def __init__(self, storage_dir: Optional[Path] = None):
        self.storage_dir = storage_dir or PLAYERS_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def upsert(self, record: Dict) -> Path:
        """Insert a player record or merge it onto the stored one.

        Fields present in *record* overwrite stored fields; other stored
        fields are kept. ``created_at`` is set on first insert and
        ``updated_at`` on every write.

        Returns:
            Path to the saved file.

        Raises:
            ValueError: If *record* lacks ``player_id`` or ``season``.
        """
        player_id = record.get("player_id")
        season = record.get("season")
        if not player_id or not season:
            raise ValueError(
                f"Player record needs player_id and season (got {player_id!r}, {season!r})"
            )

        now = datetime.now().isoformat()
        existing = self.get(player_id, season) or {}
        merged = {**existing, **record}
        merged["created_at"] = existing.get("created_at") or now
        merged["updated_at"] = now

        filepath = self._path_for(player_id, season)
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(merged, f, indent=2, ensure_ascii=False)

        logger.debug(
            "%s player %s (%s) at %s",
            "Updated" if existing else "Inserted", player_id, season, filepath,
        )
        return filepath

    def upsert_many(self, records: List[Dict]) -> int:
        """Upsert several records, skipping invalid ones.

        Returns:
            Number of records written.
        """
        written = 0
        for record in records:
            try:
                self.upsert(record)
            except ValueError as e:
                logger.warning("Skipping player record: %s", e)
                continue
            written += 1

        logger.info("Stored %d/%d player records in %s", written, len(records), self.storage_dir)
        return written

    def get(self, player_id: str, season: str) -> Optional[Dict]:
        """Load one player record.

        Returns:
            The record if found and readable, None otherwise.
        """
        filepath = self._path_for(player_id, season)
        if not filepath.exists():
            return None

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt player file %s: %s", filepath, e)
            return None

    def exists(self, player_id: str, season: str) -> bool:
        return self._path_for(player_id, season).exists()

    def list_players(
        self,
        season: Optional[str] = None,
        position: Optional[str] = None,
    ) -> List[Dict]:
        """All stored records, optionally filtered by season and position.

        Sorted by ``overall_display`` descending (missing values last).
        """
        players = []

        for filepath in self.storage_dir.glob("player_*.json"):
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Skipping corrupt player file %s: %s", filepath, e)
                continue

            if season is not None and data.get("season") != season:
                continue
            if position is not None and data.get("position") != position:
                continue
            players.append(data)

        return sorted(
            players,
            key=lambda p: (p.get("overall_display") is not None, p.get("overall_display") or 0),
            reverse=True,
        )

    def delete(self, player_id: str, season: str) -> bool:
        """Delete a stored player.

        Returns:
            True if deleted, False if not found.
        """
        filepath = self._path_for(player_id, season)
        if not filepath.exists():
            return False

        filepath.unlink()
        logger.info("Deleted player %s (%s)", player_id, season)
        return True

    def _path_for(self, player_id: str, season: str) -> Path:
        safe_id = _UNSAFE_CHARS.sub("_", str(player_id))
        safe_season = _UNSAFE_CHARS.sub("_", str(season))
        return self.storage_dir / f"player_{safe_id}_{safe_season}.json"
