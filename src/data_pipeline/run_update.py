"""Run the complete scraped-player data pipeline.

Usage:
    python -m src.data_pipeline.run_update [season] [data_dir]

Examples:
    python -m src.data_pipeline.run_update 25TY
    python -m src.data_pipeline.run_update ICON /path/to/exports
"""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from src.data_pipeline.cleaning import PlayerDataCleaner
from src.data_pipeline.config import PROCESSED_DATA_DIR, RAW_DATA_DIR
from src.data_pipeline.ingestion import ScrapedPlayerIngester
from src.data_pipeline.player_store import PlayerStore
from src.data_pipeline.transformation import PlayerTransformer
from src.logging_config import setup_logging
from src.rating_engine.coefficients import get_default_catalog

logger = logging.getLogger(__name__)


def run_pipeline(
    season: str,
    data_dir: Optional[Path] = None,
    output_dir: Optional[Path] = None,
    store: Optional[PlayerStore] = None,
) -> Path:
    """Run the complete scraped-player pipeline.

    Args:
        season: Season label of the export (e.g. ``"25TY"``).
        data_dir: Directory containing ``players_<season>.jsonl``.
            Defaults to ``data/raw/``.
        output_dir: Directory for JSON/CSV output.
            Defaults to ``data/processed/``.
        store: Player store to upsert records into; skipped when None.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting pipeline for season %s (data: %s)", season, data_dir)

    # 1. Ingest
    logger.info("Step 1/4: Ingesting scraped export...")
    raw_df = ScrapedPlayerIngester(data_dir, season).read_players()

    # 2. Clean + transform
    logger.info("Step 2/4: Cleaning and transforming player records...")
    transformer = PlayerTransformer(PlayerDataCleaner())
    records = transformer.transform(raw_df)

    # 3. Ratings
    logger.info("Step 3/4: Calculating position OVR table...")
    catalog = get_default_catalog()
    ovr_table = transformer.build_ovr_table(records, catalog)
    if not ovr_table.empty:
        ovr_table["best_group"] = transformer.best_positions(ovr_table)

    # 4. Output
    logger.info("Step 4/4: Writing output...")
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "season": season,
            "position_groups": catalog.group_keys,
            "total_players": len(records),
        },
        "players": records,
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"players_{season}.json"

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2, ensure_ascii=False)

    ovr_table.to_csv(output_dir / f"ovr_{season}.csv", index=False)

    # Update latest symlink
    latest_link = output_dir / "players_latest.json"
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    if store is not None:
        store.upsert_many(records)

    # Summary
    pos_counts: dict[str, int] = {}
    for p in records:
        pos = p["position"] or "UNKNOWN"
        pos_counts[pos] = pos_counts.get(pos, 0) + 1

    logger.info("Pipeline complete! Output: %s", output_file)
    logger.info("  Total players: %d", len(records))
    logger.info(
        "  By position: %s",
        ", ".join(f"{k}={v}" for k, v in sorted(pos_counts.items())),
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    season = sys.argv[1] if len(sys.argv) > 1 else "25TY"
    data_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_pipeline(season, data_dir, store=PlayerStore())
        print(f"Pipeline complete: {output}")
    except Exception:
        logger.exception("Pipeline failed")
        sys.exit(1)
