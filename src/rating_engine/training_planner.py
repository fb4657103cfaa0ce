"""Training simulation and greedy training-plan search.

Both work on the rounded/clamped position rating
(:func:`src.rating_engine.ovr_calculator.rounded_clamped_ovr`), not on the
floored buff breakdown.
"""

import copy
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from src.rating_engine.coefficients import (
    PositionCatalog,
    UnknownPositionError,
    get_default_catalog,
)
from src.rating_engine.config import (
    DEFAULT_KEY_STATS,
    MAX_STAT_VALUE,
    PLAN_DEFAULT_MAX_STAT_INCREASE,
    PLAN_KEY_STATS,
    PLAN_MAX_ITERATIONS,
)
from src.rating_engine.models import KeyStat, TrainingPlanResult, TrainingSimulation
from src.rating_engine.ovr_calculator import rounded_clamped_ovr, stat_value

logger = logging.getLogger(__name__)


def apply_stat_increases(
    stats: Mapping[str, Dict],
    increases: Mapping[str, int],
) -> Dict[str, Dict]:
    """Deep copy of *stats* with *increases* added, each capped at 99.

    Increases for stats the player does not have are ignored.
    """
    new_stats = copy.deepcopy(dict(stats))
    for key, increase in increases.items():
        current = stat_value(new_stats, key)
        if current is not None:
            new_stats[key]["value"] = min(MAX_STAT_VALUE, current + increase)
    return new_stats


class TrainingPlanner:
    """Position-rating helpers built on one coefficient catalog."""

    def __init__(self, catalog: Optional[PositionCatalog] = None):
        self.catalog = catalog or get_default_catalog()

    def position_ovr(self, position: str, stats: Mapping[str, Dict]) -> int:
        """Rounded, clamped OVR of *stats* at *position*.

        Raises:
            UnknownPositionError: If *position* has no coefficient group.
        """
        return rounded_clamped_ovr(stats, self.catalog.resolve(position))

    def calculate_all_position_ovr(
        self,
        stats: Mapping[str, Dict],
        positions: Optional[Iterable[str]] = None,
    ) -> Dict[str, int]:
        """OVR for each position (every catalog group when none given).

        Unknown positions are reported as 0.
        """
        positions = list(positions or [])
        if not positions:
            positions = self.catalog.group_keys

        results: Dict[str, int] = {}
        for position in positions:
            try:
                results[position] = self.position_ovr(position, stats)
            except UnknownPositionError:
                logger.warning("Position %s not found in coefficients", position)
                results[position] = 0
        return results

    def key_stats_for_position(
        self, position: str, top_n: int = DEFAULT_KEY_STATS
    ) -> List[KeyStat]:
        """Highest-weighted stats for *position* (empty if unknown)."""
        return self.catalog.key_stats(position, top_n)

    def simulate_training(
        self,
        position: str,
        current_stats: Mapping[str, Dict],
        stat_increases: Mapping[str, int],
    ) -> TrainingSimulation:
        """Apply fixed stat increases and compare position ratings.

        Raises:
            UnknownPositionError: If *position* has no coefficient group.
        """
        current_ovr = self.position_ovr(position, current_stats)
        new_stats = apply_stat_increases(current_stats, stat_increases)
        new_ovr = self.position_ovr(position, new_stats)

        return TrainingSimulation(
            position=position,
            current_ovr=current_ovr,
            new_ovr=new_ovr,
            improvement=new_ovr - current_ovr,
            current_stats=dict(current_stats),
            new_stats=new_stats,
            stat_increases=dict(stat_increases),
        )

    def calculate_training_plan(
        self,
        position: str,
        current_stats: Mapping[str, Dict],
        target_ovr: int,
        max_stat_increase: int = PLAN_DEFAULT_MAX_STAT_INCREASE,
    ) -> TrainingPlanResult:
        """Greedy search for stat increases that reach *target_ovr*.

        Each iteration raises the highest-coefficient stat that is still
        below both *max_stat_increase* and 99 by one point. The search never
        backtracks, so it can miss a target another ordering would reach.
        A failed search is reported in the result, never raised.

        Raises:
            UnknownPositionError: If *position* has no coefficient group.
        """
        current_ovr = self.position_ovr(position, current_stats)

        if current_ovr >= target_ovr:
            return TrainingPlanResult(
                success=False,
                message="Current OVR already meets or exceeds target",
                current_ovr=current_ovr,
                target_ovr=target_ovr,
            )

        key_stats = self.key_stats_for_position(position, PLAN_KEY_STATS)
        stat_increases: Dict[str, int] = {}

        for _ in range(PLAN_MAX_ITERATIONS):
            test_stats = apply_stat_increases(current_stats, stat_increases)
            test_ovr = self.position_ovr(position, test_stats)

            if test_ovr >= target_ovr:
                logger.debug(
                    "Training plan for %s reached %d: %s",
                    position, test_ovr, stat_increases,
                )
                return TrainingPlanResult(
                    success=True,
                    current_ovr=current_ovr,
                    target_ovr=target_ovr,
                    achieved_ovr=test_ovr,
                    stat_increases=stat_increases,
                    total_increase=sum(stat_increases.values()),
                )

            for stat in key_stats:
                increase = stat_increases.get(stat.key, 0)
                value = stat_value(current_stats, stat.key) or 0
                if increase < max_stat_increase and value + increase < MAX_STAT_VALUE:
                    stat_increases[stat.key] = increase + 1
                    break

        logger.info(
            "Could not reach OVR %d at %s (current %d, max +%d per stat)",
            target_ovr, position, current_ovr, max_stat_increase,
        )
        return TrainingPlanResult(
            success=False,
            message="Could not reach target OVR within constraints",
            current_ovr=current_ovr,
            target_ovr=target_ovr,
            max_stat_increase=max_stat_increase,
        )
