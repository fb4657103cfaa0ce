"""Overall rating (OVR) calculator.

OVR is a weighted average of a player's stats using the coefficient set of a
position group::

    ovr = sum(value * coefficient) / sum(coefficient)

Two numeric policies exist:

* :func:`floor_weighted_ovr` floors the average and skips stats the player
  does not have (their coefficient is left out of the denominator). The
  buff/upgrade breakdown in :class:`OVRCalculator` uses this policy.
* :func:`rounded_clamped_ovr` rounds half up, clamps to ``[0, 99]`` and treats
  a missing stat as 0 while still counting its coefficient. Position-only
  ratings and the training planner use this policy.
"""

import logging
import math
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from src.rating_engine.coefficients import PositionCatalog, get_default_catalog
from src.rating_engine.config import (
    MAX_POSITION_OVR,
    MIN_POSITION_OVR,
    UPGRADE_OVR_BONUS,
)
from src.rating_engine.models import OVRResult

logger = logging.getLogger(__name__)


def upgrade_bonus(upgrade_level: int) -> int:
    """Flat OVR bonus for an upgrade level; 0 for unknown levels."""
    return UPGRADE_OVR_BONUS.get(upgrade_level, 0)


def stat_value(stats: Mapping[str, Dict], key: str) -> Optional[int]:
    """Current ``value`` of *key*, or None if the player lacks the stat."""
    entry = stats.get(key)
    if entry is None:
        return None
    try:
        return int(entry.get("value") or 0)
    except (TypeError, ValueError):
        return 0


def contributing_stats(
    stats: Mapping[str, Dict],
    coefficients: Mapping[str, Dict],
) -> List[Tuple[str, int, float]]:
    """``(key, value, coefficient)`` for stats present in both mappings.

    Ordered by coefficient, highest first (ties keep catalog order).
    """
    rows = []
    for key, entry in coefficients.items():
        value = stat_value(stats, key)
        if value is None:
            continue
        rows.append((key, value, entry["coefficient"]))
    rows.sort(key=lambda row: row[2], reverse=True)
    return rows


def weighted_average(
    stats: Mapping[str, Dict],
    coefficients: Mapping[str, Dict],
    bonus_for: Optional[Callable[[str], int]] = None,
) -> float:
    """Exact weighted average over the stats the player has.

    Args:
        stats: Player stats, ``{key: {"value": int, ...}}``.
        coefficients: Coefficient set, ``{key: {"name": str, "coefficient": n}}``.
        bonus_for: Optional per-stat additive bonus applied before weighting.

    Returns:
        The unrounded average, or 0.0 when no coefficient contributes.
    """
    weighted_sum = 0.0
    coefficient_sum = 0.0

    for key, value, coefficient in contributing_stats(stats, coefficients):
        if bonus_for is not None:
            value += bonus_for(key)
        weighted_sum += value * coefficient
        coefficient_sum += coefficient

    if coefficient_sum == 0:
        return 0.0
    return weighted_sum / coefficient_sum


def floor_weighted_ovr(
    stats: Mapping[str, Dict],
    coefficients: Mapping[str, Dict],
) -> int:
    """Floored weighted average; stats the player lacks are skipped."""
    return math.floor(weighted_average(stats, coefficients))


def rounded_clamped_ovr(
    stats: Mapping[str, Dict],
    coefficients: Mapping[str, Dict],
) -> int:
    """Position rating rounded half up and clamped to ``[0, 99]``.

    A stat missing from *stats* counts as 0 but its coefficient still
    contributes to the denominator.
    """
    weighted_sum = 0.0
    coefficient_sum = 0.0

    for key, entry in coefficients.items():
        coefficient = entry["coefficient"]
        weighted_sum += (stat_value(stats, key) or 0) * coefficient
        coefficient_sum += coefficient

    if coefficient_sum == 0:
        return 0

    ovr = math.floor(weighted_sum / coefficient_sum + 0.5)
    return min(MAX_POSITION_OVR, max(MIN_POSITION_OVR, ovr))


class OVRCalculator:
    """Compute base, buffed and final OVR for a player.

    The calculator is stateless: buff state is passed in per call. Any
    object exposing ``training_per_stat``, ``team_color_per_stat``,
    ``upgrade_level`` and ``total_flat_buff()`` (see
    :class:`src.buff_manager.buff_state.BuffState`) is accepted.
    """

    def __init__(self, catalog: Optional[PositionCatalog] = None):
        self.catalog = catalog or get_default_catalog()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def calculate(
        self,
        stats: Mapping[str, Dict],
        coefficients: Mapping[str, Dict],
        buffs=None,
    ) -> OVRResult:
        """Full OVR breakdown for one coefficient set and buff state.

        Without *buffs* every buff counts as zero and the upgrade level as 1,
        so all three ratings are equal.
        """
        base_exact = weighted_average(stats, coefficients)

        if buffs is None:
            calculated_exact = base_exact
            bonus = 0
        else:
            calculated_exact = weighted_average(
                stats, coefficients, bonus_for=self._stat_bonus(buffs)
            )
            bonus = upgrade_bonus(buffs.upgrade_level)

        base_ovr = math.floor(base_exact)
        final_ovr = math.floor(calculated_exact + bonus)

        result = OVRResult(
            base_ovr=base_ovr,
            calculated_ovr=math.floor(calculated_exact),
            final_ovr=final_ovr,
            total_buff=final_ovr - base_ovr,
        )
        logger.debug(
            "OVR base=%d calculated=%d final=%d (upgrade bonus %d)",
            result.base_ovr, result.calculated_ovr, result.final_ovr, bonus,
        )
        return result

    def calculate_for_position(
        self,
        position: str,
        stats: Mapping[str, Dict],
        buffs=None,
    ) -> OVRResult:
        """Resolve *position* and compute its OVR breakdown.

        Raises:
            UnknownPositionError: If *position* has no coefficient group.
        """
        coefficients = self.catalog.resolve(position)
        return self.calculate(stats, coefficients, buffs)

    def buffed_stat_values(
        self,
        stats: Mapping[str, Dict],
        coefficients: Mapping[str, Dict],
        buffs,
    ) -> Dict[str, int]:
        """Displayed value of every contributing stat after buffs."""
        bonus_for = self._stat_bonus(buffs)
        return {
            key: value + bonus_for(key)
            for key, value, _ in contributing_stats(stats, coefficients)
        }

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _stat_bonus(buffs) -> Callable[[str], int]:
        """Per-stat additive bonus: training + level + team color layers."""
        global_bonus = buffs.total_flat_buff()

        def bonus_for(key: str) -> int:
            return (
                buffs.training_per_stat.get(key, 0)
                + global_bonus
                + buffs.team_color_per_stat.get(key, 0)
            )

        return bonus_for
