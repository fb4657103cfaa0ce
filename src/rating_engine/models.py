"""Data models for the rating engine."""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class OVRResult:
    """Overall rating breakdown for one player in one position group."""

    base_ovr: int
    calculated_ovr: int  # Buffed, before the upgrade bonus
    final_ovr: int
    total_buff: int


@dataclass(frozen=True)
class KeyStat:
    """A stat ranked by its weight in a position group."""

    key: str
    name: str
    coefficient: float


@dataclass(frozen=True)
class CoefficientLookup:
    """Coefficient set resolved for a single position code."""

    position: str
    group_key: str
    coefficients: Dict[str, Dict]


@dataclass
class TrainingSimulation:
    """Before/after ratings for a fixed set of stat increases."""

    position: str
    current_ovr: int
    new_ovr: int
    improvement: int
    current_stats: Dict[str, Dict]
    new_stats: Dict[str, Dict]
    stat_increases: Dict[str, int]


@dataclass
class TrainingPlanResult:
    """Outcome of the greedy training-plan search."""

    success: bool
    current_ovr: int
    target_ovr: int
    message: Optional[str] = None
    achieved_ovr: Optional[int] = None
    stat_increases: Dict[str, int] = field(default_factory=dict)
    total_increase: int = 0
    max_stat_increase: Optional[int] = None
