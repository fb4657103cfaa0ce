"""Buff state data model - the mutable input of an OVR simulation."""

from dataclasses import dataclass, field
from typing import Dict

from src.buff_manager.config import (
    DEFAULT_UPGRADE_LEVEL,
    MAX_TRAINED_STATS,
    MAX_TRAINING_VALUE,
)


@dataclass
class BuffState:
    """Buffs applied to one player in one position group."""

    training_per_stat: Dict[str, int] = field(default_factory=dict)
    team_color_per_stat: Dict[str, int] = field(default_factory=dict)
    level: int = 0
    team_color: int = 0
    upgrade_level: int = DEFAULT_UPGRADE_LEVEL

    def get_training(self, stat_key: str) -> int:
        """Training points on a stat (0 if untrained)."""
        return self.training_per_stat.get(stat_key, 0)

    def trained_stat_count(self) -> int:
        """Number of stats holding at least one training point."""
        return sum(1 for value in self.training_per_stat.values() if value > 0)

    def can_increment_training(self, stat_key: str) -> bool:
        """Whether one more training point on *stat_key* is allowed."""
        current = self.get_training(stat_key)
        if current >= MAX_TRAINING_VALUE:
            return False
        if current == 0 and self.trained_stat_count() >= MAX_TRAINED_STATS:
            return False
        return True

    def increment_training(self, stat_key: str) -> bool:
        """Add a training point; a rejected increment leaves state unchanged.

        Returns:
            True if the value changed.
        """
        if not self.can_increment_training(stat_key):
            return False
        self.training_per_stat[stat_key] = self.get_training(stat_key) + 1
        return True

    def decrement_training(self, stat_key: str) -> bool:
        """Remove a training point, never going below 0.

        Returns:
            True if the value changed.
        """
        current = self.get_training(stat_key)
        if current <= 0:
            return False
        self.training_per_stat[stat_key] = current - 1
        return True

    def reset(self):
        """Clear every buff (used when the position group changes)."""
        self.training_per_stat.clear()
        self.team_color_per_stat.clear()
        self.level = 0
        self.team_color = 0
        self.upgrade_level = DEFAULT_UPGRADE_LEVEL

    def total_flat_buff(self) -> int:
        """Buff added to every stat (level + team color)."""
        return self.level + self.team_color
