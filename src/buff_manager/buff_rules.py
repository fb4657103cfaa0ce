"""Buff range rules and validation."""

from typing import Mapping, Optional, Tuple

from src.buff_manager.config import (
    LEVEL_RANGE,
    TEAM_COLOR_PER_STAT_RANGE,
    TEAM_COLOR_RANGE,
    UPGRADE_LEVEL_RANGE,
)


class BuffValidationError(ValueError):
    """Raised when a buff value falls outside its allowed range."""

    pass


class BuffRules:
    """Validates buff values before they reach a BuffState."""

    def validate_level(self, value: int) -> Tuple[bool, Optional[str]]:
        return self._validate_range("level", value, LEVEL_RANGE)

    def validate_team_color(self, value: int) -> Tuple[bool, Optional[str]]:
        return self._validate_range("team color", value, TEAM_COLOR_RANGE)

    def validate_team_color_for_stat(
        self, stat_key: str, value: int
    ) -> Tuple[bool, Optional[str]]:
        return self._validate_range(
            f"team color for {stat_key}", value, TEAM_COLOR_PER_STAT_RANGE
        )

    def validate_upgrade_level(self, value: int) -> Tuple[bool, Optional[str]]:
        return self._validate_range("upgrade level", value, UPGRADE_LEVEL_RANGE)

    def validate_stat_key(
        self, stat_key: str, coefficients: Mapping[str, dict]
    ) -> Tuple[bool, Optional[str]]:
        """A per-stat buff only makes sense on a stat the group weighs."""
        if stat_key not in coefficients:
            return False, f"Stat {stat_key!r} is not rated in this position group"
        return True, None

    @staticmethod
    def _validate_range(
        label: str, value: int, bounds: Tuple[int, int]
    ) -> Tuple[bool, Optional[str]]:
        low, high = bounds
        if isinstance(value, bool) or not isinstance(value, int):
            return False, f"Invalid {label} {value!r}: must be an integer"
        if not low <= value <= high:
            return False, f"Invalid {label} {value}: must be between {low} and {high}"
        return True, None
