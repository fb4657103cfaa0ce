"""Buff controller - owns buff state per player and position group."""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from src.buff_manager.buff_rules import BuffRules, BuffValidationError
from src.buff_manager.buff_state import BuffState
from src.rating_engine.coefficients import PositionCatalog, get_default_catalog
from src.rating_engine.models import OVRResult
from src.rating_engine.ovr_calculator import OVRCalculator

logger = logging.getLogger(__name__)


class BuffController:
    """Coordinates BuffRules (validation), BuffState (mutation) and the
    OVRCalculator for every player in one simulation session.

    Each player has at most one selected position group. State is keyed by
    ``(player_id, group_key)`` and is rebuilt from scratch whenever the
    player's selected group changes. Sessions are not shared: concurrent
    users each need their own controller.
    """

    def __init__(
        self,
        catalog: Optional[PositionCatalog] = None,
        calculator: Optional[OVRCalculator] = None,
    ):
        self.catalog = catalog or get_default_catalog()
        self.calculator = calculator or OVRCalculator(self.catalog)
        self.rules = BuffRules()
        self._states: Dict[Tuple[str, str], BuffState] = {}
        self._selected: Dict[str, str] = {}

    # ------------------------------------------------------------------
    # Position selection
    # ------------------------------------------------------------------

    def select_position(self, player_id: str, position: str) -> str:
        """Select the position group a player is simulated in.

        *position* may be a single code (``"ST"``) or a group key
        (``"LS/ST/RS"``). Switching to a different group discards the old
        buffs and starts from a fresh state.

        Returns:
            The resolved group key.

        Raises:
            UnknownPositionError: If *position* has no coefficient group.
        """
        self.catalog.resolve(position)
        group_key = self.catalog.find_group_key(position)

        previous = self._selected.get(player_id)
        if previous != group_key:
            state = self._states.pop((player_id, previous), None)
            if state is None:
                state = BuffState()
            else:
                state.reset()
                logger.debug(
                    "Player %s moved %s -> %s, buffs reset",
                    player_id, previous, group_key,
                )
            self._selected[player_id] = group_key
            self._states[(player_id, group_key)] = state

        return group_key

    def selected_group(self, player_id: str) -> Optional[str]:
        return self._selected.get(player_id)

    def get_state(self, player_id: str) -> BuffState:
        """Buff state of the player's selected group.

        Raises:
            KeyError: If no position has been selected for the player.
        """
        group_key = self._selected.get(player_id)
        if group_key is None:
            raise KeyError(f"No position selected for player {player_id}")
        return self._states[(player_id, group_key)]

    def clear(self, player_id: str):
        """Forget a player's selection and buffs."""
        group_key = self._selected.pop(player_id, None)
        if group_key is not None:
            self._states.pop((player_id, group_key), None)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def increment_training(self, player_id: str, stat_key: str) -> bool:
        """Add a training point; limits are enforced as a silent no-op.

        Returns:
            True if the training value changed.

        Raises:
            BuffValidationError: If the stat is not rated in the group.
        """
        self._check_stat_key(player_id, stat_key)
        changed = self.get_state(player_id).increment_training(stat_key)
        if not changed:
            logger.debug("Training increment on %s rejected for %s", stat_key, player_id)
        return changed

    def decrement_training(self, player_id: str, stat_key: str) -> bool:
        self._check_stat_key(player_id, stat_key)
        return self.get_state(player_id).decrement_training(stat_key)

    def can_increment_training(self, player_id: str, stat_key: str) -> bool:
        """Lets a UI disable the increment control ahead of time."""
        return self.get_state(player_id).can_increment_training(stat_key)

    def trained_stat_count(self, player_id: str) -> int:
        return self.get_state(player_id).trained_stat_count()

    # ------------------------------------------------------------------
    # Buff setters
    # ------------------------------------------------------------------

    def set_level(self, player_id: str, value: int):
        self._raise_if_invalid(self.rules.validate_level(value))
        self.get_state(player_id).level = value

    def set_team_color(self, player_id: str, value: int):
        self._raise_if_invalid(self.rules.validate_team_color(value))
        self.get_state(player_id).team_color = value

    def set_upgrade_level(self, player_id: str, value: int):
        self._raise_if_invalid(self.rules.validate_upgrade_level(value))
        self.get_state(player_id).upgrade_level = value

    def set_team_color_for_stat(self, player_id: str, stat_key: str, value: int):
        self._check_stat_key(player_id, stat_key)
        self._raise_if_invalid(self.rules.validate_team_color_for_stat(stat_key, value))
        state = self.get_state(player_id)
        if value == 0:
            state.team_color_per_stat.pop(stat_key, None)
        else:
            state.team_color_per_stat[stat_key] = value

    # ------------------------------------------------------------------
    # Ratings
    # ------------------------------------------------------------------

    def calculate(self, player: Mapping) -> OVRResult:
        """OVR breakdown for *player* in its selected group.

        Args:
            player: Player record with ``player_id`` and ``stats``.
        """
        player_id = player["player_id"]
        group_key = self._selected.get(player_id)
        if group_key is None:
            raise KeyError(f"No position selected for player {player_id}")

        return self.calculator.calculate(
            player.get("stats", {}),
            self.catalog.resolve(group_key),
            self.get_state(player_id),
        )

    def compare(
        self, players: List[Mapping], position: str
    ) -> List[Tuple[str, OVRResult]]:
        """Rate several players in one position group.

        Each player keeps its own buffs while the group stays the same;
        players coming from another group start from fresh buffs.

        Returns:
            ``(player_id, OVRResult)`` pairs in input order.
        """
        results = []
        for player in players:
            self.select_position(player["player_id"], position)
            results.append((player["player_id"], self.calculate(player)))
        return results

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _check_stat_key(self, player_id: str, stat_key: str):
        group_key = self._selected.get(player_id)
        if group_key is None:
            raise KeyError(f"No position selected for player {player_id}")
        self._raise_if_invalid(
            self.rules.validate_stat_key(stat_key, self.catalog.resolve(group_key))
        )

    @staticmethod
    def _raise_if_invalid(check: Tuple[bool, Optional[str]]):
        is_valid, error_msg = check
        if not is_valid:
            logger.warning("Invalid buff change: %s", error_msg)
            raise BuffValidationError(error_msg)
