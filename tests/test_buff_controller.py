"""Tests for the buff controller session workflow."""

import pytest

from src.buff_manager.buff_controller import BuffController
from src.buff_manager.buff_rules import BuffValidationError
from src.buff_manager.buff_state import BuffState
from src.rating_engine.coefficients import UnknownPositionError


# ── Helpers ──────────────────────────────────────────────────────────


def _stats(**values):
    return {key: {"value": value} for key, value in values.items()}


def _make_player(player_id, **values):
    return {"player_id": player_id, "stats": _stats(**values)}


@pytest.fixture
def controller(small_catalog):
    return BuffController(small_catalog)


# ── Position selection ───────────────────────────────────────────────


class TestSelectPosition:
    def test_returns_group_key(self, controller):
        assert controller.select_position("p1", "ST") == "LS/ST/RS"
        assert controller.selected_group("p1") == "LS/ST/RS"

    def test_fresh_state_on_first_selection(self, controller):
        controller.select_position("p1", "ST")
        assert controller.get_state("p1") == BuffState()

    def test_same_group_keeps_buffs(self, controller):
        controller.select_position("p1", "ST")
        controller.increment_training("p1", "finishing")

        controller.select_position("p1", "LS")
        assert controller.get_state("p1").get_training("finishing") == 1

    def test_group_change_resets_buffs(self, controller):
        controller.select_position("p1", "ST")
        controller.increment_training("p1", "speed")
        controller.set_level("p1", 4)

        controller.select_position("p1", "CB")
        assert controller.get_state("p1") == BuffState()

    def test_group_change_clears_held_state(self, controller):
        controller.select_position("p1", "ST")
        state = controller.get_state("p1")
        controller.increment_training("p1", "speed")
        controller.set_team_color_for_stat("p1", "speed", 3)

        controller.select_position("p1", "LB")
        assert state == BuffState()
        assert controller.get_state("p1") is state

    def test_switching_back_does_not_restore(self, controller):
        controller.select_position("p1", "ST")
        controller.set_upgrade_level("p1", 8)
        controller.select_position("p1", "CB")
        controller.select_position("p1", "ST")

        assert controller.get_state("p1").upgrade_level == 1

    def test_unknown_position_raises(self, controller):
        with pytest.raises(UnknownPositionError):
            controller.select_position("p1", "GK")
        assert controller.selected_group("p1") is None

    def test_get_state_without_selection(self, controller):
        with pytest.raises(KeyError):
            controller.get_state("p1")

    def test_clear(self, controller):
        controller.select_position("p1", "ST")
        controller.clear("p1")
        assert controller.selected_group("p1") is None

    def test_players_are_independent(self, controller):
        controller.select_position("p1", "ST")
        controller.select_position("p2", "ST")
        controller.set_level("p1", 2)

        assert controller.get_state("p2").level == 0


# ── Training and setters ─────────────────────────────────────────────


class TestBuffChanges:
    def test_increment_and_decrement(self, controller):
        controller.select_position("p1", "ST")
        assert controller.increment_training("p1", "finishing") is True
        assert controller.increment_training("p1", "finishing") is True
        assert controller.increment_training("p1", "finishing") is False
        assert controller.decrement_training("p1", "finishing") is True
        assert controller.get_state("p1").get_training("finishing") == 1

    def test_training_unrated_stat_rejected(self, controller):
        controller.select_position("p1", "ST")
        with pytest.raises(BuffValidationError):
            controller.increment_training("p1", "marking")

    def test_training_without_selection(self, controller):
        with pytest.raises(KeyError):
            controller.increment_training("p1", "finishing")

    def test_trained_stat_count(self, controller):
        controller.select_position("p1", "ST")
        controller.increment_training("p1", "finishing")
        controller.increment_training("p1", "speed")
        assert controller.trained_stat_count("p1") == 2
        assert controller.can_increment_training("p1", "speed") is True

    @pytest.mark.parametrize(
        "setter, value",
        [("set_level", 5), ("set_team_color", 10), ("set_upgrade_level", 0),
         ("set_upgrade_level", 14), ("set_level", -1)],
    )
    def test_out_of_range_rejected(self, controller, setter, value):
        controller.select_position("p1", "ST")
        with pytest.raises(BuffValidationError):
            getattr(controller, setter)("p1", value)
        assert controller.get_state("p1") == BuffState()

    def test_setters_store_values(self, controller):
        controller.select_position("p1", "ST")
        controller.set_level("p1", 3)
        controller.set_team_color("p1", 6)
        controller.set_upgrade_level("p1", 13)

        state = controller.get_state("p1")
        assert (state.level, state.team_color, state.upgrade_level) == (3, 6, 13)

    def test_team_color_for_stat(self, controller):
        controller.select_position("p1", "ST")
        controller.set_team_color_for_stat("p1", "speed", 4)
        assert controller.get_state("p1").team_color_per_stat == {"speed": 4}

        controller.set_team_color_for_stat("p1", "speed", 0)
        assert controller.get_state("p1").team_color_per_stat == {}

    def test_team_color_for_unrated_stat_rejected(self, controller):
        controller.select_position("p1", "ST")
        with pytest.raises(BuffValidationError):
            controller.set_team_color_for_stat("p1", "marking", 2)


# ── Ratings ──────────────────────────────────────────────────────────


class TestRatings:
    def test_calculate_unbuffed(self, controller, striker):
        controller.select_position("p1", "ST")
        result = controller.calculate(striker)
        # (130*2 + 121) / 3 = 127
        assert result.base_ovr == result.final_ovr == 127
        assert result.total_buff == 0

    def test_calculate_with_buffs(self, controller, striker):
        controller.select_position("p1", "ST")
        controller.increment_training("p1", "finishing")
        controller.increment_training("p1", "finishing")
        controller.set_level("p1", 1)
        controller.set_upgrade_level("p1", 5)

        result = controller.calculate(striker)
        # finishing 133, speed 122: (266 + 122) / 3 = 129.33, + 6 = 135.33
        assert result.base_ovr == 127
        assert result.calculated_ovr == 129
        assert result.final_ovr == 135
        assert result.total_buff == 8

    def test_calculate_without_selection(self, controller, striker):
        with pytest.raises(KeyError):
            controller.calculate(striker)

    def test_compare_keeps_input_order(self, controller):
        players = [
            _make_player("a", finishing=100, speed=100),
            _make_player("b", finishing=120, speed=90),
        ]
        results = controller.compare(players, "ST")

        assert [pid for pid, _ in results] == ["a", "b"]
        assert results[0][1].final_ovr == 100
        assert results[1][1].final_ovr == 110

    def test_compare_keeps_buffs_in_same_group(self, controller):
        controller.select_position("a", "RS")
        controller.set_level("a", 2)

        results = dict(controller.compare([_make_player("a", finishing=100, speed=100)], "ST"))
        assert results["a"].final_ovr == 102

    def test_compare_resets_buffs_from_other_group(self, controller):
        controller.select_position("a", "CB")
        controller.set_level("a", 2)

        results = dict(controller.compare([_make_player("a", finishing=100, speed=100)], "ST"))
        assert results["a"].total_buff == 0
