"""Shared fixtures for the OVR toolkit test suite."""

import pytest

from src.data_pipeline.cleaning import PlayerDataCleaner
from src.data_pipeline.transformation import PlayerTransformer
from src.rating_engine.coefficients import PositionCatalog


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

def _make_stats(**values):
    """Build a stats mapping: ``_make_stats(speed=130)`` -> ``{"speed": {"value": 130}}``."""
    return {key: {"value": value} for key, value in values.items()}


def _make_coefficients(**weights):
    """Build a coefficient set: ``_make_coefficients(speed=2)``."""
    return {key: {"name": key, "coefficient": weight} for key, weight in weights.items()}


SMALL_CATALOG = {
    "RW/LW": _make_coefficients(speed=2, dribbling=1),
    "LS/ST/RS": _make_coefficients(finishing=2, speed=1),
    "CB": _make_coefficients(marking=1, strength=1),
    "LB/RB": _make_coefficients(speed=1, marking=1),
}


@pytest.fixture
def small_catalog():
    return PositionCatalog(SMALL_CATALOG)


@pytest.fixture(scope="module")
def cleaner():
    return PlayerDataCleaner()


@pytest.fixture(scope="module")
def transformer():
    return PlayerTransformer()


@pytest.fixture
def striker():
    """Player record with stats for the small catalog's striker group."""
    return {
        "player_id": "p1",
        "season": "25TY",
        "name": "Striker One",
        "position": "ST",
        "stats": _make_stats(finishing=130, speed=121, dribbling=110),
    }
