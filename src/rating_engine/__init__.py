from src.rating_engine.coefficients import PositionCatalog, UnknownPositionError
from src.rating_engine.models import OVRResult, TrainingPlanResult
from src.rating_engine.ovr_calculator import (
    OVRCalculator,
    floor_weighted_ovr,
    rounded_clamped_ovr,
)
from src.rating_engine.training_planner import TrainingPlanner

__all__ = [
    "OVRCalculator",
    "OVRResult",
    "PositionCatalog",
    "TrainingPlanResult",
    "TrainingPlanner",
    "UnknownPositionError",
    "floor_weighted_ovr",
    "rounded_clamped_ovr",
]
