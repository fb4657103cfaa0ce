from src.buff_manager.buff_controller import BuffController
from src.buff_manager.buff_rules import BuffRules, BuffValidationError
from src.buff_manager.buff_state import BuffState

__all__ = [
    "BuffController",
    "BuffRules",
    "BuffState",
    "BuffValidationError",
]
