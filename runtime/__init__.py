from .runner import GameRecord, GameRunner
from .controls import KEY_MAP, action_for_key, actions_for_line

__all__ = [
    "GameRecord",
    "GameRunner",
    "KEY_MAP",
    "action_for_key",
    "actions_for_line",
]
