from .paths import PROJECT_ROOT, LEVELS_DIR, LOG_DIR, REPLAY_DIR, STORAGE_DIR
from .logger import configure_logging, get_logger

__all__ = [
    "PROJECT_ROOT",
    "LEVELS_DIR",
    "STORAGE_DIR",
    "LOG_DIR",
    "REPLAY_DIR",
    "configure_logging",
    "get_logger",
]
