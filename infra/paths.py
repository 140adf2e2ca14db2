from __future__ import annotations

from pathlib import Path

# Resolved project root (parent directory of this infra package).
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Bundled level files.
LEVELS_DIR = PROJECT_ROOT / "levels"

# Writable locations (logs, finished-game records).
STORAGE_DIR = PROJECT_ROOT / "storage"
LOG_DIR = STORAGE_DIR / "logs"
REPLAY_DIR = STORAGE_DIR / "replays"
