from pathlib import Path
import sys

import pytest

# Add repository root to sys.path so tests can import local modules without installation.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lambdamine import initialize, parse_level


def level_text(rows, trampolines=None, **metadata):
    """
    Build level text from map rows (top row first) and metadata keywords.

    level_text(["#R#"], Water=1, trampolines={"A": "1"})
    """
    lines = ["\n".join(rows)]
    meta = [f"{key} {value}" for key, value in metadata.items()]
    meta += [f"Trampoline {t} targets {d}" for t, d in (trampolines or {}).items()]
    if meta:
        lines.append("\n".join(meta))
    return "\n\n".join(lines) + "\n"


@pytest.fixture
def make_level():
    def _make(rows, trampolines=None, name="test.map", **metadata):
        return parse_level(level_text(rows, trampolines, **metadata), name).unwrap()
    return _make


@pytest.fixture
def make_snapshot(make_level):
    def _make(rows, trampolines=None, **metadata):
        return initialize(make_level(rows, trampolines, **metadata))
    return _make
