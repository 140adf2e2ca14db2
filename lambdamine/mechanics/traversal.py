"""
Traversal policy - the fixed scan order for conflict-sensitive rules.

Rules that touch many cells in one tick (growth, rock physics) visit them
in this order so that rendering and tie-breaks are reproducible.
"""

from __future__ import annotations
from typing import Iterable, List

from ..core.types import Position


def scan_key(pos: Position) -> tuple[int, int]:
    """Sort key: ascending row, then ascending column."""
    return (pos[1], pos[0])


def scan_order(positions: Iterable[Position]) -> List[Position]:
    """
    Return positions in scan order: bottom row first, left to right.

    Args:
        positions: Any iterable of positions (duplicates are kept)

    Returns:
        New sorted list
    """
    return sorted(positions, key=scan_key)
