"""
Mechanics module - Per-tick rule systems.

This module provides stateless resolvers for the tick engine:
- scan_order: Fixed traversal order for conflict-sensitive rules
- ActionResolver: Resolves the player's action
- BeardGrowth: Spreads beard on growth ticks
- RockPhysics: Gravity and sliding
- WaterSystem: Flooding and air accounting
- ProgressEvaluator: Derives the verdict of a tick

All resolvers are stateless - they take grids/snapshots and return results
without modifying their own state.
"""

from .traversal import scan_order
from .actions import ActionResolver, ActionResult
from .growth import BeardGrowth, GrowthResult
from .gravity import RockPhysics, RockResult, RockMove
from .water import WaterSystem, WaterResult
from .progress import ProgressEvaluator, ProgressResult

__all__ = [
    "scan_order",
    "ActionResolver",
    "ActionResult",
    "BeardGrowth",
    "GrowthResult",
    "RockPhysics",
    "RockResult",
    "RockMove",
    "WaterSystem",
    "WaterResult",
    "ProgressEvaluator",
    "ProgressResult",
]
