"""
Water and air accounting.
"""

from __future__ import annotations
from dataclasses import dataclass

from ..core.types import Position


@dataclass
class WaterResult:
    """
    Attributes:
        water: Water row after this tick
        risen: True if the water rose this tick
        submerged: True if the robot ends the tick at or below the water row
        air: Remaining air after this tick
    """
    water: int
    risen: bool
    submerged: bool
    air: int

    @property
    def drowned(self) -> bool:
        return self.air < 0

    @property
    def log(self) -> str:
        parts = []
        if self.risen:
            parts.append(f"Water rises to row {self.water}")
        if self.submerged:
            parts.append(f"Robot underwater, air left {self.air}")
        if self.drowned:
            parts.append("Robot drowned")
        return "; ".join(parts)


class WaterSystem:
    """Stateless flooding rule."""

    @staticmethod
    def is_flood_tick(tick: int, flooding: int) -> bool:
        return flooding > 0 and tick % flooding == 0

    def apply(self, water: int, air: int, robot: Position, tick: int, flooding: int, waterproof: int) -> WaterResult:
        """
        Raise the water if due and account for the robot's air.

        Args:
            water: Water row before this tick
            air: Remaining air before this tick
            robot: Robot position after actions and physics
            tick: Number of the tick being processed
            flooding: Ticks between water rises (0 = never)
            waterproof: Air restored when the robot is above water

        Returns:
            WaterResult
        """
        risen = self.is_flood_tick(tick, flooding)
        if risen:
            water += 1

        submerged = robot[1] <= water
        air = air - 1 if submerged else waterproof
        return WaterResult(water=water, risen=risen, submerged=submerged, air=air)
