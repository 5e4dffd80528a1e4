"""Configuration objects for terrain and headless shot simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from golfsim.physics.configs import PhysicsParameters


@dataclass
class FrictionZone:
    """Axis-aligned rectangle with its own friction, e.g. a sand trap.

    Bounds are inclusive on every edge.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    kinetic_friction: float = 0.7
    static_friction: float = 1.0
    name: str = "sand"

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"Friction zone '{self.name}' has inverted bounds")

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
            "kinetic_friction": self.kinetic_friction,
            "static_friction": self.static_friction,
        }


@dataclass
class ShotConfig:
    """Goal placement and stopping rules for :class:`ShotSimulator`."""

    goal_x: float = 0.0
    goal_y: float = 0.0
    goal_radius: float = 1.5
    max_speed: float = 100.0  # m/s per axis before a run counts as diverged
    max_steps: int = 200_000
    water_level: float = 0.0  # heights strictly below this are water

    def as_dict(self) -> Dict[str, object]:
        return {
            "goal_x": self.goal_x,
            "goal_y": self.goal_y,
            "goal_radius": self.goal_radius,
            "max_speed": self.max_speed,
            "max_steps": self.max_steps,
            "water_level": self.water_level,
        }


@dataclass
class SimulationConfig:
    """Top-level configuration: course surface, physics and shot rules."""

    height_function: str = "0"
    physics: PhysicsParameters = field(default_factory=PhysicsParameters)
    friction_zones: List[FrictionZone] = field(default_factory=list)
    shot: ShotConfig = field(default_factory=ShotConfig)

    def as_dict(self) -> Dict[str, object]:
        return {
            "height_function": self.height_function,
            "physics": self.physics.as_dict(),
            "friction_zones": [zone.as_dict() for zone in self.friction_zones],
            "shot": self.shot.as_dict(),
        }


__all__ = ["FrictionZone", "ShotConfig", "SimulationConfig"]
