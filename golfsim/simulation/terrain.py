"""Course queries on top of a height field: water, friction zones, heights."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from golfsim.physics.configs import PhysicsParameters
from golfsim.physics.functions import ScalarField

from .configs import FrictionZone


class Terrain:
    """A height field plus the friction zones laid over it."""

    def __init__(
        self,
        height_function: ScalarField,
        friction_zones: Sequence[FrictionZone] = (),
        water_level: float = 0.0,
        default_friction: Optional[Tuple[float, float]] = None,
    ) -> None:
        self.height_function = height_function
        self.friction_zones = list(friction_zones)
        self.water_level = water_level
        if default_friction is None:
            params = PhysicsParameters()
            default_friction = (params.kinetic_friction, params.static_friction)
        self.default_friction = default_friction

    def height(self, x: float, y: float) -> float:
        return self.height_function.evaluate({"x": x, "y": y})

    def is_water(self, x: float, y: float) -> bool:
        return self.height(x, y) < self.water_level

    def zone_at(self, x: float, y: float) -> Optional[FrictionZone]:
        for zone in self.friction_zones:
            if zone.contains(x, y):
                return zone
        return None

    def friction_at(self, x: float, y: float) -> Tuple[float, float]:
        """``(kinetic, static)`` coefficients for the ground under ``(x, y)``."""
        zone = self.zone_at(x, y)
        if zone is None:
            return self.default_friction
        return zone.kinetic_friction, zone.static_friction


__all__ = ["Terrain"]
