"""Configuration for the surface physics engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass
class PhysicsParameters:
    """Friction coefficients and numerical settings for :class:`PhysicsEngine`."""

    kinetic_friction: float = 0.1
    static_friction: float = 0.2
    derivative_step: float = 0.01  # finite-difference spacing on the height field
    step_size: float = 0.001  # seconds per engine update
    integrator: str = "runge_kutta"

    def as_dict(self) -> Dict[str, object]:
        return {
            "kinetic_friction": self.kinetic_friction,
            "static_friction": self.static_friction,
            "derivative_step": self.derivative_step,
            "step_size": self.step_size,
            "integrator": self.integrator,
        }


__all__ = ["PhysicsParameters"]
