"""Per-step equations of motion for a ball sliding on a height field."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Mapping

from .data_structures import BallState
from .differentiation import SurfaceDifferentiator
from .functions import ScalarField, require_binding
from .ode import DerivativeFn

logger = logging.getLogger(__name__)

GRAVITY = 9.81  # m/s^2

MotionEquations = Dict[str, DerivativeFn]


@dataclass(frozen=True)
class SlopeFrictionAcceleration:
    """Tangent-plane acceleration along one axis for a frozen surface gradient.

    ``a = -g*grad / (1 + |grad|^2) - mu_k*g*v / (sqrt(1 + |grad|^2) * |v_t|)``
    where ``|v_t| = sqrt(vx^2 + vy^2 + (gx*vx + gy*vy)^2)`` is the speed
    along the tangent plane. At ``|v_t| == 0`` the friction term is zero.
    """

    axis: str
    grad_x: float
    grad_y: float
    kinetic_friction: float
    gravity: float = GRAVITY

    def __post_init__(self) -> None:
        if self.axis not in ("x", "y"):
            raise ValueError(f"axis must be 'x' or 'y', got {self.axis!r}")

    @property
    def slope_norm_sq(self) -> float:
        return 1.0 + self.grad_x**2 + self.grad_y**2

    def __call__(self, bindings: Mapping[str, float]) -> float:
        vx = require_binding(bindings, "vx")
        vy = require_binding(bindings, "vy")
        grad = self.grad_x if self.axis == "x" else self.grad_y
        velocity = vx if self.axis == "x" else vy
        norm_sq = self.slope_norm_sq
        slope_term = -self.gravity * grad / norm_sq
        vertical = self.grad_x * vx + self.grad_y * vy
        tangent_speed = math.sqrt(vx * vx + vy * vy + vertical * vertical)
        if tangent_speed == 0.0:
            return slope_term
        friction = self.kinetic_friction * self.gravity / math.sqrt(norm_sq)
        return slope_term - friction * velocity / tangent_speed


class MotionEquationBuilder:
    """Builds ``{x', y', vx', vy'}`` for the next integration step.

    The gradient is sampled once at the ball's current position and frozen
    for the whole step, so the equations must be rebuilt before every step.
    """

    def __init__(self, differentiator: SurfaceDifferentiator, gravity: float = GRAVITY) -> None:
        self.differentiator = differentiator
        self.gravity = gravity
        self._position_rates = {
            "x": ScalarField.identity("vx"),
            "y": ScalarField.identity("vy"),
        }

    def build(self, state: BallState, kinetic_friction: float) -> MotionEquations:
        grad_x, grad_y = self.differentiator.gradient(state.x, state.y)
        logger.debug("Frozen gradient (%.4f, %.4f) at (%.4f, %.4f)", grad_x, grad_y, state.x, state.y)
        equations: MotionEquations = dict(self._position_rates)
        equations["vx"] = SlopeFrictionAcceleration("x", grad_x, grad_y, kinetic_friction, self.gravity)
        equations["vy"] = SlopeFrictionAcceleration("y", grad_x, grad_y, kinetic_friction, self.gravity)
        return equations


__all__ = ["GRAVITY", "MotionEquationBuilder", "MotionEquations", "SlopeFrictionAcceleration"]
