"""Friction-aware motion of a ball across a scalar height field."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .configs import PhysicsParameters
from .data_structures import BallState
from .differentiation import DEFAULT_STEP, SurfaceDifferentiator
from .equations import GRAVITY, MotionEquationBuilder, MotionEquations
from .functions import ScalarField
from .ode import Integrator, get_integrator

logger = logging.getLogger(__name__)

REST_VELOCITY_THRESHOLD = 0.001
TIME_VARIABLE = "t"


class PhysicsEngine:
    """Advances a :class:`BallState` over a surface using an ODE solver.

    A resting ball only starts to move when the slope can overcome static
    friction; a moving ball is integrated with kinetic friction using
    equations rebuilt from the gradient at its current position.
    """

    def __init__(
        self,
        solver: Integrator,
        surface_function: ScalarField,
        kinetic_friction: float = 0.1,
        static_friction: float = 0.2,
        derivative_step: float = DEFAULT_STEP,
    ) -> None:
        self.solver = solver
        self._surface = surface_function
        self.differentiator = SurfaceDifferentiator(surface_function, derivative_step)
        self.equations = MotionEquationBuilder(self.differentiator, GRAVITY)
        self.kinetic_friction = float(kinetic_friction)
        self.static_friction = float(static_friction)

    @classmethod
    def from_parameters(
        cls, surface_function: ScalarField, params: Optional[PhysicsParameters] = None
    ) -> "PhysicsEngine":
        params = params or PhysicsParameters()
        return cls(
            get_integrator(params.integrator),
            surface_function,
            kinetic_friction=params.kinetic_friction,
            static_friction=params.static_friction,
            derivative_step=params.derivative_step,
        )

    def get_surface_function(self) -> ScalarField:
        return self._surface

    def set_friction(self, kinetic_friction: float, static_friction: float) -> None:
        """Replace the friction coefficients used by all later updates."""
        if (kinetic_friction, static_friction) != (self.kinetic_friction, self.static_friction):
            logger.debug("Friction set to mu_k=%.3f mu_s=%.3f", kinetic_friction, static_friction)
        self.kinetic_friction = float(kinetic_friction)
        self.static_friction = float(static_friction)

    # Surface queries exposed for heuristics that read slope or curvature.

    def derivative(self, x: float, y: float, dir_x: float, dir_y: float) -> float:
        """Slope along ``(dir_x, dir_y)``; pass a unit vector for a true directional derivative."""
        return self.differentiator.derivative(x, y, dir_x, dir_y)

    def second_derivative(self, x: float, y: float, dir_x: float, dir_y: float) -> float:
        """Curvature along ``(dir_x, dir_y)``; pass a unit vector."""
        return self.differentiator.second_derivative(x, y, dir_x, dir_y)

    def derivative_x(self, x: float, y: float) -> float:
        return self.differentiator.derivative_x(x, y)

    def derivative_y(self, x: float, y: float) -> float:
        return self.differentiator.derivative_y(x, y)

    # Rest / motion gating.

    def is_at_rest(self, state: BallState) -> bool:
        return abs(state.vx) < REST_VELOCITY_THRESHOLD and abs(state.vy) < REST_VELOCITY_THRESHOLD

    def can_overcome_static_friction(self, state: BallState) -> bool:
        """Unit-mass tangent-plane test of slope pull against the static limit."""
        dx, dy = self.differentiator.gradient(state.x, state.y)
        normal_force = GRAVITY * (1 + dx**2 + dy**2)
        static_limit = self.static_friction * normal_force
        driving_force = GRAVITY * math.sqrt(dx**2 + dy**2)
        return driving_force > static_limit

    def get_differential_equations(self, state: BallState) -> MotionEquations:
        return self.equations.build(state, self.kinetic_friction)

    def update(self, state: BallState, step_size: float) -> None:
        """Advance ``state`` in place by exactly one step of ``step_size`` seconds."""
        self._integrate(state, step_size, step_size)

    def update_to_certain_time(self, state: BallState, step_size: float, time: float) -> None:
        """Advance ``state`` in place to ``time`` seconds, in steps of ``step_size``.

        The motion equations are built once from the starting position, so
        the gradient stays frozen for the whole interval.
        """
        self._integrate(state, step_size, time)

    def _integrate(self, state: BallState, step_size: float, stopping_point: float) -> None:
        if self.is_at_rest(state) and not self.can_overcome_static_friction(state):
            logger.debug("Ball at rest at (%.4f, %.4f); static friction holds", state.x, state.y)
            return
        equations = self.get_differential_equations(state)
        results = self.solver.solve(
            equations, state.to_bindings(0.0, TIME_VARIABLE), step_size, stopping_point, TIME_VARIABLE
        )
        if not results:
            logger.error(
                "No states were returned by %s (step_size=%g, stopping_point=%g); ball state left unchanged",
                self.solver.name,
                step_size,
                stopping_point,
            )
            return
        final = results[-1]
        state.set(final["x"], final["y"], final["vx"], final["vy"])


__all__ = ["GRAVITY", "PhysicsEngine", "REST_VELOCITY_THRESHOLD"]
