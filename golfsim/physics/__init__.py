"""Surface physics kernel: height fields, finite differences, ODE solvers and the engine."""

from .configs import PhysicsParameters
from .data_structures import BallState, StateSnapshot
from .differentiation import SurfaceDifferentiator
from .engine import GRAVITY, REST_VELOCITY_THRESHOLD, PhysicsEngine
from .equations import MotionEquationBuilder, MotionEquations, SlopeFrictionAcceleration
from .functions import MissingVariableError, ParseError, ScalarField
from .ode import INTEGRATORS, Euler, Integrator, Midpoint, Ralston, RungeKutta, get_integrator

__all__ = [
    "BallState",
    "Euler",
    "GRAVITY",
    "INTEGRATORS",
    "Integrator",
    "Midpoint",
    "MissingVariableError",
    "MotionEquationBuilder",
    "MotionEquations",
    "ParseError",
    "PhysicsEngine",
    "PhysicsParameters",
    "REST_VELOCITY_THRESHOLD",
    "Ralston",
    "RungeKutta",
    "ScalarField",
    "SlopeFrictionAcceleration",
    "StateSnapshot",
    "SurfaceDifferentiator",
    "get_integrator",
]
