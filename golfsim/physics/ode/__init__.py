"""Interchangeable explicit ODE integrators.

All solvers share the validated ``Integrator.solve`` contract and differ only
in their per-step update rule.
"""

from __future__ import annotations

from typing import Dict, Type

from .base import DerivativeFn, Integrator
from .euler import Euler
from .midpoint import Midpoint
from .ralston import Ralston
from .runge_kutta import RungeKutta

INTEGRATORS: Dict[str, Type[Integrator]] = {
    "euler": Euler,
    "midpoint": Midpoint,
    "ralston": Ralston,
    "runge_kutta": RungeKutta,
    "rk4": RungeKutta,
}


def get_integrator(name: str) -> Integrator:
    """Return a fresh integrator for a registry name such as ``"rk4"``."""
    key = name.strip().lower().replace("-", "_")
    try:
        return INTEGRATORS[key]()
    except KeyError:
        known = ", ".join(sorted(INTEGRATORS))
        raise ValueError(f"Unknown integrator '{name}'; expected one of: {known}") from None


__all__ = [
    "DerivativeFn",
    "Euler",
    "INTEGRATORS",
    "Integrator",
    "Midpoint",
    "Ralston",
    "RungeKutta",
    "get_integrator",
]
