"""Explicit midpoint method (second-order Runge-Kutta)."""

from __future__ import annotations

from .base import Array, Integrator, RhsFn


class Midpoint(Integrator):
    """Takes the slope at a half-step Euler estimate and applies it over the full step."""

    name = "midpoint"

    def advance(self, rhs: RhsFn, t: float, y: Array, h: float) -> Array:
        k1 = rhs(t, y)
        k2 = rhs(t + 0.5 * h, y + 0.5 * h * k1)
        return y + h * k2


__all__ = ["Midpoint"]
