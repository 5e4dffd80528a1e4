"""Explicit (forward) Euler method."""

from __future__ import annotations

from .base import Array, Integrator, RhsFn


class Euler(Integrator):
    """First order: ``y_{n+1} = y_n + h * f(t_n, y_n)``."""

    name = "euler"

    def advance(self, rhs: RhsFn, t: float, y: Array, h: float) -> Array:
        return y + h * rhs(t, y)


__all__ = ["Euler"]
