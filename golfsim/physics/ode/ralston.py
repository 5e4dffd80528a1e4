"""Ralston's second-order method."""

from __future__ import annotations

from .base import Array, Integrator, RhsFn


class Ralston(Integrator):
    """Two-stage method with the second slope taken at 3/4 of the step.

    The 1/3, 2/3 weighting minimises the truncation error bound among
    explicit two-stage schemes.
    """

    name = "ralston"

    def advance(self, rhs: RhsFn, t: float, y: Array, h: float) -> Array:
        k1 = rhs(t, y)
        k2 = rhs(t + 0.75 * h, y + 0.75 * h * k1)
        return y + h * ((1.0 / 3.0) * k1 + (2.0 / 3.0) * k2)


__all__ = ["Ralston"]
