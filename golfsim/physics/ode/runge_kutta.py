"""Classical fourth-order Runge-Kutta method."""

from __future__ import annotations

from .base import Array, Integrator, RhsFn


class RungeKutta(Integrator):
    """RK4: four slopes per step, combined with weights 1, 2, 2, 1."""

    name = "runge_kutta"

    def advance(self, rhs: RhsFn, t: float, y: Array, h: float) -> Array:
        k1 = rhs(t, y)
        k2 = rhs(t + 0.5 * h, y + 0.5 * h * k1)
        k3 = rhs(t + 0.5 * h, y + 0.5 * h * k2)
        k4 = rhs(t + h, y + h * k3)
        return y + (h / 6.0) * (k1 + 2 * k2 + 2 * k3 + k4)


__all__ = ["RungeKutta"]
