"""Fixed-stencil finite differences of a height field h(x, y)."""

from __future__ import annotations

from typing import Tuple

from .functions import ScalarField

DEFAULT_STEP = 0.01


class SurfaceDifferentiator:
    """Central finite differences along arbitrary directions of a height field.

    Directions are ``(dir_x, dir_y)`` vectors in the surface plane. The result
    is only a true directional derivative when the vector has unit length;
    an unnormalized vector scales the first derivative by its norm (and the
    second by the squared norm). Callers are responsible for normalizing.
    """

    def __init__(self, surface: ScalarField, step: float = DEFAULT_STEP) -> None:
        if step <= 0:
            raise ValueError("Finite-difference step must be positive")
        self.surface = surface
        self.step = float(step)

    def _height_along(self, x: float, y: float, dir_x: float, dir_y: float, offset: float) -> float:
        return self.surface.evaluate({"x": x + offset * dir_x, "y": y + offset * dir_y})

    def derivative(self, x: float, y: float, dir_x: float, dir_y: float) -> float:
        """Fourth-order first derivative, four field evaluations."""
        h = self.step
        f_p2 = self._height_along(x, y, dir_x, dir_y, 2 * h)
        f_p1 = self._height_along(x, y, dir_x, dir_y, h)
        f_m1 = self._height_along(x, y, dir_x, dir_y, -h)
        f_m2 = self._height_along(x, y, dir_x, dir_y, -2 * h)
        return (-f_p2 + 8 * f_p1 - 8 * f_m1 + f_m2) / (12 * h)

    def second_derivative(self, x: float, y: float, dir_x: float, dir_y: float) -> float:
        """Five-point second derivative, five field evaluations."""
        h = self.step
        f_p2 = self._height_along(x, y, dir_x, dir_y, 2 * h)
        f_p1 = self._height_along(x, y, dir_x, dir_y, h)
        f_0 = self._height_along(x, y, dir_x, dir_y, 0.0)
        f_m1 = self._height_along(x, y, dir_x, dir_y, -h)
        f_m2 = self._height_along(x, y, dir_x, dir_y, -2 * h)
        return (-f_p2 + 16 * f_p1 - 30 * f_0 + 16 * f_m1 - f_m2) / (12 * h * h)

    def derivative_x(self, x: float, y: float) -> float:
        return self.derivative(x, y, 1.0, 0.0)

    def derivative_y(self, x: float, y: float) -> float:
        return self.derivative(x, y, 0.0, 1.0)

    def gradient(self, x: float, y: float) -> Tuple[float, float]:
        return self.derivative_x(x, y), self.derivative_y(x, y)


__all__ = ["DEFAULT_STEP", "SurfaceDifferentiator"]
