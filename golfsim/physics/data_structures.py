"""Lightweight state records shared by the engine and its consumers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Mapping

# One integration snapshot: the independent variable plus every integrated variable.
StateSnapshot = Dict[str, float]


@dataclass
class BallState:
    """Position ``(x, y)`` and velocity ``(vx, vy)`` of a ball on the surface plane.

    The engine advances a ball by mutating it in place; callers that need the
    previous state should take a :meth:`copy` first.
    """

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    def set(self, x: float, y: float, vx: float, vy: float) -> None:
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)

    def copy(self) -> "BallState":
        return BallState(self.x, self.y, self.vx, self.vy)

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def distance_to(self, other: "BallState") -> float:
        """Planar distance between the two positions; velocities are ignored."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def epsilon_position_equals(self, other: "BallState", epsilon: float) -> bool:
        return abs(self.x - other.x) <= epsilon and abs(self.y - other.y) <= epsilon

    def epsilon_equals(self, other: "BallState", epsilon: float) -> bool:
        return (
            self.epsilon_position_equals(other, epsilon)
            and abs(self.vx - other.vx) <= epsilon
            and abs(self.vy - other.vy) <= epsilon
        )

    def to_bindings(self, time: float = 0.0, time_variable: str = "t") -> StateSnapshot:
        """Variable bindings for an integrator run starting at ``time``."""
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy, time_variable: time}

    def as_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "vx": self.vx, "vy": self.vy}

    @classmethod
    def from_dict(cls, payload: Mapping[str, float]) -> "BallState":
        return cls(
            x=float(payload.get("x", 0.0)),
            y=float(payload.get("y", 0.0)),
            vx=float(payload.get("vx", 0.0)),
            vy=float(payload.get("vy", 0.0)),
        )


__all__ = ["BallState", "StateSnapshot"]
