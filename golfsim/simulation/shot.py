"""Headless shot simulation: hit the ball and follow it until it stops."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from golfsim.physics.data_structures import BallState
from golfsim.physics.engine import GRAVITY, PhysicsEngine
from golfsim.physics.functions import ScalarField

from .configs import ShotConfig, SimulationConfig
from .terrain import Terrain

logger = logging.getLogger(__name__)


class SimulationDivergedError(RuntimeError):
    """Raised when a shot runs away (speed ceiling, non-finite state or step budget)."""


@dataclass
class ShotResult:
    """Outcome of one shot."""

    final_state: BallState
    path: np.ndarray  # shape (N, 2): every (x, y) visited, start included
    in_water: bool
    reached_goal: bool
    steps: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "final_state": self.final_state.as_dict(),
            "path": self.path.tolist(),
            "in_water": self.in_water,
            "reached_goal": self.reached_goal,
            "steps": self.steps,
        }

    def write_json(self, path: Path) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            json.dump(self.as_dict(), fp, ensure_ascii=True, indent=2)


class ShotSimulator:
    """Runs shots through a :class:`PhysicsEngine` on a :class:`Terrain`.

    Friction follows the ground under the ball on every step. A shot ends
    when the ball comes to rest, enters the goal radius, or rolls into water;
    in the last case it is put back, at rest, on the last dry position.

    A ball slower than ``mu_k * g * step_size`` on ground where static
    friction holds is stopped outright. Without this, coarse steps on
    high-friction ground can leave explicit solvers cycling around zero
    velocity instead of reaching the engine's rest threshold.
    """

    def __init__(
        self,
        engine: PhysicsEngine,
        terrain: Terrain,
        shot: Optional[ShotConfig] = None,
        step_size: float = 0.001,
        start: Optional[BallState] = None,
    ) -> None:
        if step_size <= 0:
            raise ValueError("step_size must be positive")
        self.engine = engine
        self.terrain = terrain
        self.shot = shot or ShotConfig()
        self.step_size = step_size
        self.ball = start.copy() if start is not None else BallState()

    @classmethod
    def from_config(cls, config: SimulationConfig, start: Optional[BallState] = None) -> "ShotSimulator":
        surface = ScalarField(config.height_function, ["x", "y"])
        engine = PhysicsEngine.from_parameters(surface, config.physics)
        terrain = Terrain(
            surface,
            config.friction_zones,
            water_level=config.shot.water_level,
            default_friction=(config.physics.kinetic_friction, config.physics.static_friction),
        )
        return cls(engine, terrain, config.shot, step_size=config.physics.step_size, start=start)

    @property
    def goal(self) -> BallState:
        return BallState(self.shot.goal_x, self.shot.goal_y)

    def set_position(self, x: float, y: float) -> None:
        self.ball.x = float(x)
        self.ball.y = float(y)

    def change_height_function(self, expression: str) -> None:
        """Swap the course surface, keeping solver, friction and zones."""
        surface = ScalarField(expression, ["x", "y"])
        self.engine = PhysicsEngine(
            self.engine.solver,
            surface,
            kinetic_friction=self.engine.kinetic_friction,
            static_friction=self.engine.static_friction,
            derivative_step=self.engine.differentiator.step,
        )
        self.terrain = Terrain(
            surface,
            self.terrain.friction_zones,
            water_level=self.terrain.water_level,
            default_friction=self.terrain.default_friction,
        )

    def reached_goal(self, state: BallState) -> bool:
        return state.distance_to(self.goal) < self.shot.goal_radius

    def hit(self, speed: float, angle: float, start: Optional[BallState] = None) -> ShotResult:
        """Strike the ball with ``speed`` towards ``angle`` (radians) and follow it.

        The initial velocity is ``(-speed * cos(angle), -speed * sin(angle))``.
        """
        origin = start if start is not None else self.ball
        ball = BallState(origin.x, origin.y, -speed * math.cos(angle), -speed * math.sin(angle))
        path: List[Tuple[float, float]] = [(ball.x, ball.y)]
        last_dry = ball.copy()
        in_water = False
        reached_goal = False
        steps = 0

        while True:
            if self.terrain.is_water(ball.x, ball.y):
                logger.warning(
                    "Ball in water at (%.3f, %.3f); reset to (%.3f, %.3f)", ball.x, ball.y, last_dry.x, last_dry.y
                )
                ball.set(last_dry.x, last_dry.y, 0.0, 0.0)
                in_water = True
                break
            if self.reached_goal(ball):
                reached_goal = True
                break
            # checked after water and goal so the resting position is classified too
            if steps > 0 and self.engine.is_at_rest(ball):
                break
            if steps >= self.shot.max_steps:
                raise SimulationDivergedError(f"Ball still moving after {steps} steps")
            last_dry = ball.copy()
            self.engine.set_friction(*self.terrain.friction_at(ball.x, ball.y))
            self.engine.update(ball, self.step_size)
            steps += 1
            path.append((ball.x, ball.y))
            self._check_finite(ball)
            self._settle(ball)

        logger.info(
            "Shot speed=%.2f angle=%.3f ended at (%.3f, %.3f) after %d steps (goal=%s water=%s)",
            speed,
            angle,
            ball.x,
            ball.y,
            steps,
            reached_goal,
            in_water,
        )
        return ShotResult(
            final_state=ball,
            path=np.asarray(path, dtype=float),
            in_water=in_water,
            reached_goal=reached_goal,
            steps=steps,
        )

    def hit_many(self, speeds: Sequence[float], angles: Sequence[float]) -> List[ShotResult]:
        """Independent shots from the current ball position."""
        if len(speeds) != len(angles):
            raise ValueError("speeds and angles must have the same length")
        return [self.hit(speed, angle) for speed, angle in zip(speeds, angles)]

    def random_hits(self, n: int, radius: float, seed: Optional[int] = None) -> List[ShotResult]:
        """Shots from random points on a circle around the goal.

        Speeds are drawn from [1, 5) and angles from [0, 2*pi).
        """
        rng = np.random.default_rng(seed)
        goal = self.goal
        results: List[ShotResult] = []
        for _ in range(n):
            offset_x = float(rng.uniform(-radius, radius))
            offset_y = math.sqrt(max(radius * radius - offset_x * offset_x, 0.0))
            if rng.random() < 0.5:
                offset_y = -offset_y
            start = BallState(goal.x + offset_x, goal.y + offset_y)
            speed = float(rng.uniform(1.0, 5.0))
            angle = float(rng.uniform(0.0, 2 * math.pi))
            results.append(self.hit(speed, angle, start=start))
        return results

    def _settle(self, ball: BallState) -> None:
        # kinetic friction would stop the ball within one step and static friction holds it
        if ball.speed < self.engine.kinetic_friction * GRAVITY * self.step_size and not (
            self.engine.can_overcome_static_friction(ball)
        ):
            logger.debug("Ball settled at (%.3f, %.3f) with speed %.2e", ball.x, ball.y, ball.speed)
            ball.vx = 0.0
            ball.vy = 0.0

    def _check_finite(self, ball: BallState) -> None:
        values = (ball.x, ball.y, ball.vx, ball.vy)
        if not all(math.isfinite(v) for v in values):
            raise SimulationDivergedError(f"Non-finite ball state {ball}")
        if abs(ball.vx) > self.shot.max_speed or abs(ball.vy) > self.shot.max_speed:
            raise SimulationDivergedError(
                f"Ball too fast for simulation: ({ball.vx:.2f}, {ball.vy:.2f}) exceeds {self.shot.max_speed}"
            )


__all__ = ["ShotResult", "ShotSimulator", "SimulationDivergedError"]
