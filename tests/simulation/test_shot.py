import json
import math
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import pytest

from golfsim.physics import BallState, PhysicsEngine, RungeKutta, ScalarField
from golfsim.physics.engine import GRAVITY
from golfsim.simulation import (
    FrictionZone,
    ShotConfig,
    ShotSimulator,
    SimulationDivergedError,
    Terrain,
)

FAR_GOAL = ShotConfig(goal_x=100.0, goal_y=100.0)


def _simulator(
    height: str = "0",
    zones: Sequence[FrictionZone] = (),
    shot: ShotConfig = FAR_GOAL,
    start: Optional[BallState] = None,
) -> ShotSimulator:
    surface = ScalarField(height, ["x", "y"])
    engine = PhysicsEngine(RungeKutta(), surface)
    terrain = Terrain(surface, zones, water_level=shot.water_level)
    return ShotSimulator(engine, terrain, shot, step_size=0.001, start=start)


def test_flat_shot_rolls_to_kinematic_distance() -> None:
    simulator = _simulator()

    result = simulator.hit(2.0, math.pi)

    assert not result.in_water
    assert not result.reached_goal
    assert result.final_state.x == pytest.approx(4.0 / (2 * 0.1 * GRAVITY), abs=0.01)
    assert result.final_state.y == pytest.approx(0.0, abs=1e-9)
    assert result.path.shape == (result.steps + 1, 2)
    assert np.all(np.diff(result.path[:, 0]) >= 0.0)


def test_shot_does_not_move_simulator_ball() -> None:
    simulator = _simulator(start=BallState(1.0, 2.0))

    simulator.hit(1.0, 0.0)

    assert simulator.ball == BallState(1.0, 2.0)


def test_sand_zone_shortens_the_roll() -> None:
    sand = FrictionZone(-10.0, -10.0, 10.0, 10.0, kinetic_friction=0.7, static_friction=1.0)
    simulator = _simulator(zones=[sand])

    result = simulator.hit(2.0, math.pi)

    assert simulator.engine.kinetic_friction == 0.7
    assert result.final_state.x == pytest.approx(4.0 / (2 * 0.7 * GRAVITY), abs=0.01)
    assert result.final_state.vx == 0.0


def test_goal_stops_the_shot() -> None:
    simulator = _simulator(shot=ShotConfig(goal_x=1.0, goal_y=0.0, goal_radius=0.5))

    result = simulator.hit(3.0, math.pi)

    assert result.reached_goal
    assert result.final_state.distance_to(simulator.goal) < 0.5


def test_water_resets_to_last_dry_position() -> None:
    simulator = _simulator(height="1 - x")

    result = simulator.hit(1.0, math.pi)

    assert result.in_water
    assert result.final_state.x <= 1.0
    assert simulator.terrain.height(result.final_state.x, result.final_state.y) >= 0.0
    assert (result.final_state.vx, result.final_state.vy) == (0.0, 0.0)


def test_step_budget_raises() -> None:
    simulator = _simulator(shot=ShotConfig(goal_x=100.0, goal_y=100.0, max_steps=5))

    with pytest.raises(SimulationDivergedError):
        simulator.hit(2.0, 0.0)


def test_speed_ceiling_raises() -> None:
    simulator = _simulator(shot=ShotConfig(goal_x=100.0, goal_y=100.0, max_speed=1.0))

    with pytest.raises(SimulationDivergedError, match="too fast"):
        simulator.hit(2.0, 0.0)


def test_hit_many_and_length_mismatch() -> None:
    simulator = _simulator()

    results = simulator.hit_many([0.5, 1.0], [0.0, math.pi / 2])

    assert len(results) == 2
    assert results[0].final_state.x < 0.0
    assert results[1].final_state.y < 0.0
    with pytest.raises(ValueError):
        simulator.hit_many([1.0], [0.0, 1.0])


def test_random_hits_are_reproducible() -> None:
    first = _simulator().random_hits(2, radius=3.0, seed=7)
    second = _simulator().random_hits(2, radius=3.0, seed=7)

    assert len(first) == 2
    for a, b in zip(first, second):
        assert a.final_state == b.final_state
        assert math.hypot(a.path[0, 0] - 100.0, a.path[0, 1] - 100.0) == pytest.approx(3.0)


def test_change_height_function_keeps_friction() -> None:
    simulator = _simulator()
    simulator.engine.set_friction(0.2, 0.3)

    simulator.change_height_function("0.5 * x")

    assert simulator.engine.kinetic_friction == 0.2
    assert simulator.terrain.height(2.0, 0.0) == pytest.approx(1.0)
    assert simulator.engine.can_overcome_static_friction(BallState())


def test_write_json(tmp_path: Path) -> None:
    result = _simulator().hit(0.5, math.pi)
    out = tmp_path / "shots" / "shot.json"

    result.write_json(out)

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["steps"] == result.steps
    assert len(payload["path"]) == result.steps + 1
    assert payload["final_state"]["x"] == pytest.approx(result.final_state.x)
    assert payload["in_water"] is False


def test_set_position_moves_next_shot_origin() -> None:
    simulator = _simulator()
    simulator.set_position(3.0, -1.0)

    result = simulator.hit(0.5, 0.0)

    assert tuple(result.path[0]) == (3.0, -1.0)
    assert result.final_state.x < 3.0


def test_goal_reached_on_the_final_step() -> None:
    free_roll = _simulator().hit(2.0, math.pi)
    previous_x, final_x = free_roll.path[-2, 0], free_roll.path[-1, 0]
    assert final_x > previous_x
    radius = 0.5
    goal_x = 0.5 * (previous_x + final_x) + radius
    simulator = _simulator(shot=ShotConfig(goal_x=goal_x, goal_y=0.0, goal_radius=radius))

    result = simulator.hit(2.0, math.pi)

    assert result.steps == free_roll.steps
    assert result.reached_goal
    assert result.final_state.distance_to(simulator.goal) < radius
