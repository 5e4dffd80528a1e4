import pytest

from golfsim.physics import BallState


def test_copy_is_independent() -> None:
    state = BallState(1.0, 2.0, 3.0, 4.0)
    clone = state.copy()

    clone.set(0.0, 0.0, 0.0, 0.0)

    assert state == BallState(1.0, 2.0, 3.0, 4.0)
    assert state.speed == pytest.approx(5.0)


def test_epsilon_comparisons() -> None:
    a = BallState(1.0, 1.0, 0.5, 0.5)
    b = BallState(1.005, 0.995, 0.6, 0.5)

    assert a.epsilon_position_equals(b, 0.01)
    assert not a.epsilon_equals(b, 0.01)
    assert a.epsilon_equals(b, 0.2)
    assert a.distance_to(BallState(4.0, 5.0)) == pytest.approx(5.0)


def test_bindings_and_dict_round_trip() -> None:
    state = BallState(1.0, -2.0, 0.25, 0.0)

    assert state.to_bindings(3.0) == {"x": 1.0, "y": -2.0, "vx": 0.25, "vy": 0.0, "t": 3.0}
    assert state.to_bindings(time_variable="s")["s"] == 0.0
    assert BallState.from_dict(state.as_dict()) == state
    assert BallState.from_dict({"x": 2}) == BallState(2.0)
