import math
from typing import Mapping

import pytest

from golfsim.physics.functions import MissingVariableError, ScalarField
from golfsim.physics.ode import INTEGRATORS, Euler, Midpoint, Ralston, RungeKutta, get_integrator

ALL_SOLVERS = [Euler, Midpoint, Ralston, RungeKutta]


def _exponential() -> dict:
    return {"y": ScalarField("y", ["y"])}


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_single_step_when_step_equals_stop(solver_cls) -> None:
    results = solver_cls().solve(_exponential(), {"y": 1.0, "t": 0.3}, 0.1, 0.1 + 0.3, "t")

    assert len(results) == 1
    assert results[0]["t"] == 0.3 + 0.1


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
@pytest.mark.parametrize("step", [0.0, -0.1])
def test_non_positive_step_rejected(solver_cls, step: float) -> None:
    with pytest.raises(ValueError):
        solver_cls().solve(_exponential(), {"y": 1.0, "t": 0.0}, step, 1.0, "t")


@pytest.mark.parametrize("solver_cls", ALL_SOLVERS)
def test_missing_independent_variable_rejected(solver_cls) -> None:
    with pytest.raises(ValueError):
        solver_cls().solve(_exponential(), {"y": 1.0}, 0.1, 1.0, "t")


def test_missing_dependent_variable_rejected() -> None:
    with pytest.raises(ValueError, match="y"):
        Euler().solve(_exponential(), {"t": 0.0}, 0.1, 1.0, "t")


@pytest.mark.parametrize(
    "stop, expected",
    [(1.0, 4), (0.95, 3), (0.25, 1), (0.2, 0), (0.0, 0), (-1.0, 0)],
)
def test_step_count_is_floor_of_span(stop: float, expected: int) -> None:
    results = RungeKutta().solve(_exponential(), {"y": 1.0, "t": 0.0}, 0.25, stop, "t")

    assert len(results) == expected


def test_time_is_accumulated_by_repeated_addition() -> None:
    results = Euler().solve(_exponential(), {"y": 1.0, "t": 0.0}, 0.1, 1.0, "t")

    expected = []
    running = 0.0
    for _ in range(10):
        running += 0.1
        expected.append(running)
    assert [s["t"] for s in results] == expected
    assert results[-1]["t"] != 10 * 0.1


def test_orders_of_accuracy_on_exponential_growth() -> None:
    errors = {}
    for name in ("euler", "midpoint", "ralston", "runge_kutta"):
        final = get_integrator(name).solve(_exponential(), {"y": 1.0, "t": 0.0}, 0.125, 1.0, "t")[-1]
        errors[name] = abs(final["y"] - math.e)

    assert errors["euler"] > 0.1
    assert errors["midpoint"] < 1e-2
    assert errors["ralston"] < 1e-2
    assert errors["runge_kutta"] < 1e-4
    assert errors["runge_kutta"] < errors["midpoint"] < errors["euler"]


def test_slopes_see_the_independent_variable() -> None:
    derivatives = {"y": ScalarField("t", ["t"])}

    rk4 = RungeKutta().solve(derivatives, {"y": 0.0, "t": 0.0}, 0.125, 1.0, "t")[-1]
    euler = Euler().solve(derivatives, {"y": 0.0, "t": 0.0}, 0.125, 1.0, "t")[-1]

    assert rk4["y"] == pytest.approx(0.5)
    assert euler["y"] == pytest.approx(0.4375)


def test_extra_initial_keys_are_visible_but_not_snapshotted() -> None:
    derivatives = {"y": ScalarField("k * y", ["k", "y"])}

    results = Euler().solve(derivatives, {"y": 1.0, "k": 2.0, "t": 0.0}, 0.5, 0.5, "t")

    assert results[0]["y"] == pytest.approx(2.0)
    assert set(results[0]) == {"y", "t"}


def test_plain_callables_are_accepted() -> None:
    def decay(bindings: Mapping[str, float]) -> float:
        return -bindings["y"]

    results = Midpoint().solve({"y": decay}, {"y": 1.0, "t": 0.0}, 0.5, 0.5, "t")

    assert results[0]["y"] == pytest.approx(1.0 - 0.5 * (1.0 - 0.25))


def test_evaluation_failures_propagate() -> None:
    derivatives = {"y": ScalarField("y + q", ["y", "q"])}

    with pytest.raises(MissingVariableError):
        Ralston().solve(derivatives, {"y": 1.0, "t": 0.0}, 0.1, 1.0, "t")


def test_registry_resolves_aliases() -> None:
    assert isinstance(get_integrator("rk4"), RungeKutta)
    assert isinstance(get_integrator("Runge-Kutta"), RungeKutta)
    assert isinstance(get_integrator("euler"), Euler)
    assert set(INTEGRATORS) >= {"euler", "midpoint", "ralston", "runge_kutta"}


def test_registry_rejects_unknown_name() -> None:
    with pytest.raises(ValueError, match="Unknown integrator"):
        get_integrator("leapfrog")
