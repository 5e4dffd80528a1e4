"""Explicit one-step ODE integrators over named variables."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Mapping, Sequence

import numpy as np

from ..data_structures import StateSnapshot

logger = logging.getLogger(__name__)


Array = np.ndarray
DerivativeFn = Callable[[Mapping[str, float]], float]
RhsFn = Callable[[float, Array], Array]


class Integrator(ABC):
    """Base class for explicit Runge-Kutta style solvers.

    ``solve`` validates arguments, packs the dependent variables into a
    vector and drives :meth:`advance` once per step. Subclasses only supply
    the update rule ``y_{n+1} = advance(f, t_n, y_n, h)``, where
    ``f(t, y)`` returns the slope vector of every dependent variable.
    """

    name: str = "integrator"

    def solve(
        self,
        derivatives: Mapping[str, DerivativeFn],
        initial_state: Mapping[str, float],
        step_size: float,
        stopping_point: float,
        independent_variable: str = "t",
    ) -> List[StateSnapshot]:
        """Integrate from ``initial_state`` up to ``stopping_point``.

        Args:
            derivatives: time-derivative function per dependent variable. Each
                is called with a mapping holding the independent variable, all
                dependent variables and any extra keys of ``initial_state``.
            initial_state: starting values, including the independent variable.
            step_size: positive increment of the independent variable.
            stopping_point: value of the independent variable to stop at.
            independent_variable: name of the independent variable.

        Returns:
            One snapshot per completed step, ``floor((stop - t0) / step_size)``
            in total. Empty when the stopping point is not ahead of ``t0``.

        Raises:
            ValueError: if ``step_size`` is not positive or ``initial_state``
                lacks the independent variable or a dependent variable.
        """
        self._validate(derivatives, initial_state, step_size, independent_variable)

        variables = [name for name in derivatives if name != independent_variable]
        t = float(initial_state[independent_variable])
        steps = math.floor((stopping_point - t) / step_size)
        y = np.array([float(initial_state[name]) for name in variables], dtype=float)
        rhs = self._make_rhs(derivatives, variables, initial_state, independent_variable)

        values: List[StateSnapshot] = []
        for _ in range(max(steps, 0)):
            y = self.advance(rhs, t, y, step_size)
            # accumulate, never ``t0 + i * h``, so drift matches iterative callers
            t += step_size
            snapshot: StateSnapshot = dict(zip(variables, y.tolist()))
            snapshot[independent_variable] = t
            values.append(snapshot)
        logger.debug(
            "%s: %d step(s) of %g from %s=%g",
            self.name,
            len(values),
            step_size,
            independent_variable,
            initial_state[independent_variable],
        )
        return values

    @abstractmethod
    def advance(self, rhs: RhsFn, t: float, y: Array, h: float) -> Array:
        """Return the state one step of size ``h`` after ``(t, y)``."""
        raise NotImplementedError

    @staticmethod
    def _validate(
        derivatives: Mapping[str, DerivativeFn],
        initial_state: Mapping[str, float],
        step_size: float,
        independent_variable: str,
    ) -> None:
        if not step_size > 0:
            raise ValueError("Step size must be positive.")
        if independent_variable not in initial_state:
            raise ValueError("Initial state must include the independent variable.")
        missing = [name for name in derivatives if name not in initial_state]
        if missing:
            raise ValueError(f"Initial state has no value for: {', '.join(missing)}")

    @staticmethod
    def _make_rhs(
        derivatives: Mapping[str, DerivativeFn],
        variables: Sequence[str],
        initial_state: Mapping[str, float],
        independent_variable: str,
    ) -> RhsFn:
        functions = [derivatives[name] for name in variables]
        base: Dict[str, float] = dict(initial_state)

        def rhs(t: float, y: Array) -> Array:
            bindings = dict(base)
            bindings.update(zip(variables, y.tolist()))
            bindings[independent_variable] = t
            return np.array([fn(bindings) for fn in functions], dtype=float)

        return rhs

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


__all__ = ["Array", "DerivativeFn", "Integrator", "RhsFn"]
