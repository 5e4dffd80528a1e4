"""YAML loader for simulation configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml  # type: ignore[import-untyped]

from golfsim.physics.configs import PhysicsParameters

from .configs import FrictionZone, ShotConfig, SimulationConfig

logger = logging.getLogger(__name__)


def _load_physics(data: Mapping[str, Any] | None) -> PhysicsParameters:
    data = data or {}
    defaults = PhysicsParameters()
    return PhysicsParameters(
        kinetic_friction=float(data.get("kinetic_friction", defaults.kinetic_friction)),
        static_friction=float(data.get("static_friction", defaults.static_friction)),
        derivative_step=float(data.get("derivative_step", defaults.derivative_step)),
        step_size=float(data.get("step_size", defaults.step_size)),
        integrator=str(data.get("integrator", defaults.integrator)),
    )


def _load_zones(data: List[Mapping[str, Any]] | None) -> List[FrictionZone]:
    zones: List[FrictionZone] = []
    for idx, item in enumerate(data or []):
        zones.append(
            FrictionZone(
                min_x=float(item["min_x"]),
                min_y=float(item["min_y"]),
                max_x=float(item["max_x"]),
                max_y=float(item["max_y"]),
                kinetic_friction=float(item.get("kinetic_friction", 0.7)),
                static_friction=float(item.get("static_friction", 1.0)),
                name=str(item.get("name", f"zone_{idx}")),
            )
        )
    return zones


def _load_shot(data: Mapping[str, Any] | None) -> ShotConfig:
    data = data or {}
    defaults = ShotConfig()
    return ShotConfig(
        goal_x=float(data.get("goal_x", defaults.goal_x)),
        goal_y=float(data.get("goal_y", defaults.goal_y)),
        goal_radius=float(data.get("goal_radius", defaults.goal_radius)),
        max_speed=float(data.get("max_speed", defaults.max_speed)),
        max_steps=int(data.get("max_steps", defaults.max_steps)),
        water_level=float(data.get("water_level", defaults.water_level)),
    )


def load_simulation_config(path: Path) -> SimulationConfig:
    """Load SimulationConfig from a YAML file; absent sections use defaults."""
    with Path(path).open("r", encoding="utf-8") as fp:
        raw: Dict[str, Any] = yaml.safe_load(fp) or {}
    config = SimulationConfig(
        height_function=str(raw.get("height_function", "0")),
        physics=_load_physics(raw.get("physics")),
        friction_zones=_load_zones(raw.get("friction_zones")),
        shot=_load_shot(raw.get("shot")),
    )
    logger.info("Loaded simulation config from %s (h(x, y) = %s)", path, config.height_function)
    return config


__all__ = ["load_simulation_config"]
