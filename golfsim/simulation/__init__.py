"""Headless shot simulation on configured courses."""

from .config_loader import load_simulation_config
from .configs import FrictionZone, ShotConfig, SimulationConfig
from .shot import ShotResult, ShotSimulator, SimulationDivergedError
from .terrain import Terrain

__all__ = [
    "FrictionZone",
    "ShotConfig",
    "ShotResult",
    "ShotSimulator",
    "SimulationConfig",
    "SimulationDivergedError",
    "Terrain",
    "load_simulation_config",
]
