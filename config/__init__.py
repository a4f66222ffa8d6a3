"""
Configuration management package

Group control settings and simulation settings, loadable from YAML.
"""

from .group_control import (
    GroupControlConfig,
    AllocationStrategyConfig,
)

from .simulation import (
    SimulationConfig,
    BuildingConfig,
    CarConfig,
    DoorConfig,
    TrafficConfig
)

from .config_loader import (
    ConfigLoader,
    load_group_control_config,
    load_simulation_config,
    save_group_control_config,
    save_simulation_config
)

__all__ = [
    # Group control
    'GroupControlConfig',
    'AllocationStrategyConfig',

    # Simulation
    'SimulationConfig',
    'BuildingConfig',
    'CarConfig',
    'DoorConfig',
    'TrafficConfig',

    # Loader
    'ConfigLoader',
    'load_group_control_config',
    'load_simulation_config',
    'save_group_control_config',
    'save_simulation_config',
]
