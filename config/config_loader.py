"""
Configuration loader utility

Reads and writes GroupControlConfig and SimulationConfig as YAML.
"""

import yaml
from pathlib import Path
from typing import Union

from .group_control import GroupControlConfig
from .simulation import SimulationConfig


def _read_yaml(file_path: Union[str, Path]) -> dict:
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _write_yaml(data: dict, file_path: Union[str, Path]):
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, 'w', encoding='utf-8') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


class ConfigLoader:
    """Load/save configuration files. Loaded configs are validated."""

    @staticmethod
    def load_group_control(file_path: Union[str, Path]) -> GroupControlConfig:
        """
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If validation fails
        """
        config = GroupControlConfig.from_dict(_read_yaml(file_path))
        config.validate()
        return config

    @staticmethod
    def load_simulation(file_path: Union[str, Path]) -> SimulationConfig:
        """
        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If validation fails
        """
        config = SimulationConfig.from_dict(_read_yaml(file_path))
        config.validate()
        return config

    @staticmethod
    def save_group_control(config: GroupControlConfig, file_path: Union[str, Path]):
        _write_yaml(config.to_dict(), file_path)

    @staticmethod
    def save_simulation(config: SimulationConfig, file_path: Union[str, Path]):
        _write_yaml(config.to_dict(), file_path)


# Convenience functions
def load_group_control_config(file_path: Union[str, Path]) -> GroupControlConfig:
    """Load GroupControlConfig from YAML file"""
    return ConfigLoader.load_group_control(file_path)


def load_simulation_config(file_path: Union[str, Path]) -> SimulationConfig:
    """Load SimulationConfig from YAML file"""
    return ConfigLoader.load_simulation(file_path)


def save_group_control_config(config: GroupControlConfig, file_path: Union[str, Path]):
    """Save GroupControlConfig to YAML file"""
    ConfigLoader.save_group_control(config, file_path)


def save_simulation_config(config: SimulationConfig, file_path: Union[str, Path]):
    """Save SimulationConfig to YAML file"""
    ConfigLoader.save_simulation(config, file_path)
