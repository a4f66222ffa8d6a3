"""
Configuration loading and validation tests
"""

from pathlib import Path

import pytest

from config import (
    GroupControlConfig, SimulationConfig, TrafficConfig, BuildingConfig, CarConfig, DoorConfig,
    load_group_control_config, load_simulation_config,
    save_group_control_config, save_simulation_config,
)

SCENARIOS = Path(__file__).parent.parent.parent / "scenarios"


def test_bundled_scenarios_load():
    office = load_simulation_config(SCENARIOS / "simulation" / "office_random.yaml")
    assert office.building.num_floors == 10
    assert office.car.num_cars == 3
    assert office.traffic.pattern == "random"
    assert office.random_seed == 42
    assert office.verbose is False

    demo = load_simulation_config(SCENARIOS / "simulation" / "reversal_demo.yaml")
    assert demo.traffic.pattern == "scripted"
    assert [c['floor'] for c in demo.traffic.calls] == [1, 3, 2]
    # Unspecified sections fall back to defaults
    assert demo.door.open_time == 2.5
    assert demo.car.travel_time_per_floor == 2.0

    gc = load_group_control_config(SCENARIOS / "group_control" / "directional_cost.yaml")
    assert gc.allocation_strategy.name == "DirectionalCost"
    assert gc.allocation_strategy.parameters['load_balance_weight'] == 0.5

    nearest = load_group_control_config(SCENARIOS / "group_control" / "nearest_car.yaml")
    assert nearest.allocation_strategy.name == "NearestCar"
    assert nearest.allocation_strategy.parameters == {}


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_simulation_config(tmp_path / "nope.yaml")


def test_save_and_reload(tmp_path):
    config = SimulationConfig.from_dict({
        'building': {'num_floors': 7},
        'car': {'num_cars': 2, 'travel_time_per_floor': 1.5},
        'traffic': {'pattern': 'scripted', 'calls': [{'time': 1.0, 'floor': 6, 'direction': 'DOWN'}]},
        'random_seed': 3,
    })
    path = tmp_path / "out" / "sim.yaml"
    save_simulation_config(config, path)

    reloaded = load_simulation_config(path)
    assert reloaded == config

    gc_path = tmp_path / "gc.yaml"
    save_group_control_config(GroupControlConfig(), gc_path)
    assert load_group_control_config(gc_path) == GroupControlConfig()


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    config = load_simulation_config(path)
    assert config.building.num_floors == 10
    assert config.car.num_cars == 3
    assert config.random_seed is None


@pytest.mark.parametrize("build", [
    lambda: BuildingConfig(num_floors=1),
    lambda: CarConfig(num_cars=0),
    lambda: CarConfig(travel_time_per_floor=0),
    lambda: DoorConfig(open_time=0),
    lambda: DoorConfig(wait_time=-1),
    lambda: TrafficConfig(pattern="rush_hour"),
    lambda: TrafficConfig(call_rate=-0.1),
    lambda: TrafficConfig(calls=[{'time': 0, 'floor': 2}]),
    lambda: TrafficConfig(calls=[{'time': 0, 'floor': 2, 'direction': 'IDLE'}]),
    lambda: TrafficConfig(calls=[{'time': -1, 'floor': 2, 'direction': 'UP'}]),
])
def test_invalid_values_rejected(build):
    with pytest.raises(ValueError):
        build()


@pytest.mark.parametrize("call", [
    {'time': 0, 'floor': 0, 'direction': 'DOWN'},
    {'time': 0, 'floor': 4, 'direction': 'UP'},
    {'time': 0, 'floor': 9, 'direction': 'DOWN'},
])
def test_scripted_calls_must_have_a_button(call):
    config = SimulationConfig.from_dict({
        'building': {'num_floors': 5},
        'traffic': {'pattern': 'scripted', 'calls': [call]},
    })
    with pytest.raises(ValueError):
        config.validate()


def test_unknown_strategy_rejected_on_load(tmp_path):
    path = tmp_path / "gc.yaml"
    path.write_text("group_control:\n  allocation_strategy:\n    name: Zoning\n")

    with pytest.raises(ValueError):
        load_group_control_config(path)
