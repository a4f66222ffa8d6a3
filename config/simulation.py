"""
Simulation Configuration

Physical layout of the bank, timing of cars and doors, and the traffic
used to exercise it.
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional


@dataclass
class BuildingConfig:
    """Building specifications"""
    num_floors: int = 10  # floors 0..num_floors-1, 0 = ground

    def __post_init__(self):
        if self.num_floors < 2:
            raise ValueError("num_floors must be at least 2")


@dataclass
class CarConfig:
    """Car specifications"""
    num_cars: int = 3
    travel_time_per_floor: float = 2.0  # seconds

    def __post_init__(self):
        if self.num_cars < 1:
            raise ValueError("num_cars must be at least 1")
        if self.travel_time_per_floor <= 0:
            raise ValueError("travel_time_per_floor must be positive")


@dataclass
class DoorConfig:
    """Door cycle timing"""
    open_time: float = 2.5  # seconds
    wait_time: float = 1.0  # seconds held open
    close_time: float = 2.5  # seconds

    def __post_init__(self):
        if self.open_time <= 0:
            raise ValueError("open_time must be positive")
        if self.wait_time < 0:
            raise ValueError("wait_time cannot be negative")
        if self.close_time <= 0:
            raise ValueError("close_time must be positive")


@dataclass
class TrafficConfig:
    """Hall call traffic"""
    pattern: str = "random"  # random, scripted
    simulation_duration: float = 300.0  # seconds
    call_rate: float = 0.1  # calls per second (random)
    calls: List[Dict[str, Any]] = field(default_factory=list)  # [{time, floor, direction}] (scripted)

    def __post_init__(self):
        if self.pattern not in ["random", "scripted"]:
            raise ValueError("pattern must be 'random' or 'scripted'")
        if self.simulation_duration <= 0:
            raise ValueError("simulation_duration must be positive")
        if self.call_rate < 0:
            raise ValueError("call_rate cannot be negative")
        for call in self.calls:
            if not {'time', 'floor', 'direction'} <= set(call):
                raise ValueError(f"scripted call {call} must have time, floor and direction")
            if call['direction'] not in ["UP", "DOWN"]:
                raise ValueError(f"scripted call {call}: direction must be 'UP' or 'DOWN'")
            if call['time'] < 0:
                raise ValueError(f"scripted call {call}: time cannot be negative")


@dataclass
class SimulationConfig:
    """
    Complete simulation configuration

    Combines building, car, door, and traffic settings.
    """
    building: BuildingConfig
    car: CarConfig
    door: DoorConfig
    traffic: TrafficConfig

    # Simulation control
    random_seed: Optional[int] = None
    realtime_factor: float = 0.0  # 1.0 = realtime, 0.0 = as fast as possible
    verbose: bool = True  # print every broker publication

    def __post_init__(self):
        if self.realtime_factor < 0:
            raise ValueError("realtime_factor cannot be negative")

    @classmethod
    def from_dict(cls, data: dict) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary"""
        sim_data = data.get('simulation', data)

        building_data = sim_data.get('building', {})
        building = BuildingConfig(
            num_floors=building_data.get('num_floors', 10)
        )

        car_data = sim_data.get('car', {})
        car = CarConfig(
            num_cars=car_data.get('num_cars', 3),
            travel_time_per_floor=car_data.get('travel_time_per_floor', 2.0)
        )

        door_data = sim_data.get('door', {})
        door = DoorConfig(
            open_time=door_data.get('open_time', 2.5),
            wait_time=door_data.get('wait_time', 1.0),
            close_time=door_data.get('close_time', 2.5)
        )

        traffic_data = sim_data.get('traffic', {})
        traffic = TrafficConfig(
            pattern=traffic_data.get('pattern', 'random'),
            simulation_duration=traffic_data.get('simulation_duration', 300.0),
            call_rate=traffic_data.get('call_rate', 0.1),
            calls=traffic_data.get('calls') or []
        )

        return cls(
            building=building,
            car=car,
            door=door,
            traffic=traffic,
            random_seed=sim_data.get('random_seed'),
            realtime_factor=sim_data.get('realtime_factor', 0.0),
            verbose=sim_data.get('verbose', True)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        result = {
            'simulation': {
                'building': {
                    'num_floors': self.building.num_floors
                },
                'car': {
                    'num_cars': self.car.num_cars,
                    'travel_time_per_floor': self.car.travel_time_per_floor
                },
                'door': {
                    'open_time': self.door.open_time,
                    'wait_time': self.door.wait_time,
                    'close_time': self.door.close_time
                },
                'traffic': {
                    'pattern': self.traffic.pattern,
                    'simulation_duration': self.traffic.simulation_duration,
                    'call_rate': self.traffic.call_rate,
                    'calls': self.traffic.calls
                },
                'realtime_factor': self.realtime_factor,
                'verbose': self.verbose
            }
        }

        if self.random_seed is not None:
            result['simulation']['random_seed'] = self.random_seed

        return result

    def validate(self):
        """Validate configuration consistency"""
        top_floor = self.building.num_floors - 1
        for call in self.traffic.calls:
            floor = call['floor']
            if not (0 <= floor <= top_floor):
                raise ValueError(f"scripted call floor {floor} outside 0..{top_floor}")
            if floor == 0 and call['direction'] == "DOWN":
                raise ValueError("scripted call: no DOWN button on the ground floor")
            if floor == top_floor and call['direction'] == "UP":
                raise ValueError("scripted call: no UP button on the top floor")
