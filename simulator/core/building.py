"""
Building - the elevator bank and its landing calls

This module provides the Building class which owns:
- The call registry (one hall button per valid floor/direction)
- The cars and their doors, all created at floor 0 and idle
- The entry point for landing calls coming from the outside world

Group control is not wired in here. Calls are published on the
'gcs/hall_call' topic and whichever GroupControlSystem listens on the
broker assigns them.
"""

import simpy
from typing import List

from ..infrastructure.message_broker import MessageBroker
from .call_registry import HallCallRegistry
from .car import Car
from .door import Door


class Building:
    """
    Simulation context for one bank of cars.

    Cars are created once and live for the whole run.
    """

    HALL_CALL_TOPIC = "gcs/hall_call"

    def __init__(self, env: simpy.Environment, broker: MessageBroker, num_floors: int, num_cars: int,
                 travel_time: float = 2.0, door_open_time: float = 2.5,
                 door_wait_time: float = 1.0, door_close_time: float = 2.5):
        """
        Args:
            env: SimPy environment
            broker: Message broker shared with group control and recorders
            num_floors: Floors 0..num_floors-1 (0 is the ground floor)
            num_cars: Number of cars in the bank
            travel_time: Seconds to run one floor
            door_open_time: Seconds for the doors to open
            door_wait_time: Seconds the doors stay open
            door_close_time: Seconds for the doors to close
        """
        self.env = env
        self.broker = broker
        self.num_floors = num_floors
        self.call_registry = HallCallRegistry(env, num_floors, broker)

        self.cars: List[Car] = []
        for i in range(num_cars):
            door = Door(env, f"Car_{i}_Door", open_time=door_open_time,
                        wait_time=door_wait_time, close_time=door_close_time)
            self.cars.append(Car(env, f"Car_{i}", broker, num_floors, self.call_registry, door,
                                 travel_time=travel_time))

        print(f"{self.env.now:.2f} [Building] {num_floors} floors, {num_cars} cars. "
              f"Hall buttons: {len(self.call_registry.valid_calls())}")

    def request_call(self, floor: int, direction: str) -> bool:
        """
        A landing button was pressed.

        Returns:
            bool: True if the call was new and has been sent to group
            control, False if it was already pending

        Raises:
            ValueError: No such button (DOWN at ground, UP at the top floor,
            floor out of range)
        """
        if not self.call_registry.activate(floor, direction):
            return False

        self.broker.put(self.HALL_CALL_TOPIC, {
            "timestamp": self.env.now,
            "floor": floor,
            "direction": direction,
        })
        return True

    def get_car(self, name: str) -> Car:
        for car in self.cars:
            if car.name == name:
                return car
        raise KeyError(f"No car named '{name}'")

    def is_quiescent(self) -> bool:
        """No pending call and every car idle"""
        return not self.call_registry.active_calls() and all(
            car.state == "IDLE" and not car.stops for car in self.cars)

    def __repr__(self) -> str:
        return f"Building(floors={self.num_floors}, cars={len(self.cars)})"
