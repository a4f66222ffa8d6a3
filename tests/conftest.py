"""
Shared fixtures: a small bank of cars wired to a group control system,
with every broker publication recorded.
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import matplotlib
matplotlib.use("Agg")

import pytest
import simpy

from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.building import Building
from controller.group_control import GroupControlSystem
from controller.algorithms.directional_cost import DirectionalCostStrategy


class Bank:
    """Building + group control on a fresh environment, recording every event"""

    def __init__(self, num_floors=5, num_cars=1, **timing):
        self.env = simpy.Environment()
        self.broker = MessageBroker(self.env, verbose=False)
        self.building = Building(self.env, self.broker, num_floors, num_cars, **timing)
        self.gcs = GroupControlSystem("GCS", self.broker, DirectionalCostStrategy(num_floors=num_floors))
        for car in self.building.cars:
            self.gcs.register_car(car)
        self.env.process(self.gcs.run())

        self.events = []
        self.env.process(self._record())

    def _record(self):
        pipe = self.broker.get_broadcast_pipe()
        while True:
            data = yield pipe.get()
            self.events.append((self.env.now, data['topic'], data['message']))

    @property
    def cars(self):
        return self.building.cars

    @property
    def registry(self):
        return self.building.call_registry

    def messages(self, topic):
        return [message for _, t, message in self.events if t == topic]

    def positions(self, car_name="Car_0"):
        return [(m['timestamp'], m['floor']) for m in self.messages(f"car/{car_name}/position")]

    def door_openings(self, car_name="Car_0"):
        return [(m['timestamp'], m['floor']) for m in self.messages(f"car/{car_name}/door") if m['open']]

    def calls_served(self):
        return [(m['timestamp'], m['floor'], m['direction'], m['serviced_by'])
                for _, t, m in self.events if t.endswith('/call_off')]


@pytest.fixture
def make_bank():
    return Bank
