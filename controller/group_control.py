from typing import Dict, Optional

from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.car import Car, CarStatus
from .interfaces.allocation_strategy import IAllocationStrategy
from .algorithms.nearest_car import NearestCarStrategy

class GroupControlSystem:
    """
    Group control (dispatcher) for one bank of cars.

    This is a controller, not a simulated entity. It holds no scheduling
    state of its own: every assignment is decided from a fresh snapshot of
    the registered cars, which may already be slightly stale by the time
    the chosen car acts on it.

    Hall calls arrive on the 'gcs/hall_call' topic, both new presses and
    calls a car handed back because it could not serve them.
    """
    def __init__(self, name: str, broker: MessageBroker,
                 strategy: IAllocationStrategy,
                 fallback_strategy: IAllocationStrategy = None):
        self.name = name
        self.broker = broker
        self.strategy = strategy
        self.fallback_strategy = fallback_strategy or NearestCarStrategy()
        self.cars: Dict[str, Car] = {}
        self.assignment_count = 0

        # Calls pressed before run() starts are queued, not lost
        self.hall_call_topic = 'gcs/hall_call'
        self.broker.subscribe(self.hall_call_topic)

        print(f"{self.broker.get_current_time():.2f} [GCS] Using strategy: {self.strategy.get_strategy_name()}")

    def register_car(self, car: Car):
        """Register a car under this group control; order of registration breaks ties"""
        self.cars[car.name] = car
        print(f"{self.broker.get_current_time():.2f} [GCS] Car '{car.name}' registered.")

    def snapshot(self) -> Dict[str, CarStatus]:
        """Immutable status of every registered car, in registration order"""
        return {name: car.snapshot() for name, car in self.cars.items()}

    def assign(self, floor: int, direction: str) -> Optional[str]:
        """
        Pick a car for a hall call and add the floor to its stops.

        Returns:
            Name of the selected car (None only if no car is registered)
        """
        call_data = {
            'floor': floor,
            'direction': direction,
            'timestamp': self.broker.get_current_time()
        }
        statuses = self.snapshot()

        selected_car = self.strategy.select_car(call_data, statuses)

        if selected_car is None:
            print(f"{self.broker.get_current_time():.2f} [GCS] ERROR: design invariant violated: "
                  f"no car has a finite cost for floor {floor} {direction}. Falling back to nearest car.")
            selected_car = self.fallback_strategy.select_car(call_data, statuses)

        if selected_car is None:
            print(f"{self.broker.get_current_time():.2f} [GCS] ERROR: No car registered. Hall call floor {floor} {direction} dropped.")
            return None

        self.cars[selected_car].add_stop(floor)
        self.assignment_count += 1
        print(f"{self.broker.get_current_time():.2f} [GCS] Assigned hall call to {selected_car}: Floor {floor} {direction}")

        self.broker.put('gcs/hall_call_assignment', {
            "timestamp": self.broker.get_current_time(),
            "floor": floor,
            "direction": direction,
            "assigned_car": selected_car
        })
        return selected_car

    def run(self):
        """
        Main process of GCS. Listens for hall calls
        """
        print(f"{self.broker.get_current_time():.2f} [GCS] GCS is operational. Waiting for hall calls...")

        while True:
            message = yield self.broker.get(self.hall_call_topic)
            resubmitted_by = message.get('resubmitted_by')
            if resubmitted_by:
                print(f"{self.broker.get_current_time():.2f} [GCS] Hall call handed back by {resubmitted_by}: {message}")
            else:
                print(f"{self.broker.get_current_time():.2f} [GCS] Received hall call: {message}")

            self.assign(message['floor'], message['direction'])
