import simpy
from .entity import Entity

class Door(Entity):
    """
    Car door. Driven directly by its car: the car yields cycle() and gets
    control back only once the doors are shut again.

    A door never acts on its own, so the process Entity starts for it
    ends at once; cycle() runs as a separate process per stop.
    """
    def __init__(self, env: simpy.Environment, name: str, open_time=2.5, wait_time=1.0, close_time=2.5, broker=None, car_name: str = None):
        super().__init__(env, name)
        self.open_time = open_time
        self.wait_time = wait_time
        self.close_time = close_time
        self.broker = broker
        self.car_name = car_name
        self.cycle_count = 0
        self.set_state('CLOSED')  # CLOSED, OPENING, OPEN, CLOSING

    def run(self):
        """Finishes immediately; see cycle()."""
        yield self.env.timeout(0)

    def set_broker_and_car(self, broker, car_name: str):
        """Attach the door to its car after construction."""
        self.broker = broker
        self.car_name = car_name

    def _report_door_state(self, floor: int, is_open: bool):
        if not self.broker or not self.car_name:
            return
        self.broker.put(f"car/{self.car_name}/door", {
            "timestamp": self.env.now,
            "car": self.car_name,
            "floor": floor,
            "open": is_open,
        })

    def cycle(self, floor: int):
        """
        Open, hold for boarding, close. Not interruptible.

        Args:
            floor: Floor the car is standing at (for the report only)
        """
        self.cycle_count += 1

        self.set_state('OPENING')
        self._report_door_state(floor, True)
        yield self.env.timeout(self.open_time)

        self.set_state('OPEN')
        yield self.env.timeout(self.wait_time)

        self.set_state('CLOSING')
        self._report_door_state(floor, False)
        yield self.env.timeout(self.close_time)

        self.set_state('CLOSED')
