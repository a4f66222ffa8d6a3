import simpy
from ..infrastructure.message_broker import MessageBroker

class HallButton:
    """
    One landing call button: a (floor, direction) pair whose light is the
    "call pending" flag of the call registry.
    """
    def __init__(self, env: simpy.Environment, floor: int, direction: str, broker: MessageBroker):
        """
        Args:
            env (simpy.Environment): SimPy environment
            floor (int): Floor where the button is installed
            direction (str): 'UP' or 'DOWN'
            broker (MessageBroker): Channel for light ON/OFF reports
        """
        self.env = env
        self.floor = floor
        self.direction = direction
        self.broker = broker
        self.is_pressed = False
        self.pressed_at = None

    def is_lit(self):
        """Check if the button is lit"""
        return self.is_pressed

    def press(self):
        """
        Light the button.

        Returns:
            bool: True if the call was newly registered, False if it was
            already lit (the press is then a no-op).
        """
        if self.is_pressed:
            print(f"{self.env.now:.2f} [HallButton] Floor {self.floor} ({self.direction}) already lit. Press ignored.")
            return False

        self.is_pressed = True
        self.pressed_at = self.env.now
        print(f"{self.env.now:.2f} [HallButton] Button pressed at floor {self.floor} ({self.direction}). Light ON.")
        self.broker.put(f"hall_button/floor_{self.floor}/call_on", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
            "action": "ON",
        })
        return True

    def serve(self, car_name=None):
        """
        Turn the light off because a car is servicing the call.

        Args:
            car_name: Name of the car that serviced this call (for the viewer)
        """
        if not self.is_pressed:
            return

        self.is_pressed = False
        print(f"{self.env.now:.2f} [HallButton] Call served at floor {self.floor} ({self.direction}) by {car_name}. Light OFF.")
        self.broker.put(f"hall_button/floor_{self.floor}/call_off", {
            "timestamp": self.env.now,
            "floor": self.floor,
            "direction": self.direction,
            "action": "OFF",
            "serviced_by": car_name,
            "waited": self.env.now - self.pressed_at,
        })
        self.pressed_at = None
