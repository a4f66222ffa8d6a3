import simpy
from typing import Dict, List, Tuple

from ..infrastructure.message_broker import MessageBroker
from ..interfaces.call_registry import ICallRegistry
from .direction import UP, DOWN, CALL_DIRECTIONS
from .hall_button import HallButton


class HallCallRegistry(ICallRegistry):
    """
    Call registry backed by one HallButton per valid (floor, direction).

    The button set is fixed at construction: UP on every floor but the top,
    DOWN on every floor but the ground.
    """

    def __init__(self, env: simpy.Environment, num_floors: int, broker: MessageBroker):
        self.env = env
        self.num_floors = num_floors
        self.broker = broker
        self.buttons: Dict[Tuple[int, str], HallButton] = {}

        for floor in range(num_floors):
            if floor < num_floors - 1:
                self.buttons[(floor, UP)] = HallButton(env, floor, UP, broker)
            if floor > 0:
                self.buttons[(floor, DOWN)] = HallButton(env, floor, DOWN, broker)

    def get_button(self, floor: int, direction: str) -> HallButton:
        """
        Raises:
            ValueError: No button exists for this pair
        """
        if direction not in CALL_DIRECTIONS:
            raise ValueError(f"Invalid call direction '{direction}'. Must be 'UP' or 'DOWN'")
        button = self.buttons.get((floor, direction))
        if button is None:
            raise ValueError(f"No {direction} call button at floor {floor} (building has floors 0..{self.num_floors - 1})")
        return button

    def is_call_active(self, floor: int, direction: str) -> bool:
        button = self.buttons.get((floor, direction))
        return button is not None and button.is_lit()

    def set_call_active(self, floor: int, direction: str, active: bool, car_name: str = None):
        button = self.get_button(floor, direction)
        if active:
            button.press()
        else:
            button.serve(car_name)

    def activate(self, floor: int, direction: str) -> bool:
        """
        Register a call.

        Returns:
            bool: True if newly activated, False if it was already pending

        Raises:
            ValueError: The pair has no button
        """
        return self.get_button(floor, direction).press()

    def valid_calls(self) -> List[Tuple[int, str]]:
        return list(self.buttons.keys())
