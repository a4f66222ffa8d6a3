"""
Call Registry Interface

The only view a car has of the landing calls in the building.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple


class ICallRegistry(ABC):
    """
    Per (floor, direction) "call pending" flags.

    Only valid pairs exist: the ground floor has no DOWN call and the top
    floor has no UP call. Querying a pair that does not exist reports an
    inactive call.

    Calls are monotonic: inactive -> active (a press) -> inactive (cleared
    by the car that services it).
    """

    @abstractmethod
    def is_call_active(self, floor: int, direction: str) -> bool:
        """
        Args:
            floor: Floor index (0 = ground)
            direction: 'UP' or 'DOWN'

        Returns:
            bool: True if a call is pending there
        """
        pass

    @abstractmethod
    def set_call_active(self, floor: int, direction: str, active: bool, car_name: str = None):
        """
        Set the pending flag of a call.

        Args:
            floor: Floor index
            direction: 'UP' or 'DOWN'
            active: New value
            car_name: Car clearing the call, when active is False
        """
        pass

    @abstractmethod
    def valid_calls(self) -> List[Tuple[int, str]]:
        """All (floor, direction) pairs that have a button, bottom to top"""
        pass

    def active_calls(self) -> List[Tuple[int, str]]:
        """(floor, direction) pairs currently pending"""
        return [key for key in self.valid_calls() if self.is_call_active(*key)]
