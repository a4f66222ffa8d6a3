"""
Allocation Strategy Interface

Defines how a car is selected for a hall call.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

from simulator.core.car import CarStatus


class IAllocationStrategy(ABC):
    """
    Interface for car allocation strategies.

    A strategy is a pure function of the call and a snapshot of every car;
    it keeps no scheduling state between calls.
    """

    @abstractmethod
    def select_car(
        self,
        call_data: Dict[str, Any],
        car_statuses: Dict[str, CarStatus]
    ) -> Optional[str]:
        """
        Select the best car for a hall call

        Args:
            call_data: Hall call information
                {
                    'floor': int,          # Call floor
                    'direction': str,      # 'UP' or 'DOWN'
                    'timestamp': float     # Simulation time
                }

            car_statuses: Snapshot of every car, in creation order
                {'Car_0': CarStatus(...), 'Car_1': CarStatus(...), ...}

        Returns:
            Name of the selected car, or None if no car qualifies
        """
        pass

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Human-readable name (for logging)"""
        pass
