"""
Nearest Car Strategy

Plain distance-based allocation: direction and load are ignored. Also used
by the group control system as the fallback when the main strategy finds
no car.
"""

from typing import Dict, Any, Optional

from simulator.core.car import CarStatus
from ..interfaces.allocation_strategy import IAllocationStrategy


class NearestCarStrategy(IAllocationStrategy):
    """
    Nearest car allocation strategy

    Selection Logic:
    - Score = |car floor - call floor|, whatever the car is doing
    - First car in creation order wins a tie

    Usage:
        strategy = NearestCarStrategy()
        selected = strategy.select_car(call_data, car_statuses)
    """

    def select_car(
        self,
        call_data: Dict[str, Any],
        car_statuses: Dict[str, CarStatus]
    ) -> Optional[str]:
        call_floor = call_data['floor']

        best_car = None
        best_distance = None

        for name, status in car_statuses.items():
            distance = abs(status.current_floor - call_floor)
            if best_distance is None or distance < best_distance:
                best_distance = distance
                best_car = name

        if best_car:
            print(f"[GCS] Nearest car {best_car} at distance={best_distance}")

        return best_car

    def get_strategy_name(self) -> str:
        return "Nearest Car (Distance-based)"
