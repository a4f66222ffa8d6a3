"""
Directional Cost Strategy

Assigns a hall call to the car that can reach it soonest without breaking
its current sweep, with a light preference for less loaded cars.
"""

import math
from typing import Dict, Any, Optional

from simulator.core.car import CarStatus
from simulator.core.direction import UP, DOWN, IDLE
from ..interfaces.allocation_strategy import IAllocationStrategy


class DirectionalCostStrategy(IAllocationStrategy):
    """
    Cost per car, with distance = |car floor - call floor|:

    - idle car: distance
    - moving in the call direction, call still ahead: distance
    - moving in the call direction, call already passed:
      distance + passed_penalty_factor * num_floors (finish sweep, come back)
    - moving against the call direction:
      distance + reversal_penalty_factor * num_floors (must reverse first)

    plus load_balance_weight * number of pending stops.

    Lowest cost wins; the first car in creation order wins a tie.
    """

    def __init__(self, num_floors: int = 10, passed_penalty_factor: float = 2.0,
                 reversal_penalty_factor: float = 1.0, load_balance_weight: float = 0.5):
        """
        Args:
            num_floors: Total number of floors in the building
            passed_penalty_factor: Multiple of num_floors added when the car has passed the call
            reversal_penalty_factor: Multiple of num_floors added when the car runs the other way
            load_balance_weight: Cost per pending stop
        """
        self.num_floors = num_floors
        self.passed_penalty_factor = passed_penalty_factor
        self.reversal_penalty_factor = reversal_penalty_factor
        self.load_balance_weight = load_balance_weight

    def calculate_cost(self, status: CarStatus, call_floor: int, call_direction: str) -> float:
        distance = abs(status.current_floor - call_floor)

        if status.direction == IDLE:
            cost = distance
        elif status.direction == call_direction:
            not_passed = (
                (call_direction == UP and status.current_floor <= call_floor) or
                (call_direction == DOWN and status.current_floor >= call_floor)
            )
            if not_passed:
                cost = distance
            else:
                cost = distance + self.passed_penalty_factor * self.num_floors
        else:
            cost = distance + self.reversal_penalty_factor * self.num_floors

        if math.isfinite(cost):
            cost += status.stop_count * self.load_balance_weight
        return cost

    def calculate_costs(self, call_data: Dict[str, Any], car_statuses: Dict[str, CarStatus]) -> Dict[str, float]:
        """Cost of every car, in snapshot order"""
        return {
            name: self.calculate_cost(status, call_data['floor'], call_data['direction'])
            for name, status in car_statuses.items()
        }

    def select_car(
        self,
        call_data: Dict[str, Any],
        car_statuses: Dict[str, CarStatus]
    ) -> Optional[str]:
        best_car = None
        best_cost = math.inf

        for name, cost in self.calculate_costs(call_data, car_statuses).items():
            status = car_statuses[name]
            print(f"[GCS] {name}: Floor={status.current_floor}, Direction={status.direction}, "
                  f"Stops={status.stop_count}, Cost={cost:.1f}")
            if cost < best_cost:
                best_cost = cost
                best_car = name

        if best_car:
            print(f"[GCS] Selected {best_car} with cost={best_cost:.1f}")

        return best_car

    def get_strategy_name(self) -> str:
        return "Directional Cost (SCAN sweep + load balance)"
