"""Car allocation algorithms"""

from .directional_cost import DirectionalCostStrategy
from .nearest_car import NearestCarStrategy


def create_strategy(name: str, num_floors: int, parameters: dict = None):
    """
    Build an allocation strategy from its configured name.

    Raises:
        ValueError: Unknown strategy name
    """
    parameters = parameters or {}
    if name == "DirectionalCost":
        return DirectionalCostStrategy(num_floors=num_floors, **parameters)
    if name == "NearestCar":
        return NearestCarStrategy(**parameters)
    raise ValueError(f"Unknown allocation strategy '{name}'. Expected 'DirectionalCost' or 'NearestCar'")


__all__ = ['DirectionalCostStrategy', 'NearestCarStrategy', 'create_strategy']
