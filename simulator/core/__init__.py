"""Core simulation entities"""

from .entity import Entity
from .car import Car, CarStatus
from .door import Door
from .hall_button import HallButton
from .call_registry import HallCallRegistry
from .building import Building

__all__ = [
    'Entity',
    'Car',
    'CarStatus',
    'Door',
    'HallButton',
    'HallCallRegistry',
    'Building',
]
