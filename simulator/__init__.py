"""
Elevator bank simulator - core simulation engine

Cars, doors, hall buttons and the call registry, running as SimPy
processes and reporting through the message broker.
"""

__version__ = "0.1.0"

from .core.car import Car, CarStatus
from .core.door import Door
from .core.hall_button import HallButton
from .core.call_registry import HallCallRegistry
from .core.building import Building
from .core.entity import Entity
from .core.direction import UP, DOWN, IDLE

from .infrastructure.message_broker import MessageBroker
from .infrastructure.realtime_env import RealtimeEnvironment

from .traffic import HallCallGenerator

__all__ = [
    'Car',
    'CarStatus',
    'Door',
    'HallButton',
    'HallCallRegistry',
    'Building',
    'Entity',
    'UP',
    'DOWN',
    'IDLE',
    'MessageBroker',
    'RealtimeEnvironment',
    'HallCallGenerator',
]
