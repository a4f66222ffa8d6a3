"""Messaging and clock pacing shared by every simulated component"""

from .message_broker import MessageBroker
from .realtime_env import RealtimeEnvironment

__all__ = ['MessageBroker', 'RealtimeEnvironment']
