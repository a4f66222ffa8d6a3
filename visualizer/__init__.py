"""Live WebSocket feed for the elevator bank viewer"""

from .server import VisualizerServer

__all__ = ['VisualizerServer']
