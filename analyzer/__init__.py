"""
Elevator Bank Analyzer

Components:
- Statistics: Records every broker publication (trajectories, doors,
  hall calls, assignments), JSON Lines log, trajectory diagram
- RealtimePerformanceMonitor: Hall call service times from button lights
"""

__version__ = "0.1.0"

from .statistics import Statistics
from .realtime_monitor import RealtimePerformanceMonitor

__all__ = ['Statistics', 'RealtimePerformanceMonitor']
