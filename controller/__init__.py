"""
Group control: assigns hall calls to cars through a pluggable allocation
strategy.
"""

from .group_control import GroupControlSystem

__all__ = ['GroupControlSystem']
