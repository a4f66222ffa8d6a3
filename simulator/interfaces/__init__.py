"""Interfaces between the cars and the rest of the building"""

from .call_registry import ICallRegistry

__all__ = ['ICallRegistry']
