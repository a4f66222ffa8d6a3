from .allocation_strategy import IAllocationStrategy

__all__ = ['IAllocationStrategy']
