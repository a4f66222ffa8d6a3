"""
Group Control System Configuration

Control logic settings only; no physical specifications.
"""

from dataclasses import dataclass, field
from typing import Dict, Any

KNOWN_STRATEGIES = ["DirectionalCost", "NearestCar"]


@dataclass
class AllocationStrategyConfig:
    """Configuration for call allocation strategy"""
    name: str = "DirectionalCost"
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("allocation_strategy.name cannot be empty")


@dataclass
class GroupControlConfig:
    """
    Group Control System configuration
    """
    allocation_strategy: AllocationStrategyConfig = field(default_factory=AllocationStrategyConfig)

    @classmethod
    def from_dict(cls, data: dict) -> 'GroupControlConfig':
        """Create GroupControlConfig from dictionary"""
        gc_data = data.get('group_control', data)

        alloc_data = gc_data.get('allocation_strategy', {})
        allocation_strategy = AllocationStrategyConfig(
            name=alloc_data.get('name', 'DirectionalCost'),
            parameters=alloc_data.get('parameters') or {}
        )

        return cls(allocation_strategy=allocation_strategy)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization"""
        return {
            'group_control': {
                'allocation_strategy': {
                    'name': self.allocation_strategy.name,
                    'parameters': self.allocation_strategy.parameters
                }
            }
        }

    def validate(self):
        """Validate configuration consistency"""
        if self.allocation_strategy.name not in KNOWN_STRATEGIES:
            raise ValueError(f"allocation_strategy.name must be one of {KNOWN_STRATEGIES}, "
                             f"got '{self.allocation_strategy.name}'")
