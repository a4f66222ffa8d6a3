"""
Hall call generation

Stands in for people pressing landing buttons. Two patterns:
- scripted: replay a fixed list of (time, floor, direction) presses
- random: exponential inter-arrival times, uniform over the valid buttons
"""

import random
import simpy
from typing import Any, Dict, List, Optional

from .core.building import Building


class HallCallGenerator:
    """Drives Building.request_call from a traffic pattern."""

    def __init__(self, env: simpy.Environment, building: Building, pattern: str = "random",
                 call_rate: float = 0.1, calls: Optional[List[Dict[str, Any]]] = None,
                 rng: Optional[random.Random] = None):
        """
        Args:
            env: SimPy environment
            building: Building receiving the calls
            pattern: 'random' or 'scripted'
            call_rate: Calls per second (random pattern)
            calls: [{'time': float, 'floor': int, 'direction': 'UP'|'DOWN'}, ...] (scripted pattern)
            rng: Random source (defaults to the random module)
        """
        self.env = env
        self.building = building
        self.pattern = pattern
        self.call_rate = call_rate
        self.calls = sorted(calls or [], key=lambda c: c['time'])
        self.rng = rng if rng is not None else random
        self.presses = 0
        self.new_calls = 0

    def run(self):
        if self.pattern == "scripted":
            yield from self._scripted()
        else:
            yield from self._random()

    def _press(self, floor: int, direction: str):
        self.presses += 1
        if self.building.request_call(floor, direction):
            self.new_calls += 1

    def _scripted(self):
        print(f"--- Scripted Hall Calls ({len(self.calls)} presses) ---")
        for call in self.calls:
            delay = call['time'] - self.env.now
            if delay > 0:
                yield self.env.timeout(delay)
            self._press(call['floor'], call['direction'])

    def _random(self):
        print(f"--- Random Hall Calls (Rate: {self.call_rate} calls/sec) ---")
        if self.call_rate <= 0:
            return
        buttons = self.building.call_registry.valid_calls()
        while True:
            yield self.env.timeout(self.rng.expovariate(self.call_rate))
            floor, direction = self.rng.choice(buttons)
            self._press(floor, direction)
