"""
realtime_env.py

SimPy environment that paces simulated seconds against the wall clock so a
live viewer can follow the cars.
"""

import simpy
import time


class RealtimeEnvironment(simpy.Environment):
    """
    simpy.Environment with adjustable pacing.

    Args:
        speed_factor (float): Simulated seconds per real second
            - 1.0 = real time (a 2 s floor run takes 2 s)
            - 4.0 = four times faster
            - 0.0 = no pacing at all
    """

    def __init__(self, speed_factor=1.0, initial_time=0):
        super().__init__(initial_time=initial_time)
        self.speed_factor = speed_factor
        self._anchor_real = time.monotonic()
        self._anchor_sim = self.now

    def step(self):
        """Process one event, then sleep until the wall clock catches up."""
        super().step()

        if self.speed_factor <= 0:
            return

        due = self._anchor_real + (self.now - self._anchor_sim) / self.speed_factor
        lag = due - time.monotonic()
        if lag > 0:
            time.sleep(lag)

    def set_speed(self, speed_factor):
        """
        Change pacing mid-run. The anchor is reset so that the new factor
        applies from the current instant rather than retroactively.
        """
        self.speed_factor = speed_factor
        self._anchor_real = time.monotonic()
        self._anchor_sim = self.now

    def get_speed(self):
        return self.speed_factor
