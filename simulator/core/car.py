import simpy
from dataclasses import dataclass
from typing import Optional, Tuple

from .entity import Entity
from .door import Door
from .direction import UP, DOWN, IDLE, ARROWS, format_floor
from ..infrastructure.message_broker import MessageBroker
from ..interfaces.call_registry import ICallRegistry


@dataclass(frozen=True)
class CarStatus:
    """Immutable view of a car, as read by the group control system."""
    name: str
    current_floor: int
    direction: str
    stops: Tuple[int, ...]
    state: str = "IDLE"
    busy: bool = False

    @property
    def stop_count(self) -> int:
        return len(self.stops)


class Car(Entity):
    """
    One elevator car running a directional (SCAN) stop policy.

    The car owns its set of stops. Each pass of the control loop does
    exactly one thing: a door cycle at the current floor, going idle, or a
    single-floor move toward the next target. Calls in the opposite
    direction are only picked up at the floor where the car reverses.
    """

    def __init__(self, env: simpy.Environment, name: str, broker: MessageBroker, num_floors: int,
                 call_registry: ICallRegistry, door: Door, travel_time: float = 2.0):
        # Read by the status report, which may fire during construction
        self.direction = IDLE
        self.current_floor = 0
        self.stops = set()
        self.busy = False
        self.next_stop: Optional[int] = None

        super().__init__(env, name)
        self.broker = broker
        self.num_floors = num_floors
        self.call_registry = call_registry
        self.door = door
        self.travel_time = travel_time

        self.floors_travelled = 0
        self.door_cycles = 0

        self.door.set_broker_and_car(self.broker, self.name)

        self.new_stop_event = self.env.event()
        self.status_topic = f"car/{self.name}/status"
        self.position_topic = f"car/{self.name}/position"
        self.dispatch_topic = "gcs/hall_call"

        self.set_state("IDLE")

    # --- Reporting ---

    def _on_state_changed(self, old_state: str, new_state: str):
        super()._on_state_changed(old_state, new_state)
        self._report_status()

    def _update_direction(self, new_direction: str):
        if self.direction != new_direction:
            old_direction = self.direction
            self.direction = new_direction
            print(f"{self.env.now:.2f}: [{self.name}] Direction: {old_direction} -> {new_direction}")
            self._report_status()

    def _set_next_stop(self, floor: Optional[int]):
        if self.next_stop != floor:
            self.next_stop = floor
            self._report_status()

    def get_display(self) -> str:
        """Text for the car's indicator panel"""
        if self.state == "DOOR_CYCLE":
            return format_floor(self.current_floor)
        if self.state == "MOVING" and self.direction in ARROWS:
            label = format_floor(self.next_stop) if self.next_stop is not None else "--"
            return f"{ARROWS[self.direction]} {label}"
        return "--"

    def _report_status(self):
        self.broker.put(self.status_topic, {
            "timestamp": self.env.now,
            "car": self.name,
            "state": self.state,
            "direction": self.direction,
            "current_floor": self.current_floor,
            "next_stop": self.next_stop,
            "stops": sorted(self.stops),
            "num_floors": self.num_floors,
            "display": self.get_display(),
        })

    def _report_position(self):
        self.broker.put(self.position_topic, {
            "timestamp": self.env.now,
            "car": self.name,
            "floor": self.current_floor,
            "travel_duration_ms": int(round(self.travel_time * 1000)),
        })

    def snapshot(self) -> CarStatus:
        return CarStatus(
            name=self.name,
            current_floor=self.current_floor,
            direction=self.direction,
            stops=tuple(sorted(self.stops)),
            state=self.state,
            busy=self.busy,
        )

    # --- Stops ---

    def add_stop(self, floor: int):
        """
        Commit this car to visit floor. Wakes the control loop if the car is
        idle; a busy car picks the stop up when its current step ends.
        """
        if floor in self.stops:
            print(f"{self.env.now:.2f} [{self.name}] Stop {format_floor(floor)} already registered.")
            return

        self.stops.add(floor)
        print(f"{self.env.now:.2f} [{self.name}] Stop {format_floor(floor)} registered. Stops: {sorted(self.stops)}")
        self._report_status()

        if not self.busy and not self.new_stop_event.triggered:
            self.new_stop_event.succeed()
            self.new_stop_event = self.env.event()

    def _has_stops_ahead(self) -> bool:
        """Any stop strictly beyond the current floor in the travel direction"""
        if self.direction == UP:
            return any(f > self.current_floor for f in self.stops)
        if self.direction == DOWN:
            return any(f < self.current_floor for f in self.stops)
        return False

    def _should_stop_at_current_floor(self) -> bool:
        floor = self.current_floor
        if floor not in self.stops:
            return False

        if self.direction == IDLE:
            return True

        if self.call_registry.is_call_active(floor, self.direction):
            return True

        if self._has_stops_ahead():
            # Stop was registered for the opposite direction: serve it on the way back
            print(f"{self.env.now:.2f} [{self.name}] Passing floor {format_floor(floor)} ({self.direction}): no call in this direction.")
            return False

        # Reversal floor
        return True

    def _select_target(self) -> Optional[int]:
        """
        Next floor to head for. May flip the direction when nothing is left
        ahead; an idle car heads for the nearest stop.
        """
        floor = self.current_floor
        above = sorted(f for f in self.stops if f > floor)
        below = sorted((f for f in self.stops if f < floor), reverse=True)

        if self.direction == UP:
            if above:
                return above[0]
            print(f"{self.env.now:.2f} [{self.name}] No stops above floor {format_floor(floor)}. Reversing.")
            self._update_direction(DOWN)
            return below[0] if below else None

        if self.direction == DOWN:
            if below:
                return below[0]
            print(f"{self.env.now:.2f} [{self.name}] No stops below floor {format_floor(floor)}. Reversing.")
            self._update_direction(UP)
            return above[0] if above else None

        # IDLE: nearest stop, lower floor wins a tie
        target = min(sorted(self.stops), key=lambda f: abs(f - floor))
        self._update_direction(UP if target > floor else DOWN)
        return target

    def _calls_to_service(self, up_active: bool, down_active: bool) -> Tuple[bool, bool]:
        """
        Which of the active calls at the current floor this stop services.
        With stops still ahead only the call in the travel direction is
        taken; at a reversal floor (or when idle) both are.
        """
        if self.direction == UP:
            return up_active, down_active and not self._has_stops_ahead()
        if self.direction == DOWN:
            return up_active and not self._has_stops_ahead(), down_active
        return up_active, down_active

    # --- Main process ---

    def run(self):
        print(f"{self.env.now:.2f} [{self.name}] Operational at floor {format_floor(self.current_floor)}.")

        while True:
            if self._should_stop_at_current_floor():
                yield from self._door_cycle()
                continue

            if not self.stops:
                self._go_idle()
                yield self.new_stop_event
                continue

            target = self._select_target()
            if target is None or target == self.current_floor:
                # Stop added for the floor the car is already standing at
                yield from self._door_cycle()
                continue

            yield from self._move_one_floor(target)

    def _go_idle(self):
        self._update_direction(IDLE)
        self._set_next_stop(None)
        self.set_state("IDLE")
        print(f"{self.env.now:.2f} [{self.name}] IDLE at floor {format_floor(self.current_floor)}. Waiting for a stop...")

    def _move_one_floor(self, target: int):
        self.busy = True
        self._set_next_stop(target)
        self.set_state("MOVING")

        old_floor = self.current_floor
        self.current_floor += 1 if self.direction == UP else -1
        if not 0 <= self.current_floor < self.num_floors:
            print(f"{self.env.now:.2f} [{self.name}] ERROR: LEFT SHAFT: {old_floor} -> {self.current_floor}")
        self.floors_travelled += 1
        print(f"{self.env.now:.2f} [{self.name}] Moving {self.direction}: {format_floor(old_floor)} -> {format_floor(self.current_floor)} (target {format_floor(target)})")
        self._report_position()

        yield self.env.timeout(self.travel_time)
        self.busy = False

    def _door_cycle(self):
        self.busy = True
        self.set_state("DOOR_CYCLE")
        self.door_cycles += 1

        floor = self.current_floor
        up_active = self.call_registry.is_call_active(floor, UP)
        down_active = self.call_registry.is_call_active(floor, DOWN)
        serve_up, serve_down = self._calls_to_service(up_active, down_active)

        print(f"{self.env.now:.2f} [{self.name}] Stopping at floor {format_floor(floor)} "
              f"(direction {self.direction}, serving UP={serve_up} DOWN={serve_down}).")

        if serve_up:
            self.call_registry.set_call_active(floor, UP, False, self.name)
        if serve_down:
            self.call_registry.set_call_active(floor, DOWN, False, self.name)

        self.stops.discard(floor)

        # A pending call this stop does not serve goes back to group control
        if up_active and not serve_up:
            self._resubmit_call(floor, UP)
        if down_active and not serve_down:
            self._resubmit_call(floor, DOWN)

        self._report_status()

        yield self.env.process(self.door.cycle(floor))
        self.busy = False

    def _resubmit_call(self, floor: int, direction: str):
        print(f"{self.env.now:.2f} [{self.name}] Not serving {direction} call at floor {format_floor(floor)}. Handing back to group control.")
        self.broker.put(self.dispatch_topic, {
            "timestamp": self.env.now,
            "floor": floor,
            "direction": direction,
            "resubmitted_by": self.name,
        })
