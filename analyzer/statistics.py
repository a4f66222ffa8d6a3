import matplotlib.pyplot as plt
import re
import json
from datetime import datetime

class Statistics:
    """
    Independent "recorder" listening to every broker publication.

    Keeps car trajectories, door events and hall call history, forwards
    events to a WebSocket server for live viewing, and keeps a JSON Lines
    event log for offline playback.
    """
    def __init__(self, env, broadcast_pipe, websocket_server=None):
        self.env = env
        self.broadcast_pipe = broadcast_pipe
        self.websocket_server = websocket_server
        self.car_trajectories = {}    # {car: [(timestamp, floor), ...]}
        self.door_events_history = {}  # {car: [(timestamp, floor, open), ...]}
        self.hall_call_on_history = []  # [(timestamp, floor, direction)]
        self.hall_call_off_history = []  # [(timestamp, floor, direction, serviced_by)]
        self.assignments = []  # [(timestamp, floor, direction, car)]
        self.current_car_states = {}  # {car: latest status message}

        self.event_log = []
        self.simulation_metadata = {}

    def _send_to_websocket(self, message):
        """Queue a message for the WebSocket server, if one is attached."""
        if self.websocket_server:
            self.websocket_server.queue_message(message)

    def _add_event_log(self, event_type, event_data):
        event = {
            "time": self.env.now,
            "type": event_type,
            "data": event_data
        }
        self.event_log.append(event)
        self._send_to_websocket(event)

    def set_simulation_metadata(self, metadata):
        """
        Args:
            metadata (dict): Simulation configuration (num_floors, cars, etc.)
        """
        self.simulation_metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }
        self._send_to_websocket({"type": "metadata", "data": self.simulation_metadata})

    def start_listening(self):
        """
        Main process: consume the broadcast pipe forever.
        """
        while True:
            data = yield self.broadcast_pipe.get()
            self.handle_message(data.get('topic', ''), data.get('message', {}))

    def handle_message(self, topic, message):
        status_match = re.fullmatch(r'car/(.*?)/status', topic)
        if status_match:
            car = status_match.group(1)
            self.current_car_states[car] = message
            # First report of a car anchors its trajectory at the start floor
            if car not in self.car_trajectories:
                self.car_trajectories[car] = [(message['timestamp'], message['current_floor'])]
            self._add_event_log('car_status', message)
            return

        position_match = re.fullmatch(r'car/(.*?)/position', topic)
        if position_match:
            car = position_match.group(1)
            self.car_trajectories.setdefault(car, []).append((message['timestamp'], message['floor']))
            self._add_event_log('car_position', message)
            return

        door_match = re.fullmatch(r'car/(.*?)/door', topic)
        if door_match:
            car = door_match.group(1)
            self.door_events_history.setdefault(car, []).append(
                (message['timestamp'], message['floor'], message['open']))
            self._add_event_log('door', message)
            return

        if re.fullmatch(r'hall_button/floor_(\d+)/call_on', topic):
            self.hall_call_on_history.append((message['timestamp'], message['floor'], message['direction']))
            self._add_event_log('hall_call_on', message)
            return

        if re.fullmatch(r'hall_button/floor_(\d+)/call_off', topic):
            self.hall_call_off_history.append(
                (message['timestamp'], message['floor'], message['direction'], message.get('serviced_by')))
            self._add_event_log('hall_call_off', message)
            return

        if topic == 'gcs/hall_call_assignment':
            self.assignments.append(
                (message['timestamp'], message['floor'], message['direction'], message['assigned_car']))
            self._add_event_log('assignment', message)

    def get_floor_at_time(self, car, timestamp):
        """Last reported floor of a car at or before timestamp (None if unknown)"""
        floor = None
        for t, f in self.car_trajectories.get(car, []):
            if t > timestamp:
                break
            floor = f
        return floor

    def print_summary(self):
        print("\n" + "="*60)
        print("   CAR SUMMARY")
        print("="*60)
        for car, trajectory in sorted(self.car_trajectories.items()):
            moves = len(trajectory) - 1
            door_cycles = sum(1 for _, _, is_open in self.door_events_history.get(car, []) if is_open)
            served = sum(1 for *_, by in self.hall_call_off_history if by == car)
            print(f"{car}: floors travelled={moves}, door cycles={door_cycles}, calls served={served}")
        print(f"Hall calls registered: {len(self.hall_call_on_history)}, "
              f"served: {len(self.hall_call_off_history)}, assignments: {len(self.assignments)}")

    def save_event_log(self, filename='simulation_log.jsonl'):
        """Write metadata (first line) and every event as JSON Lines."""
        with open(filename, 'w', encoding='utf-8') as f:
            if self.simulation_metadata:
                f.write(json.dumps({"type": "metadata", "data": self.simulation_metadata}, ensure_ascii=False) + "\n")
            for event in self.event_log:
                f.write(json.dumps(event, ensure_ascii=False) + "\n")
        print(f"Event log saved: {filename} ({len(self.event_log)} events)")

    def plot_trajectory_diagram(self, output_filename='trajectory_diagram.png', show=False):
        """Travel diagram: floor against time per car, with hall calls and door openings."""
        if not self.car_trajectories:
            print("No trajectory data to plot.")
            return

        plt.figure(figsize=(14, 8))
        colors = plt.rcParams['axes.prop_cycle'].by_key()['color']
        max_floor = 0

        for i, (car, trajectory) in enumerate(sorted(self.car_trajectories.items())):
            color = colors[i % len(colors)]
            # Extend the last segment to the current time
            times = [t for t, _ in trajectory] + [self.env.now]
            floors = [f for _, f in trajectory] + [trajectory[-1][1]]
            max_floor = max(max_floor, max(floors))
            plt.step(times, floors, where='post', label=car, linewidth=2.5, color=color, alpha=0.8)

            for timestamp, floor, is_open in self.door_events_history.get(car, []):
                if is_open:
                    plt.scatter(timestamp, floor, marker='s', s=60, color=color, zorder=5)

        for timestamp, floor, direction in self.hall_call_on_history:
            plt.annotate('↑' if direction == "UP" else '↓', (timestamp, floor),
                         fontsize=14, ha='center', va='center', color='black')
        for timestamp, floor, _, _ in self.hall_call_off_history:
            plt.annotate('✕', (timestamp, floor), fontsize=10, ha='center', va='center', color='red')

        plt.title("Car Trajectory Diagram")
        plt.xlabel("Time (s)")
        plt.ylabel("Floor")
        plt.yticks(range(0, max_floor + 1))
        plt.grid(True, which='both', linestyle='--', alpha=0.7)
        plt.legend(loc='upper right', fontsize=10)
        plt.tight_layout()

        plt.savefig(output_filename, dpi=150, bbox_inches='tight')
        print(f"Trajectory diagram saved: {output_filename}")
        if show:
            plt.show()
        plt.close()
