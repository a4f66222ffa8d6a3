import numpy as np

from .statistics import Statistics

class RealtimePerformanceMonitor(Statistics):
    """
    Service time monitoring from hall button lights only.

    Service time of a call = light OFF time - light ON time. Nothing else
    about the cars is needed, so the same monitor would work against a real
    installation's button signals.
    """
    def __init__(self, env, broadcast_pipe, websocket_server=None):
        super().__init__(env, broadcast_pipe, websocket_server)
        self.hall_button_press_times = {}  # {(floor, direction): press_time}
        self.service_times = {}  # {(floor, direction): [(press_time, service_time), ...]}

    def handle_message(self, topic, message):
        super().handle_message(topic, message)

        if topic.endswith('/call_on'):
            key = (message['floor'], message['direction'])
            self.hall_button_press_times.setdefault(key, message['timestamp'])

        elif topic.endswith('/call_off'):
            key = (message['floor'], message['direction'])
            press_time = self.hall_button_press_times.pop(key, None)
            if press_time is not None:
                self.service_times.setdefault(key, []).append(
                    (press_time, message['timestamp'] - press_time))

    def pending_calls(self):
        """Calls lit and not yet served, with their waiting time so far"""
        return {key: self.env.now - t for key, t in self.hall_button_press_times.items()}

    def get_summary(self):
        """
        Returns:
            dict with count, mean, p95 and max service time (seconds), or
            None if no call has been served
        """
        values = np.array([st for records in self.service_times.values() for _, st in records])
        if values.size == 0:
            return None
        return {
            'count': int(values.size),
            'mean': float(np.mean(values)),
            'p95': float(np.percentile(values, 95)),
            'max': float(np.max(values)),
        }

    def print_performance_summary(self):
        print("\n" + "="*60)
        print("   HALL CALL SERVICE TIMES")
        print("="*60)
        summary = self.get_summary()
        if summary is None:
            print("No hall call served.")
            return

        print(f"Served calls: {summary['count']}")
        print(f"Mean: {summary['mean']:.1f}s  P95: {summary['p95']:.1f}s  Max: {summary['max']:.1f}s")
        for (floor, direction), records in sorted(self.service_times.items()):
            times = [st for _, st in records]
            print(f"  Floor {floor} {direction:<4}: {len(times)} calls, mean {np.mean(times):.1f}s")

        pending = self.pending_calls()
        if pending:
            print(f"Still pending: {len(pending)} calls, longest {max(pending.values()):.1f}s")
