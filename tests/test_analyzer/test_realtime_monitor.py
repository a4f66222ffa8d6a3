"""
Recorder and service time monitor tests, run through a full simulation
setup so the monitor sees the real broker traffic.
"""

import json

import pytest

from config import GroupControlConfig, SimulationConfig
from main import setup_simulation


def _scripted(calls, num_floors=5, num_cars=1):
    return SimulationConfig.from_dict({
        'building': {'num_floors': num_floors},
        'car': {'num_cars': num_cars},
        'traffic': {'pattern': 'scripted', 'simulation_duration': 60.0, 'calls': calls},
        'random_seed': 1,
        'verbose': False,
    })


@pytest.fixture
def single_call_run():
    ctx = setup_simulation(_scripted([{'time': 0.0, 'floor': 3, 'direction': 'DOWN'}]), GroupControlConfig())
    ctx.env.run(until=30)
    return ctx


def test_service_time_is_light_on_to_light_off(single_call_run):
    monitor = single_call_run.monitor

    assert monitor.service_times == {(3, 'DOWN'): [(0.0, 6.0)]}
    assert monitor.pending_calls() == {}
    assert monitor.get_summary() == {'count': 1, 'mean': 6.0, 'p95': 6.0, 'max': 6.0}


def test_trajectory_and_history(single_call_run):
    monitor = single_call_run.monitor

    assert monitor.car_trajectories['Car_0'] == [(0, 0), (0.0, 1), (2.0, 2), (4.0, 3)]
    assert monitor.door_events_history['Car_0'] == [(6.0, 3, True), (9.5, 3, False)]
    assert monitor.hall_call_on_history == [(0.0, 3, 'DOWN')]
    assert monitor.hall_call_off_history == [(6.0, 3, 'DOWN', 'Car_0')]
    assert monitor.assignments == [(0.0, 3, 'DOWN', 'Car_0')]
    assert monitor.current_car_states['Car_0']['state'] == 'IDLE'

    assert monitor.get_floor_at_time('Car_0', 3.0) == 2
    assert monitor.get_floor_at_time('Car_0', 100.0) == 3
    assert monitor.get_floor_at_time('Car_9', 1.0) is None


def test_pending_call_waits_until_served():
    ctx = setup_simulation(_scripted([{'time': 0.0, 'floor': 4, 'direction': 'DOWN'}]), GroupControlConfig())
    ctx.env.run(until=5)

    assert ctx.monitor.pending_calls() == {(4, 'DOWN'): 5}
    assert ctx.monitor.get_summary() is None


def test_event_log_written_as_json_lines(single_call_run, tmp_path):
    path = tmp_path / "log.jsonl"
    single_call_run.monitor.save_event_log(str(path))

    lines = [json.loads(line) for line in path.read_text(encoding='utf-8').splitlines()]
    assert lines[0]['type'] == 'metadata'
    assert lines[0]['data']['config'] == {'num_floors': 5, 'num_cars': 1, 'allocation_strategy': 'DirectionalCost'}

    types = {line['type'] for line in lines[1:]}
    assert {'car_status', 'car_position', 'door', 'hall_call_on', 'hall_call_off', 'assignment'} <= types


def test_trajectory_diagram_saved(single_call_run, tmp_path):
    path = tmp_path / "diagram.png"
    single_call_run.monitor.plot_trajectory_diagram(str(path))

    assert path.exists()
    assert path.stat().st_size > 0


def test_events_forwarded_to_live_feed():
    class Feed:
        def __init__(self):
            self.messages = []

        def queue_message(self, message):
            self.messages.append(message)

    feed = Feed()
    ctx = setup_simulation(_scripted([{'time': 0.0, 'floor': 2, 'direction': 'UP'}]),
                           GroupControlConfig(), websocket_server=feed)
    ctx.env.run(until=20)

    assert feed.messages[0]['type'] == 'metadata'
    assert any(m['type'] == 'hall_call_off' for m in feed.messages)
