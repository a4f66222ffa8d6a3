"""
Group control system tests
"""

import math

import simpy

from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.building import Building
from simulator.core.direction import UP, DOWN
from controller.group_control import GroupControlSystem
from controller.algorithms import DirectionalCostStrategy, NearestCarStrategy


def _bank(num_floors, num_cars, strategy):
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    building = Building(env, broker, num_floors, num_cars)
    gcs = GroupControlSystem("GCS", broker, strategy)
    for car in building.cars:
        gcs.register_car(car)
    return env, broker, building, gcs


def test_assign_adds_stop_and_publishes():
    env, broker, building, gcs = _bank(10, 2, DirectionalCostStrategy(num_floors=10))

    assert gcs.assign(4, DOWN) == "Car_0"
    assert building.cars[0].stops == {4}
    assert building.cars[1].stops == set()
    assert gcs.assignment_count == 1

    published = [item['message'] for item in broker.get_broadcast_pipe().items
                 if item['topic'] == 'gcs/hall_call_assignment']
    assert published == [{'timestamp': 0, 'floor': 4, 'direction': DOWN, 'assigned_car': "Car_0"}]


def test_calls_pressed_before_run_are_queued():
    env, broker, building, gcs = _bank(6, 1, DirectionalCostStrategy(num_floors=6))

    building.request_call(3, UP)
    env.process(gcs.run())
    env.run(until=1)

    assert gcs.assignment_count == 1
    assert building.cars[0].stops == {3}


def test_load_balance_spreads_calls_over_idle_cars():
    env, broker, building, gcs = _bank(10, 2, DirectionalCostStrategy(num_floors=10))

    assert gcs.assign(0, UP) == "Car_0"
    # Car_0 now carries one stop, Car_1 is equally close and empty
    assert gcs.assign(0, UP) == "Car_1"


def test_snapshot_is_a_copy():
    env, broker, building, gcs = _bank(10, 2, DirectionalCostStrategy(num_floors=10))
    gcs.assign(5, UP)

    snap = gcs.snapshot()
    assert list(snap) == ["Car_0", "Car_1"]
    assert snap["Car_0"].stops == (5,)

    building.cars[0].add_stop(7)
    assert snap["Car_0"].stops == (5,)


def test_falls_back_to_nearest_car_when_no_cost_is_finite():
    env, broker, building, gcs = _bank(10, 2, DirectionalCostStrategy(num_floors=math.inf))
    building.request_call(9, DOWN)
    building.request_call(1, DOWN)
    env.process(gcs.run())
    env.run(until=3)

    # Both cars are heading UP now; an UP call below them has no finite cost
    assert all(car.direction == UP for car in building.cars)
    floors = {car.name: car.current_floor for car in building.cars}

    selected = gcs.assign(0, UP)
    expected = min(floors, key=lambda name: (floors[name], name))
    assert selected == expected
    assert 0 in building.get_car(selected).stops


def test_custom_fallback_strategy_is_used():
    class Last(NearestCarStrategy):
        def select_car(self, call_data, car_statuses):
            return list(car_statuses)[-1]

    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    building = Building(env, broker, 10, 3)
    gcs = GroupControlSystem("GCS", broker, DirectionalCostStrategy(num_floors=math.inf), fallback_strategy=Last())
    for car in building.cars:
        gcs.register_car(car)
        car.direction = DOWN

    assert gcs.assign(5, UP) == "Car_2"


def test_no_registered_car_drops_the_call():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    gcs = GroupControlSystem("GCS", broker, DirectionalCostStrategy(num_floors=10))

    assert gcs.assign(3, UP) is None
    assert gcs.assignment_count == 0


def test_run_assigns_published_hall_calls():
    env, broker, building, gcs = _bank(6, 1, DirectionalCostStrategy(num_floors=6))
    env.process(gcs.run())

    building.request_call(2, UP)
    env.run(until=1)

    assert gcs.assignment_count == 1
    assert building.cars[0].direction == UP
    assert building.cars[0].next_stop == 2
