"""
Message broker tests: topic queues exist only for subscribed topics
"""

import simpy

from simulator.infrastructure.message_broker import MessageBroker
from simulator.core.direction import UP, DOWN


def test_unsubscribed_topic_goes_to_broadcast_only():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)

    assert broker.put('car/Car_0/status', {'state': 'IDLE'}) is None
    assert not broker.is_subscribed('car/Car_0/status')
    assert broker.subscriptions == {}
    assert broker.get_broadcast_pipe().items == [{'topic': 'car/Car_0/status', 'message': {'state': 'IDLE'}}]


def test_subscriber_receives_messages_in_order():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    broker.subscribe('gcs/hall_call')
    received = []

    def listener():
        while True:
            message = yield broker.get('gcs/hall_call')
            received.append((env.now, message['floor']))

    broker.put('gcs/hall_call', {'floor': 2})

    def later():
        yield env.timeout(5)
        broker.put('gcs/hall_call', {'floor': 4})

    env.process(listener())
    env.process(later())
    env.run(until=10)

    assert received == [(0, 2), (5, 4)]
    assert broker.subscriptions['gcs/hall_call'].items == []


def test_topic_queues_stay_empty_over_a_long_run(make_bank):
    """Status, door and light reports are not retained per topic while the bank runs"""
    bank = make_bank(num_floors=6, num_cars=2)

    def calls():
        while True:
            bank.building.request_call(5, DOWN)
            bank.building.request_call(0, UP)
            yield bank.env.timeout(40)

    bank.env.process(calls())

    retained = []
    for until in (1000, 2000, 4000):
        bank.env.run(until=until)
        retained.append(sum(len(store.items) for store in bank.broker.subscriptions.values()))

    assert list(bank.broker.subscriptions) == ['gcs/hall_call']
    assert retained == [0, 0, 0]
    assert len(bank.calls_served()) > 150
