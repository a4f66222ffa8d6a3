import simpy
from typing import Optional

class MessageBroker:
    """
    Topic-based publish/subscribe channel between the cars, the group
    control system and whatever presentation layer is listening.

    Every published message goes to a single broadcast pipe, so that
    recorders (see analyzer.Statistics) can observe the whole system.
    A topic only gets its own queue once something subscribes to it;
    reports nobody consumes by topic (car status, doors, button lights)
    live on the broadcast pipe alone.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = True):
        """
        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publication
        """
        self.env = env
        self.verbose = verbose
        self.subscriptions = {}  # topic -> simpy.Store
        self.broadcast_pipe = simpy.Store(self.env)

    def subscribe(self, topic: str) -> simpy.Store:
        """
        Open (or return) the queue of a topic. Messages published before
        the subscription are not queued, so subscribe before the first
        publication you need.
        """
        if topic not in self.subscriptions:
            self.subscriptions[topic] = simpy.Store(self.env)
        return self.subscriptions[topic]

    def is_subscribed(self, topic: str) -> bool:
        return topic in self.subscriptions

    def put(self, topic: str, message) -> Optional[simpy.events.Event]:
        """
        Publish a message on a topic.

        Returns:
            The put event of the topic queue, or None if nobody subscribed
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        self.broadcast_pipe.put({'topic': topic, 'message': message})

        pipe = self.subscriptions.get(topic)
        if pipe is None:
            return None
        return pipe.put(message)

    def get(self, topic: str):
        """Wait for the next message on a topic (subscribes on first use)"""
        return self.subscribe(topic).get()

    def get_broadcast_pipe(self) -> simpy.Store:
        """Pipe carrying a copy of every publication, as {'topic', 'message'}"""
        return self.broadcast_pipe

    def get_current_time(self) -> float:
        """
        Current simulation time.

        Lets the group control system read the clock without holding
        the SimPy environment itself.
        """
        return self.env.now
