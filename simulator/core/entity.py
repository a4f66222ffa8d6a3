import simpy
from abc import ABC, abstractmethod
import itertools
from typing import Optional

class Entity(ABC):
    """
    Base class for anything that lives on the simulation timeline as a
    SimPy process (cars, doors).

    The process running run() is started from the constructor, so a
    subclass must finish setting its attributes before the environment
    is stepped. Creating the generator does not execute any of its body.
    """
    _entity_id_counter = itertools.count()

    def __init__(self, env: simpy.Environment, name: Optional[str] = None):
        """
        Args:
            env: The SimPy environment this entity belongs to.
            name: Entity name. Defaults to "<ClassName>_<id>".
        """
        self.env = env
        self.entity_id: int = next(self._entity_id_counter)
        self.name: str = name if name is not None else f"{self.__class__.__name__}_{self.entity_id}"

        # Concrete classes set their real initial state in __init__
        self.state: str = "initial_state"

        self._process = self.env.process(self.run())

        print(f'{self.env.now:.2f}: Entity "{self.name}" ({self.__class__.__name__}, ID:{self.entity_id}) created.')

    @abstractmethod
    def run(self):
        """
        Main SimPy generator of the entity.

        Typically an infinite loop that dispatches on self.state and yields
        timeouts or events; it must never call itself recursively.
        """
        pass

    def set_state(self, new_state: str):
        """Transition to new_state; no-op when already there."""
        if self.state != new_state:
            old_state = self.state
            self.state = new_state
            self._on_state_changed(old_state, new_state)

    def _on_state_changed(self, old_state: str, new_state: str):
        """
        Hook called after every state transition. Subclasses extend it
        (e.g. to publish a status report) and should call super().
        """
        print(f'{self.env.now:.2f}: Entity "{self.name}" ({self.__class__.__name__}, ID:{self.entity_id}) state transition: {old_state} -> {new_state}')

    @property
    def process(self) -> simpy.Process:
        """The SimPy process running run()"""
        return self._process
