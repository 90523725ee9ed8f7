"""A small state machine that drives interactive programs."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class StateNotFoundError(LookupError):
    """Raised when a state is triggered that was never registered."""

    def __init__(self, state_name: str) -> None:
        super().__init__(f"State '{state_name}' does not exist or is not registered.")
        self.state_name = state_name


class _Action(Enum):
    NOTHING = auto()
    QUEUE_STATE = auto()
    EXIT = auto()


class Command:
    """An instruction a state leaves for the App, applied after the state returns."""

    __slots__ = ("_action", "_state_name")

    def __init__(self) -> None:
        self._action = _Action.NOTHING
        self._state_name: Optional[str] = None

    def nothing(self) -> None:
        """Leave the App's next state unchanged."""
        self._action = _Action.NOTHING
        self._state_name = None

    def queue_state(self, state_name: str) -> None:
        """Make ``state_name`` the state run on the next update."""
        self._action = _Action.QUEUE_STATE
        self._state_name = str(state_name)

    def exit(self) -> None:
        """Stop the App after this state."""
        self._action = _Action.EXIT
        self._state_name = None


StateFunc = Callable[[T, Command], None]


class App(Generic[T]):
    """Runs registered states against shared data until a state exits."""

    def __init__(self, data: T) -> None:
        self.data = data
        self._states: dict[str, StateFunc] = {}
        self._queued: Optional[str] = None

    def register_state(self, state_name: str, func: StateFunc) -> None:
        """Register ``func(data, command)`` under ``state_name``."""
        self._states[str(state_name)] = func

    def update(self) -> bool:
        """Run the queued state; return False once the App has exited."""
        if self._queued is None:
            return False
        self.trigger_state(self._queued)
        return True

    def trigger_state(self, state_name: str) -> None:
        """Run one state and apply the command it leaves."""
        try:
            func = self._states[state_name]
        except KeyError:
            raise StateNotFoundError(state_name) from None
        command = Command()
        func(self.data, command)
        if command._action is _Action.QUEUE_STATE:
            self._queued = command._state_name
        elif command._action is _Action.EXIT:
            self._queued = None

    def queue_state(self, state_name: str) -> None:
        """Queue the state to be run on the next update."""
        self._queued = str(state_name)