"""
Navigation history for params-router.
Keeps the current location, commits navigations and notifies listeners.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from collections import deque
from enum import Enum

from params_router.location import Location
from params_router.types import Listener, State, Unsubscribe

logger = logging.getLogger("params_router.history")


class Action(str, Enum):
    """How the current location was reached."""

    POP = "POP"
    PUSH = "PUSH"
    REPLACE = "REPLACE"


class _Subscription:
    """A registered listener; ``active`` turns False once unsubscribed."""

    __slots__ = ("listener", "active")

    def __init__(self, listener: Listener) -> None:
        self.listener = listener
        self.active = True


class History(ABC):
    """
    Abstract navigation history.

    Subclasses store the entries; this class owns listener bookkeeping.
    Listeners are called synchronously, in registration order, with the
    committed location. Navigations made from inside a listener are
    delivered after the current round of notifications finishes. If a
    listener raises, the error propagates and locations still queued are
    delivered, in order, ahead of the next navigation.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []
        self._pending: deque[Location] = deque()
        self._notifying = False
        self.action: Action = Action.POP

    @property
    @abstractmethod
    def location(self) -> Location:
        """The current location."""
        ...

    @abstractmethod
    def push(self, url: str, state: State | None = None) -> None:
        """Add a new entry and make it current."""
        ...

    @abstractmethod
    def replace(self, url: str, state: State | None = None) -> None:
        """Overwrite the current entry."""
        ...

    @abstractmethod
    def go(self, delta: int) -> None:
        """Move ``delta`` entries through the stack."""
        ...

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def listen(self, listener: Listener) -> Unsubscribe:
        """
        Register a listener for committed navigations.

        The returned function unsubscribes; it may be called more than
        once and from inside a listener.
        """
        subscription = _Subscription(listener)
        self._subscriptions.append(subscription)

        def unlisten() -> None:
            if not subscription.active:
                return
            subscription.active = False
            self._subscriptions.remove(subscription)

        return unlisten

    def _notify(self, location: Location) -> None:
        self._pending.append(location)
        if self._notifying:
            return

        self._notifying = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for subscription in list(self._subscriptions):
                    if subscription.active:
                        subscription.listener(current)
        finally:
            self._notifying = False


class MemoryHistory(History):
    """
    History kept entirely in memory.

    Usage:
        history = MemoryHistory(["/users/1"])
        history.push("/users/2?tab=profile")
        history.back()
    """

    def __init__(
        self,
        initial_entries: list[str | Location] | None = None,
        initial_index: int | None = None,
    ) -> None:
        super().__init__()
        entries = initial_entries or ["/"]
        self._entries: list[Location] = [
            entry if isinstance(entry, Location) else Location.from_url(entry, key=self._create_key())
            for entry in entries
        ]
        index = len(self._entries) - 1 if initial_index is None else initial_index
        self._index = self._clamp(index)

    @staticmethod
    def _create_key() -> str:
        return uuid.uuid4().hex[:8]

    def _clamp(self, index: int) -> int:
        return min(max(index, 0), len(self._entries) - 1)

    @property
    def location(self) -> Location:
        return self._entries[self._index]

    @property
    def index(self) -> int:
        """Position of the current entry."""
        return self._index

    @property
    def entries(self) -> tuple[Location, ...]:
        return tuple(self._entries)

    def push(self, url: str, state: State | None = None) -> None:
        location = Location.from_url(url, state=state, key=self._create_key())
        del self._entries[self._index + 1:]
        self._entries.append(location)
        self._index = len(self._entries) - 1
        self.action = Action.PUSH
        logger.debug("PUSH %s", location.url)
        self._notify(location)

    def replace(self, url: str, state: State | None = None) -> None:
        location = Location.from_url(url, state=state, key=self._create_key())
        self._entries[self._index] = location
        self.action = Action.REPLACE
        logger.debug("REPLACE %s", location.url)
        self._notify(location)

    def go(self, delta: int) -> None:
        index = self._clamp(self._index + delta)
        if index == self._index:
            return

        self._index = index
        self.action = Action.POP
        logger.debug("POP %s", self.location.url)
        self._notify(self.location)
