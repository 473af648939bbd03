"""
Trace events recorded by the Lr driver, one per move:

  Shift(token, nextState)
  Reduce(production, lhs, rhs, nextState)
  Accept()
  Error(state, token)
"""

from __future__ import annotations
from typing import Any, Sequence, Tuple


class Event:
    """
    Abstract base class for trace events.  Events compare by value so that
    whole traces can be checked against expected move sequences."""

    def _fields(self) -> Tuple[Any, ...]:
        return ()

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return False
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._fields())

    def __repr__(self) -> str:
        return "%s(%s)" % (
            type(self).__name__,
            ", ".join(repr(f) for f in self._fields()),
        )


class Shift(Event):
    def __init__(self, token: str, nextState: int) -> None:
        self.token = token
        self.nextState = nextState

    def _fields(self) -> Tuple[Any, ...]:
        return (self.token, self.nextState)


class Reduce(Event):
    """
    Reduction by production, followed by the GOTO move to nextState on
    the production's left-hand side."""

    def __init__(
        self, production: int, lhs: str, rhs: Sequence[str], nextState: int
    ) -> None:
        self.production = production
        self.lhs = lhs
        self.rhs = tuple(rhs)
        self.nextState = nextState

    def _fields(self) -> Tuple[Any, ...]:
        return (self.production, self.lhs, self.rhs, self.nextState)


class Accept(Event):
    pass


class Error(Event):
    def __init__(self, state: int, token: str) -> None:
        self.state = state
        self.token = token

    def _fields(self) -> Tuple[Any, ...]:
        return (self.state, self.token)
