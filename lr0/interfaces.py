"""
Abstract interfaces shared by the table generator, the grammar readers and
the parse driver.  Third-party grammar readers subclass GrammarSource.
"""

from __future__ import annotations

import abc
from typing import Optional, Sequence

from lr0.grammar import ActionState, GotoState, Grammar


class Spec(abc.ABC):
    @abc.abstractmethod
    def grammar(self) -> Grammar:
        raise NotImplementedError

    @abc.abstractmethod
    def actions(self) -> list[ActionState]:
        raise NotImplementedError

    @abc.abstractmethod
    def goto(self) -> list[GotoState]:
        raise NotImplementedError

    @abc.abstractmethod
    def start_sym(self) -> str:
        raise NotImplementedError

    @property
    @abc.abstractmethod
    def conflicts(self) -> int:
        raise NotImplementedError


class GrammarSource(abc.ABC):
    @abc.abstractmethod
    def get_productions(self) -> list[tuple[str, tuple[str, ...]]]:
        raise NotImplementedError

    def get_start(self) -> Optional[str]:
        """The start non-terminal, or None for the first left-hand side."""
        return None


class Parser(abc.ABC):
    def __init__(self, spec: Spec) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def token(self, token: str) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def eoi(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def parse(self, tokens: str | Sequence[str]) -> bool:
        raise NotImplementedError
