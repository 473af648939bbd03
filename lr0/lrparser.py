from __future__ import annotations
from typing import Sequence

from lr0.errors import ParsingError, ParseError, MissingGotoError
from lr0.grammar import (
    Production,
    eoi,
    ShiftAction,
    ReduceAction,
    AcceptAction,
)
from lr0.interfaces import Parser, Spec
from lr0.trace import Event, Shift, Reduce, Accept, Error


class Lr(Parser):
    """
    LR(0) parser.  The Lr class uses a Spec instance in order to parse
    input that is fed to it via the token() method, and terminated via the
    eoi() method.  Every move is recorded in the trace list.

    The stack holds state indices only; the symbols are recoverable from
    the productions being reduced.
    """

    _spec: Spec
    _stack: list[int]
    _trace: list[Event]

    def __init__(self, spec: Spec) -> None:
        self._spec = spec
        self._action = spec.actions()
        self._goto = spec.goto()
        self.reset()
        self.verbose = False

    @property
    def spec(self) -> Spec:
        return self._spec

    @property
    def trace(self) -> list[Event]:
        """The moves made so far, including a final Accept or Error."""
        return self._trace

    @property
    def stack(self) -> list[int]:
        return self._stack

    @property
    def accepted(self) -> bool:
        return self._accepted

    @property
    def position(self) -> int:
        """Index of the current input token."""
        return self._pos

    def reset(self) -> None:
        self._stack = [0]
        self._trace = []
        self._pos = 0
        self._accepted = False
        self._failed = False

    def token(self, token: str) -> None:
        """Feed a token to the parser."""
        if token == eoi:
            raise ParsingError(
                "%r is reserved for end-of-input; call eoi()" % eoi
            )
        self._act(token)

    def eoi(self) -> None:
        """Signal end-of-input to the parser."""
        self._act(eoi)

        assert self._accepted
        if self.verbose:
            self._printStack()
            print("   --> accept")

    def parse(self, tokens: str | Sequence[str]) -> bool:
        """
        Reset, then feed a whole input to the parser: either a sequence of
        tokens or a string of whitespace-separated tokens.  End-of-input is
        signalled automatically.  Returns True on acceptance; ParseError
        is raised otherwise."""
        if isinstance(tokens, str):
            tokens = tokens.split()
        self.reset()
        for token in tokens:
            self.token(token)
        self.eoi()
        return self._accepted

    def _act(self, sym: str) -> None:
        if self._accepted or self._failed:
            raise ParsingError(
                "Parser is finished; call reset() before feeding %r" % sym
            )
        if self.verbose:
            self._printStack()
            print("INPUT: %s" % sym)

        while True:
            top = self._stack[-1]
            action = self._action[top].get(sym)
            if action is None:
                self._failed = True
                self._trace.append(Error(top, sym))
                raise ParseError(top, sym, self._pos)

            if self.verbose:
                print("   --> %r" % action)
            if type(action) is ShiftAction:
                self._stack.append(action.nextState)
                self._trace.append(Shift(sym, action.nextState))
                self._pos += 1
                break
            elif type(action) is AcceptAction:
                self._accepted = True
                self._trace.append(Accept())
                break
            else:
                assert type(action) is ReduceAction
                self._reduce(action.production)

            if self.verbose:
                self._printStack()

    def _printStack(self) -> None:
        print("STACK:", " ".join("%r" % state for state in self._stack))

    def _reduce(self, production: Production) -> None:
        nRhs = len(production.rhs)
        for i in range(nRhs):
            self._stack.pop()

        top = self._stack[-1]
        nextState = self._goto[top].get(production.lhs)
        if nextState is None:
            self._failed = True
            raise MissingGotoError(top, production.lhs)
        self._stack.append(nextState)
        self._trace.append(
            Reduce(production.index, production.lhs, production.rhs, nextState)
        )
