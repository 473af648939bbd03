# ============================================================================
# Copyright (c) 2007 Jason Evans <jasone@canonware.com>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
# ============================================================================
"""
This module contains the classes that make up a grammar: productions, the
dotted items built from them, and the actions stored in the parsing tables.

Symbols are plain strings.  A symbol is a non-terminal if it appears as the
left-hand side of some production, and a terminal otherwise.  The terminal
"$" is reserved for end-of-input.
"""

from __future__ import annotations
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from mypy_extensions import mypyc_attr

from lr0.errors import SpecError, EmptyGrammarError


# <$>.
eoi = "$"


class Production:
    """
    A production lhs -> rhs, identified by its index in the (augmented)
    grammar.  Productions never change once a Grammar has been built.
    """

    def __init__(self, index: int, lhs: str, rhs: Sequence[str]) -> None:
        self.index = index
        self.lhs = lhs
        self.rhs: Tuple[str, ...] = tuple(rhs)
        self._items = [Item(self, i) for i in range(len(self.rhs) + 1)]

    def __hash__(self) -> int:
        return hash((self.index, self.lhs, self.rhs))

    def __eq__(self, other: Any) -> bool:
        if type(other) is Production:
            return (self.index, self.lhs, self.rhs) == (
                other.index,
                other.lhs,
                other.rhs,
            )
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if type(other) is Production:
            return self.index < other.index
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return "%s -> %s" % (self.lhs, self.rhsText())

    def rhsText(self) -> str:
        if len(self.rhs) == 0:
            return "eps"
        return " ".join(self.rhs)

    def item(self, dotPos: int) -> Item:
        return self._items[dotPos]


class Item:
    """
    An LR(0) item: a production with a dot somewhere in its right-hand
    side.  Items are ordered by production index, then by dot position,
    which is the canonical order of items within a state.
    """

    def __init__(self, production: Production, dotPos: int) -> None:
        assert 0 <= dotPos <= len(production.rhs)
        self.production = production
        self.dotPos = dotPos

    @property
    def key(self) -> Tuple[int, int]:
        return (self.production.index, self.dotPos)

    @property
    def symbol(self) -> Optional[str]:
        """The symbol right after the dot, or None for a complete item."""
        if self.dotPos < len(self.production.rhs):
            return self.production.rhs[self.dotPos]
        return None

    @property
    def complete(self) -> bool:
        return self.dotPos == len(self.production.rhs)

    def advance(self) -> Item:
        return self.production.item(self.dotPos + 1)

    def __hash__(self) -> int:
        return hash(self.key)

    def __eq__(self, other: Any) -> bool:
        if type(other) is Item:
            return self.key == other.key
        else:
            return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if type(other) is Item:
            return self.key < other.key
        else:
            return NotImplemented

    def __repr__(self) -> str:
        return "[%d] %s" % (self.production.index, self.lr0__repr__())

    def lr0__repr__(self) -> str:
        strs = ["%s ->" % self.production.lhs]
        for i, sym in enumerate(self.production.rhs):
            if i == self.dotPos:
                strs.append(".")
            strs.append(sym)
        if self.complete:
            strs.append(".")
        return " ".join(strs)


class Grammar:
    """
    The augmented grammar.  Given productions in declaration order and an
    optional start symbol (the first left-hand side by default), Grammar
    classifies symbols and prepends the synthetic start production

        S' -> S

    which always has index 0.  The name S' is derived from the start symbol
    by appending quotes until it no longer clashes with a grammar symbol.
    """

    def __init__(
        self,
        productions: Iterable[Union[Production, Tuple[str, Sequence[str]]]],
        start: Optional[str] = None,
    ) -> None:
        pairs: List[Tuple[str, Tuple[str, ...]]] = []
        for prod in productions:
            if isinstance(prod, Production):
                pairs.append((prod.lhs, prod.rhs))
            else:
                lhs, rhs = prod
                pairs.append((lhs, tuple(rhs)))
        if len(pairs) == 0:
            raise EmptyGrammarError("Grammar has no productions")

        nonterms: Dict[str, None] = {}
        for lhs, rhs in pairs:
            if lhs == eoi or eoi in rhs:
                raise SpecError(
                    "Reserved symbol %r used in production: %s -> %s"
                    % (eoi, lhs, " ".join(rhs))
                )
            nonterms.setdefault(lhs)
        tokens: Dict[str, None] = {}
        for lhs, rhs in pairs:
            for sym in rhs:
                if sym not in nonterms:
                    tokens.setdefault(sym)
        tokens.setdefault(eoi)

        if start is None:
            start = pairs[0][0]
        elif start not in nonterms:
            raise SpecError("Start symbol is not a non-terminal: %s" % start)
        self.userStartSym = start

        startSym = start + "'"
        while startSym in nonterms or startSym in tokens:
            startSym += "'"
        self.startSym = startSym

        self.nonterminals: Tuple[str, ...] = (startSym,) + tuple(nonterms)
        self.terminals: Tuple[str, ...] = tuple(tokens)
        self._nontermSet = frozenset(self.nonterminals)
        self._termSet = frozenset(self.terminals)

        # Augment grammar with a special start production.
        self.productions: List[Production] = [Production(0, startSym, [start])]
        for lhs, rhs in pairs:
            self.productions.append(
                Production(len(self.productions), lhs, rhs)
            )

        self._byLhs: Dict[str, List[Production]] = {
            sym: [] for sym in self.nonterminals
        }
        for prod in self.productions:
            self._byLhs[prod.lhs].append(prod)

    def __repr__(self) -> str:
        return "\n".join(
            "%d: %r" % (prod.index, prod) for prod in self.productions
        )

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Grammar):
            return self.signature() == other.signature()
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.signature())

    def signature(self) -> Tuple[Tuple[str, Tuple[str, ...]], ...]:
        return tuple((prod.lhs, prod.rhs) for prod in self.productions)

    @property
    def startProduction(self) -> Production:
        return self.productions[0]

    def isTerminal(self, sym: str) -> bool:
        return sym in self._termSet

    def isNonterminal(self, sym: str) -> bool:
        return sym in self._nontermSet

    def productionsFor(self, nonterm: str) -> List[Production]:
        return self._byLhs.get(nonterm, [])

    def symbolAfterDot(self, item: Item) -> Optional[str]:
        return item.symbol


@mypyc_attr(serializable=True, allow_interpreted_subclasses=True)
class Action:
    """
    Abstract base class, subclassed by {Shift,Reduce,Accept}Action."""

    def __init__(self) -> None:
        pass

    @property
    def code(self) -> str:
        raise NotImplementedError


class ShiftAction(Action):
    """
    Shift action, with assocated nextState."""

    def __init__(self, nextState: int) -> None:
        super().__init__()
        self.nextState = nextState

    @property
    def code(self) -> str:
        return "s%d" % self.nextState

    def __repr__(self) -> str:
        return "[shift %r]" % self.nextState

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ShiftAction):
            return False
        if self.nextState != other.nextState:
            return False
        return True

    def __hash__(self) -> int:
        return hash(("s", self.nextState))


class ReduceAction(Action):
    """
    Reduce action, with associated production."""

    def __init__(self, production: Production) -> None:
        super().__init__()
        self.production = production

    @property
    def code(self) -> str:
        return "r%d" % self.production.index

    def __repr__(self) -> str:
        return "[reduce %r]" % self.production

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ReduceAction):
            return False
        if self.production != other.production:
            return False
        return True

    def __hash__(self) -> int:
        return hash(("r", self.production.index))


class AcceptAction(Action):
    """
    Accept action, found only under <$> in states containing the complete
    start item."""

    @property
    def code(self) -> str:
        return "acc"

    def __repr__(self) -> str:
        return "[accept]"

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, AcceptAction)

    def __hash__(self) -> int:
        return hash("acc")


ActionState = Dict[str, Action]
GotoState = Dict[str, int]
