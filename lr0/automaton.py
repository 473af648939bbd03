"""
The classes in this module are used to compute the LR(0) automaton (the
canonical collection of item sets) and the ACTION/GOTO tables derived
from it.
"""
from __future__ import annotations
from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Tuple,
)

import pickle
import sys
import time

from mypy_extensions import mypyc_attr

from lr0.errors import SpecError
from lr0 import interfaces
from lr0 import report
from lr0.grammar import (
    Grammar,
    Item,
    eoi,
    Action,
    ShiftAction,
    ReduceAction,
    AcceptAction,
)
from lr0.text_spec import TextGrammarSource

if TYPE_CHECKING:
    from typing_extensions import Literal
    from lr0.grammar import ActionState, GotoState
    from lr0.interfaces import GrammarSource

    SpecCompatibility = Literal["compatible", "incompatible", "repickle"]

    PickleMode = Literal["r", "w", "rw"]


class ItemSet:
    """
    A closure-complete set of LR(0) items.  The items are kept in canonical
    order (production index, then dot position), and two ItemSets are
    equal whenever they hold the same items, no matter how they were
    built.  This is what keeps the automaton finite.
    """

    def __init__(self, grammar: Grammar, items: Iterable[Item]) -> None:
        self._grammar = grammar
        self._items: Tuple[Item, ...] = tuple(sorted(set(items)))
        self._symMap: Dict[str, List[Item]] = {}
        for item in self._items:
            sym = item.symbol
            if sym is not None:
                self._symMap.setdefault(sym, []).append(item)
        self._hash = hash(self._items)

    @classmethod
    def closure(cls, grammar: Grammar, items: Iterable[Item]) -> ItemSet:
        """
        Compute the closure of items: for every item with a non-terminal A
        right after the dot, add [A -> * gamma] for all of A's productions,
        until nothing more can be added.
        """
        worklist = list(items)
        seen = set(worklist)
        i = 0
        while i < len(worklist):
            sym = worklist[i].symbol
            if sym is not None and grammar.isNonterminal(sym):
                for prod in grammar.productionsFor(sym):
                    tItem = prod.item(0)
                    if tItem not in seen:
                        seen.add(tItem)
                        worklist.append(tItem)
            i += 1
        return cls(grammar, seen)

    def __repr__(self) -> str:
        return "ItemSet(%s)" % ", ".join(repr(i) for i in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: Any) -> bool:
        if type(other) is ItemSet:
            return self._items == other._items
        else:
            return NotImplemented

    def __iter__(self) -> Iterator[Item]:
        return iter(self._items)

    @property
    def key(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(item.key for item in self._items)

    def symbols(self) -> List[str]:
        """Distinct symbols found right after a dot, sorted by name."""
        return sorted(self._symMap)

    # Calculate the goto set, given a particular symbol.  An empty ItemSet
    # means that there is no transition on sym.
    def gotoState(self, sym: str) -> ItemSet:
        items = self._symMap.get(sym)
        if items:
            return ItemSet.closure(
                self._grammar, [i.advance() for i in items]
            )
        else:
            return ItemSet(self._grammar, ())


class Collision(NamedTuple):
    state: int
    sym: str
    old: Action
    new: Action
    resolution: Action


@mypyc_attr(allow_interpreted_subclasses=True)
class ConflictPolicy:
    """
    Decides what a table cell ends up holding when a second, different
    action is proposed for it.  Subclasses override resolve(); the table
    builder calls it uniformly for every collision.
    """

    def resolve(self, oldAct: Action, newAct: Action) -> Action:
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class NaivePolicy(ConflictPolicy):
    """
    The LR(0) tie-break:

      * accept is never displaced;
      * shift beats reduce, whichever came first;
      * between two reduces, the production with the smaller index wins.

    This silently resolves conflicts that make a grammar non-LR(0); it does
    not reject such grammars.
    """

    def resolve(self, oldAct: Action, newAct: Action) -> Action:
        if type(oldAct) is AcceptAction:
            return oldAct
        elif type(newAct) is AcceptAction:
            return newAct
        elif type(oldAct) is ShiftAction:
            # Two shifts on one symbol share a goto target.
            assert type(newAct) is not ShiftAction or oldAct == newAct
            return oldAct
        elif type(newAct) is ShiftAction:
            return newAct

        assert type(oldAct) is ReduceAction
        assert type(newAct) is ReduceAction
        if newAct.production.index < oldAct.production.index:
            return newAct
        return oldAct


class Spec(interfaces.Spec):
    """
    The Spec class contains the read-only data structures that the Parser
    class needs in order to parse input.  Parser generation results in a
    Spec instance, which can then be shared by multiple Parser instances."""

    def grammar(self) -> Grammar:
        return self._grammar

    def actions(self) -> list[ActionState]:
        return self._action

    def goto(self) -> list[GotoState]:
        return self._goto

    def start_sym(self) -> str:
        return self._grammar.userStartSym

    @property
    def conflicts(self) -> int:
        return self._nConflicts

    @property
    def collisions(self) -> list[Collision]:
        return self._collisions

    @property
    def states(self) -> list[ItemSet]:
        if self._skinny:
            raise SpecError("Item sets are not kept by a skinny Spec")
        return self._itemSets

    def __init__(
        self,
        source: Grammar | GrammarSource | str,
        policy: Optional[ConflictPolicy] = None,
        pickleFile: Optional[str] = None,
        pickleMode: PickleMode = "rw",
        skinny: bool = True,
        logFile: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        """
        source : A Grammar, a GrammarSource, or grammar text.

        policy : The ConflictPolicy used when two different actions are
                 proposed for the same table cell (NaivePolicy by default).

        pickleFile : The path of a file to use for Spec pickling/unpickling.

        pickleMode :  "r" : Unpickle from pickleFile.
                      "w" : Pickle to pickleFile.
                      "rw" : Unpickle/pickle from/to pickleFile.

        skinny : If true, discard all data that are only strictly necessary
                 while constructing the parsing tables (the item sets).
                 This reduces available debugging context, but
                 substantially reduces pickle size.

        logFile : The path of a file to store a human-readable copy of the
                  parsing tables in.

        verbose : If true, print progress information while generating the
                  parsing tables."""
        self._skinny = skinny
        self._verbose = verbose
        self._policy = policy if policy is not None else NaivePolicy()

        if isinstance(source, Grammar):
            self._grammar = source
        else:
            if isinstance(source, str):
                source = TextGrammarSource(source)
            if self._verbose:
                print("lr0.Spec: Reading grammar from %r..." % source)
            self._grammar = Grammar(
                source.get_productions(), source.get_start()
            )

        # Everything below this point is computed from the grammar.

        # Each element corresponds to an element in _action.
        self._itemSets: list[ItemSet] = []
        self._itemSetsHash: dict[ItemSet, int] = {}
        self._transitions: list[dict[str, int]] = []
        # LR parsing tables.  The tables conceptually contain one state per
        # row, where each row contains one element per symbol.  Each row is
        # actually a dictionary.  If no entry for a symbol exists for a
        # particular state, then input of that symbol is an error for that
        # state.
        self._action: list[ActionState] = []
        self._goto: list[GotoState] = []
        self._nActions = 0
        self._nConflicts = 0
        self._collisions: list[Collision] = []

        # Generate parse tables.
        self._prepare(pickleFile, pickleMode, logFile)

    def __repr__(self) -> str:
        nstates = len(self._action)
        if self._skinny:
            # Print a very reduced summary, since most info has been discarded.
            return "lr0.Spec: %d state%s, %d action%s (%d collision%s)" % (
                nstates,
                ("s", "")[nstates == 1],
                self._nActions,
                ("s", "")[self._nActions == 1],
                self._nConflicts,
                ("s", "")[self._nConflicts == 1],
            )

        return "\n".join(report.format_spec(self))

    def _prepare(
        self,
        pickleFile: Optional[str],
        pickleMode: PickleMode,
        logFile: Optional[str],
    ) -> None:
        """
        Compile the grammar into data structures that can be used by the
        Parser class for parsing."""
        # Check for a compatible pickle.
        compat = self._unpickle(pickleFile, pickleMode)

        if compat == "incompatible":
            start = time.monotonic()

            # Create the collection of sets of LR(0) items.
            self._items()

            # Generate LR(0) parsing tables.
            self._lr()

            if self._verbose:
                print(
                    "lr0.Spec: LR(0) parser generation took "
                    f"{(time.monotonic() - start) * 1000:.1f} milliseconds"
                )

            # Report unused definitions, and write the log.
            self._validate(logFile)

            # Pickle the spec, if method parameters so dictate.  This also
            # discards data that are not needed during parsing.
            self._pickle(pickleFile, pickleMode)
        else:
            self._validate(logFile)
            if compat == "repickle":
                self._pickle(pickleFile, pickleMode)

    # Look up a state by content.  Returns -1 if no equal state exists.
    def findStateIndex(self, itemSet: ItemSet) -> int:
        return self._itemSetsHash.get(itemSet, -1)

    # Compute the canonical collection of sets of LR(0) items.
    def _items(self) -> None:
        # Add closure({[S' ::= * S]}) to _itemSets.
        tItem = self._grammar.startProduction.item(0)
        tItemSet = ItemSet.closure(self._grammar, (tItem,))
        self._itemSets = [tItemSet]
        self._itemSetsHash = {tItemSet: 0}
        self._transitions = []

        if self._verbose:
            print(
                "lr0.Spec: Generating LR(0) itemset collection... ",
                end=" ",
            )
            sys.stdout.write("+")
            sys.stdout.flush()

        # States are visited in index order, including the ones appended
        # along the way, so a single sweep reaches the fixpoint.
        i = 0
        while i < len(self._itemSets):
            itemSet = self._itemSets[i]
            edges: dict[str, int] = {}
            for sym in itemSet.symbols():
                gotoSet = itemSet.gotoState(sym)
                if len(gotoSet) == 0:
                    continue
                j = self.findStateIndex(gotoSet)
                if j < 0:
                    j = len(self._itemSets)
                    self._itemSetsHash[gotoSet] = j
                    self._itemSets.append(gotoSet)
                    if self._verbose:
                        sys.stdout.write("+")
                        sys.stdout.flush()
                edges[sym] = j
            self._transitions.append(edges)
            i += 1

        if self._verbose:
            sys.stdout.write("\n")
            sys.stdout.flush()

    # Compute LR parsing tables.
    def _lr(self) -> None:
        # The collection of sets of LR(0) items already exists.
        assert len(self._itemSets) > 0
        assert len(self._action) == 0
        assert len(self._goto) == 0
        assert self._nConflicts == 0

        if self._verbose:
            print(
                "lr0.Spec: Generating LR(0) parsing tables (%d state%s)... "
                % (len(self._itemSets), ("s", "")[len(self._itemSets) == 1]),
                end=" ",
            )
            sys.stdout.flush()

        grammar = self._grammar
        for stateInd, itemSet in enumerate(self._itemSets):
            if self._verbose:
                sys.stdout.write(".")
                sys.stdout.flush()
            state: ActionState = {}
            gstate: GotoState = {}
            self._action.append(state)
            self._goto.append(gstate)
            edges = self._transitions[stateInd]
            for item in itemSet:
                sym = grammar.symbolAfterDot(item)
                # X ::= a*Ab
                if sym is not None:
                    j = edges[sym]
                    if grammar.isTerminal(sym):
                        self._actionPropose(
                            stateInd, state, sym, ShiftAction(j)
                        )
                    else:
                        gstate[sym] = j
                # S' ::= S*
                elif item.production.index == 0:
                    self._actionPropose(stateInd, state, eoi, AcceptAction())
                # X ::= a*
                else:
                    action = ReduceAction(item.production)
                    for token in grammar.terminals:
                        self._actionPropose(stateInd, state, token, action)
            self._nActions += len(state)

        if self._verbose:
            sys.stdout.write("\n")
            if self._nConflicts > 0:
                print(
                    "lr0.Spec: Resolved %d collision%s with %s"
                    % (
                        self._nConflicts,
                        ("s", "")[self._nConflicts == 1],
                        type(self._policy).__name__,
                    )
                )
            sys.stdout.flush()

    # Propose an action for state[sym], deferring to the policy if the cell
    # already holds a different one.
    def _actionPropose(
        self,
        stateInd: int,
        state: ActionState,
        sym: str,
        action: Action,
    ) -> None:
        oldAct = state.get(sym)
        if oldAct is None:
            state[sym] = action
        elif oldAct != action:
            resolution = self._policy.resolve(oldAct, action)
            self._nConflicts += 1
            self._collisions.append(
                Collision(stateInd, sym, oldAct, action, resolution)
            )
            state[sym] = resolution

    def _validate(self, logFile: Optional[str]) -> None:
        if self._verbose:
            print("lr0.Spec: Validating grammar...")

        lines = []
        grammar = self._grammar

        # Productions that never show up in an item set cannot take part in
        # a parse; neither can the symbols only they mention.
        used: Dict[str, None] = {}
        productions = set()
        for itemSet in self._itemSets:
            for item in itemSet:
                productions.add(item.production.index)
                used[item.production.lhs] = None
                for sym in item.production.rhs:
                    used[sym] = None

        nUnused = 0
        if self._itemSets:
            for prod in grammar.productions:
                if prod.index not in productions:
                    nUnused += 1
                    lines.append(
                        "lr0.Spec: Unused production: %d: %r"
                        % (prod.index, prod)
                    )
            for nonterm in grammar.nonterminals:
                if nonterm not in used:
                    nUnused += 1
                    lines.append("lr0.Spec: Unused nonterm: %s" % nonterm)
            for token in grammar.terminals:
                if token != eoi and token not in used:
                    nUnused += 1
                    lines.append("lr0.Spec: Unused token: %s" % token)

        if nUnused > 0:
            lines.insert(
                0,
                "lr0.Spec: %d unused definition%s"
                % (nUnused, ("s", "")[nUnused == 1]),
            )

        # Write to logFile, if one was specified.
        if logFile is not None:
            with open(logFile, "w+") as f:
                if self._verbose:
                    print("lr0.Spec: Writing log to '%s'..." % logFile)
                f.write("%s\n" % "\n".join(lines + ["%r" % self]))

        if self._verbose:
            ntokens = len(grammar.terminals) - 1
            nnonterms = len(grammar.nonterminals) - 1
            nproductions = len(grammar.productions) - 1
            lines.append(
                "lr0.Spec: %d token%s, %d non-terminal%s, %d production%s"
                % (
                    ntokens,
                    ("s", "")[ntokens == 1],
                    nnonterms,
                    ("s", "")[nnonterms == 1],
                    nproductions,
                    ("s", "")[nproductions == 1],
                )
            )
            sys.stdout.write("%s\n" % "\n".join(lines))

    # Store state to a pickle file, if requested.
    def _pickle(self, file: Optional[str], mode: PickleMode) -> None:
        if self._skinny:
            # Discard data that don't need to be pickled.
            self._itemSets = []
            self._itemSetsHash = {}
            self._transitions = []

        if file is not None and "w" in mode:
            if self._verbose:
                print(
                    "lr0.Spec: Creating %s Spec pickle in %s..."
                    % (("fat", "skinny")[self._skinny], file)
                )

            with open(file, "wb") as f:
                pickle.dump(self, f, protocol=pickle.HIGHEST_PROTOCOL)

    # Restore state from a pickle file, if a compatible one is provided.  This
    # method uses the same set of return values as does _compatible().
    def _unpickle(
        self, file: Optional[str], mode: PickleMode
    ) -> SpecCompatibility:
        if file is not None and "r" in mode:
            if self._verbose:
                print(
                    "lr0.Spec: Attempting to use pickle from "
                    'file "%s"...' % file
                )
            try:
                with open(file, "rb") as f:
                    # Any exception at all in unpickling can be assumed to be
                    # due to an incompatible pickle.
                    try:
                        spec = pickle.load(f)
                    except Exception:
                        if self._verbose:
                            error = sys.exc_info()
                            print(
                                "lr0.Spec: Pickle load failed: "
                                "Exception %s: %s" % (error[0], error[1])
                            )
                        return "incompatible"
            except OSError:
                if self._verbose:
                    error = sys.exc_info()
                    print(
                        "lr0.Spec: Pickle open failed: "
                        "Exception %s: %s" % (error[0], error[1])
                    )
                return "incompatible"

            if not isinstance(spec, Spec):
                return "incompatible"

            compat = self._compatible(spec)
            if compat == "incompatible":
                if self._verbose:
                    print(
                        'lr0.Spec: Pickle in "%s" is incompatible.' % file
                    )
                return compat

            if self._verbose:
                print(
                    'lr0.Spec: Using %s pickle in "%s" (%s)...'
                    % (("fat", "skinny")[spec._skinny], file, compat)
                )

            # Copy spec's data structures.
            self._grammar = spec._grammar
            self._action = spec._action
            self._goto = spec._goto
            self._nActions = spec._nActions
            self._nConflicts = spec._nConflicts
            self._collisions = spec._collisions
            if not self._skinny:
                self._itemSets = spec._itemSets
                self._itemSetsHash = spec._itemSetsHash
                self._transitions = spec._transitions

            return compat
        else:
            return "incompatible"

    # Determine whether other is compatible with self.  Note that self is not
    # completely initialized; the idea here is to determine whether other's
    # data structures can be copied *before* doing the work of building
    # parsing tables.
    #
    #   "compatible" : Completely compatible.
    #
    #   "repickle" : Compatible, but pickle needs to be regenerated.
    #
    #   "incompatible" : No useful compatibility.
    def _compatible(self, other: Spec) -> SpecCompatibility:
        ret: SpecCompatibility = "compatible"

        if (not self._skinny) and other._skinny:
            return "incompatible"
        elif self._skinny != other._skinny:
            ret = "repickle"

        if self._policy != other._policy:
            if self._verbose:
                print(
                    "lr0.Spec: Conflict policy changed (%s vs %s)"
                    % (
                        type(self._policy).__name__,
                        type(other._policy).__name__,
                    )
                )
            return "incompatible"

        if self._grammar != other._grammar:
            if self._verbose:
                print("lr0.Spec: Productions changed")
            return "incompatible"

        return ret
