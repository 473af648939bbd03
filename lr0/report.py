"""
Human-readable rendering of a Spec (productions, item sets, ACTION and
GOTO tables) and of a parse trace.  All functions return lists of lines.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, List, Sequence

from lr0.grammar import Grammar
from lr0.trace import Event, Shift, Reduce, Accept, Error

if TYPE_CHECKING:
    from lr0.automaton import Spec

# Rendering of an empty table cell.
blank = "."


def format_productions(grammar: Grammar) -> List[str]:
    lines = ["Grammar productions:"]
    for prod in grammar.productions:
        lines.append("  %d: %r" % (prod.index, prod))
    return lines


def format_states(spec: Spec) -> List[str]:
    states = spec.states
    lines = ["States (%d):" % len(states)]
    for i, itemSet in enumerate(states):
        lines.append("I%d:" % i)
        for item in itemSet:
            lines.append("  %r" % item)
        lines.append("")
    return lines


def format_action_table(spec: Spec) -> List[str]:
    tokens = sorted(spec.grammar().terminals)
    lines = ["ACTION table (terminals):"]
    lines.append("\t".join(["state"] + tokens))
    for i, state in enumerate(spec.actions()):
        row = ["%d" % i]
        for token in tokens:
            action = state.get(token)
            row.append(blank if action is None else action.code)
        lines.append("\t".join(row))
    return lines


def format_goto_table(spec: Spec) -> List[str]:
    nonterms = sorted(spec.grammar().nonterminals)
    lines = ["GOTO table (nonterminals):"]
    lines.append("\t".join(["state"] + nonterms))
    for i, gstate in enumerate(spec.goto()):
        row = ["%d" % i]
        for nonterm in nonterms:
            target = gstate.get(nonterm)
            row.append(blank if target is None else "%d" % target)
        lines.append("\t".join(row))
    return lines


def format_spec(spec: Spec) -> List[str]:
    lines = format_productions(spec.grammar())
    lines.append("")
    lines += format_states(spec)
    lines += format_action_table(spec)
    lines.append("")
    lines += format_goto_table(spec)
    return lines


def format_event(event: Event) -> List[str]:
    if isinstance(event, Shift):
        return ["shift '%s' -> state %d" % (event.token, event.nextState)]
    elif isinstance(event, Reduce):
        rhs = " ".join(event.rhs) if event.rhs else "eps"
        return [
            "reduce by %d: %s -> %s" % (event.production, event.lhs, rhs),
            "goto state %d" % event.nextState,
        ]
    elif isinstance(event, Accept):
        return ["Input accepted (ACCEPT)"]
    elif isinstance(event, Error):
        return [
            "Parse error at token '%s' (state %d)" % (event.token, event.state)
        ]
    else:
        raise TypeError("Unknown trace event: %r" % (event,))


def format_trace(tokens: Sequence[str], trace: Iterable[Event]) -> List[str]:
    lines = ["Parsing input: %s" % " ".join(list(tokens) + ["$"]), ""]
    for event in trace:
        lines += format_event(event)
    return lines
