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
The lr0 package implements an LR(0) parser generator, as well as a
shift-reduce driver that runs the generated tables over a token sequence
and records every move it makes.

Grammars are plain text, one production group per line:

    # Expressions.
    E -> E + T | T
    T -> id

The first left-hand side is the start symbol and "eps" denotes the empty
right-hand side.  The grammar is augmented with a production E' -> E,
which always has index 0.

Parser specifications are encapsulated by the Spec class, which computes
the canonical collection of LR(0) item sets and the ACTION/GOTO tables.
Parser instances use Spec instances, but are themselves based on a
separate class, so that several parsers can share one set of tables:

    spec = lr0.Spec(text)
    parser = lr0.Lr(spec)
    parser.parse("id + id")
    parser.trace  # [Shift('id', 3), Reduce(3, 'T', ('id',), 2), ...]

LR(0) tables place reduce actions under every terminal, so grammars that
are not LR(0) produce colliding actions.  These are resolved by a
ConflictPolicy; the default NaivePolicy prefers shift over reduce and the
lower-numbered production between two reduces.  The grammar is never
rejected for being non-LR(0).

Table generation results can be cached on disk by passing pickleFile to
Spec; a cached Spec is reused only if its productions and policy match.
"""

from __future__ import annotations


__all__ = (
    "Accept",
    "AcceptAction",
    "ConflictPolicy",
    "EmptyGrammarError",
    "Error",
    "FileGrammarSource",
    "Grammar",
    "GrammarFormatError",
    "GrammarSource",
    "Item",
    "ItemSet",
    "Lr",
    "MissingGotoError",
    "NaivePolicy",
    "ParseError",
    "Parser",
    "ParsingError",
    "Production",
    "Reduce",
    "ReduceAction",
    "Shift",
    "ShiftAction",
    "Spec",
    "SpecError",
    "TextGrammarSource",
    "__version__",
)

from lr0._version import __version__
from lr0.automaton import Spec, ItemSet, ConflictPolicy, NaivePolicy
from lr0.errors import (
    SpecError,
    GrammarFormatError,
    EmptyGrammarError,
    ParsingError,
    ParseError,
    MissingGotoError,
)
from lr0.grammar import (
    Grammar,
    Production,
    Item,
    ShiftAction,
    ReduceAction,
    AcceptAction,
)
from lr0.interfaces import Parser, GrammarSource
from lr0.text_spec import TextGrammarSource, FileGrammarSource
from lr0.lrparser import Lr
from lr0.trace import Shift, Reduce, Accept, Error
