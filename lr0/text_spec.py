"""
This module contains functionality for extracting a grammar from text in
the production-group format:

    # Comments run to the end of the line.
    E -> E + T | T
    T -> id
    A -> eps

Each line holds one left-hand side, the "->" separator, and one or more
alternatives separated by "|".  An alternative is a whitespace-separated
list of symbols; the symbol "eps" stands for the empty string.  The first
left-hand side is the start symbol.
"""
from __future__ import annotations

import re

from lr0.interfaces import GrammarSource
from lr0.errors import GrammarFormatError

# Epsilon keyword.
epsilon = "eps"

arrow = "->"
comment_re = re.compile(r"#.*$")
symbol_re = re.compile(r"\S+$")


def split_symbols(s: str) -> tuple[str, ...]:
    return tuple(sym for sym in s.split() if sym != epsilon)


class TextGrammarSource(GrammarSource):
    """
    TextGrammarSource reads productions out of a string.  Productions are
    returned in the order they are declared, alternatives left to right.
    """

    def __init__(self, text: str, name: str = "<string>") -> None:
        self.text = text
        self.name = name
        self._cache_productions: list[
            tuple[str, tuple[str, ...]]
        ] | None = None

    def __repr__(self) -> str:
        return "%s(%r)" % (type(self).__name__, self.name)

    def get_productions(self) -> list[tuple[str, tuple[str, ...]]]:
        if self._cache_productions is not None:
            return self._cache_productions
        result = []
        for lineno, raw in enumerate(self.text.splitlines(), 1):
            line = comment_re.sub("", raw).strip()
            if not line:
                continue
            lhs, sep, rest = line.partition(arrow)
            if not sep:
                raise GrammarFormatError(
                    "Invalid production (missing %s): %s" % (arrow, line),
                    raw,
                    lineno,
                )
            lhs = lhs.strip()
            if symbol_re.match(lhs) is None:
                raise GrammarFormatError(
                    "Invalid left-hand side %r: %s" % (lhs, line),
                    raw,
                    lineno,
                )
            for alt in rest.split("|"):
                result.append((lhs, split_symbols(alt)))
        self._cache_productions = result
        return result


class FileGrammarSource(TextGrammarSource):
    """
    FileGrammarSource reads productions from a grammar file.
    """

    def __init__(self, path: str) -> None:
        try:
            with open(path) as f:
                text = f.read()
        except OSError as ex:
            raise GrammarFormatError(
                "Could not open grammar file: %s (%s)" % (path, ex.strerror)
            ) from ex
        super().__init__(text, path)
        self.path = path
