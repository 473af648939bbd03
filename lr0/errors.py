"""
The lr0 package implements the following exception classes:

  * AnyException
  * SpecError
    * GrammarFormatError
    * EmptyGrammarError
  * ParsingError
    * ParseError
    * MissingGotoError
"""

from __future__ import annotations


# ============================================================================
# Begin exceptions.
#
class AnyException(Exception):
    """
    Top-level class for all exceptions thrown within the lr0 package.
    """


class SpecError(AnyException):
    """
    Specification error exception.  SpecError arises when a grammar cannot
    be turned into parsing tables, either because its text is malformed or
    because the productions do not make up a usable grammar.
    """


class GrammarFormatError(SpecError):
    """
    A grammar text line could not be read as a production group.
    """

    def __init__(
        self, message: str, line: str = "", lineno: int | None = None
    ) -> None:
        if lineno is not None:
            message = "line %d: %s" % (lineno, message)
        super().__init__(message)
        self.line = line
        self.lineno = lineno


class EmptyGrammarError(SpecError):
    """
    The grammar has no productions, so no start symbol can be determined.
    """


class ParsingError(AnyException):
    """
    Top level parse-time exception class, from which we derive all
    exceptions that occur while driving the tables over an input.
    """


class ParseError(ParsingError):
    """
    Parser syntax error.  ParseError arises when the ACTION table has no
    entry for the current (state, token) pair, i.e. the input is not in the
    language described by the tables.
    """

    def __init__(self, state: int, token: str, position: int = -1) -> None:
        super().__init__(
            "Parse error at token %r (state %d)" % (token, state)
        )
        self.state = state
        self.token = token
        self.position = position


class MissingGotoError(ParsingError):
    """
    A reduction uncovered a state with no GOTO entry for the reduced
    non-terminal.  The tables and the driver disagree, which cannot happen
    for tables generated by this package unless they were tampered with.
    """

    def __init__(self, state: int, nonterm: str) -> None:
        super().__init__(
            "No GOTO for state %d and nonterminal %s" % (state, nonterm)
        )
        self.state = state
        self.nonterm = nonterm


#
# End exceptions.
# ============================================================================
