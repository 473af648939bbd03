"""lr0 command line

Usage:
    $ python -m lr0 grammar.txt "id + id"
    $ python -m lr0 grammar.txt id + id --log tables.log -v
    $ python -m lr0 grammar.txt            # display the tables only

Reads the grammar file, prints the productions, the LR(0) item sets and
the ACTION/GOTO tables, then parses the whitespace-separated tokens and
prints the trace.  The exit status is 0 when the input is accepted (or
when no input was given), 1 on any grammar or parse error.
"""

from __future__ import annotations
import argparse
import sys
from typing import Any, List, Optional

from lr0 import report
from lr0.automaton import Spec
from lr0.errors import SpecError, ParsingError, ParseError
from lr0.lrparser import Lr
from lr0.text_spec import FileGrammarSource
from lr0.trace import Error


def _eprint(*args: Any, **kw: Any) -> None:
    print(*args, file=sys.stderr, **kw)


def _build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="lr0",
        description="Build LR(0) parsing tables for a grammar file and "
        "trace a shift-reduce parse of the given tokens.",
    )
    ap.add_argument("grammar", help="grammar file (A -> b c | eps)")
    ap.add_argument(
        "tokens",
        nargs="*",
        help="input tokens; quoted strings are split on whitespace",
    )
    ap.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print progress while generating the tables",
    )
    ap.add_argument(
        "--log", metavar="FILE", help="write the parsing tables to FILE"
    )
    ap.add_argument(
        "--pickle",
        metavar="FILE",
        help="reuse/store the generated tables in FILE",
    )
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_argparser().parse_args(argv)

    try:
        spec = Spec(
            FileGrammarSource(args.grammar),
            pickleFile=args.pickle,
            skinny=False,
            logFile=args.log,
            verbose=args.verbose,
        )
    except SpecError as ex:
        _eprint("Error: %s" % ex)
        return 1

    print("\n".join(report.format_spec(spec)))

    if not args.tokens:
        return 0

    tokens = " ".join(args.tokens).split()
    print()
    print("\n".join(report.format_trace(tokens, [])))

    parser = Lr(spec)
    failure: Optional[ParsingError] = None
    try:
        parser.parse(tokens)
    except ParsingError as ex:
        failure = ex

    for event in parser.trace:
        lines = "\n".join(report.format_event(event))
        if isinstance(event, Error):
            _eprint(lines)
        else:
            print(lines)

    if failure is not None:
        if not isinstance(failure, ParseError):
            _eprint("Error: %s" % failure)
        return 1
    return 0
