# mpcomb/runtime.py
from __future__ import annotations
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, TextIO

from .core import Parser, Reply
from .debug import _eprint, describe
from .errors import AmbiguousParseError, NoParseError, ParseDepthError
from .inputs import to_input


@dataclass(frozen=True)
class RunOptions:
    """How a `ParserRunner` executes its parser.

    recursion_limit : raise the interpreter recursion limit to at least this
        value for the duration of a run. Combinators recurse once per
        consumed element (and more for nested grammars), so long inputs
        need headroom. A RecursionError is reported as ParseDepthError.
    debug : print a one-line summary of every run on stderr.
    out : where debug lines go instead of stderr.
    """
    recursion_limit: Optional[int] = None
    debug: bool = False
    out: Optional[TextIO] = None


@contextmanager
def _recursion_headroom(limit: Optional[int]) -> Iterator[None]:
    old = sys.getrecursionlimit()
    if limit is not None and limit > old:
        sys.setrecursionlimit(limit)
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


class ParserRunner:
    """Execute a parser on inputs given as Input values or plain sources
    (str, list, tuple, iterator)."""

    def __init__(self, parser: Parser, options: Optional[RunOptions] = None):
        self.parser = parser
        self.options = options or RunOptions()

    def run(self, source: Any) -> List[Reply]:
        inp = to_input(source)
        try:
            with _recursion_headroom(self.options.recursion_limit):
                replies = self.parser(inp)
        except RecursionError as e:
            raise ParseDepthError(
                f"recursion exhausted while parsing {inp.preview()}"
                " (zero-width repetition, or input too long for the recursion limit)"
            ) from e
        if self.options.debug:
            complete = sum(1 for _, rem in replies if rem.is_empty())
            _eprint(f"[DEBUG] run @ {inp.preview()} -> {describe(replies)}, {complete} complete",
                    out=self.options.out)
        return replies

    def values(self, source: Any, *, complete: bool = True) -> List[Any]:
        """Values of every parse; with `complete`, only those that used up the input."""
        return [v for v, rem in self.run(source) if not complete or rem.is_empty()]

    def one(self, source: Any, *, complete: bool = True) -> Any:
        inp = to_input(source)
        vals = self.values(inp, complete=complete)
        if not vals:
            raise NoParseError(inp.preview())
        if len(vals) > 1:
            raise AmbiguousParseError(inp.preview(), vals)
        return vals[0]


def parse(parser: Parser, source: Any, options: Optional[RunOptions] = None) -> List[Reply]:
    return ParserRunner(parser, options).run(source)


def parse_all(parser: Parser, source: Any, options: Optional[RunOptions] = None) -> List[Any]:
    return ParserRunner(parser, options).values(source)


def parse_one(parser: Parser, source: Any, options: Optional[RunOptions] = None,
              *, complete: bool = True) -> Any:
    return ParserRunner(parser, options).one(source, complete=complete)
