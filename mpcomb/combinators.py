# mpcomb/combinators.py
"""Repetition and derived combinators.

Everything here is built from `result`, `fail`, `item`, `bind`, `alt` and
`not_p`; nothing adds new behaviour to the algebra. The only exception is
`consuming`, which compares Inputs to drop zero-width replies.
"""

from __future__ import annotations
from typing import Any, Callable, Iterable, List, Optional

from .core import Parser, Reply, alt, bind, fail, item, not_p, result
from .inputs import Input


# ---- repetition ----

def zero_or_more(p: Parser) -> Parser:
    """Greedy repetition, collecting values into a list; never fails.

    `p` must consume input whenever it succeeds. A parser that can
    succeed on zero input makes this recurse forever; wrap it in
    `consuming` if that is possible.
    """
    return alt(
        bind(p, lambda x: bind(zero_or_more(p), lambda xs: result([x] + xs))),
        result([]),
    )


def one_or_more(p: Parser) -> Parser:
    """Like `zero_or_more` but `p` has to match at least once."""
    return bind(p, lambda x: bind(zero_or_more(p), lambda xs: result([x] + xs)))


# ---- sequencing helpers ----

def and_p(*parsers: Parser) -> Parser:
    """Run parsers one after another, keeping the value of the last."""
    if not parsers:
        return result(True)
    head, tail = parsers[0], parsers[1:]
    if not tail:
        return head
    return bind(head, lambda _: and_p(*tail))


def fmap(p: Parser, fn: Callable[[Any], Any]) -> Parser:
    return bind(p, lambda v: result(fn(v)))


def maybe(p: Parser) -> Parser:
    """`p`, or None without consuming anything."""
    return alt(p, result(None))


def between(open_: Parser, p: Parser, close: Parser) -> Parser:
    return bind(open_, lambda _: bind(p, lambda v: bind(close, lambda _c: result(v))))


def sep_by1(p: Parser, sep: Parser) -> Parser:
    return bind(p, lambda x: bind(zero_or_more(and_p(sep, p)), lambda xs: result([x] + xs)))


def sep_by(p: Parser, sep: Parser) -> Parser:
    return alt(sep_by1(p, sep), result([]))


# ---- conditionals ----
# The test parser's consumption is kept on the branch where it succeeded.

def if_p(test: Parser, then: Parser, otherwise: Optional[Parser] = None) -> Parser:
    if otherwise is None:
        otherwise = fail()
    return alt(
        bind(test, lambda _: then),
        bind(not_p(test), lambda _: otherwise),
    )


def when_p(test: Parser, *body: Parser) -> Parser:
    """Run `body` after `test` succeeds; otherwise yield None."""
    return if_p(test, and_p(*body), result(None))


def unless_p(test: Parser, *body: Parser) -> Parser:
    """Run `body` when `test` fails; otherwise yield None after `test`."""
    return if_p(test, result(None), and_p(*body))


# ---- element matching ----

def sat(pred: Callable[[Any], bool]) -> Parser:
    """One element satisfying `pred`."""
    return bind(item(), lambda x: result(x) if pred(x) else fail())


def lit(element: Any) -> Parser:
    """One element equal to `element`."""
    return sat(lambda x: x == element)


def literal(elements: Iterable[Any]) -> Parser:
    """The given elements in order; yields `elements` itself."""
    seq = elements if isinstance(elements, (str, tuple)) else tuple(elements)
    return and_p(*[lit(e) for e in seq], result(seq))


# ---- lookahead ----

def lookahead(p: Parser) -> Parser:
    """True, without consuming, when `p` would match here."""
    return not_p(not_p(p))


def end_of_input() -> Parser:
    return not_p(item())


def consuming(p: Parser) -> Parser:
    """`p` with every reply that consumed nothing removed."""
    def _consuming(inp: Input) -> List[Reply]:
        return [(v, rem) for v, rem in p(inp) if rem != inp]
    return _consuming
