# mpcomb/core.py
from __future__ import annotations
from typing import Any, Callable, List, Tuple

from .inputs import Input

# A parser maps an Input to every way it can consume a prefix of it:
#   []                -> no match
#   [(v, rest)]       -> deterministic success
#   [(v1, r1), ...]   -> ambiguous; order is significant
Reply = Tuple[Any, Input]
Parser = Callable[[Input], List[Reply]]


# ---- primitives ----

def result(value: Any) -> Parser:
    """Succeed with `value` without consuming anything (monadic unit)."""
    def _result(inp: Input) -> List[Reply]:
        return [(value, inp)]
    return _result


def _fail(inp: Input) -> List[Reply]:
    return []


def fail() -> Parser:
    """The parser that never matches (monadic zero)."""
    return _fail


def _item(inp: Input) -> List[Reply]:
    if inp.is_empty():
        return []
    return [(inp.first(), inp.rest())]


def item() -> Parser:
    """Consume exactly one element, whatever it is."""
    return _item


# ---- sequencing ----

def bind(parser: Parser, continuation: Callable[[Any], Parser]) -> Parser:
    """Run `parser`, feed each value to `continuation`, run the parser it
    returns on the matching remainder and flatten the replies depth-first.
    """
    def _bind(inp: Input) -> List[Reply]:
        out: List[Reply] = []
        for value, remaining in parser(inp):
            out.extend(continuation(value)(remaining))
        return out
    return _bind


# ---- choice ----

def plus(p1: Parser, p2: Parser, *more: Parser) -> Parser:
    """Non-deterministic choice: every reply of every alternative, left first."""
    parsers = (p1, p2) + more

    def _plus(inp: Input) -> List[Reply]:
        out: List[Reply] = []
        for p in parsers:
            out.extend(p(inp))
        return out
    return _plus


def alt(*parsers: Parser) -> Parser:
    """Deterministic choice: the replies of the first alternative that has any.

    Later alternatives are not invoked once one succeeds.
    """
    def _alt(inp: Input) -> List[Reply]:
        for p in parsers:
            replies = p(inp)
            if replies:
                return replies
        return []
    return _alt


# ---- negation ----

def not_p(parser: Parser) -> Parser:
    """Succeed with True, consuming nothing, exactly when `parser` fails."""
    def _not_p(inp: Input) -> List[Reply]:
        if parser(inp):
            return []
        return [(True, inp)]
    return _not_p
