# mpcomb/debug.py
from __future__ import annotations
import sys
from typing import List, Optional, TextIO

from .core import Parser, Reply
from .inputs import Input


def _eprint(*args, out: Optional[TextIO] = None, **kw) -> None:
    print(*args, file=out if out is not None else sys.stderr, **kw)


def describe(replies: List[Reply]) -> str:
    n = len(replies)
    return f"{n} result" if n == 1 else f"{n} results"


def traced(parser: Parser, name: str, *, out: Optional[TextIO] = None) -> Parser:
    """`parser`, reporting every invocation on stderr (or `out`).

        [DEBUG] number @ '12+3' -> 1 result
    """
    def _traced(inp: Input) -> List[Reply]:
        replies = parser(inp)
        _eprint(f"[DEBUG] {name} @ {inp.preview()} -> {describe(replies)}", out=out)
        return replies
    return _traced
