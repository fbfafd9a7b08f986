# mpcomb/errors.py
"""Exceptions raised by mpcomb.

A parser never raises to say "no match": it returns an empty list.
Everything here is either a broken contract (reading past the end of an
Input) or a failure reported at the runner boundary.
"""

from __future__ import annotations
from typing import Any, List


class EmptyInputError(IndexError):
    """`first`/`rest` called on an exhausted Input."""


class ParseError(SyntaxError):
    """Base class for failures reported by `ParserRunner`."""


class NoParseError(ParseError):
    def __init__(self, preview: str):
        super().__init__(f"no parse for input {preview}")
        self.preview = preview


class AmbiguousParseError(ParseError):
    def __init__(self, preview: str, values: List[Any]):
        super().__init__(
            f"ambiguous parse for input {preview}: {len(values)} results"
        )
        self.preview = preview
        self.values = values

    @property
    def count(self) -> int:
        return len(self.values)


class ParseDepthError(RuntimeError):
    """Recursion exhausted while parsing (see `RunOptions.recursion_limit`)."""


class UnusedBindingWarning(UserWarning):
    """A `Do` binding whose value is never read by a later step or the body."""
