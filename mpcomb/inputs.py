# mpcomb/inputs.py
"""Input protocol and the stock input adapters.

Combinators only ever talk to an Input through three operations:

- `is_empty()`  -> bool
- `first()`     -> the next element (EmptyInputError when exhausted)
- `rest()`      -> a new Input one element further along

Adapters:
- `TextInput`   character sequences (str), elements are 1-char strings
- `SeqInput`    token lists / any Python sequence, elements are the items
- `StreamInput` lazy view over an iterator; every cell is forced once and
                memoised, so `rest()` on the same cell returns the same object
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Iterator, Tuple

from .errors import EmptyInputError


class Input(ABC):
    """Immutable, sequence-like source of elements."""

    __slots__ = ()

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def first(self) -> Any:
        raise NotImplementedError

    @abstractmethod
    def rest(self) -> "Input":
        raise NotImplementedError

    def preview(self, limit: int = 16) -> str:
        """Short human-readable rendering of the unconsumed elements."""
        parts = []
        cur: Input = self
        while not cur.is_empty() and len(parts) < limit:
            parts.append(repr(cur.first()))
            cur = cur.rest()
        tail = ", ..." if not cur.is_empty() else ""
        return "<" + ", ".join(parts) + tail + ">"


def is_empty(inp: Input) -> bool:
    return inp.is_empty()


def first(inp: Input) -> Any:
    return inp.first()


def rest(inp: Input) -> Input:
    return inp.rest()


# ---- character sequences ----

@dataclass(frozen=True, eq=False)
class TextInput(Input):
    text: str
    pos: int = 0

    def __post_init__(self):
        if not 0 <= self.pos <= len(self.text):
            raise ValueError(f"position {self.pos} outside text of length {len(self.text)}")

    @property
    def remaining(self) -> str:
        return self.text[self.pos:]

    def is_empty(self) -> bool:
        return self.pos >= len(self.text)

    def first(self) -> str:
        if self.is_empty():
            raise EmptyInputError("first() on empty TextInput")
        return self.text[self.pos]

    def rest(self) -> "TextInput":
        if self.is_empty():
            raise EmptyInputError("rest() on empty TextInput")
        return TextInput(self.text, self.pos + 1)

    def advance(self, n: int) -> "TextInput":
        """Skip `n` characters at once (used by `pattern`)."""
        if self.pos + n > len(self.text):
            raise EmptyInputError(f"advance({n}) past end of TextInput")
        return TextInput(self.text, self.pos + n)

    def preview(self, limit: int = 16) -> str:
        s = self.remaining
        return repr(s if len(s) <= limit else s[:limit] + "...")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TextInput):
            return NotImplemented
        return self.remaining == other.remaining

    def __hash__(self) -> int:
        return hash((TextInput, self.remaining))

    def __repr__(self) -> str:
        return f"TextInput({self.remaining!r})"


# ---- token lists / generic sequences ----

@dataclass(frozen=True, eq=False)
class SeqInput(Input):
    items: Tuple[Any, ...]
    pos: int = 0

    def __post_init__(self):
        # freeze lists handed in by callers; a tuple passes through untouched
        object.__setattr__(self, "items", tuple(self.items))
        if not 0 <= self.pos <= len(self.items):
            raise ValueError(f"position {self.pos} outside sequence of length {len(self.items)}")

    @property
    def remaining(self) -> Tuple[Any, ...]:
        return self.items[self.pos:]

    def is_empty(self) -> bool:
        return self.pos >= len(self.items)

    def first(self) -> Any:
        if self.is_empty():
            raise EmptyInputError("first() on empty SeqInput")
        return self.items[self.pos]

    def rest(self) -> "SeqInput":
        if self.is_empty():
            raise EmptyInputError("rest() on empty SeqInput")
        return SeqInput(self.items, self.pos + 1)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeqInput):
            return NotImplemented
        return self.remaining == other.remaining

    def __hash__(self) -> int:
        return hash((SeqInput, self.remaining))

    def __repr__(self) -> str:
        return f"SeqInput({list(self.remaining)!r})"


# ---- streams ----

class StreamInput(Input):
    """Functional stream over an iterator.

    The underlying iterator is advanced at most once per cell; the
    element and the successor cell are cached, which keeps `first` and
    `rest` referentially stable even though the iterator is not.
    Equality is identity.
    """

    __slots__ = ("_it", "_forced", "_empty", "_head", "_tail")

    def __init__(self, iterable: Iterable[Any]):
        self._it: Iterator[Any] = iter(iterable)
        self._forced = False
        self._empty = False
        self._head: Any = None
        self._tail: "StreamInput | None" = None

    def _force(self) -> None:
        if self._forced:
            return
        try:
            self._head = next(self._it)
        except StopIteration:
            self._empty = True
        else:
            self._tail = StreamInput(self._it)
        self._forced = True

    def is_empty(self) -> bool:
        self._force()
        return self._empty

    def first(self) -> Any:
        if self.is_empty():
            raise EmptyInputError("first() on empty StreamInput")
        return self._head

    def rest(self) -> "StreamInput":
        if self.is_empty():
            raise EmptyInputError("rest() on empty StreamInput")
        return self._tail  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"StreamInput({self.preview(8)})"


def to_input(source: Any) -> Input:
    """Coerce `source` into an Input.

    str -> TextInput, other sequences -> SeqInput, any other iterable ->
    StreamInput. An Input is returned unchanged.
    """
    if isinstance(source, Input):
        return source
    if isinstance(source, str):
        return TextInput(source)
    if isinstance(source, Sequence) or isinstance(source, (bytes, bytearray)):
        return SeqInput(tuple(source))
    if isinstance(source, Iterable):
        return StreamInput(source)
    raise TypeError(f"cannot use {type(source).__name__!r} as parser input")
