# mpcomb/__init__.py
"""Monadic parser combinators.

This package provides:
- an Input protocol (`is_empty` / `first` / `rest`) with text, sequence
  and stream adapters
- the primitive parsers `result`, `fail`, `item`
- sequencing (`bind`), non-deterministic choice (`plus`), deterministic
  choice (`alt`) and negation (`not_p`)
- repetition and derived combinators built on top of those
- a `Do` builder for sequencing with named bindings
- a regex tokenizer producing token-list inputs
- a runner with depth headroom and debug output

Parsers are plain callables `Input -> list[(value, Input)]`: an empty list
is "no match", several entries mean an ambiguous parse.
"""

from .errors import (
    EmptyInputError, ParseError, NoParseError, AmbiguousParseError,
    ParseDepthError, UnusedBindingWarning,
)
from .inputs import (
    Input, TextInput, SeqInput, StreamInput, to_input, is_empty, first, rest,
)
from .core import Parser, Reply, result, fail, item, bind, plus, alt, not_p
from .combinators import (
    zero_or_more, one_or_more, and_p, fmap, maybe, between, sep_by, sep_by1,
    if_p, when_p, unless_p, sat, lit, literal, lookahead, end_of_input,
    consuming,
)
from .sugar import Do, IGNORE, using, do
from .debug import traced
from .runtime import RunOptions, ParserRunner, parse, parse_all, parse_one
