# mpcomb/lex/__init__.py
"""Regex tokenizer feeding token-list inputs, plus regex-level parsers.

Matching order at every position:
  1) skip %ignore-style patterns as far as possible
  2) keywords (literals), longest first; word keywords need identifier
     boundaries on both sides
  3) token patterns, longest match; ties go to the earlier declaration
  4) nothing matches -> SyntaxError with line:col

API
---
- `LexTok(type, text, line, col)`     one token
- `Lexer(tokens, ignores=, keywords=)` `tokenize(text) -> list[LexTok]`
- `token(kind)`                        parser for one LexTok of that type
- `pattern(rx, flags=0)`               parser matching a regex on a TextInput
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import regex

from ..combinators import sat
from ..core import Parser, Reply
from ..inputs import Input, SeqInput, TextInput

_RE_XID_CONT = regex.compile(r"\p{XID_Continue}")


def _is_ident_continue(ch: str) -> bool:
    return bool(_RE_XID_CONT.fullmatch(ch))


def _is_word_keyword(s: str) -> bool:
    """True when the keyword contains identifier characters and so needs
    word boundaries (`if` must not match inside `iffy`)."""
    return any(_is_ident_continue(c) for c in s)


def _compile(pat: Union[str, "regex.Pattern[str]"], flags: int = 0) -> "regex.Pattern[str]":
    if isinstance(pat, str):
        return regex.compile(pat, flags)
    return pat


# --------- Public datatypes ---------

@dataclass(frozen=True)
class LexTok:
    type: str   # token name, or the keyword literal itself
    text: str   # lexeme
    line: int   # 1-based
    col: int    # 1-based


class Lexer:
    def __init__(self,
            tokens: Sequence[Tuple[str, Union[str, "regex.Pattern[str]"]]],
            *,
            ignores: Iterable[Union[str, "regex.Pattern[str]"]] = (),
            keywords: Iterable[str] = ()):
        self._tokens = [(name, _compile(p)) for name, p in tokens]
        self._ignores = [_compile(p) for p in ignores]
        # dedupe keeping first declaration, then longest first (stable)
        seen = set()
        kws = []
        for kw in keywords:
            if kw and kw not in seen:
                seen.add(kw)
                kws.append(kw)
        self._keywords = sorted(kws, key=len, reverse=True)

    def tokenize(self, text: str) -> List[LexTok]:
        return list(_Scan(self, text))

    def input(self, text: str) -> SeqInput:
        """Tokenize `text` and wrap the tokens as an Input."""
        return SeqInput(tuple(self.tokenize(text)))


class _Scan:
    def __init__(self, lexer: Lexer, text: str):
        self.lx = lexer
        self.text = text
        self.i = 0
        self.line = 1
        self.col = 1

    def __iter__(self):
        while True:
            tok = self._next_token()
            if tok is None:
                return
            yield tok

    # ---- Internals ----
    def _advance(self, consumed: str) -> None:
        nl = consumed.count("\n")
        if nl:
            self.line += nl
            self.col = len(consumed) - consumed.rfind("\n")
        else:
            self.col += len(consumed)
        self.i += len(consumed)

    def _skip_ignores(self) -> None:
        while self.i < len(self.text):
            for rgx in self.lx._ignores:
                m = rgx.match(self.text, self.i)
                if m and m.end() > self.i:
                    self._advance(m.group(0))
                    break
            else:
                return

    def _match_keyword(self) -> Optional[LexTok]:
        s, i = self.text, self.i
        for lit in self.lx._keywords:
            if not s.startswith(lit, i):
                continue
            if _is_word_keyword(lit):
                if i > 0 and _is_ident_continue(s[i - 1]):
                    continue
                j = i + len(lit)
                if j < len(s) and _is_ident_continue(s[j]):
                    continue
            return LexTok(type=lit, text=lit, line=self.line, col=self.col)
        return None

    def _match_token(self) -> Optional[LexTok]:
        best: Optional[Tuple[str, str]] = None
        for name, rgx in self.lx._tokens:
            m = rgx.match(self.text, self.i)
            if not m:
                continue
            txt = m.group(0)
            if txt and (best is None or len(txt) > len(best[1])):
                best = (name, txt)
        if best is None:
            return None
        return LexTok(type=best[0], text=best[1], line=self.line, col=self.col)

    def _next_token(self) -> Optional[LexTok]:
        self._skip_ignores()
        if self.i >= len(self.text):
            return None
        kw = self._match_keyword()
        if kw is not None:
            self._advance(kw.text)
            return kw
        tk = self._match_token()
        if tk is not None:
            self._advance(tk.text)
            return tk
        ch = self.text[self.i]
        raise SyntaxError(f"Lexing error: unexpected character {ch!r} at {self.line}:{self.col}")


# --------- Parsers over lexer output ---------

def token(kind: str) -> Parser:
    """One LexTok whose type is `kind`."""
    return sat(lambda t: isinstance(t, LexTok) and t.type == kind)


def pattern(rx: Union[str, "regex.Pattern[str]"], flags: int = 0) -> Parser:
    """Match `rx` at the current position of a TextInput; yields the text.

    Empty matches succeed without consuming anything.
    """
    compiled = _compile(rx, flags)

    def _pattern(inp: Input) -> List[Reply]:
        if not isinstance(inp, TextInput):
            raise TypeError(f"pattern() needs a TextInput, got {type(inp).__name__}")
        m = compiled.match(inp.text, inp.pos)
        if m is None:
            return []
        return [(m.group(0), inp.advance(m.end() - inp.pos))]
    return _pattern
