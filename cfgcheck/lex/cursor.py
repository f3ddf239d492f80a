# cfgcheck/lex/cursor.py
"""Clonable, forward-only token cursor.

The lexer itself can only move forward, so the cursor memoizes every token
it pulls into a buffer shared by all of its clones. Each clone keeps its
own position; cloning is O(1) and advancing one clone never moves another.
"""

from __future__ import annotations
from typing import Iterable, Iterator, List, Optional


class _TokenBuffer:
    """Tokens pulled so far from one source, shared between cursors."""

    def __init__(self, source: Iterable):
        self._it = iter(source)
        self._toks: List = []
        self._done = False

    def get(self, pos: int):
        while pos >= len(self._toks):
            if self._done:
                return None
            tok = next(self._it, None)
            if tok is None:
                self._done = True
                return None
            self._toks.append(tok)
        return self._toks[pos]

    def __len__(self) -> int:
        return len(self._toks)


class TokenCursor:
    """Forward cursor: `next()` returns the next token or None at the end."""

    def __init__(self, source: Iterable, *, _buffer: Optional[_TokenBuffer] = None, _pos: int = 0):
        self._buf = _buffer if _buffer is not None else _TokenBuffer(source)
        self._pos = _pos

    @classmethod
    def from_text(cls, text: str) -> "TokenCursor":
        from . import SimpleLexer
        return cls(SimpleLexer(text))

    def next(self):
        tok = self._buf.get(self._pos)
        if tok is not None:
            self._pos += 1
        return tok

    def clone(self) -> "TokenCursor":
        return TokenCursor(None, _buffer=self._buf, _pos=self._pos)

    @property
    def position(self) -> int:
        """Number of tokens this cursor has consumed."""
        return self._pos

    def __iter__(self) -> Iterator:
        while True:
            tok = self.next()
            if tok is None:
                return
            yield tok

    def __repr__(self) -> str:
        return f"TokenCursor(pos={self._pos}, buffered={len(self._buf)})"
