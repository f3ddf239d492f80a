# cfgcheck/lex/__init__.py
"""cfgcheck tokenizer (runtime) — fixed lexer for the contact-plan language.

Features
--------
- Keyword literals (`contact`, `rate`, `delay`) and regex tokens
  (`[a-zA-Z]+`, `[0-9]+`) from a fixed rule table
- Whitespace (`[ \\t\\n\\f\\r]+`) is skipped between tokens
- Produced token `kind` is a `TokenKind`; lexemes are kept for display only


Matching order:
  1) skip ignore patterns as far as possible
  2) every rule is tried at the current position — **longest match** wins
  3) on a tie, keywords beat regex tokens, then declaration order
  4) nothing matches → one `Error` token covering the unknown run


API
---
- `TokenKind` — token categories; `TokenKind.from_name(name)` for grammars
- `LexTok(kind, text, line, col)` — one token
- `SimpleLexer(text).next() -> Optional[LexTok]`
- `TokenCursor` — clonable cursor over a lexer (see `cursor.py`)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Pattern, Tuple
import regex as re


class TokenKind(Enum):
    Contact = "Contact"
    Options = "Options"
    Identifier = "Identifier"
    Number = "Number"
    End = "End"
    # lexer failure; has no grammar name so it never matches a step
    Error = "Error"

    @classmethod
    def from_name(cls, name: str) -> "TokenKind":
        """Decode a grammar terminal name. Unknown names raise KeyError."""
        try:
            return _NAME_TO_KIND[name]
        except KeyError:
            raise KeyError(f"Invalid token name: {name!r}") from None

    def __str__(self) -> str:
        return self.value


# names accepted in grammar files; Rate/Delay are legacy aliases of Options
_NAME_TO_KIND = {
    "Contact": TokenKind.Contact,
    "Options": TokenKind.Options,
    "Rate": TokenKind.Options,
    "Delay": TokenKind.Options,
    "Identifier": TokenKind.Identifier,
    "Number": TokenKind.Number,
    "End": TokenKind.End,
}

# --------- Public datatypes ---------

@dataclass(frozen=True)
class LexTok:
    kind: TokenKind
    text: str   # source lexeme
    line: int   # 1-based
    col: int    # 1-based


# --------- Rule table ---------

KEYWORDS: List[Tuple[str, TokenKind]] = [
    ("contact", TokenKind.Contact),
    ("rate", TokenKind.Options),
    ("delay", TokenKind.Options),
]

TOKENS: List[Tuple[TokenKind, Pattern[str]]] = [
    (TokenKind.Identifier, re.compile(r"[a-zA-Z]+")),
    (TokenKind.Number, re.compile(r"[0-9]+")),
]

IGNORE: Pattern[str] = re.compile(r"[ \t\n\f\r]+")

# an unknown run stops at whitespace or at anything the table could start with
_ERROR_RUN: Pattern[str] = re.compile(r"[^ \t\n\f\r a-zA-Z0-9]+")


# --------- Core implementation ---------

class SimpleLexer:
    """
    SimpleLexer
    ===========
    Reference lexer over the fixed rule table. Never raises on bad input:
    an unrecognised character run is returned as a `TokenKind.Error` token
    so the recognizer can reject the branch that meets it.
    """
    def __init__(self, text: str = ""):
        self._text = ""
        self._i = 0
        self._line = 1
        self._col = 1
        self.reset(text)

    # ---- Input binding ----
    def reset(self, text: str, *, line: int = 1, col: int = 1) -> None:
        self._text = text
        self._i = 0
        self._line = line
        self._col = col

    # ---- Public API ----
    def next(self) -> Optional[LexTok]:
        """Return the next token, or None once the input is exhausted."""
        self._skip_ignores()
        if self._i >= len(self._text):
            return None

        tok = self._match_longest()
        if tok is None:
            m = _ERROR_RUN.match(self._text, self._i)
            tok = LexTok(TokenKind.Error, m.group(0), self._line, self._col)
        self._advance_text(tok.text)
        return tok

    def __iter__(self) -> Iterator[LexTok]:
        while True:
            tok = self.next()
            if tok is None:
                return
            yield tok

    # ---- Internals ----
    def _advance_text(self, consumed: str) -> None:
        """Move the cursor and line/column past `consumed`."""
        nl = consumed.count("\n")
        if nl:
            self._line += nl
            self._col = len(consumed) - consumed.rfind("\n")
        else:
            self._col += len(consumed)
        self._i += len(consumed)

    def _skip_ignores(self) -> None:
        m = IGNORE.match(self._text, self._i)
        if m and m.end() > self._i:
            self._advance_text(m.group(0))

    def _match_longest(self) -> Optional[LexTok]:
        s = self._text
        i = self._i
        best_kind: Optional[TokenKind] = None
        best_text = ""

        # keywords first so that they keep equal-length ties
        for lit, kind in KEYWORDS:
            if s.startswith(lit, i) and len(lit) > len(best_text):
                best_kind, best_text = kind, lit

        for kind, rgx in TOKENS:
            m = rgx.match(s, i)
            if m and len(m.group(0)) > len(best_text):
                best_kind, best_text = kind, m.group(0)

        if best_kind is None:
            return None
        return LexTok(best_kind, best_text, self._line, self._col)


def tokenize(text: str) -> List[LexTok]:
    """Lex the whole of `text` eagerly."""
    return list(SimpleLexer(text))


from .cursor import TokenCursor  # noqa: E402
