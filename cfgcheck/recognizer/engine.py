# cfgcheck/recognizer/engine.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Sequence, Union

from ..lex import LexTok, TokenCursor, TokenKind
from ..rules.graph import Link, Rule
from ..rules.store import Store

# Backtracking recursive-descent recognizer:
# - A RuleSet is tried alternative by alternative, each on its own clone of
#   the token cursor; the first alternative that accepts wins.
# - A Link step descends into its RuleSet carrying the token already read,
#   so the callee sees that token first. Steps after a link are never
#   reached (the store only produces trailing links).
# - The End sentinel is produced once, when the cursor runs dry.
# - No cycle detection; `max_depth` optionally bounds link descents.
# - Pending alternatives are kept on an explicit stack, so long inputs
#   need no interpreter recursion.

recognizer_log = logging.getLogger("cfgcheck.recognizer")

END = LexTok(TokenKind.End, "", 0, 0)


@dataclass
class RecognizerOptions:
    """
    - max_depth: reject any branch nested deeper than this many link
      descents (None = unbounded)
    - tracer   : called with each Rule that accepts inside a disjunction,
      innermost first
    """
    max_depth: Optional[int] = None
    tracer: Optional[Callable[[Rule], None]] = None


class _Frame(NamedTuple):
    """One pending alternative: try `rule` from step `index`."""
    cursor: TokenCursor
    rule: Rule
    index: int
    carry: Optional[LexTok]
    end: bool
    depth: int
    parent: Optional["_Frame"]  # frame whose link led here


class Recognizer:
    def __init__(self, store: Store, options: Optional[RecognizerOptions] = None):
        self.store = store
        self.options = options or RecognizerOptions()

    # ---- Public entrypoint ----
    def parse(self, source: Union[TokenCursor, str]) -> bool:
        """True iff some top-level rule matches the whole input plus End."""
        cursor = TokenCursor.from_text(source) if isinstance(source, str) else source
        ok = self.process_rule_set(cursor, self.store.get_all_rules(), None, False, 0)
        recognizer_log.debug("verdict: %s", "accepted" if ok else "rejected")
        return ok

    # ---- Disjunction ----
    def process_rule_set(
        self,
        cursor: TokenCursor,
        rules: Sequence[Rule],
        carry: Optional[LexTok],
        end: bool,
        depth: int,
    ) -> bool:
        """Depth-first search over the alternatives of `rules`.

        Links are always the last step of a rule, so a descent decides its
        parent branch outright; pending alternatives live on an explicit
        stack instead of the interpreter's, and input length does not
        bound the search.
        """
        stack: List[_Frame] = []
        _push_alternatives(stack, cursor, rules, carry, end, depth, None)
        while stack:
            frame = stack.pop()
            if self.process(frame, stack):
                self._trace(frame)
                return True
        return False

    # ---- Concatenation ----
    def process(self, frame: _Frame, stack: List[_Frame]) -> bool:
        """Match the terminal steps of one alternative.

        Returns True when the alternative accepts. On a link step the
        target's alternatives are pushed onto `stack` and False is
        returned; the search continues from there.
        """
        max_depth = self.options.max_depth
        if max_depth is not None and frame.depth > max_depth:
            recognizer_log.debug("depth %d exceeds max_depth; rejecting %r", frame.depth, frame.rule)
            return False

        cursor, index, carry, end = frame.cursor, frame.index, frame.carry, frame.end
        steps = frame.rule.steps
        while True:
            # carry first, then the cursor, then (once) the End sentinel
            if carry is not None:
                token: Optional[LexTok] = carry
                carry = None
            else:
                token = cursor.next()
                if token is None and not end:
                    end = True
                    token = END

            exhausted = token is None or token.kind is TokenKind.End
            if exhausted and index == len(steps):
                return True
            if token is None or index == len(steps):
                return False

            step = steps[index]
            if isinstance(step, Link):
                recognizer_log.debug("%r: descend into %s on %s", frame.rule, step.name, token.kind)
                _push_alternatives(stack, cursor, step.target.rules, token, end, frame.depth + 1, frame)
                return False

            if token.kind != step.kind:
                return False
            index += 1

    def _trace(self, frame: Optional[_Frame]) -> None:
        tracer = self.options.tracer
        if tracer is None:
            return
        while frame is not None:
            tracer(frame.rule)
            frame = frame.parent


def _push_alternatives(
    stack: List[_Frame],
    cursor: TokenCursor,
    rules: Sequence[Rule],
    carry: Optional[LexTok],
    end: bool,
    depth: int,
    parent: Optional[_Frame],
) -> None:
    # reversed, so the first alternative is popped first; each alternative
    # restarts from the same input position
    for rule in reversed(rules):
        stack.append(_Frame(cursor.clone(), rule, 0, carry, end, depth, parent))
