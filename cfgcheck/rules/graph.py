# cfgcheck/rules/graph.py
from __future__ import annotations
from dataclasses import FrozenInstanceError, dataclass, field
from typing import List, Sequence, Union

from ..lex import TokenKind

# ---- Rule graph node definitions ----
# A RuleSet is an ordered alternation of Rules; a Rule is an ordered
# concatenation of steps. Link steps point back into RuleSets owned by the
# store, so the graph may be cyclic.

@dataclass(frozen=True)
class Terminal:
    kind: TokenKind  # consume one token of this kind

    def __str__(self) -> str:
        return str(self.kind).lower()

@dataclass(frozen=True, eq=False)
class Link:
    name: str
    target: "RuleSet"  # non-owning; compared by identity

    def __str__(self) -> str:
        return self.name.upper()

    def __repr__(self) -> str:
        return f"Link({self.name!r})"

RuleStep = Union[Terminal, Link]

class _Sealable:
    """Rejects attribute assignment once `_freeze()` has run."""
    _sealed = False

    def __setattr__(self, name, value):
        if self._sealed:
            raise FrozenInstanceError(f"cannot assign to {name!r} of a sealed {type(self).__name__}")
        object.__setattr__(self, name, value)

    def _freeze(self) -> None:
        object.__setattr__(self, "_sealed", True)

@dataclass(eq=False)
class Rule(_Sealable):
    owner: str
    index: int
    # list while the store is building, tuple once sealed
    steps: Sequence[RuleStep] = field(default_factory=list)

    def seal(self) -> None:
        if self._sealed:
            return
        self.steps = tuple(self.steps)
        self._freeze()

    @property
    def is_epsilon(self) -> bool:
        return len(self.steps) == 0

    @property
    def link(self) -> Union[Link, None]:
        """The trailing link step, if any."""
        if self.steps and isinstance(self.steps[-1], Link):
            return self.steps[-1]
        return None

    def __str__(self) -> str:
        return " ".join(str(s) for s in self.steps) or "None"

    def __repr__(self) -> str:
        return f"Rule({self.owner}#{self.index}: {self})"

@dataclass(eq=False)
class RuleSet(_Sealable):
    name: str
    rules: List[Rule] = field(default_factory=list)

    def seal(self) -> None:
        """Seal every rule, then the alternative list itself."""
        if self._sealed:
            return
        for rule in self.rules:
            rule.seal()
        self.rules = tuple(self.rules)
        self._freeze()

    def __str__(self) -> str:
        return f"{self.name} -> " + " | ".join(str(r) for r in self.rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.name!r}, {len(self.rules)} rules)"
