# cfgcheck/grammar/ast.py
"""Grammar description AST
- GrammarDescription: ordered list of GrammarSet
- GrammarSet: one non-terminal with its ordered alternatives
- GrammarRule: terminal names, optionally followed by one non-terminal name

The description is what a grammar file says; `cfgcheck.rules.store`
compiles it into the rule graph.
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Any, Dict, List, Optional


class GrammarError(SyntaxError):
    """Grammar description is malformed or references something unknown."""


@dataclass
class GrammarRule:
    """
    One alternative of a set.
    - terminals   : token-kind names in match order (empty list => epsilon prefix)
    - non_terminal: name of the set to descend into afterwards, or None
    """
    terminals: List[str] = field(default_factory=list)
    non_terminal: Optional[str] = None

    def __str__(self) -> str:
        parts = [t.lower() for t in self.terminals]
        if self.non_terminal is not None:
            parts.append(self.non_terminal.upper())
        if not parts:
            parts.append("None")
        return " ".join(parts)

    def to_json(self) -> Dict[str, Any]:
        return {"terminals": list(self.terminals), "non_terminal": self.non_terminal}


@dataclass
class GrammarSet:
    name: str
    rules: List[GrammarRule] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.name} -> " + " | ".join(str(r) for r in self.rules)

    def to_json(self) -> Dict[str, Any]:
        return {"name": self.name, "rules": [r.to_json() for r in self.rules]}


@dataclass
class GrammarDescription:
    sets: List[GrammarSet] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(f"{s}\n" for s in self.sets)

    def to_json(self) -> Dict[str, Any]:
        return {"sets": [s.to_json() for s in self.sets]}
