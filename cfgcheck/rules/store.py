# cfgcheck/rules/store.py
"""Rule store: owns the RuleSets and compiles grammar descriptions into them."""

from __future__     import annotations
import logging
from dataclasses    import dataclass, field
from typing         import Dict, Iterator, List, Optional, Tuple

from ..grammar.ast  import GrammarDescription, GrammarError, GrammarRule, GrammarSet
from ..lex          import TokenKind
from .graph         import Link, Rule, RuleSet, Terminal

store_log = logging.getLogger("cfgcheck.store")


class StoreSealedError(RuntimeError):
    """A sealed store was asked to change."""


@dataclass
class Store:
    """
    Store
    =====
    Mapping of non-terminal **name → RuleSet**. The store owns every RuleSet;
    link steps inside the rules only reference them, which is how cycles
    between non-terminals are expressed.

    Lifecycle
    ---------
    - build: `add_rule_set()` any number of times (duplicates overwrite)
    - seal():  step lists become tuples, rules and rule sets reject
      attribute assignment, further `add_rule_set()` raises `StoreSealedError`
    - lookups (`get_rule_set`, `get_all_rules`) never fail after sealing

    When `start` is set, `get_all_rules()` only exposes that set; otherwise
    the top level is the union of every set in insertion order.
    """

    _sets: Dict[str, RuleSet] = field(default_factory=dict)
    start: Optional[str] = None
    _sealed: bool = False

    # ----- build -----
    def add_rule_set(self, name: str, rule_set: RuleSet) -> None:
        if self._sealed:
            raise StoreSealedError(f"Store is sealed; cannot add rule set {name!r}")
        if name in self._sets:
            store_log.debug("rule set %r overwritten", name)
        self._sets[name] = rule_set

    def seal(self) -> None:
        """Freeze the graph. Calling it twice is a no-op."""
        if self._sealed:
            return
        if self.start is not None and self.start not in self._sets:
            raise GrammarError(f"Unknown start symbol: {self.start!r}")
        for rule_set in self._sets.values():
            rule_set.seal()
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ----- lookups -----
    def get_rule_set(self, name: str) -> Optional[RuleSet]:
        return self._sets.get(name)

    def get_all_rules(self) -> List[Rule]:
        """Top-level alternatives, tried in this order by the recognizer."""
        if self.start is not None:
            return list(self._sets[self.start].rules)
        rules: List[Rule] = []
        for rule_set in self._sets.values():
            rules.extend(rule_set.rules)
        return rules

    def names(self) -> List[str]:
        return list(self._sets)

    def __contains__(self, name: object) -> bool:
        return name in self._sets

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[RuleSet]:
        return iter(self._sets.values())

    def dump(self) -> str:
        """One line per set; equal for stores built from equal descriptions."""
        lines = [str(rs) for rs in self._sets.values()]
        if self.start is not None:
            lines.append(f"%start {self.start}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Store(sets={self.names()}, start={self.start}, sealed={self._sealed})"


# ------------------------------
# description → store
# ------------------------------

def _decode_terminal(name: str, where: str) -> Terminal:
    try:
        return Terminal(TokenKind.from_name(name))
    except KeyError:
        raise GrammarError(f"{where}: unknown terminal {name!r}") from None


def _skeleton(gset: GrammarSet) -> RuleSet:
    """Pass 1 shape of a set: terminal steps only."""
    rules = []
    for i, grule in enumerate(gset.rules):
        where = f"{gset.name}#{i}"
        steps = [_decode_terminal(t, where) for t in grule.terminals]
        rules.append(Rule(owner=gset.name, index=i, steps=steps))
    return RuleSet(name=gset.name, rules=rules)


def build_store(g: GrammarDescription, start: Optional[str] = None) -> Store:
    """
    Compile a grammar description into a sealed Store, in two passes.

    1) skeletons: every set becomes a RuleSet of terminal-only Rules
    2) links: each grammar rule that names a non-terminal gets exactly one
       Link appended, after its terminal prefix. Every set already exists
       at this point, so forward and backward references (and cycles)
       resolve the same way.

    Raises GrammarError on an unknown terminal, non-terminal or start symbol.
    """
    store = Store(start=start)

    # pass 1
    built: List[Tuple[GrammarSet, RuleSet]] = []
    for gset in g.sets:
        rule_set = _skeleton(gset)
        store.add_rule_set(gset.name, rule_set)
        built.append((gset, rule_set))
    store_log.debug("pass 1: %d rule sets", len(store))

    # pass 2
    links = 0
    for gset, rule_set in built:
        # only rules that carry a non-terminal, in declaration order
        linked: List[Rule] = [r for r, gr in zip(rule_set.rules, gset.rules) if gr.non_terminal is not None]
        wanted: List[GrammarRule] = [gr for gr in gset.rules if gr.non_terminal is not None]

        for index, grule in enumerate(wanted):
            target = store.get_rule_set(grule.non_terminal)
            if target is None:
                raise GrammarError(
                    f"{gset.name}: unknown non-terminal {grule.non_terminal!r}"
                )
            linked[index].steps.append(Link(name=grule.non_terminal, target=target))
            links += 1
    store_log.debug("pass 2: %d links resolved", links)

    store.seal()
    return store
