"""Rule graph and the store that owns it."""

from .graph import Link, Rule, RuleSet, RuleStep, Terminal
from .store import Store, StoreSealedError, build_store
