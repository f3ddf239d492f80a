"""Declarative grammar descriptions: model, JSON loader, reference grammar."""

from .ast import GrammarDescription, GrammarError, GrammarRule, GrammarSet
from .loader import grammar_from_json, load_grammar, load_grammar_text, load_input_text, parse_grammar
from .reference import contact_grammar
