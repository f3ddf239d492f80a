"""JSON grammar description loader"""

from __future__ import annotations
import json
from pathlib    import Path
from typing     import Any, List

from .ast import GrammarDescription, GrammarError, GrammarRule, GrammarSet


def load_grammar_text(path: str) -> str:
    """
    Load Grammar Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_input_text(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def load_grammar(path: str) -> GrammarDescription:
    """Read and decode a grammar file. OSError propagates to the caller."""
    try:
        src = load_grammar_text(path)
    except UnicodeDecodeError as e:
        raise GrammarError(f"{path}: grammar file is not valid UTF-8 ({e})") from e
    return parse_grammar(src)


def parse_grammar(src: str) -> GrammarDescription:
    """Decode a JSON grammar description.

    Only the document shape is checked here; terminal and non-terminal
    names are resolved when the store is built.
    """
    try:
        doc = json.loads(src)
    except json.JSONDecodeError as e:
        raise GrammarError(f"Malformed grammar description: {e}") from e
    return grammar_from_json(doc)


def grammar_from_json(doc: Any) -> GrammarDescription:
    if not isinstance(doc, dict) or not isinstance(doc.get("sets"), list):
        raise GrammarError("Grammar description must be an object with a 'sets' list")

    sets: List[GrammarSet] = []
    for si, raw_set in enumerate(doc["sets"]):
        where = f"sets[{si}]"
        if not isinstance(raw_set, dict):
            raise GrammarError(f"{where}: expected an object")
        name = raw_set.get("name")
        if not isinstance(name, str) or not name:
            raise GrammarError(f"{where}: 'name' must be a non-empty string")
        raw_rules = raw_set.get("rules")
        if not isinstance(raw_rules, list):
            raise GrammarError(f"{where} ({name}): 'rules' must be a list")

        rules: List[GrammarRule] = []
        for ri, raw_rule in enumerate(raw_rules):
            rwhere = f"{where}.rules[{ri}] ({name})"
            if not isinstance(raw_rule, dict):
                raise GrammarError(f"{rwhere}: expected an object")
            terminals = raw_rule.get("terminals", [])
            if not isinstance(terminals, list) or not all(isinstance(t, str) for t in terminals):
                raise GrammarError(f"{rwhere}: 'terminals' must be a list of strings")
            non_terminal = raw_rule.get("non_terminal")
            if non_terminal is not None and not isinstance(non_terminal, str):
                raise GrammarError(f"{rwhere}: 'non_terminal' must be a string or null")
            rules.append(GrammarRule(terminals=list(terminals), non_terminal=non_terminal))

        sets.append(GrammarSet(name=name, rules=rules))

    return GrammarDescription(sets=sets)
