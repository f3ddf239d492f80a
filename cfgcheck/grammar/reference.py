# cfgcheck/grammar/reference.py
"""Built-in reference grammar for contact plans.

    C -> contact ID ID NUM NUM R | None
    R -> (rate|delay) NUM NUM NUM R | (rate|delay) NUM NUM NUM C | None

`rate` and `delay` share the `Options` token, so one R covers both.
"""

from __future__ import annotations

from .ast import GrammarDescription, GrammarRule, GrammarSet

_CONTACT = ["Contact", "Identifier", "Identifier", "Number", "Number"]
_OPTION = ["Options", "Number", "Number", "Number"]


def contact_grammar() -> GrammarDescription:
    return GrammarDescription(sets=[
        GrammarSet("C", [
            GrammarRule(list(_CONTACT), "R"),
            GrammarRule([], None),
        ]),
        GrammarSet("R", [
            GrammarRule(list(_OPTION), "R"),
            GrammarRule(list(_OPTION), "C"),
            GrammarRule([], None),
        ]),
    ])
