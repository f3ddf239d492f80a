# cfgcheck/recognizer/runtime.py
"""Convenience entry point over `Recognizer`.

- `recognize(text, grammar)` builds a store when given a description and
  returns the accept/reject verdict for `text`.
"""

from __future__ import annotations
from typing import Optional, Union

from ..grammar.ast import GrammarDescription
from ..rules.store import Store, build_store
from .engine import Recognizer, RecognizerOptions


def recognize(
    text: str,
    grammar: Union[GrammarDescription, Store],
    *,
    start: Optional[str] = None,
    options: Optional[RecognizerOptions] = None,
) -> bool:
    """Parameters
    ----------
    text : str
        Input to check.
    grammar : GrammarDescription | Store
        A description is compiled fresh (with `start`); a Store is used
        as is and `start` must be None.
    options : RecognizerOptions, optional
        Depth cap / tracer.

    Returns
    -------
    bool
        True when the input is accepted.
    """
    if isinstance(grammar, Store):
        if start is not None:
            raise ValueError("start applies only when building from a description")
        store = grammar
    else:
        store = build_store(grammar, start=start)
    return Recognizer(store, options).parse(text)
