# cfgcheck/cfgcheckc.py
"""cfgcheckc – cfgcheck CLI

Usage:
    $ python -m cfgcheck.cfgcheckc run --grammar tests/grammar_test/contact.json --input plan.txt
    $ python -m cfgcheck.cfgcheckc check tests/grammar_test/contact.json -D
    $ python -m cfgcheck.cfgcheckc lex --text "contact A B 20 32"

Commands
--------
- run   : load the grammar, build the rule store, recognize the input and
          print the verdict (exit code 0 for both accepted and rejected)
- check : load and build the grammar only, print a summary
- lex   : print the token stream of an input

Debug mode (-D/--debug) turns on DEBUG logging and prints pipeline
summaries (store dump, token counts) to stderr.
"""

from __future__ import annotations
import argparse
import logging
import sys
from typing import Optional

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

# ------------------------------
# pipeline loading
# ------------------------------

def _load_pipeline(grammar_path: str, debug: bool, start: Optional[str]):
    """Read the grammar file and compile it into a sealed store."""
    from .grammar.loader import load_grammar
    from .rules.store import build_store

    g = load_grammar(grammar_path)
    if debug: _eprint("[DEBUG] grammar ready | sets=%d rules=%d" %
                      (len(g.sets), sum(len(s.rules) for s in g.sets)))

    store = build_store(g, start=start)
    if debug: _eprint("[DEBUG] store sealed | sets=%d top-level rules=%d start=%s" %
                      (len(store), len(store.get_all_rules()), store.start or "*"))

    return g, store


def _print_store(store) -> None:
    _eprint("\n[STORE]\n" + store.dump())

# ------------------------------
# commands
# ------------------------------

def cmd_run(args) -> int:
    from .grammar.ast import GrammarError
    from .grammar.loader import load_input_text
    from .recognizer import Recognizer, RecognizerOptions

    try:
        g, store = _load_pipeline(args.grammar, debug=args.debug, start=args.start)
        text = load_input_text(args.input)
    except (GrammarError, OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    print("Grammar to use:\n")
    print(g)
    print("Input to be analyzed:\n")
    print(text)

    if args.debug:
        _print_store(store)

    tracer = None
    if args.debug:
        tracer = lambda rule: _eprint(f"[DEBUG] accepted {rule!r}")
    recognizer = Recognizer(store, RecognizerOptions(max_depth=args.max_depth, tracer=tracer))

    if recognizer.parse(text):
        print("The input is correct")
    else:
        print("The input is incorrect")
    return 0


def cmd_check(args) -> int:
    from .grammar.ast import GrammarError

    try:
        g, store = _load_pipeline(args.file, debug=args.debug, start=args.start)
    except (GrammarError, OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_store(store)

    links = sum(1 for rs in store for r in rs.rules if r.link is not None)
    print(f"[CHECK OK] sets={len(store)} top-level rules={len(store.get_all_rules())} links={links}")
    return 0


def cmd_lex(args) -> int:
    """Tokenize the given text and print one token per line."""
    from .lex import SimpleLexer

    try:
        if args.text is not None:
            text = args.text
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    for i, tok in enumerate(SimpleLexer(text)):
        print(f"{i:03d}: {tok.kind.value:<12} {tok.text!r}  @{tok.line}:{tok.col}")
    return 0

# ------------------------------
# entrypoint
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="cfgcheck", description="cfgcheck grammar-driven recognizer")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="recognize an input file against a grammar")
    p_run.add_argument("--grammar", required=True, help="JSON grammar file")
    p_run.add_argument("--input", required=True, help="input file to validate")
    p_run.add_argument("--start", help="start symbol (default: every set is top-level)")
    p_run.add_argument("--max-depth", type=int, default=None, help="reject branches nested deeper than N links")
    p_run.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_run.set_defaults(func=cmd_run)

    p_check = sub.add_parser("check", help="load and build a grammar")
    p_check.add_argument("file", help="JSON grammar file")
    p_check.add_argument("--start", help="start symbol (default: every set is top-level)")
    p_check.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_check.set_defaults(func=cmd_check)

    p_lex = sub.add_parser("lex", help="tokenize input text")
    src_group = p_lex.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="input text")
    src_group.add_argument("--input", help="input text file path")
    p_lex.set_defaults(func=cmd_lex, debug=False)

    args = ap.parse_args(argv)
    _setup_logging(args.debug)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
