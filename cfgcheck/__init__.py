"""cfgcheck: decide whether an input conforms to a JSON-described grammar.

    g = load_grammar("contact.json")
    store = build_store(g)
    Recognizer(store).parse("contact A B 20 32")   # -> True
"""

__version__ = "0.1.0"

from .grammar import GrammarDescription, GrammarError, contact_grammar, load_grammar, parse_grammar
from .lex import LexTok, SimpleLexer, TokenCursor, TokenKind
from .recognizer import Recognizer, RecognizerOptions, recognize
from .rules import Store, StoreSealedError, build_store
