import pytest

from cfgcheck.grammar import GrammarDescription, GrammarError, GrammarRule, GrammarSet, contact_grammar
from cfgcheck.lex import TokenKind
from cfgcheck.rules import Link, Rule, RuleSet, Store, StoreSealedError, Terminal, build_store


def _g(**sets):
    return GrammarDescription(
        [GrammarSet(name, [GrammarRule(list(t), nt) for t, nt in rules]) for name, rules in sets.items()]
    )


def test_reference_store_shape():
    store = build_store(contact_grammar())
    assert store.names() == ["C", "R"]

    c = store.get_rule_set("C")
    r = store.get_rule_set("R")
    assert [len(rule.steps) for rule in c.rules] == [6, 0]
    assert [len(rule.steps) for rule in r.rules] == [5, 5, 0]

    assert c.rules[0].steps[:5] == (
        Terminal(TokenKind.Contact),
        Terminal(TokenKind.Identifier),
        Terminal(TokenKind.Identifier),
        Terminal(TokenKind.Number),
        Terminal(TokenKind.Number),
    )
    assert c.rules[0].link.target is r
    assert r.rules[0].link.target is r
    assert r.rules[1].link.target is c


def test_every_link_resolves_inside_the_store():
    store = build_store(contact_grammar())
    for rule_set in store:
        for rule in rule_set.rules:
            for step in rule.steps:
                if isinstance(step, Link):
                    assert step.target is store.get_rule_set(step.name)


def test_link_is_appended_after_unchanged_terminal_prefix():
    g = contact_grammar()
    store = build_store(g)
    for gset in g.sets:
        for grule, rule in zip(gset.rules, store.get_rule_set(gset.name).rules):
            prefix = tuple(Terminal(TokenKind.from_name(t)) for t in grule.terminals)
            assert tuple(rule.steps[: len(prefix)]) == prefix
            if grule.non_terminal is None:
                assert len(rule.steps) == len(prefix)
            else:
                assert len(rule.steps) == len(prefix) + 1
                assert rule.link.name == grule.non_terminal


def test_parallel_index_skips_terminal_only_rules():
    store = build_store(
        _g(
            S=[(["Number"], None), (["Identifier"], "T"), ([], "U")],
            T=[(["Number"], None)],
            U=[([], None)],
        )
    )
    s = store.get_rule_set("S")
    assert s.rules[0].link is None
    assert s.rules[1].link.name == "T"
    assert s.rules[2].link.name == "U"
    assert s.rules[2].steps[0].target is store.get_rule_set("U")


def test_forward_and_self_references():
    store = build_store(_g(A=[([], "B")], B=[(["Number"], "B"), ([], None)]))
    b = store.get_rule_set("B")
    assert store.get_rule_set("A").rules[0].link.target is b
    assert b.rules[0].link.target is b


def test_rule_metadata():
    store = build_store(contact_grammar())
    rules = store.get_all_rules()
    assert [(r.owner, r.index) for r in rules] == [("C", 0), ("C", 1), ("R", 0), ("R", 1), ("R", 2)]
    assert rules[1].is_epsilon
    assert str(rules[0]) == "contact identifier identifier number number R"


def test_get_all_rules_follows_declaration_order():
    store = build_store(_g(Z=[(["Number"], None)], A=[(["Identifier"], None)]))
    assert [r.owner for r in store.get_all_rules()] == ["Z", "A"]


def test_start_symbol_restricts_top_level():
    store = build_store(contact_grammar(), start="C")
    assert [(r.owner, r.index) for r in store.get_all_rules()] == [("C", 0), ("C", 1)]
    assert len(store) == 2


def test_unknown_start_symbol():
    with pytest.raises(GrammarError, match="start"):
        build_store(contact_grammar(), start="Nope")


def test_unknown_terminal():
    with pytest.raises(GrammarError, match="'Foo'"):
        build_store(_g(S=[(["Number", "Foo"], None)]))


def test_error_kind_cannot_be_named():
    with pytest.raises(GrammarError):
        build_store(_g(S=[(["Error"], None)]))


def test_unknown_non_terminal():
    with pytest.raises(GrammarError, match="'Missing'"):
        build_store(_g(S=[(["Number"], "Missing")]))


def test_legacy_option_aliases():
    store = build_store(_g(S=[(["Rate", "Delay", "Options"], None)]))
    assert store.get_rule_set("S").rules[0].steps == (Terminal(TokenKind.Options),) * 3


def test_sealed_store_is_frozen():
    store = build_store(contact_grammar())
    assert store.sealed
    with pytest.raises(StoreSealedError):
        store.add_rule_set("X", RuleSet("X"))
    rule = store.get_rule_set("C").rules[0]
    assert isinstance(rule.steps, tuple)
    with pytest.raises(AttributeError):
        rule.steps.append(Terminal(TokenKind.Number))
    store.seal()  # no-op


def test_sealed_rules_reject_reassignment():
    store = build_store(contact_grammar())
    rule_set = store.get_rule_set("C")
    rule = rule_set.rules[0]
    with pytest.raises(AttributeError):
        rule.steps = []
    with pytest.raises(AttributeError):
        rule.owner = "R"
    with pytest.raises(AttributeError):
        rule_set.rules = []
    assert len(rule.steps) == 6
    assert len(rule_set.rules) == 2


def test_unsealed_rules_stay_mutable():
    rule = Rule("S", 0)
    rule.steps = [Terminal(TokenKind.Number)]
    rule_set = RuleSet("S", [rule])
    rule_set.seal()
    assert rule.steps == (Terminal(TokenKind.Number),)
    with pytest.raises(AttributeError):
        rule.index = 1


def test_same_description_builds_equal_stores():
    a = build_store(contact_grammar())
    b = build_store(contact_grammar())
    assert a.dump() == b.dump()
    assert a.dump() == (
        "C -> contact identifier identifier number number R | None\n"
        "R -> options number number number R | options number number number C | None"
    )
    assert build_store(contact_grammar(), start="C").dump().endswith("%start C")


def test_manual_store_lookup_and_overwrite():
    store = Store()
    first = RuleSet("S", [Rule("S", 0, [Terminal(TokenKind.Number)])])
    second = RuleSet("S", [Rule("S", 0, [])])
    store.add_rule_set("S", first)
    store.add_rule_set("S", second)
    assert store.get_rule_set("S") is second
    assert store.get_rule_set("T") is None
    assert "S" in store and "T" not in store
    assert store.get_all_rules() == second.rules
