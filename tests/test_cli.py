from pathlib import Path

from cfgcheck.cfgcheckc import main

HERE = Path(__file__).parent / "grammar_test"
GRAMMAR = str(HERE / "contact.json")


def test_run_accepted(capsys):
    assert main(["run", "--grammar", GRAMMAR, "--input", str(HERE / "plan_valid.txt")]) == 0
    out = capsys.readouterr().out
    assert "C -> contact identifier identifier number number R | None" in out
    assert "delay 10 20 30" in out
    assert out.rstrip().endswith("The input is correct")


def test_run_rejected_still_exits_zero(capsys):
    assert main(["run", "--grammar", GRAMMAR, "--input", str(HERE / "plan_invalid.txt")]) == 0
    assert capsys.readouterr().out.rstrip().endswith("The input is incorrect")


def test_run_with_start_symbol(tmp_path, capsys):
    plan = tmp_path / "plan.txt"
    plan.write_text("rate 10 20 30\n")
    assert main(["run", "--grammar", GRAMMAR, "--input", str(plan)]) == 0
    assert capsys.readouterr().out.rstrip().endswith("The input is correct")
    assert main(["run", "--grammar", GRAMMAR, "--input", str(plan), "--start", "C"]) == 0
    assert capsys.readouterr().out.rstrip().endswith("The input is incorrect")


def test_run_debug_traces_to_stderr(capsys):
    assert main(["run", "--grammar", GRAMMAR, "--input", str(HERE / "plan_valid.txt"), "-D"]) == 0
    err = capsys.readouterr().err
    assert "[STORE]" in err
    assert "[DEBUG] accepted Rule(C#0" in err


def test_run_missing_input(tmp_path, capsys):
    assert main(["run", "--grammar", GRAMMAR, "--input", str(tmp_path / "nope.txt")]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_run_bad_grammar(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text('{"sets": [{"name": "S", "rules": [{"terminals": ["Foo"]}]}]}')
    assert main(["run", "--grammar", str(bad), "--input", str(HERE / "plan_valid.txt")]) == 2
    err = capsys.readouterr().err
    assert "[ERROR] GrammarError" in err
    assert "unknown terminal 'Foo'" in err


def test_run_input_not_utf8(tmp_path, capsys):
    plan = tmp_path / "plan.txt"
    plan.write_bytes(b"contact A B 20 32 \xff\xfe")
    assert main(["run", "--grammar", GRAMMAR, "--input", str(plan)]) == 2
    assert "[ERROR] UnicodeDecodeError" in capsys.readouterr().err


def test_check_grammar_not_utf8(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_bytes(b'{"sets": [\xff]}')
    assert main(["check", str(bad)]) == 2
    err = capsys.readouterr().err
    assert "[ERROR] GrammarError" in err
    assert "not valid UTF-8" in err


def test_lex_input_not_utf8(tmp_path, capsys):
    plan = tmp_path / "plan.txt"
    plan.write_bytes(b"rate \xff")
    assert main(["lex", "--input", str(plan)]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_check(capsys):
    assert main(["check", GRAMMAR]) == 0
    assert capsys.readouterr().out.strip() == "[CHECK OK] sets=2 top-level rules=5 links=3"


def test_check_unknown_start(capsys):
    assert main(["check", GRAMMAR, "--start", "X"]) == 2
    assert "Unknown start symbol" in capsys.readouterr().err


def test_lex(capsys):
    assert main(["lex", "--text", "contact A\n7"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "000: Contact      'contact'  @1:1",
        "001: Identifier   'A'  @1:9",
        "002: Number       '7'  @2:1",
    ]
