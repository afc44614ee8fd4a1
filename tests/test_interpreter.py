import logging

import pytest

from glisp.builtin.env_builtin import builtin_environment
from glisp.errors import EvalError, ParseError
from glisp.interpreter import Interpreter
from glisp.types import Nil, NumberValue, StringValue


def test_eval_returns_last_value():
    interp = Interpreter()
    assert interp.eval("(let x 2) (* x 21)") == NumberValue(42)


def test_eval_empty_source_is_nil():
    assert Interpreter().eval("") is Nil
    assert Interpreter().eval("; only a comment") is Nil


def test_bindings_persist_between_calls():
    interp = Interpreter()
    interp.eval("(let greeting \"hi\")")
    assert interp.eval("greeting") == StringValue("hi")


def test_interpreters_do_not_share_bindings():
    a, b = Interpreter(), Interpreter()
    a.eval("(let only 1)")
    assert b.eval("only") is Nil


def test_script_frame_is_child_of_builtins():
    interp = Interpreter()
    assert interp.env.outer is builtin_environment()


def test_eval_all():
    assert Interpreter().eval_all("1 (+ 1 1) nil") == [NumberValue(1), NumberValue(2), Nil]


def test_prelude():
    interp = Interpreter(prelude="(let double (fn (x) (* x 2)))")
    assert interp.eval("(double 4)") == NumberValue(8)


def test_eval_file(tmp_path):
    path = tmp_path / "main.gl"
    path.write_text("(let a 1)\n(+ a 1)\n", encoding="utf-8")
    assert Interpreter().eval_file(path) == [NumberValue(1), NumberValue(2)]


def test_parse_errors_propagate():
    with pytest.raises(ParseError):
        Interpreter().eval("(let)")


def test_deep_recursion_is_an_eval_error():
    interp = Interpreter()
    interp.eval("(let loop (fn (n) (loop (+ n 1))))")
    with pytest.raises(EvalError) as excinfo:
        interp.eval("(loop 0)")
    assert "maximum recursion depth" in str(excinfo.value)
    # the interpreter is still usable afterwards
    assert interp.eval("(+ 1 1)") == NumberValue(2)


def test_recursion_limit_from_environment(monkeypatch):
    calls = []
    monkeypatch.setenv("GLISP_RECURSION_LIMIT", "5000")
    monkeypatch.setattr("glisp.interpreter.sys.setrecursionlimit", calls.append)
    Interpreter()
    assert calls == [5000]


def test_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger="Interpreter"):
        Interpreter().eval("(+ 1 2)")
    messages = [r.getMessage() for r in caplog.records if r.name == "Interpreter"]
    assert "parsed 1 expressions from <string>" in messages
    assert "evaluating (+ 1.0 2.0)" in messages


def test_deep_nesting_is_a_parse_error(monkeypatch):
    monkeypatch.delenv("GLISP_RECURSION_LIMIT", raising=False)
    interp = Interpreter()
    with pytest.raises(ParseError) as excinfo:
        interp.eval("(list " * 5000 + ")" * 5000, "deep.gl")
    assert "nested too deeply" in str(excinfo.value)
    assert excinfo.value.pos.source_file == "deep.gl"
    assert interp.eval("(+ 1 1)") == NumberValue(2)
