import math

import pytest

from glisp.errors import (
    ArgumentError,
    EvalError,
    ForbiddenCharacterError,
    GlispError,
    GlispTypeError,
    ParseError,
    UnexpectedEOFError,
)
from glisp.reader.tokens import ScannedToken, TokenType
from glisp.types import (
    BoolValue,
    FunctionValue,
    ListValue,
    MapValue,
    Nil,
    NilValue,
    NumberValue,
    PairValue,
    ScannerPosition,
    StringValue,
    format_number,
    kind_of,
)


# -----------------------------------------------------
# Values
# -----------------------------------------------------

@pytest.mark.parametrize(
    "value,expected",
    [
        (NumberValue(3), "3"),
        (NumberValue(-3), "-3"),
        (NumberValue(2.5), "2.5"),
        (NumberValue(-0.001), "-0.001"),
        (NumberValue(1e21), "1000000000000000000000"),
        (NumberValue(math.inf), "inf"),
        (NumberValue(-math.inf), "-inf"),
        (StringValue("a b"), '"a b"'),
        (BoolValue(True), "true"),
        (BoolValue(False), "false"),
        (Nil, "nil"),
        (PairValue(NumberValue(1), Nil), "(1 . nil)"),
        (ListValue(), "[]"),
        (ListValue([NumberValue(1), StringValue("x")]), '[1 "x"]'),
        (MapValue(), "{}"),
        (MapValue({"b": NumberValue(1), "a": ListValue()}), '{"b": 1, "a": []}'),
        (FunctionValue(lambda env, args: Nil, "f"), "<func f>"),
        (FunctionValue(lambda env, args: Nil), "<func>"),
    ]
)
def test_inspect_str(value, expected):
    assert value.inspect_str() == expected


def test_format_number():
    assert format_number(1.0) == "1.0"
    assert format_number(1e-5) == "0.00001"
    assert format_number(math.nan) == "nan"


def test_kinds():
    assert [kind_of(v) for v in (
        NumberValue(1), StringValue(""), BoolValue(True), Nil,
        PairValue(), ListValue(), MapValue(), FunctionValue(lambda env, args: Nil),
    )] == ["number", "string", "bool", "nil", "pair", "list", "map", "function"]


def test_nil_is_a_singleton():
    assert NilValue() is Nil
    assert not Nil


def test_structural_equality():
    assert NumberValue(1) == NumberValue(1.0)
    assert ListValue([NumberValue(1)]) == ListValue((NumberValue(1),))
    assert MapValue({"a": Nil}) == MapValue({"a": Nil})
    assert PairValue(Nil, Nil) == PairValue()
    assert NumberValue(1) != StringValue("1")


def test_functions_compare_by_identity():
    fn = lambda env, args: Nil  # noqa: E731
    assert FunctionValue(fn, "f") != FunctionValue(fn, "f")
    a = FunctionValue(fn)
    assert a == a


def test_values_are_immutable():
    with pytest.raises(AttributeError):
        NumberValue(1).val = 2
    source = {"a": Nil}
    mapping = MapValue(source)
    source["b"] = Nil
    assert "b" not in mapping.vals


def test_function_call_passes_arguments():
    seen = []
    fn = FunctionValue(lambda env, args: seen.append((env, args)) or Nil)
    assert fn.call("env", [NumberValue(1)]) is Nil
    assert seen == [("env", [NumberValue(1)])]


# -----------------------------------------------------
# Errors
# -----------------------------------------------------

POS = ScannerPosition("f.gl", 3, 7)


def test_all_errors_share_a_base():
    for cls in (ForbiddenCharacterError, ParseError, UnexpectedEOFError,
                GlispTypeError, EvalError, ArgumentError):
        assert issubclass(cls, GlispError)
    assert issubclass(UnexpectedEOFError, ParseError)


def test_position_rendering():
    assert str(POS) == "f.gl:3:7"


@pytest.mark.parametrize(
    "pos,expected",
    [
        (ScannerPosition(), "<string>:1:1"),
        (ScannerPosition("f.gl"), "f.gl:1:1"),
        (ScannerPosition("f.gl", 4), "f.gl:4:1"),
    ]
)
def test_default_position_is_first_column(pos, expected):
    assert str(pos) == expected


def test_parse_error_takes_position_from_token():
    token = ScannedToken(TokenType.OPERATOR, "&&", POS)
    err = ParseError("unrecognized operator", token)
    assert err.pos == POS
    assert str(err) == "Parse error unrecognized operator for token `&&` (f.gl:3:7)"


def test_unexpected_eof_error():
    err = UnexpectedEOFError("parse ended inside of call", POS)
    assert err.token is None
    assert str(err) == "Parse error parse ended inside of call (f.gl:3:7)"


def test_type_error_message():
    err = GlispTypeError("bool", "number", POS)
    assert (err.expected, err.actual) == ("bool", "number")
    assert str(err) == "Type error: expected 'bool', got 'number' (f.gl:3:7)"
    assert str(GlispTypeError("a", "b")) == "Type error: expected 'a', got 'b'"


def test_eval_error_message():
    assert str(EvalError("boom")) == "Eval error: boom"
    assert EvalError("boom", POS).pos == POS


def test_argument_error_fields():
    err = ArgumentError("listGet", 1, "expected 'number', got 'string'", "number", "string")
    assert (err.fn_name, err.arg_index, err.expected, err.actual) == ("listGet", 1, "number", "string")
    assert str(err) == "Argument error in 'listGet' at arg 1: expected 'number', got 'string'"


def test_forbidden_character_message():
    err = ForbiddenCharacterError("\x00", POS)
    assert str(err) == "Forbidden character 0x0 found in scan of f.gl:3:7"
