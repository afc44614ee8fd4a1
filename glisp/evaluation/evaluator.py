"""Core evaluator for the glisp interpreter.

Evaluation is a structural match over the closed set of AST node kinds.
Literals produce their value, identifiers resolve through the environment
chain (unresolved names yield nil), calls evaluate callee and arguments
strictly left to right, and special forms dispatch to their handlers.
"""

from __future__ import annotations

from glisp import Value
from glisp.ast import (
    BoolLiteral,
    CallExpr,
    Expr,
    FnExpr,
    FunctionLiteral,
    IdentifierLiteral,
    IfExpr,
    LetExpr,
    NilLiteral,
    NumberLiteral,
    StringLiteral,
)
from glisp.errors import EvalError, GlispTypeError
from glisp.evaluation.apply import apply
from glisp.evaluation.special_forms import SPECIAL_FORMS
from glisp.types.environment import Environment
from glisp.types.nil import Nil
from glisp.types.values import (
    BoolValue,
    FunctionValue,
    NumberValue,
    StringValue,
    kind_of,
)


def evaluate(expr: Expr, env: Environment) -> Value:
    """Evaluate a single expression in `env`."""
    match expr:
        case NumberLiteral(num=num):
            return NumberValue(num)
        case StringLiteral(text=text):
            return StringValue(text)
        case BoolLiteral(flag=flag):
            return BoolValue(flag)
        case NilLiteral():
            return Nil
        case FunctionLiteral(name=name, fn=fn):
            return FunctionValue(fn, name)
        case IdentifierLiteral(name=name):
            return env.lookup(name)
        case CallExpr():
            return evaluate_call(expr, env)
        case IfExpr() | FnExpr() | LetExpr():
            return SPECIAL_FORMS[type(expr)](expr, env, evaluate)

    raise EvalError(f"cannot evaluate node of type {type(expr).__name__}")


def evaluate_call(expr: CallExpr, env: Environment) -> Value:
    # An empty call `()` evaluates to nil.
    if not expr.exprs:
        return Nil

    head, *arg_exprs = expr.exprs
    fn = _evaluate_callee(head, env)
    args = [evaluate(arg, env) for arg in arg_exprs]
    return apply(fn, args, env)


def _evaluate_callee(head: Expr, env: Environment) -> FunctionValue:
    # Unbound identifiers get their own error rather than a type error on nil.
    if isinstance(head, IdentifierLiteral):
        if env.find(head.name) is None:
            raise EvalError(
                f"undefined identifier '{head.name}' cannot be used as function",
                head.pos,
            )
    value = evaluate(head, env)
    if not isinstance(value, FunctionValue):
        raise GlispTypeError("function", kind_of(value), head.pos)
    return value


def evaluate_all(exprs: list[Expr], env: Environment) -> Value:
    """Evaluate expressions in order; return the last value (nil if none)."""
    result: Value = Nil
    for expr in exprs:
        result = evaluate(expr, env)
    return result
