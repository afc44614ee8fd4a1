"""Application engine for glisp.

This module centralizes function application semantics for the interpreter:
- Application of FunctionValues (built-ins and closures alike) with the
  already-evaluated argument values.
- Construction of closures from `fn` expressions. A closure captures the
  frame it was created in; every invocation binds its parameters in a fresh
  child of that frame, never of the caller's frame.

Keeping this logic in one place prevents duplication between the evaluator,
special forms, and the higher-order built-ins.
"""

from __future__ import annotations

from typing import Callable

from glisp import Value
from glisp.ast import FnExpr, Expr
from glisp.errors import EvalError, GlispTypeError
from glisp.types.environment import Environment
from glisp.types.nil import Nil
from glisp.types.values import FunctionValue, kind_of

EvaluatorFn = Callable[[Expr, Environment], Value]


def apply(head: Value, args: list[Value], env: Environment) -> Value:
    """Apply a function value to evaluated arguments.

    `env` is the caller's environment; built-ins receive it so they can call
    back into other functions. Closures ignore it.
    """
    if not isinstance(head, FunctionValue):
        raise GlispTypeError("function", kind_of(head))
    return head.call(env, args)


def make_closure(fn_expr: FnExpr, env: Environment, evaluate_fn: EvaluatorFn) -> FunctionValue:
    """Build the function value for an `fn` expression evaluated in `env`."""
    params = fn_expr.params

    def closure(_caller_env: Environment, args: list[Value]) -> Value:
        if len(args) != len(params):
            raise EvalError(
                f"expected {len(params)} arguments in call; got {len(args)}",
                fn_expr.pos,
            )
        call_env = env.sub_environment(dict(zip(params, args)))
        result: Value = Nil
        for body_expr in fn_expr.body:
            result = evaluate_fn(body_expr, call_env)
        return result

    return FunctionValue(closure)
