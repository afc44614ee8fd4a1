from glisp import Value
from glisp.ast import LetExpr
from glisp.evaluation.apply import EvaluatorFn
from glisp.types.environment import Environment


def let_form(expr: LetExpr, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """
    (let name value)
    Binds in the current frame (no new scope is opened) and returns the value.
    """
    value = evaluate_fn(expr.value, env)
    env.define(expr.ident.name, value)
    return value
