from glisp import Value
from glisp.ast import IfExpr
from glisp.errors import GlispTypeError
from glisp.evaluation.apply import EvaluatorFn
from glisp.types.environment import Environment
from glisp.types.values import BoolValue, kind_of


def if_form(expr: IfExpr, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    """(if cond then else)

    The condition must be a bool; only the selected branch is evaluated.
    """
    cond = evaluate_fn(expr.cond, env)
    if not isinstance(cond, BoolValue):
        raise GlispTypeError("bool", kind_of(cond), expr.cond.pos)

    if cond.val:
        return evaluate_fn(expr.then_branch, env)
    return evaluate_fn(expr.else_branch, env)
