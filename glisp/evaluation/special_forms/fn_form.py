from glisp import Value
from glisp.ast import FnExpr
from glisp.evaluation.apply import EvaluatorFn, make_closure
from glisp.types.environment import Environment


def fn_form(expr: FnExpr, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    # (fn (params) body...) does not run the body; it closes over env.
    # An empty body makes a function that returns nil.
    return make_closure(expr, env, evaluate_fn)
