"""Registry of special forms for the glisp evaluator.

Maps special-form node types to handler functions that implement their
non-standard evaluation rules. The parser has already recognized the forms,
so the evaluator dispatches on the node type alone.
"""

from glisp.ast import FnExpr, IfExpr, LetExpr
from glisp.evaluation.special_forms.fn_form import fn_form
from glisp.evaluation.special_forms.if_form import if_form
from glisp.evaluation.special_forms.let_form import let_form

SPECIAL_FORMS = {
    IfExpr: if_form,
    FnExpr: fn_form,
    LetExpr: let_form,
}
