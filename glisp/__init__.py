# Core type aliases for glisp's data model.
#
# Unlike a host-typed Lisp, glisp keeps code and data apart:
# - Expr:  AST nodes produced by the parser (see glisp.ast).
# - Value: runtime values produced by evaluation (see glisp.types.values).
#
# BuiltinFn is the calling convention shared by built-ins and closures: the
# environment of the call site plus the already-evaluated argument values.

from typing import Any, Callable

Value = Any
BuiltinFn = Callable[[Any, list], Any]

__version__ = "0.1.0"
