"""Built-in functions for the glisp runtime environment.

This module defines the arithmetic and comparison operators, boolean logic,
pairs, lists, maps and printing. Every built-in takes the caller's environment
and the evaluated argument list, and validates its arguments through an
ArgMapper. Operators are not bound to names: the parser resolves operator
tokens against OPERATORS directly.
"""
from __future__ import annotations

import math
from types import MappingProxyType
from typing import Optional

from glisp import Value
from glisp.builtin.arg_mapper import ArgMapper
from glisp.errors import ArgumentError, EvalError, GlispTypeError
from glisp.evaluation.apply import apply as apply_engine
from glisp.types.environment import Environment
from glisp.types.nil import Nil, NilValue
from glisp.types.values import (
    BoolValue,
    FunctionValue,
    ListValue,
    MapValue,
    NumberValue,
    PairValue,
    StringValue,
    kind_of,
)


# -------------------------------
# Arithmetic
# -------------------------------
def _fold_numbers(name: str, args: list[Value]) -> tuple[float, list[float]]:
    first, rest = ArgMapper.values(name, args).read_number().read_numbers().complete()
    return first.val, [n.val for n in rest]


def add(env: Environment, args: list[Value]) -> Value:
    """Return the sum of one or more numbers."""
    total, rest = _fold_numbers("+", args)
    for n in rest:
        total += n
    return NumberValue(total)


def sub(env: Environment, args: list[Value]) -> Value:
    """Subtract all subsequent numbers from the first, folding left."""
    total, rest = _fold_numbers("-", args)
    for n in rest:
        total -= n
    return NumberValue(total)


def mul(env: Environment, args: list[Value]) -> Value:
    """Return the product of one or more numbers."""
    total, rest = _fold_numbers("*", args)
    for n in rest:
        total *= n
    return NumberValue(total)


def _ieee_div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def div(env: Environment, args: list[Value]) -> Value:
    """Divide the first number by each subsequent number (IEEE semantics)."""
    total, rest = _fold_numbers("/", args)
    for n in rest:
        total = _ieee_div(total, n)
    return NumberValue(total)


# -------------------------------
# Comparison
# -------------------------------
def _two_numbers(name: str, args: list[Value]) -> tuple[float, float]:
    a, b = ArgMapper.values(name, args).read_number().read_number().complete()
    return a.val, b.val


def eq_num(env: Environment, args: list[Value]) -> Value:
    a, b = _two_numbers("==", args)
    return BoolValue(a == b)


def lt_num(env: Environment, args: list[Value]) -> Value:
    a, b = _two_numbers("<", args)
    return BoolValue(a < b)


def gt_num(env: Environment, args: list[Value]) -> Value:
    a, b = _two_numbers(">", args)
    return BoolValue(a > b)


def lte_num(env: Environment, args: list[Value]) -> Value:
    a, b = _two_numbers("<=", args)
    return BoolValue(a <= b)


def gte_num(env: Environment, args: list[Value]) -> Value:
    a, b = _two_numbers(">=", args)
    return BoolValue(a >= b)


# -------------------------------
# Logic
# -------------------------------
def logical_and(env: Environment, args: list[Value]) -> Value:
    """True if every one of the (already evaluated) bools is true."""
    first, rest = ArgMapper.values("and", args).read_bool().read_bools().complete()
    return BoolValue(all(b.val for b in [first, *rest]))


def logical_or(env: Environment, args: list[Value]) -> Value:
    """True if any of the (already evaluated) bools is true."""
    first, rest = ArgMapper.values("or", args).read_bool().read_bools().complete()
    return BoolValue(any(b.val for b in [first, *rest]))


def logical_not(env: Environment, args: list[Value]) -> Value:
    (flag,) = ArgMapper.values("not", args).read_bool().complete()
    return BoolValue(not flag.val)


# -------------------------------
# Strings and pairs
# -------------------------------
def concat(env: Environment, args: list[Value]) -> Value:
    """Join zero or more strings."""
    (strs,) = ArgMapper.values("concat", args).read_strings().complete()
    return StringValue("".join(s.val for s in strs))


def str_eq(env: Environment, args: list[Value]) -> Value:
    a, b = ArgMapper.values("strEq", args).read_string().read_string().complete()
    return BoolValue(a.val == b.val)


def cons(env: Environment, args: list[Value]) -> Value:
    """Build a pair; missing slots are nil."""
    left, right = ArgMapper.values("cons", args).maybe_read_value().maybe_read_value().complete()
    return PairValue(_or_nil(left), _or_nil(right))


def car(env: Environment, args: list[Value]) -> Value:
    (pair,) = ArgMapper.values("car", args).read_pair().complete()
    return pair.left


def cdr(env: Environment, args: list[Value]) -> Value:
    (pair,) = ArgMapper.values("cdr", args).read_pair().complete()
    return pair.right


def _or_nil(value: Optional[Value]) -> Value:
    return Nil if value is None else value


# -------------------------------
# Lists
# -------------------------------
def list_create(env: Environment, args: list[Value]) -> Value:
    return ListValue(args)


def list_get(env: Environment, args: list[Value]) -> Value:
    """Element at a floored index; an index outside the list is an error."""
    lst, num = ArgMapper.values("listGet", args).read_list().read_number().complete()
    if not math.isfinite(num.val):
        raise EvalError(f"listGet index {num.inspect_str()} out of bounds")
    index = math.floor(num.val)
    if index < 0 or index >= len(lst):
        raise EvalError(f"listGet index {index} out of bounds for list of length {len(lst)}")
    return lst.vals[index]


def _keep(result: Value) -> bool:
    # filter callbacks return a bool (keep on true) or nil (drop)
    if isinstance(result, NilValue):
        return False
    if isinstance(result, BoolValue):
        return result.val
    raise GlispTypeError("bool", kind_of(result))


def list_filter(env: Environment, args: list[Value]) -> Value:
    lst, fn = ArgMapper.values("listFilter", args).read_list().read_function().complete()
    return ListValue(v for v in lst.vals if _keep(apply_engine(fn, [v], env)))


def list_map(env: Environment, args: list[Value]) -> Value:
    lst, fn = ArgMapper.values("listMap", args).read_list().read_function().complete()
    return ListValue(apply_engine(fn, [v], env) for v in lst.vals)


def list_reduce(env: Environment, args: list[Value]) -> Value:
    """Left fold: (fn acc elem) starting from the initial value."""
    acc, lst, fn = (
        ArgMapper.values("listReduce", args)
        .read_value()
        .read_list()
        .read_function()
        .complete()
    )
    for v in lst.vals:
        acc = apply_engine(fn, [acc, v], env)
    return acc


def length(env: Environment, args: list[Value]) -> Value:
    """Length of a list, map, or string (in code points)."""
    (value,) = ArgMapper.values("len", args).read_value().complete()
    match value:
        case ListValue() | MapValue():
            return NumberValue(len(value))
        case StringValue(val=text):
            return NumberValue(len(text))
    raise ArgumentError(
        "len", 0, f"cannot get length of '{kind_of(value)}'", "list, string or map", kind_of(value)
    )


# -------------------------------
# Maps
# -------------------------------
def map_create(env: Environment, args: list[Value]) -> Value:
    """Build a map from alternating string keys and values."""
    if len(args) % 2 != 0:
        raise ArgumentError(
            "map", len(args) - 1, f"map expects an even number of arguments; got {len(args)}"
        )
    vals: dict[str, Value] = {}
    for i in range(0, len(args), 2):
        key = args[i]
        if not isinstance(key, StringValue):
            raise ArgumentError(
                "map", i, f"map expects string keys, got '{kind_of(key)}'", "string", kind_of(key)
            )
        vals[key.val] = args[i + 1]
    return MapValue(vals)


def map_get(env: Environment, args: list[Value]) -> Value:
    """Value at a key, or nil if the key is absent."""
    mapping, key = ArgMapper.values("mapGet", args).read_map().read_string().complete()
    return mapping.vals.get(key.val, Nil)


def map_filter(env: Environment, args: list[Value]) -> Value:
    mapping, fn = ArgMapper.values("mapFilter", args).read_map().read_function().complete()
    return MapValue({
        k: v for k, v in mapping.vals.items()
        if _keep(apply_engine(fn, [StringValue(k), v], env))
    })


def map_map(env: Environment, args: list[Value]) -> Value:
    mapping, fn = ArgMapper.values("mapMap", args).read_map().read_function().complete()
    return MapValue({k: apply_engine(fn, [StringValue(k), v], env) for k, v in mapping.vals.items()})


def map_reduce(env: Environment, args: list[Value]) -> Value:
    """Fold (fn acc key value) over the map in insertion order."""
    acc, mapping, fn = (
        ArgMapper.values("mapReduce", args)
        .read_value()
        .read_map()
        .read_function()
        .complete()
    )
    for k, v in mapping.vals.items():
        acc = apply_engine(fn, [acc, StringValue(k), v], env)
    return acc


def map_keys(env: Environment, args: list[Value]) -> Value:
    (mapping,) = ArgMapper.values("mapKeys", args).read_map().complete()
    return ListValue(StringValue(k) for k in mapping.vals)


def map_values(env: Environment, args: list[Value]) -> Value:
    (mapping,) = ArgMapper.values("mapValues", args).read_map().complete()
    return ListValue(mapping.vals.values())


# -------------------------------
# Misc
# -------------------------------
def print_values(env: Environment, args: list[Value]) -> Value:
    """Print inspect strings separated by spaces, then a newline."""
    print(" ".join(v.inspect_str() for v in args))
    return Nil


# -------------------------------
# Registration
# -------------------------------
OPERATORS = MappingProxyType({
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "==": eq_num,
    "<": lt_num,
    ">": gt_num,
    "<=": lte_num,
    ">=": gte_num,
})

_NAMED_BUILTINS = {
    "concat": concat,
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "and": logical_and,
    "or": logical_or,
    "not": logical_not,
    "strEq": str_eq,
    "list": list_create,
    "listGet": list_get,
    "listFilter": list_filter,
    "listMap": list_map,
    "listReduce": list_reduce,
    "len": length,
    "map": map_create,
    "mapGet": map_get,
    "mapFilter": map_filter,
    "mapMap": map_map,
    "mapReduce": map_reduce,
    "mapKeys": map_keys,
    "mapValues": map_values,
    "print": print_values,
}

BUILTINS = MappingProxyType({
    name: FunctionValue(fn, name) for name, fn in _NAMED_BUILTINS.items()
})

_ROOT = Environment(BUILTINS, read_only=True)


def builtin_environment() -> Environment:
    """Return the shared, read-only root frame holding every named built-in."""
    return _ROOT
