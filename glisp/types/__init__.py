from glisp.types.position import ScannerPosition
from glisp.types.nil import Nil, NilValue
from glisp.types.values import (
    BoolValue,
    FunctionValue,
    ListValue,
    MapValue,
    NumberValue,
    PairValue,
    StringValue,
    Value,
    format_number,
    kind_of,
)
from glisp.types.environment import Environment

__all__ = [
    "ScannerPosition",
    "Nil",
    "NilValue",
    "BoolValue",
    "FunctionValue",
    "ListValue",
    "MapValue",
    "NumberValue",
    "PairValue",
    "StringValue",
    "Value",
    "format_number",
    "kind_of",
    "Environment",
]
