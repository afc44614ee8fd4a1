from __future__ import annotations


class NilValue:
    """The nil value. There is exactly one instance, `Nil`."""

    __slots__ = ()
    kind = "nil"

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilValue)

    def __hash__(self):
        return hash(NilValue)

    def inspect_str(self) -> str:
        return "nil"


Nil = NilValue()
