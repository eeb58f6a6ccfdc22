from __future__ import annotations

from lilith import BuiltinFn


class Builtin:
    """A native operation registered under a name in the root scope."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __eq__(self, other: object) -> bool:
        # Identity of the native operation, not the name it was bound under
        return isinstance(other, Builtin) and self.fn is other.fn

    __hash__ = None

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
