"""Canonical textual form of Lilith values."""

from __future__ import annotations

from lilith import LispValue
from lilith.types.builtin_fn import Builtin
from lilith.types.error_value import Error
from lilith.types.expression import Expression
from lilith.types.lambda_fn import Lambda
from lilith.types.symbol import Symbol

ESCAPES: dict[str, str] = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\0": "\\0",
    "\\": "\\\\",
    '"': '\\"',
}


def escape_string(text: str) -> str:
    return '"' + "".join(ESCAPES.get(ch, ch) for ch in text) + '"'


def show(value: LispValue, literal: bool = True) -> str:
    """Render `value` as text.

    With `literal` False strings are written raw instead of quoted and escaped.
    """
    match value:
        case bool():
            return "#t" if value else "#f"
        case int():
            return str(value)
        case float():
            return f"{value:f}"
        case str():
            return escape_string(value) if literal else value
        case Symbol():
            return value.id
        case Error():
            return f"Error: {value.message}"
        case Expression():
            inner = " ".join(show(cell, literal) for cell in value.cells)
            return f"{value.open_bracket}{inner}{value.close_bracket}"
        case Builtin():
            return "<builtin>"
        case Lambda():
            return f"(\\ {show(value.formals, literal)} {show(value.body, literal)})"
    return repr(value)
