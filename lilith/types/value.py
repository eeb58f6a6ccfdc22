"""Kind predicates, structural equality and copying for Lilith values.

Runtime values use plain Python types where one fits:

    Integer  -> int (never bool), wrapped to a signed 64-bit range
    Decimal  -> float
    Boolean  -> bool
    String   -> str
    Symbol   -> lilith.types.symbol.Symbol
    Error    -> lilith.types.error_value.Error
    S/Q-expr -> lilith.types.expression.SExpression / QExpression
    Builtin  -> lilith.types.builtin_fn.Builtin
    Lambda   -> lilith.types.lambda_fn.Lambda

bool is a subclass of int in Python, so every numeric predicate here rules it
out explicitly.
"""

from __future__ import annotations

from lilith import LispValue
from lilith.types.builtin_fn import Builtin
from lilith.types.error_value import Error
from lilith.types.expression import Expression, QExpression, SExpression
from lilith.types.lambda_fn import Lambda
from lilith.types.symbol import Symbol

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int(n: int) -> int:
    """Reduce `n` to the signed 64-bit range using two's-complement wrap."""
    if INT64_MIN <= n <= INT64_MAX:
        return n
    return ((n - INT64_MIN) & 0xFFFFFFFFFFFFFFFF) + INT64_MIN


# -------------------------------
# Kind predicates
# -------------------------------
def is_integer(value: LispValue) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_decimal(value: LispValue) -> bool:
    return isinstance(value, float)


def is_number(value: LispValue) -> bool:
    return is_integer(value) or is_decimal(value)


def is_function(value: LispValue) -> bool:
    return isinstance(value, (Builtin, Lambda))


def type_name(value: LispValue) -> str:
    """Name of the value's kind as it appears in diagnostics."""
    match value:
        case bool():
            return "Boolean"
        case int():
            return "Number"
        case float():
            return "Decimal"
        case str():
            return "String"
        case Symbol():
            return "Symbol"
        case Error():
            return "Error"
        case SExpression():
            return "S-Expression"
        case QExpression():
            return "Q-Expression"
        case Builtin() | Lambda():
            return "Function"
    return "Unknown"


# -------------------------------
# Equality
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Structural equality.

    Integer and Decimal compare equal when numerically equal. Booleans only
    equal booleans. Expressions must share a tag and have equal elements in
    order. Builtins compare by native operation, lambdas by formals and body.
    """
    if is_number(a) and is_number(b):
        return a == b
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Expression) or isinstance(b, Expression):
        if type(a) is not type(b) or len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a.cells, b.cells))
    if type(a) is not type(b):
        return False
    return a == b


# -------------------------------
# Copying
# -------------------------------
def copy_value(value: LispValue) -> LispValue:
    """Return an independent copy of `value`.

    Scalars, symbols, errors and builtins are immutable and returned as-is.
    Expressions are copied element by element. A lambda gets copies of its
    formals and body plus a copy of its own scope, which keeps the parent link
    to the defining scope.
    """
    match value:
        case Expression():
            return type(value)(copy_value(cell) for cell in value.cells)
        case Lambda():
            return Lambda(
                copy_value(value.formals),
                copy_value(value.body),
                value.env.copy(),
            )
    return value
