"""Arithmetic and comparison builtins.

Every operator is a pair of native operations, one over two Integers and one
over two floats. `promote_and_apply` picks the integer one only when both
operands are Integers; otherwise both operands are coerced to float.
"""

from __future__ import annotations

import math
from enum import Enum
from functools import partial
from typing import Callable

from lilith import LispValue
from lilith.builtin.checks import check_count, check_env, check_min_count, type_mismatch
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import SExpression
from lilith.types.value import is_integer, is_number, wrap_int


class ArithOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    MAX = "max"
    MIN = "min"
    MOD = "%"


class CompareOp(Enum):
    GT = ">"
    LT = "<"
    GTE = ">="
    LTE = "<="


def _divide_by_zero() -> Error:
    return Error("divide by zero")


# -------------------------------
# Integer operations
# -------------------------------
def _add_i(x: int, y: int) -> LispValue:
    return wrap_int(x + y)


def _sub_i(x: int, y: int) -> LispValue:
    return wrap_int(x - y)


def _mul_i(x: int, y: int) -> LispValue:
    return wrap_int(x * y)


def _div_i(x: int, y: int) -> LispValue:
    # Always a Decimal
    return _divide_by_zero() if y == 0 else x / y


def _pow_i(x: int, y: int) -> LispValue:
    if y >= 0:
        return wrap_int(pow(x, y, 1 << 64))
    if x == 0:
        return _divide_by_zero()
    # Negative exponent: truncate the fractional result toward zero
    return wrap_int(int(x ** y))


def _max_i(x: int, y: int) -> LispValue:
    return x if x > y else y


def _min_i(x: int, y: int) -> LispValue:
    return x if x < y else y


def _mod_i(x: int, y: int) -> LispValue:
    if y == 0:
        return _divide_by_zero()
    # Remainder takes the sign of the dividend
    r = abs(x) % abs(y)
    return -r if x < 0 else r


# -------------------------------
# Floating point operations
# -------------------------------
def _add_f(x: float, y: float) -> LispValue:
    return x + y


def _sub_f(x: float, y: float) -> LispValue:
    return x - y


def _mul_f(x: float, y: float) -> LispValue:
    return x * y


def _div_f(x: float, y: float) -> LispValue:
    return _divide_by_zero() if y == 0.0 else x / y


def _pow_f(x: float, y: float) -> LispValue:
    if x == 0.0 and y < 0.0:
        return _divide_by_zero()
    try:
        return math.pow(x, y)
    except ValueError:
        return Error("function '^' domain error")
    except OverflowError:
        return Error("function '^' result out of range")


def _max_f(x: float, y: float) -> LispValue:
    return x if x > y else y


def _min_f(x: float, y: float) -> LispValue:
    return x if x < y else y


def _mod_f(x: float, y: float) -> LispValue:
    if y == 0.0:
        return _divide_by_zero()
    try:
        return math.fmod(x, y)
    except ValueError:
        # Infinite dividend
        return Error("function '%s' domain error", "%")


BinaryOp = Callable[..., LispValue]

OPERATIONS: dict[ArithOp, tuple[BinaryOp, BinaryOp]] = {
    ArithOp.ADD: (_add_i, _add_f),
    ArithOp.SUB: (_sub_i, _sub_f),
    ArithOp.MUL: (_mul_i, _mul_f),
    ArithOp.DIV: (_div_i, _div_f),
    ArithOp.POW: (_pow_i, _pow_f),
    ArithOp.MAX: (_max_i, _max_f),
    ArithOp.MIN: (_min_i, _min_f),
    ArithOp.MOD: (_mod_i, _mod_f),
}

COMPARISONS: dict[CompareOp, Callable[[float, float], bool]] = {
    CompareOp.GT: lambda x, y: x > y,
    CompareOp.LT: lambda x, y: x < y,
    CompareOp.GTE: lambda x, y: x >= y,
    CompareOp.LTE: lambda x, y: x <= y,
}


def promote_and_apply(op: ArithOp, x: LispValue, y: LispValue) -> LispValue:
    """Apply `op` to two numbers using integer semantics only for two Integers."""
    int_op, float_op = OPERATIONS[op]
    if is_integer(x) and is_integer(y):
        return int_op(x, y)
    return float_op(float(x), float(y))


def negate(x: LispValue) -> LispValue:
    return wrap_int(-x) if is_integer(x) else -x


def _check_numeric(args: SExpression, name: str) -> Error | None:
    for arg in args:
        if not is_number(arg):
            return type_mismatch(name, "numeric", arg)
    return None


# -------------------------------
# Builtins
# -------------------------------
def builtin_op(env: Environment, name: str, args: SExpression, op: ArithOp) -> LispValue:
    """Fold `op` left to right over the arguments.

    All arguments are validated before any arithmetic happens. A lone
    argument to subtraction is negated.
    """
    if err := check_env(env, name) or _check_numeric(args, name) or check_min_count(args, 1, name):
        return err

    x = args.pop()
    if not args and op is ArithOp.SUB:
        return negate(x)

    while args:
        x = promote_and_apply(op, x, args.pop())
        if isinstance(x, Error):
            args.clear()
            return x
    return x


def builtin_compare(env: Environment, name: str, args: SExpression, op: CompareOp) -> LispValue:
    """Compare exactly two numbers as floats."""
    if err := check_env(env, name) or check_count(args, 2, name) or _check_numeric(args, name):
        return err
    x, y = args.pop(), args.pop()
    return COMPARISONS[op](float(x), float(y))


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    for op in ArithOp:
        env.register(op.value, partial(builtin_op, op=op))
    for cmp in CompareOp:
        env.register(cmp.value, partial(builtin_compare, op=cmp))
