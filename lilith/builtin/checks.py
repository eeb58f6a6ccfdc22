"""Argument validation shared by the builtins.

Each check returns an Error describing the first violation, or None. Builtins
run all their checks before touching the argument bundle, so a failing call
has no side effects.
"""

from __future__ import annotations

from typing import Optional

from lilith import LispValue
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import Expression, QExpression
from lilith.types.value import type_name

# Diagnostic names for the classes builtins ask for by type
_EXPECTED_NAMES: dict[type, str] = {
    QExpression: "Q-Expression",
}


def check_env(env: Optional[Environment], name: str) -> Optional[Error]:
    if env is None:
        return Error("environment not set for '%s'", name)
    return None


def check_count(args: Expression, expected: int, name: str) -> Optional[Error]:
    if len(args) != expected:
        return Error(
            "function '%s' expects %d argument, received %d", name, expected, len(args)
        )
    return None


def check_min_count(args: Expression, minimum: int, name: str) -> Optional[Error]:
    if len(args) < minimum:
        return Error(
            "function '%s' expects at least %d argument, received %d",
            name, minimum, len(args),
        )
    return None


def check_type(args: Expression, index: int, expected: type, name: str) -> Optional[Error]:
    """Argument `index` must be an instance of `expected`."""
    if index >= len(args):
        return check_min_count(args, index + 1, name)
    arg: LispValue = args[index]
    if not isinstance(arg, expected):
        return type_mismatch(name, _EXPECTED_NAMES.get(expected, expected.__name__), arg)
    return None


def check_not_empty(args: Expression, index: int, name: str) -> Optional[Error]:
    if len(args[index]) == 0:
        return Error("empty q-expression passed to '%s'", name)
    return None


def type_mismatch(name: str, expected: str, received: LispValue) -> Error:
    return Error(
        "function '%s' type mismatch - expected %s, received %s",
        name, expected, type_name(received),
    )
