"""Binding builtins and root-scope registration.

`def` binds names in the current scope, `\\` builds closures over it and `env`
exposes the current frame for introspection. `register` installs every native
operation into the (read-only) root environment.
"""
from __future__ import annotations

import logging

from lilith import LispValue
from lilith.builtin import arith_builtin, list_builtin
from lilith.builtin.checks import check_count, check_env, check_min_count, check_type, type_mismatch
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import QExpression, SExpression
from lilith.types.lambda_fn import Lambda
from lilith.types.symbol import Symbol

logger = logging.getLogger(__name__)


def _check_symbols(names: QExpression, name: str) -> Error | None:
    for sym in names:
        if not isinstance(sym, Symbol):
            return type_mismatch(name, "Symbol", sym)
    return None


def builtin_def(env: Environment, name: str, args: SExpression) -> LispValue:
    """(def {a b ...} va vb ...) binds each name to its value in `env`.

    Transactional: every name is checked, including against read-only scopes
    up the chain, before any binding is made. Returns ().
    """
    if err := (
        check_env(env, name)
        or check_min_count(args, 1, name)
        or check_type(args, 0, QExpression, name)
    ):
        return err

    names: QExpression = args[0]
    if err := _check_symbols(names, name):
        return err
    if len(names) != len(args) - 1:
        return Error(
            "function '%s' argument mismatch - %d symbols, %d values",
            name, len(names), len(args) - 1,
        )
    for sym in names:
        if env.is_protected(sym):
            return Error("function '%s' is a built-in", sym)

    names = args.pop()
    for sym in names:
        env.put(sym, args.pop())
    return SExpression()


def builtin_lambda(env: Environment, name: str, args: SExpression) -> LispValue:
    """(\\ {formals} {body}) returns a closure over `env`."""
    if err := (
        check_env(env, name)
        or check_count(args, 2, name)
        or check_type(args, 0, QExpression, name)
        or check_type(args, 1, QExpression, name)
        or _check_symbols(args[0], name)
    ):
        return err

    formals = args.pop()
    body = args.pop()
    return Lambda(formals, body, Environment(parent=env))


def builtin_env(env: Environment, name: str, args: SExpression) -> LispValue:
    """Return the current frame's bindings; arguments are ignored."""
    if err := check_env(env, name):
        return err
    args.clear()
    return env.to_value()


def register(env: Environment) -> None:
    """Install all builtins into `env`, normally the read-only root."""
    arith_builtin.register(env)
    list_builtin.register(env)
    env.register("def", builtin_def)
    env.register("\\", builtin_lambda)
    env.register("env", builtin_env)
    logger.debug("registered %d builtins", len(env.table))
