"""Q-expression builtins: list, head, tail, init, eval, join, len, cons."""

from __future__ import annotations

from lilith import LispValue
from lilith.builtin.checks import check_count, check_env, check_not_empty, check_type
from lilith.evaluation.evaluator import evaluate
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import QExpression, SExpression
from lilith.types.value import is_function, is_number


def _check_single_list(env: Environment, name: str, args: SExpression) -> Error | None:
    return (
        check_env(env, name)
        or check_count(args, 1, name)
        or check_type(args, 0, QExpression, name)
    )


def builtin_list(env: Environment, name: str, args: SExpression) -> LispValue:
    """Retag the evaluated argument bundle as a Q-expression."""
    if err := check_env(env, name):
        return err
    return args.retag(QExpression)


def builtin_head(env: Environment, name: str, args: SExpression) -> LispValue:
    """Return a Q-expression holding only the first element."""
    if err := _check_single_list(env, name, args) or check_not_empty(args, 0, name):
        return err
    rv = args.take(0)
    while len(rv) > 1:
        rv.pop_last()
    return rv


def builtin_tail(env: Environment, name: str, args: SExpression) -> LispValue:
    """Return the Q-expression without its first element."""
    if err := _check_single_list(env, name, args) or check_not_empty(args, 0, name):
        return err
    rv = args.take(0)
    rv.pop()
    return rv


def builtin_init(env: Environment, name: str, args: SExpression) -> LispValue:
    """Return the Q-expression without its last element."""
    if err := _check_single_list(env, name, args) or check_not_empty(args, 0, name):
        return err
    rv = args.take(0)
    rv.pop_last()
    return rv


def builtin_eval(env: Environment, name: str, args: SExpression) -> LispValue:
    """Retag a Q-expression as an S-expression and evaluate it."""
    if err := _check_single_list(env, name, args):
        return err
    expr = args.take(0).retag(SExpression)
    return evaluate(env, expr)


def builtin_join(env: Environment, name: str, args: SExpression) -> LispValue:
    """Concatenate Q-expressions in argument order."""
    if err := check_env(env, name):
        return err
    for i in range(len(args)):
        if err := check_type(args, i, QExpression, name):
            return err

    if not args:
        return QExpression()
    rv = args.pop()
    while args:
        rv.extend(args.pop())
    return rv


def builtin_len(env: Environment, name: str, args: SExpression) -> LispValue:
    """Number of elements in a Q-expression, as an Integer."""
    if err := _check_single_list(env, name, args):
        return err
    return len(args.take(0))


def builtin_cons(env: Environment, name: str, args: SExpression) -> LispValue:
    """Prepend a value or function to a Q-expression."""
    if err := check_env(env, name) or check_count(args, 2, name):
        return err
    first = args[0]
    if not (is_number(first) or isinstance(first, bool) or is_function(first)):
        return Error("first '%s' parameter should be a value or a function", name)
    if not isinstance(args[1], QExpression):
        return Error("second '%s' parameter should be a q-expression", name)

    rv = QExpression()
    rv.append(args.pop())
    rv.extend(args.pop())
    return rv


def register(env: Environment) -> None:
    env.register("list", builtin_list)
    env.register("head", builtin_head)
    env.register("tail", builtin_tail)
    env.register("init", builtin_init)
    env.register("eval", builtin_eval)
    env.register("join", builtin_join)
    env.register("len", builtin_len)
    env.register("cons", builtin_cons)
