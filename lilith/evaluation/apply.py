"""Application engine for Lilith.

Calls a function value on an already-evaluated argument bundle:
- Builtins are invoked as fn(env, name, args) and own the bundle from then on.
- Lambdas bind their formals positionally in a fresh child of the closure's
  scope and evaluate a copy of their body there as an S-expression.

The evaluator is passed in; this module does not import
lilith.evaluation.evaluator.
"""

from __future__ import annotations

from typing import Callable

from lilith import LispValue
from lilith.types.builtin_fn import Builtin
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import SExpression
from lilith.types.lambda_fn import Lambda
from lilith.types.value import copy_value, type_name

EvaluateFn = Callable[[Environment, LispValue], LispValue]


def apply_lambda(fn: Lambda, args: SExpression, evaluate_fn: EvaluateFn) -> LispValue:
    """Apply a Lilith Lambda with exact-arity positional binding."""
    expected = len(fn.formals)
    received = len(args)
    if expected != received:
        return Error(
            "function expects %d argument(s), received %d", expected, received
        )

    local_env = Environment(parent=fn.env)
    for formal in fn.formals:
        local_env.put(formal, args.pop())

    body = copy_value(fn.body).retag(SExpression)
    return evaluate_fn(local_env, body)


def apply(
    head: LispValue,
    args: SExpression,
    env: Environment,
    evaluate_fn: EvaluateFn,
) -> LispValue:
    """Apply either a Builtin or a Lambda to `args`."""
    if isinstance(head, Builtin):
        return head.fn(env, head.name, args)
    if isinstance(head, Lambda):
        return apply_lambda(head, args, evaluate_fn)
    return Error("s-expression does not start with function, '%s'", type_name(head))
