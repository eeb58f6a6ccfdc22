"""Tree-walking evaluator for Lilith.

Symbols are looked up, S-expressions are reduced, and every other value
(numbers, booleans, strings, errors, Q-expressions, functions) evaluates to
itself. The evaluator recurses once per level of expression nesting, so very
deep user recursion ends in Python's RecursionError; no stack-safety is
promised.
"""

from __future__ import annotations

from lilith import LispValue
from lilith.evaluation.apply import apply
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.expression import SExpression
from lilith.types.symbol import Symbol
from lilith.types.value import is_function, type_name


def evaluate(env: Environment, value: LispValue) -> LispValue:
    """Reduce `value` in `env`. The value is consumed."""
    match value:
        case Symbol():
            return env.get(value)
        case SExpression():
            return evaluate_sexpr(env, value)
    return value


def evaluate_sexpr(env: Environment, expr: SExpression) -> LispValue:
    # Evaluate children left to right in place: each one is popped from the
    # front and its result appended at the back, so after one full pass the
    # order is restored. The first Error ends the pass and the rest is dropped.
    for _ in range(len(expr)):
        result = evaluate(env, expr.pop())
        if isinstance(result, Error):
            expr.clear()
            return result
        expr.append(result)

    if not expr:
        return expr

    if len(expr) == 1:
        return expr.take(0)

    head = expr.pop()
    if not is_function(head):
        expr.clear()
        return Error("s-expression does not start with function, '%s'", type_name(head))

    return apply(head, expr, env, evaluate)


def evaluate_all(env: Environment, forms: SExpression) -> LispValue:
    """Evaluate top-level `forms` one at a time.

    Stops at and returns the first Error; otherwise returns the result of the
    last form, or an empty S-expression when there are none.
    """
    result: LispValue = SExpression()
    while forms:
        result = evaluate(env, forms.pop())
        if isinstance(result, Error):
            forms.clear()
            return result
    return result
