# Core type aliases for Lilith's data model.
# Runtime values are plain Python scalars (int, float, bool, str) plus the small
# classes in lilith.types (Symbol, Error, SExpression, QExpression, Builtin,
# Lambda). Code and data share one representation: an S-expression read from
# source is the same kind of object the evaluator reduces.
#
# Naming guidance:
# - LispValue:  any runtime value (evaluated or not).
# - BuiltinFn:  native operation signature, fn(env, name, args) -> LispValue.

from typing import Any, Callable

LispValue = Any

# Native operations receive the calling environment, the name they were
# registered under and the (consumed) argument bundle.
BuiltinFn = Callable[..., LispValue]
