"""User-defined functions (closures)."""

from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING

from lilith.types.expression import QExpression

if TYPE_CHECKING:
    from lilith.types.environment import Environment


class Lambda:
    """A closure: formal parameters, a body and the function's own scope.

    `env` is a frame private to this function whose parent is the scope the
    lambda was created in. The parent link is an ordinary reference, so the
    defining scope stays alive for as long as any copy of the closure does,
    even after the call frame that created it has returned.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(self, formals: QExpression, body: QExpression, env: Environment):
        self.formals: QExpression = formals
        self.body: QExpression = body
        self.env: Environment = env

    def __eq__(self, other: object) -> bool:
        # The captured environment does not take part in equality
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
        )

    __hash__ = None

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
