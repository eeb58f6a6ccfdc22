"""S-expressions and Q-expressions.

Both variants carry the same payload, an ordered sequence of values stored in a
deque so that popping from the front and appending at the back are O(1). They
differ only by class: an SExpression is reduced by the evaluator, a QExpression
is inert data. Retagging one into the other moves the cell storage across
without copying any element.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, TypeVar

from lilith import LispValue

E = TypeVar("E", bound="Expression")


class Expression:
    __slots__ = ("cells",)

    open_bracket = ""
    close_bracket = ""

    def __init__(self, cells: Iterable[LispValue] = ()):
        self.cells: deque[LispValue] = deque(cells)

    # --- Sequence protocol ---
    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[LispValue]:
        return iter(self.cells)

    def __getitem__(self, index: int) -> LispValue:
        return self.cells[index]

    # --- Ownership-transferring operations ---
    def append(self, value: LispValue) -> None:
        """Add `value` at the end."""
        self.cells.append(value)

    def prepend(self, value: LispValue) -> None:
        self.cells.appendleft(value)

    def pop(self) -> LispValue:
        """Remove and return the first element; the remainder keeps its order."""
        return self.cells.popleft()

    def pop_last(self) -> LispValue:
        return self.cells.pop()

    def take(self, index: int) -> LispValue:
        """Return element `index` and discard everything else."""
        value = self.cells[index]
        self.cells.clear()
        return value

    def extend(self, other: Expression) -> None:
        """Move every element of `other` onto the end of this expression."""
        while other.cells:
            self.cells.append(other.cells.popleft())

    def clear(self) -> None:
        self.cells.clear()

    def retag(self, cls: type[E]) -> E:
        """Hand this expression's cells to a new `cls` instance.

        The elements themselves are not copied; this expression is left empty.
        """
        if type(self) is cls:
            return self
        other = cls.__new__(cls)
        other.cells = self.cells
        self.cells = deque()
        return other

    def copy(self: E) -> E:
        from lilith.types.value import copy_value
        return copy_value(self)

    # --- Comparison / printing ---
    def __eq__(self, other: object) -> bool:
        from lilith.types.value import is_equal
        return is_equal(self, other)

    __hash__ = None

    def __str__(self) -> str:
        from lilith.types.printer import show
        return show(self)

    def __repr__(self) -> str:
        return str(self)


class SExpression(Expression):
    """An expression pending evaluation."""

    __slots__ = ()

    open_bracket = "("
    close_bracket = ")"


class QExpression(Expression):
    """A literal list; never evaluated unless retagged by `eval`."""

    __slots__ = ()

    open_bracket = "{"
    close_bracket = "}"
