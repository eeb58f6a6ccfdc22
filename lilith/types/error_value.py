"""First-class error values.

Builtins and the evaluator never raise for language-level failures; they
return an Error and every caller inspects the kind of what it got back.
"""

from __future__ import annotations

# Rendered messages never exceed this many bytes (UTF-8).
MAX_ERROR_BYTES = 511


def _truncate(text: str, limit: int = MAX_ERROR_BYTES) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= limit:
        return text
    # drop any multi-byte sequence cut in half
    return raw[:limit].decode("utf-8", errors="ignore")


class Error:
    """An error message built from a %-style template and positional args."""

    __slots__ = ("message",)

    def __init__(self, template: str, *args: object):
        text = template % args if args else template
        self.message: str = _truncate(text)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    __hash__ = None

    def __str__(self) -> str:
        return f"Error: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"
