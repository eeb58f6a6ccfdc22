"""
  Lilith Reader, Lexer and Parser

- Streaming, lazy parsing
- Emits Lilith values directly:

    - integers       -> int
    - decimals       -> float
    - #t / #f        -> bool
    - strings        -> str (backslash escapes decoded)
    - symbols        -> Symbol
    - ( ... )        -> SExpression
    - { ... }        -> QExpression

A whole source text reads as one S-expression of its top-level forms, so
`+ 1 2` and `(+ 1 2)` both evaluate to 3.
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from lilith import LispValue
from lilith.errors import LilithSyntaxError
from lilith.types.expression import Expression, QExpression, SExpression
from lilith.types.symbol import Symbol
from lilith.types.value import INT64_MAX, INT64_MIN


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted strings
    r'|(?P<symbol>[^\s(){}";]+)'  # fallback: atoms
    r")",
    re.DOTALL,
)

INTEGER_RE = re.compile(r"-?\d+")
DECIMAL_RE = re.compile(r"-?(?:\d+\.\d*|\.\d+)(?:[eE][-+]?\d+)?|-?\d+[eE][-+]?\d+")
SYMBOL_RE = re.compile(r"[A-Za-z0-9_+\-*/\\=<>!&%^]+")

UNESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}

CLOSERS: dict[str, tuple[str, type[Expression]]] = {
    "lparen": ("rparen", SExpression),
    "lbrace": ("rbrace", QExpression),
}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos:].isspace():
                return
            raise LilithSyntaxError(f"Unexpected char at {pos}: {source[pos]!r}")
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            if m.group(nm):
                if nm != "comment":
                    yield nm, m.group(nm)
                break


def unescape(body: str) -> str:
    out: list[str] = []
    chars = iter(body)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt is None or nxt not in UNESCAPES:
            raise LilithSyntaxError(f"Invalid escape sequence in string: \\{nxt or ''}")
        out.append(UNESCAPES[nxt])
    return "".join(out)


def parse_atom(tok_val: str) -> LispValue:
    if tok_val == "#t":
        return True
    if tok_val == "#f":
        return False
    if INTEGER_RE.fullmatch(tok_val):
        value = int(tok_val)
        if not INT64_MIN <= value <= INT64_MAX:
            raise LilithSyntaxError(f"Integer literal out of range: {tok_val}")
        return value
    if DECIMAL_RE.fullmatch(tok_val):
        return float(tok_val)
    if SYMBOL_RE.fullmatch(tok_val):
        return Symbol(tok_val)
    raise LilithSyntaxError(f"Invalid symbol: {tok_val!r}")


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> Optional[LispValue]:
        """Parse one form; None at end of input."""
        tok_type, tok_val = self.peek()
        if tok_type is None:
            return None

        if tok_type == "symbol":
            self.advance()
            return parse_atom(tok_val)

        if tok_type == "string":
            self.advance()
            return unescape(tok_val[1:-1])

        if tok_type in CLOSERS:
            self.advance()
            closer, cls = CLOSERS[tok_type]
            expr = cls()
            while True:
                nxt = self.peek()[0]
                if nxt == closer:
                    self.advance()
                    return expr
                if nxt is None:
                    raise LilithSyntaxError(f"Unmatched '{tok_val}'")
                if nxt in ("rparen", "rbrace"):
                    raise LilithSyntaxError(f"Mismatched closing bracket for '{tok_val}'")
                expr.append(self.parse_expr())

        raise LilithSyntaxError(f"Unexpected token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[LispValue]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def read(source: str) -> SExpression:
    """Read all top-level forms of `source` into one S-expression."""
    return SExpression(TokenStream(lex(source)).parse_all())
