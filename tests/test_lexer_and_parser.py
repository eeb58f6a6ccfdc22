import pytest
from hypothesis import given, strategies as st

from lilith.errors import LilithSyntaxError
from lilith.reader.parser import lex, read, TokenStream
from lilith.types.expression import QExpression, SExpression
from lilith.types.printer import show
from lilith.types.symbol import Symbol
from lilith.types.value import INT64_MAX, INT64_MIN


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a", [("symbol", "a")]),
        ("(a b)", [("lparen", "("), ("symbol", "a"), ("symbol", "b"), ("rparen", ")")]),
        ("{1 2}", [("lbrace", "{"), ("symbol", "1"), ("symbol", "2"), ("rbrace", "}")]),
        ('"hello"', [("string", '"hello"')]),
        ('"a \\" b"', [("string", '"a \\" b"')]),
        (" ; comment\n a b", [("symbol", "a"), ("symbol", "b")]),
        ("x ; trailing", [("symbol", "x")]),
        ("(+ 1{2})", [("lparen", "("), ("symbol", "+"), ("symbol", "1"), ("lbrace", "{"),
                      ("symbol", "2"), ("rbrace", "}"), ("rparen", ")")]),
        ("   \n\t ", []),
    ],
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("123", 123),
        ("-45", -45),
        ("3.14", 3.14),
        ("-.5", -0.5),
        ("1e3", 1000.0),
        ("#t", True),
        ("#f", False),
        ("foo", Symbol("foo")),
        ("-", Symbol("-")),
        ("\\", Symbol("\\")),
        ("list->q", Symbol("list->q")),
        ('"a\\nb"', "a\nb"),
        ('"tab\\there"', "tab\there"),
        ('""', ""),
        ("(+ 1 2)", SExpression([Symbol("+"), 1, 2])),
        ("{a {b}}", QExpression([Symbol("a"), QExpression([Symbol("b")])])),
        ("()", SExpression()),
    ],
)
def test_parse_single_form(source, expected):
    forms = read(source)
    assert len(forms) == 1
    result = forms[0]
    assert type(result) is type(expected)
    assert result == expected


def test_read_wraps_top_level_forms():
    forms = read("(def {x} 1) x 2")
    assert isinstance(forms, SExpression)
    assert len(forms) == 3
    assert show(forms) == "((def {x} 1) x 2)"
    assert read("") == SExpression()


def test_parse_all_is_lazy():
    stream = TokenStream(lex("1 (2 3) {4}"))
    items = stream.parse_all()
    assert next(items) == 1
    assert next(items) == SExpression([2, 3])
    assert next(items) == QExpression([4])
    assert next(items, None) is None


@pytest.mark.parametrize(
    "source",
    ["(+ 1", "{1 2)", ")", "}", '"unterminated', "a'b", "#x", "empty?", "9223372036854775808", '"bad \\q"'],
)
def test_syntax_errors(source):
    with pytest.raises(LilithSyntaxError):
        read(source)


@given(st.integers(min_value=INT64_MIN, max_value=INT64_MAX))
def test_integers_read_back(n):
    assert read(show(n))[0] == n


@given(st.floats(allow_nan=False, allow_infinity=False))
def test_decimals_read_back_from_repr(x):
    result = read(repr(x))[0]
    assert isinstance(result, float)
    assert result == x
