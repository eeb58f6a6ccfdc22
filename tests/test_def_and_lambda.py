import pytest

from lilith.evaluation.evaluator import evaluate
from lilith.reader.parser import read
from lilith.types.builtin_fn import Builtin
from lilith.types.error_value import Error
from lilith.types.expression import QExpression, SExpression
from lilith.types.lambda_fn import Lambda
from lilith.types.symbol import Symbol


def run(env, source):
    return evaluate(env, read(source))


# -------------------------------
# def
# -------------------------------
def test_def_binds_in_current_scope(env):
    assert run(env, "(def {x y} 1 (+ 2 3))") == SExpression()
    assert env.table[Symbol("x")] == 1
    assert env.table[Symbol("y")] == 5
    assert run(env, "(+ x y)") == 6


def test_def_overwrites_in_writable_scope(env):
    run(env, "def {x} 1")
    run(env, "def {x} 2")
    assert run(env, "x") == 2


def test_redefining_a_builtin_is_rejected(env, root):
    result = run(env, "def {+} 1")
    assert isinstance(result, Error)
    assert result.message == "function '+' is a built-in"
    assert Symbol("+") not in env.table
    assert isinstance(root.table[Symbol("+")], Builtin)
    assert run(env, "(+ 1 2)") == 3


def test_def_is_transactional(env):
    # `a` is valid but `+` is protected: neither gets bound
    result = run(env, "def {a +} 1 2")
    assert isinstance(result, Error)
    assert "built-in" in result.message
    assert isinstance(run(env, "a"), Error)
    assert run(env, "(+ 1 2)") == 3


def test_def_directly_in_root_accepts_new_names(root):
    assert run(root, "def {fresh} 1") == SExpression()
    assert run(root, "fresh") == 1
    assert isinstance(run(root, "def {fresh} 2"), Error)
    assert run(root, "fresh") == 1


@pytest.mark.parametrize(
    "source,message",
    [
        ("def {a 1} 1 2", "function 'def' type mismatch - expected Symbol, received Number"),
        ("def {a b} 1", "function 'def' argument mismatch - 2 symbols, 1 values"),
        ("def {a} 1 2", "function 'def' argument mismatch - 1 symbols, 2 values"),
        ("def 1 2", "function 'def' type mismatch - expected Q-Expression, received Number"),
    ],
)
def test_def_validation(env, source, message):
    result = run(env, source)
    assert isinstance(result, Error)
    assert result.message == message
    assert not env.table


# -------------------------------
# lambda
# -------------------------------
def test_lambda_construction(env):
    fn = run(env, r"\ {x y} {+ x y}")
    assert isinstance(fn, Lambda)
    assert fn.formals == QExpression([Symbol("x"), Symbol("y")])
    assert fn.body == QExpression([Symbol("+"), Symbol("x"), Symbol("y")])
    assert fn.env.parent is env


def test_lambda_application(env):
    assert run(env, r"((\ {x y} {+ x y}) 2 3)") == 5
    assert run(env, r"((\ {x} {x}) 7)") == 7
    assert run(env, r"((\ {} {+ 1 2}) 0)") == Error("function expects 0 argument(s), received 1")


def test_lambda_can_be_called_repeatedly(env):
    run(env, r"def {add} (\ {x y} {+ x y})")
    assert run(env, "add 1 2") == 3
    assert run(env, "add 10 20") == 30


def test_lambda_arity_is_exact(env):
    run(env, r"def {add} (\ {x y} {+ x y})")
    result = run(env, "add 1")
    assert isinstance(result, Error)
    assert result.message == "function expects 2 argument(s), received 1"
    result = run(env, "add 1 2 3")
    assert result.message == "function expects 2 argument(s), received 3"


@pytest.mark.parametrize(
    "source,message",
    [
        (r"\ {x}", "function '\\' expects 2 argument, received 1"),
        (r"\ {1} {x}", "function '\\' type mismatch - expected Symbol, received Number"),
        (r"\ {x} 1", "function '\\' type mismatch - expected Q-Expression, received Number"),
    ],
)
def test_lambda_validation(env, source, message):
    result = run(env, source)
    assert isinstance(result, Error)
    assert result.message == message


def test_recursion_through_the_defining_scope(env):
    run(env, r"def {twice} (\ {f x} {f (f x)})")
    run(env, r"def {inc} (\ {x} {+ x 1})")
    assert run(env, "twice inc 5") == 7
    # functions defined later are visible to earlier ones at call time
    run(env, r"def {later-user} (\ {x} {helper x})")
    run(env, r"def {helper} (\ {x} {* x 10})")
    assert run(env, "later-user 4") == 40


# -------------------------------
# Scoping
# -------------------------------
def test_call_scope_bindings_vanish_after_return(env):
    run(env, r"def {f} (\ {x} {def {inner} x})")
    assert run(env, "f 5") == SExpression()
    result = env.get(Symbol("inner"))
    assert isinstance(result, Error)
    assert result.message == "unbound symbol 'inner'"


def test_outer_bindings_visible_from_nested_scope(env):
    run(env, "def {y} 10")
    run(env, r"def {g} (\ {x} {+ x y})")
    assert run(env, "g 1") == 11


def test_formals_shadow_outer_bindings(env):
    run(env, "def {x} 100")
    run(env, r"def {f} (\ {x} {* x 2})")
    assert run(env, "f 3") == 6
    assert run(env, "x") == 100


def test_closure_outlives_its_defining_call(env):
    run(env, r"def {adder} (\ {x} {\ {y} {+ x y}})")
    run(env, "def {add5} (adder 5)")
    run(env, "def {add7} (adder 7)")
    assert run(env, "add5 10") == 15
    assert run(env, "add7 10") == 17


def test_lexical_not_dynamic_scope(env):
    run(env, "def {n} 1")
    run(env, r"def {peek} (\ {k} {+ n k})")
    run(env, r"def {caller} (\ {n} {peek 0})")
    # peek sees the n of the scope it was defined in, not the caller's
    assert run(env, "caller 99") == 1
