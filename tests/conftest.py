import pytest

from lilith.builtin.env_builtin import register
from lilith.interpreter import Interpreter
from lilith.types.environment import Environment

# Fixtures shared by the test modules:
# - root:   read-only scope holding only the builtins
# - env:    writable child of `root`, like the scope user code runs in
# - bare:   Interpreter without the bootstrap library
# - interp: Interpreter with the packaged bootstrap library loaded


@pytest.fixture
def root():
    e = Environment(read_only=True)
    register(e)
    return e


@pytest.fixture
def env(root):
    return Environment(parent=root)


@pytest.fixture
def bare():
    return Interpreter(prelude=None)


@pytest.fixture
def interp(monkeypatch):
    monkeypatch.delenv("LILITH_PRELUDE_PATH", raising=False)
    return Interpreter()
