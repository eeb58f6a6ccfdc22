"""Runtime environment for Lilith.

An Environment maps Symbols to owned values and links to an enclosing scope
through `parent`. Lookups walk the chain outwards and hand back a copy of the
stored value, never the value itself. The root scope holds the builtins and is
read-only: rebinding a name already present there is rejected.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lilith import LispValue, BuiltinFn
from lilith.errors import LilithInvalidSymbol
from lilith.types.builtin_fn import Builtin
from lilith.types.error_value import Error
from lilith.types.expression import QExpression
from lilith.types.symbol import Symbol
from lilith.types.value import copy_value


class Environment:
    """Hierarchical mapping from Symbols to Lilith values."""

    __slots__ = ("table", "parent", "read_only")

    def __init__(self, parent: Optional[Environment] = None, read_only: bool = False):
        # Insertion ordered, which fixes the enumeration order of to_value()
        self.table: dict[Symbol, LispValue] = {}
        self.parent: Environment | None = parent
        self.read_only: bool = read_only

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.table:
                return env
            env = env.parent
        return None

    def get(self, name: Symbol) -> LispValue:
        """Return a copy of the value bound to `name`.

        An unbound name yields an Error value rather than raising.
        """
        env = self.find(name)
        if env is None:
            return Error("unbound symbol '%s'", name)
        return copy_value(env.table[name])

    def put(self, name: Symbol, value: LispValue) -> bool:
        """Bind a copy of `value` to `name` in this frame.

        Returns True when the binding was rejected: the frame is read-only and
        already binds `name`. Writable frames accept overwrites.
        """
        if not isinstance(name, Symbol):
            raise LilithInvalidSymbol(f"Cannot bind {name!r} as a symbol")
        if self.read_only and name in self.table:
            return True
        self.table[name] = copy_value(value)
        return False

    def is_protected(self, name: Symbol) -> bool:
        """True if a read-only frame anywhere on the chain binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if env.read_only and name in env.table:
                return True
            env = env.parent
        return False

    def register(self, name: str, fn: BuiltinFn) -> None:
        """Install a native operation, bypassing read-only protection."""
        self.table[Symbol(name)] = Builtin(name, fn)

    def copy(self) -> Environment:
        """Independent frame with the same parent, flag and copied bindings."""
        env = Environment(self.parent, self.read_only)
        for k, v in self.table.items():
            env.table[k] = copy_value(v)
        return env

    def to_value(self) -> QExpression:
        """This frame's bindings as a Q-expression of {"name" value} pairs."""
        rv = QExpression()
        for k, v in self.table.items():
            rv.append(QExpression([k.id, copy_value(v)]))
        return rv

    @property
    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.table.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Chain representation for debugging; read-only frames are marked."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf = StringIO()
                if env.read_only:
                    env_buf.write("ro")
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.parent
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
