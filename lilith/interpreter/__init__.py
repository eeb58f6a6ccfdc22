from __future__ import annotations
import logging
from typing import Literal

from lilith import LispValue
from lilith.builtin.env_builtin import register
from lilith.config import prelude_is_configured
from lilith.errors import LilithInitError
from lilith.evaluation.evaluator import evaluate, evaluate_all
from lilith.reader.parser import read
from lilith.types.environment import Environment
from lilith.types.error_value import Error
from lilith.types.printer import show

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Owns the scope chain and evaluates Lilith source against it.

    `root` is read-only and holds only the builtins; `env` is its child and
    receives the bootstrap library bindings and every top-level `def`.
    Construction raises LilithInitError if the bootstrap library evaluates to
    an Error, so a half-initialised interpreter is never handed out.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.root: Environment = Environment(read_only=True)
        register(self.root)
        self.env: Environment = Environment(parent=self.root)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import
                from lilith.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError as e:
                if prelude_is_configured():
                    logger.error("%s", e)
                    raise LilithInitError(str(e)) from e
                # Packaged library absent: proceed with builtins only
                logger.warning("%s", e)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        """Evaluate each top-level form of `code`; any Error is fatal."""
        result = evaluate_all(self.env, read(code))
        if isinstance(result, Error):
            logger.error("bootstrap library failed: %s", result.message)
            raise LilithInitError(show(result))
        logger.debug("bootstrap library loaded, %d bindings", len(self.env.table))

    def eval(self, code: str) -> LispValue:
        """Evaluate `code` as a single top-level S-expression of its forms."""
        return evaluate(self.env, read(code))

    def eval_value(self, value: LispValue) -> LispValue:
        """Evaluate an already-read value tree."""
        return evaluate(self.env, value)
