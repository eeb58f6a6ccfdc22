from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from lilith.config import get_prelude_path

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def read_prelude(path: Path | None = None) -> str:
    """Return the bootstrap library source (configured or packaged)."""
    p = path if path is not None else get_prelude_path()
    if not p.is_file():
        raise FileNotFoundError(f"Cannot find bootstrap library '{p}' (see LILITH_PRELUDE_PATH)")
    logger.debug("reading bootstrap library from %s", p)
    return p.read_text(encoding='utf-8')


def load_prelude(itp: _HasEvalPrelude, path: Path | None = None) -> None:
    itp.eval_prelude(read_prelude(path))
