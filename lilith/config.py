from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (lilith package directory)
_LILITH_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _LILITH_DIR / 'prelude'
PRELUDE_FILE_NAME = 'std.llth'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_path() -> Path:
    roots = paths_from_env('LILITH_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # first entry wins; a directory is expected to hold std.llth
    p = roots[0]
    return p / PRELUDE_FILE_NAME if p.is_dir() else p


def prelude_is_configured() -> bool:
    return bool(os.environ.get('LILITH_PRELUDE_PATH', '').strip())
