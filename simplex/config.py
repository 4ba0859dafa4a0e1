from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

from simplex.errors import DEFAULT_SOURCE_ID


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (simplex package directory)
_SIMPLEX_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _SIMPLEX_DIR / 'prelude'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('SIMPLEX_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_default_source_id() -> str:
    return os.environ.get('SIMPLEX_SOURCE_ID') or DEFAULT_SOURCE_ID


DEFAULT_RECURSION_LIMIT = 10000


def get_recursion_limit() -> int:
    """Python frame limit in effect while Simplex code runs; each language call costs several frames."""
    raw = os.environ.get('SIMPLEX_RECURSION_LIMIT')
    if not raw:
        return DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 1000)
    except ValueError:
        return DEFAULT_RECURSION_LIMIT
