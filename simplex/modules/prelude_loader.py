from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from simplex.config import get_prelude_root
from simplex.errors import SimplexBootstrapError

log = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str, source_id: str = ...) -> None: ...


def core_path(root: Path | None = None) -> Path:
    root = root if root is not None else get_prelude_root()
    return root / 'std' / 'core.simplex'


def load_prelude(itp: _HasEvalPrelude, root: Path | None = None) -> None:
    std_core = core_path(root)
    if not std_core.is_file():
        raise SimplexBootstrapError(
            f"Cannot find bootstrap library '{std_core}' (check SIMPLEX_PRELUDE_PATH)"
        )
    log.debug("loading bootstrap library from %s", std_core)
    itp.eval_prelude(std_core.read_text(encoding='utf-8'), source_id=str(std_core))
