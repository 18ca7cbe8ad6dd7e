from __future__ import annotations
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, List

from lispy.types.errors import LispyConfigError


class ClosureScope(str, Enum):
    """How a closure's environment is treated when the closure is applied.

    FRESH: each application binds into a copy of the closure's environment,
    leaving the applied Lambda untouched.
    SHARED: arguments are bound into the closure's own environment and its
    outer link is reassigned to the caller on every full application.
    """

    FRESH = "fresh"
    SHARED = "shared"


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_HISTORY_NAME = '.lispy_history'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()).expanduser() for p in raw.split(sep) if p.strip()]


def parse_closure_scope(raw: str | ClosureScope) -> ClosureScope:
    if isinstance(raw, ClosureScope):
        return raw
    try:
        return ClosureScope(raw.strip().lower())
    except ValueError:
        choices = ", ".join(s.value for s in ClosureScope)
        raise LispyConfigError(f"Unknown closure scope {raw!r}, expected one of: {choices}")


def get_closure_scope() -> ClosureScope:
    return parse_closure_scope(os.environ.get('LISPY_CLOSURE_SCOPE') or ClosureScope.FRESH)


def get_log_level() -> str:
    return (os.environ.get('LISPY_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()


def get_history_file() -> Path:
    raw = os.environ.get('LISPY_HISTORY_FILE')
    if raw:
        return Path(raw).expanduser()
    return Path.home() / _DEFAULT_HISTORY_NAME


def get_prelude_paths() -> List[Path]:
    return paths_from_env('LISPY_PRELUDE_PATH', [])
