from __future__ import annotations
from contextlib import contextmanager
from typing import Iterator, Optional

from lispy.config import ClosureScope, get_closure_scope as _configured_closure_scope

# NOTE: process-global, read by the call protocol on every closure application.
_closure_scope: Optional[ClosureScope] = None


def set_closure_scope(scope: Optional[ClosureScope]) -> None:
    """Set the closure scoping mode; None falls back to configuration."""
    global _closure_scope
    _closure_scope = scope


def get_closure_scope() -> ClosureScope:
    global _closure_scope
    if _closure_scope is None:
        _closure_scope = _configured_closure_scope()
    return _closure_scope


@contextmanager
def closure_scope_override(scope: Optional[ClosureScope]) -> Iterator[None]:
    """Apply ``scope`` for the duration of the block, then restore the previous
    setting. None leaves the current setting untouched.
    """
    global _closure_scope
    if scope is None:
        yield
        return
    saved = _closure_scope
    _closure_scope = scope
    try:
        yield
    finally:
        _closure_scope = saved
