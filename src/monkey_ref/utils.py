from __future__ import annotations

import os
import sys
from typing import Optional

from .trace import Tracer

TRACE_ENV = "MONKEY_TRACE"

# Each Monkey call nests roughly twenty Python frames.
RECURSION_LIMIT = 20_000
_TRUTHY = ("1", "true", "yes", "on")


def trace_enabled() -> bool:
    """Parser tracing requested through the environment."""
    return os.environ.get(TRACE_ENV, "").strip().lower() in _TRUTHY


def set_trace_enabled(enabled: bool) -> None:
    if enabled:
        os.environ[TRACE_ENV] = "1"
    else:
        os.environ.pop(TRACE_ENV, None)


def make_tracer(enabled: Optional[bool] = None) -> Optional[Tracer]:
    """A stderr tracer when tracing is on, else None."""
    if enabled is None:
        enabled = trace_enabled()
    return Tracer() if enabled else None


def ensure_recursion_limit(limit: int = RECURSION_LIMIT) -> None:
    """Raise the interpreter recursion limit to at least `limit`."""
    if sys.getrecursionlimit() < limit:
        sys.setrecursionlimit(limit)
