"""Indented BEGIN/END tracing for the parser.

A `Tracer` is handed to the parser explicitly; there is no module-level
switch, so two sessions can trace (or not) independently.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager, nullcontext
from typing import ContextManager, Iterator, Optional, TextIO

INDENT = "\t"


class Tracer:
    """Writes one line per rule entry/exit, indented by nesting depth."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.level = 0

    def emit(self, text: str) -> None:
        line = f"{INDENT * (self.level - 1)}{text}"
        print(line, file=self.out if self.out is not None else sys.stderr)

    @contextmanager
    def rule(self, name: str) -> Iterator[None]:
        self.level += 1
        self.emit(f"BEGIN {name}")
        try:
            yield
        finally:
            self.emit(f"END {name}")
            self.level -= 1


def traced(tracer: Optional[Tracer], name: str) -> ContextManager[None]:
    if tracer is None:
        return nullcontext()
    return tracer.rule(name)
