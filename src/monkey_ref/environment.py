from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict, Optional, TextIO

if TYPE_CHECKING:
    from .types import MkValue


class Environment:
    """Chained scope. Closures hold a reference to the scope they were made in.

    Not thread-safe; run parallel sessions against separate root environments.
    """

    def __init__(self, outer: Optional[Environment] = None, output: Optional[TextIO] = None):
        self.outer = outer
        self.store: Dict[str, MkValue] = {}
        self.output: Optional[TextIO]

        if output is not None:
            self.output = output
        elif outer is not None:
            self.output = outer.output
        else:
            self.output = None

    @classmethod
    def new_enclosed(cls, outer: Environment) -> Environment:
        return cls(outer=outer)

    def get(self, name: str) -> Optional[MkValue]:
        """Look `name` up here, then outward. None when no scope binds it."""
        env: Optional[Environment] = self

        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer

        return None

    def set(self, name: str, val: MkValue) -> MkValue:
        """Bind in this scope only; outer bindings of the same name are shadowed."""
        self.store[name] = val
        return val

    def write(self, text: str) -> None:
        print(text, file=self.output if self.output is not None else sys.stdout)
