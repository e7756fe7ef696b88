from __future__ import annotations

import importlib
from typing import Dict, List, Optional

from .types import (
    BuiltinFn,
    MkBuiltin,
    MkError,
    MkValue,
)

_STDLIB_INITIALIZED = False


class Builtins:
    functions: Dict[str, MkBuiltin] = {}


def init_stdlib() -> None:
    """Load the stdlib module (idempotent) so register_builtin hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("monkey_ref.stdlib")
    _STDLIB_INITIALIZED = True


def register_builtin(name: str):
    def dec(fn: BuiltinFn):
        Builtins.functions[name] = MkBuiltin(name=name, fn=fn)
        return fn

    return dec


def lookup_builtin(name: str) -> Optional[MkBuiltin]:
    init_stdlib()
    return Builtins.functions.get(name)


def new_error(message: str) -> MkError:
    return MkError(message)


def expect_arity(args: List[MkValue], expected: int) -> Optional[MkError]:
    if len(args) != expected:
        return new_error(f"wrong number of arguments. got={len(args)}, want={expected}")
    return None
