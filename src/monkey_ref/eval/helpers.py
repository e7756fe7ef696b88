from __future__ import annotations

from typing import Callable

from ..environment import Environment
from ..tree import Node
from ..types import MkBoolean, MkError, MkNull, MkReturn, MkValue

EvalFunc = Callable[[Node, Environment], MkValue]


def is_truthy(val: MkValue) -> bool:
    match val:
        case MkBoolean(value=b):
            return b
        case MkNull():
            return False
        case _:
            return True


def is_signal(val: MkValue) -> bool:
    """Return/error values stop evaluation of whatever encloses them."""
    return isinstance(val, (MkReturn, MkError))
