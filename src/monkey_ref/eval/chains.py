from __future__ import annotations

from ..environment import Environment
from ..runtime import new_error
from ..tree import IndexExpression
from ..types import NULL, MkArray, MkHash, MkInteger, MkValue, is_hashable
from .helpers import EvalFunc, is_signal


def eval_index_expression(node: IndexExpression, env: Environment, eval_func: EvalFunc) -> MkValue:
    left = eval_func(node.left, env)
    if is_signal(left):
        return left

    index = eval_func(node.index, env)
    if is_signal(index):
        return index

    return index_value(left, index)


def index_value(left: MkValue, index: MkValue) -> MkValue:
    match (left, index):
        case (MkArray(elements=elements), MkInteger(value=i)):
            # Out of range reads are null, not errors.
            if i < 0 or i >= len(elements):
                return NULL
            return elements[i]
        case (MkHash(pairs=pairs), _):
            if not is_hashable(index):
                return new_error(f"unusable as hash key: {index.type_name}")
            pair = pairs.get(index.hash_key())
            return pair.value if pair is not None else NULL
        case _:
            return new_error(f"index operator not supported: {left.type_name}")
