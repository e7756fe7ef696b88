from __future__ import annotations

from ..environment import Environment
from ..runtime import new_error
from ..tree import HashLiteral
from ..types import HashPair, MkHash, MkValue, is_hashable
from .helpers import EvalFunc, is_signal


def eval_hash_literal(node: HashLiteral, env: Environment, eval_func: EvalFunc) -> MkValue:
    """Keys then values, pair by pair. A repeated key keeps the last value."""
    result = MkHash()

    for key_node, value_node in node.pairs:
        key = eval_func(key_node, env)
        if is_signal(key):
            return key

        if not is_hashable(key):
            return new_error(f"unusable as hash key: {key.type_name}")

        value = eval_func(value_node, env)
        if is_signal(value):
            return value

        result.pairs[key.hash_key()] = HashPair(key=key, value=value)

    return result
