from __future__ import annotations

from ..environment import Environment
from ..tree import BlockStatement, Program
from ..types import NULL, MkError, MkReturn, MkValue
from .helpers import EvalFunc, is_signal


def eval_program(program: Program, env: Environment, eval_func: EvalFunc) -> MkValue:
    """Top level: a `return` ends the program with its value; errors pass through."""
    result: MkValue = NULL

    for stmt in program.statements:
        result = eval_func(stmt, env)

        match result:
            case MkReturn(value=value):
                return value
            case MkError():
                return result

    return result


def eval_block_statement(block: BlockStatement, env: Environment, eval_func: EvalFunc) -> MkValue:
    """Nested block: signals are handed back still wrapped so they keep unwinding."""
    result: MkValue = NULL

    for stmt in block.statements:
        result = eval_func(stmt, env)

        if is_signal(result):
            return result

    return result
