from __future__ import annotations

from typing import Callable, Dict, Optional, Type

from .environment import Environment
from .runtime import lookup_builtin, new_error
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)
from .types import NULL, MkArray, MkInteger, MkReturn, MkString, MkValue, native_bool

from .eval.blocks import eval_block_statement, eval_program as _eval_program
from .eval.chains import eval_index_expression
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_call, eval_expressions, eval_function_literal
from .eval.helpers import is_signal, is_truthy
from .eval.objects import eval_hash_literal

# ---------------- Public API ----------------

def eval_program(program: Program, env: Optional[Environment] = None) -> MkValue:
    """Run a parsed program. A fresh root environment is used when none is given."""
    if env is None:
        env = Environment()

    try:
        return eval_node(program, env)
    except RecursionError:
        return new_error("stack overflow")

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> MkValue:
    handler = _NODE_DISPATCH.get(type(n))
    if handler is None:
        return new_error(f"unsupported node: {type(n).__name__}")
    return handler(n, env)


def _eval_let(n: LetStatement, env: Environment) -> MkValue:
    val = eval_node(n.value, env)
    if is_signal(val):
        return val

    env.set(n.name.value, val)
    return NULL


def _eval_return(n: ReturnStatement, env: Environment) -> MkValue:
    val = eval_node(n.value, env)
    if is_signal(val):
        return val

    return MkReturn(val)


def _eval_identifier(n: Identifier, env: Environment) -> MkValue:
    val = env.get(n.value)
    if val is not None:
        return val

    builtin = lookup_builtin(n.value)
    if builtin is not None:
        return builtin

    return new_error(f"identifier not found: {n.value}")


def _eval_prefix(n: PrefixExpression, env: Environment) -> MkValue:
    right = eval_node(n.right, env)
    if is_signal(right):
        return right

    return eval_prefix(n.operator, right)


def _eval_infix(n: InfixExpression, env: Environment) -> MkValue:
    left = eval_node(n.left, env)
    if is_signal(left):
        return left

    right = eval_node(n.right, env)
    if is_signal(right):
        return right

    return eval_infix(n.operator, left, right)


def _eval_if(n: IfExpression, env: Environment) -> MkValue:
    condition = eval_node(n.condition, env)
    if is_signal(condition):
        return condition

    if is_truthy(condition):
        return eval_node(n.consequence, env)
    if n.alternative is not None:
        return eval_node(n.alternative, env)
    return NULL


def _eval_array(n: ArrayLiteral, env: Environment) -> MkValue:
    elements = eval_expressions(n.elements, env, eval_node)
    if not isinstance(elements, list):
        return elements

    return MkArray(elements)


_NODE_DISPATCH: Dict[Type[Node], Callable[..., MkValue]] = {
    Program: lambda n, env: _eval_program(n, env, eval_node),
    BlockStatement: lambda n, env: eval_block_statement(n, env, eval_node),
    ExpressionStatement: lambda n, env: eval_node(n.value, env),
    LetStatement: _eval_let,
    ReturnStatement: _eval_return,
    Identifier: _eval_identifier,
    IntegerLiteral: lambda n, env: MkInteger(n.value),
    StringLiteral: lambda n, env: MkString(n.value),
    Boolean: lambda n, env: native_bool(n.value),
    PrefixExpression: _eval_prefix,
    InfixExpression: _eval_infix,
    IfExpression: _eval_if,
    FunctionLiteral: lambda n, env: eval_function_literal(n, env),
    CallExpression: lambda n, env: eval_call(n, env, eval_node),
    ArrayLiteral: _eval_array,
    IndexExpression: lambda n, env: eval_index_expression(n, env, eval_node),
    HashLiteral: lambda n, env: eval_hash_literal(n, env, eval_node),
}
