from __future__ import annotations

from typing import List, Union

from ..environment import Environment
from ..runtime import expect_arity, new_error
from ..tree import CallExpression, Expression, FunctionLiteral
from ..types import MkBuiltin, MkFunction, MkReturn, MkValue
from .helpers import EvalFunc, is_signal


def eval_function_literal(node: FunctionLiteral, env: Environment) -> MkValue:
    # Captures the defining scope, not the caller's.
    return MkFunction(parameters=node.parameters, body=node.body, env=env)


def eval_expressions(exprs: List[Expression], env: Environment, eval_func: EvalFunc) -> Union[List[MkValue], MkValue]:
    """Evaluate left to right; the first signal is returned in place of the list."""
    values: List[MkValue] = []

    for expr in exprs:
        val = eval_func(expr, env)
        if is_signal(val):
            return val
        values.append(val)

    return values


def eval_call(node: CallExpression, env: Environment, eval_func: EvalFunc) -> MkValue:
    function = eval_func(node.function, env)
    if is_signal(function):
        return function

    args = eval_expressions(node.arguments, env, eval_func)
    if not isinstance(args, list):
        return args

    return apply_function(function, args, env, eval_func)


def apply_function(fn: MkValue, args: List[MkValue], env: Environment, eval_func: EvalFunc) -> MkValue:
    """Invoke a function value. `env` is the call site, seen only by builtins."""
    match fn:
        case MkFunction():
            err = expect_arity(args, len(fn.parameters))
            if err is not None:
                return err

            call_env = extend_function_env(fn, args)
            evaluated = eval_func(fn.body, call_env)
            return unwrap_return_value(evaluated)
        case MkBuiltin():
            return fn.fn(env, args)
        case _:
            return new_error(f"not a function: {fn.type_name}")


def extend_function_env(fn: MkFunction, args: List[MkValue]) -> Environment:
    env = Environment.new_enclosed(fn.env)

    for param, arg in zip(fn.parameters, args):
        env.set(param.value, arg)

    return env


def unwrap_return_value(val: MkValue) -> MkValue:
    if isinstance(val, MkReturn):
        return val.value
    return val
