"""Built-in functions (len, first, last, rest, push, puts) registered via runtime."""

from __future__ import annotations

from typing import List

from .environment import Environment
from .runtime import expect_arity, new_error, register_builtin
from .types import NULL, MkArray, MkInteger, MkString, MkValue


@register_builtin("len")
def std_len(_env: Environment, args: List[MkValue]) -> MkValue:
    err = expect_arity(args, 1)
    if err is not None:
        return err

    match args[0]:
        case MkString(value=s):
            return MkInteger(len(s))
        case MkArray(elements=elements):
            return MkInteger(len(elements))
        case other:
            return new_error(f"argument to `len` not supported, got {other.type_name}")


def _array_arg(name: str, arg: MkValue) -> MkValue:
    if isinstance(arg, MkArray):
        return arg
    return new_error(f"argument to `{name}` must be ARRAY, got {arg.type_name}")


@register_builtin("first")
def std_first(_env: Environment, args: List[MkValue]) -> MkValue:
    err = expect_arity(args, 1)
    if err is not None:
        return err

    arr = _array_arg("first", args[0])
    if not isinstance(arr, MkArray):
        return arr

    return arr.elements[0] if arr.elements else NULL


@register_builtin("last")
def std_last(_env: Environment, args: List[MkValue]) -> MkValue:
    err = expect_arity(args, 1)
    if err is not None:
        return err

    arr = _array_arg("last", args[0])
    if not isinstance(arr, MkArray):
        return arr

    return arr.elements[-1] if arr.elements else NULL


@register_builtin("rest")
def std_rest(_env: Environment, args: List[MkValue]) -> MkValue:
    err = expect_arity(args, 1)
    if err is not None:
        return err

    arr = _array_arg("rest", args[0])
    if not isinstance(arr, MkArray):
        return arr

    # Empty and single-element arrays have no rest.
    if len(arr.elements) < 2:
        return NULL

    return MkArray(arr.elements[1:])


@register_builtin("push")
def std_push(_env: Environment, args: List[MkValue]) -> MkValue:
    err = expect_arity(args, 2)
    if err is not None:
        return err

    arr = _array_arg("push", args[0])
    if not isinstance(arr, MkArray):
        return arr

    return MkArray([*arr.elements, args[1]])


@register_builtin("puts")
def std_puts(env: Environment, args: List[MkValue]) -> MkValue:
    for arg in args:
        env.write(arg.inspect())

    return NULL
