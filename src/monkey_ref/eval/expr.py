from __future__ import annotations

from ..runtime import new_error
from ..types import (
    MkBoolean,
    MkInteger,
    MkString,
    MkValue,
    native_bool,
)
from .helpers import is_truthy

INT64_MIN = -(2 ** 63)
_UINT64 = 2 ** 64


def wrap_int64(value: int) -> int:
    """Two's-complement wraparound into the signed 64-bit range."""
    return (value - INT64_MIN) % _UINT64 + INT64_MIN


def _trunc_div(lhs: int, rhs: int) -> int:
    quotient = abs(lhs) // abs(rhs)
    return -quotient if (lhs < 0) != (rhs < 0) else quotient


def eval_prefix(op: str, right: MkValue) -> MkValue:
    match op:
        case '!':
            return native_bool(not is_truthy(right))
        case '-':
            if not isinstance(right, MkInteger):
                return new_error(f"unknown operator: -{right.type_name}")
            return MkInteger(wrap_int64(-right.value))
        case _:
            return new_error(f"unknown operator: {op}{right.type_name}")


def eval_integer_infix(op: str, lhs: int, rhs: int) -> MkValue:
    match op:
        case '+':
            return MkInteger(wrap_int64(lhs + rhs))
        case '-':
            return MkInteger(wrap_int64(lhs - rhs))
        case '*':
            return MkInteger(wrap_int64(lhs * rhs))
        case '/':
            if rhs == 0:
                return new_error("division by zero")
            return MkInteger(wrap_int64(_trunc_div(lhs, rhs)))
        case '<':
            return native_bool(lhs < rhs)
        case '>':
            return native_bool(lhs > rhs)
        case '==':
            return native_bool(lhs == rhs)
        case '!=':
            return native_bool(lhs != rhs)
        case _:
            return new_error(f"unknown operator: INTEGER {op} INTEGER")


def eval_infix(op: str, left: MkValue, right: MkValue) -> MkValue:
    match (left, right):
        case (MkInteger(value=a), MkInteger(value=b)):
            return eval_integer_infix(op, a, b)
        case (MkString(value=a), MkString(value=b)):
            if op == '+':
                return MkString(a + b)
            return new_error(f"unknown operator: STRING {op} STRING")
        case (MkBoolean(value=a), MkBoolean(value=b)) if op in ('==', '!='):
            return native_bool(a == b if op == '==' else a != b)

    if left.type_name != right.type_name:
        return new_error(f"type mismatch: {left.type_name} {op} {right.type_name}")

    # Same-typed reference values: identity
    if op == '==':
        return native_bool(left is right)
    if op == '!=':
        return native_bool(left is not right)

    return new_error(f"unknown operator: {left.type_name} {op} {right.type_name}")
