from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Sequence, Union
from typing_extensions import TypeAlias, TypeGuard

from .tree import BlockStatement, Identifier

if TYPE_CHECKING:
    from .environment import Environment

# ---------- Value Model ----------

INTEGER_OBJ = "INTEGER"
BOOLEAN_OBJ = "BOOLEAN"
STRING_OBJ = "STRING"
NULL_OBJ = "NULL"
ARRAY_OBJ = "ARRAY"
HASH_OBJ = "HASH"
FUNCTION_OBJ = "FUNCTION"
BUILTIN_OBJ = "BUILTIN"
RETURN_VALUE_OBJ = "RETURN_VALUE"
ERROR_OBJ = "ERROR"


@dataclass(frozen=True)
class HashKey:
    type: str
    value: Union[int, bool, str]


@dataclass
class MkInteger:
    value: int
    type_name = INTEGER_OBJ

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)


@dataclass
class MkBoolean:
    value: bool
    type_name = BOOLEAN_OBJ

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)


@dataclass
class MkString:
    value: str
    type_name = STRING_OBJ

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.type_name, self.value)


@dataclass
class MkNull:
    type_name = NULL_OBJ

    def inspect(self) -> str:
        return "null"


@dataclass
class MkArray:
    elements: List[MkValue]
    type_name = ARRAY_OBJ

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"


@dataclass
class HashPair:
    key: MkValue
    value: MkValue


@dataclass
class MkHash:
    pairs: Dict[HashKey, HashPair] = field(default_factory=dict)
    type_name = HASH_OBJ

    def inspect(self) -> str:
        items = [f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values()]
        return "{" + ", ".join(items) + "}"


@dataclass(eq=False)
class MkFunction:
    parameters: List[Identifier]
    body: BlockStatement
    env: Environment  # closure scope, shared with every other holder
    type_name = FUNCTION_OBJ

    def inspect(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


BuiltinFn = Callable[['Environment', List['MkValue']], 'MkValue']


@dataclass(frozen=True)
class MkBuiltin:
    name: str
    fn: BuiltinFn
    type_name = BUILTIN_OBJ

    def inspect(self) -> str:
        return "builtin function"


# ---------- Signals ----------
# Internal-only values that short-circuit evaluation. Every site that
# evaluates a sub-node hands these back unchanged.

@dataclass
class MkReturn:
    value: MkValue
    type_name = RETURN_VALUE_OBJ

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass
class MkError:
    message: str
    type_name = ERROR_OBJ

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


MkValue: TypeAlias = Union[
    MkInteger,
    MkBoolean,
    MkString,
    MkNull,
    MkArray,
    MkHash,
    MkFunction,
    MkBuiltin,
    MkReturn,
    MkError,
]

Hashable: TypeAlias = Union[MkInteger, MkBoolean, MkString]

TRUE = MkBoolean(True)
FALSE = MkBoolean(False)
NULL = MkNull()


def native_bool(value: bool) -> MkBoolean:
    return TRUE if value else FALSE


def is_hashable(value: MkValue) -> TypeGuard[Hashable]:
    return isinstance(value, (MkInteger, MkBoolean, MkString))


# ---------- Exceptions (host side only) ----------

class MonkeyError(Exception):
    pass


class ParseError(MonkeyError):
    """One or more syntax errors. Never raised out of `Parser.parse_program`."""

    errors: List[str]

    def __init__(self, errors: Union[str, Sequence[str]]):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("\n".join(self.errors))

