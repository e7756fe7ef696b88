"""AST node classes shared by the parser (producer) and evaluator (consumer).

Every node keeps the token it was built from so `token_literal()` can report
it, and renders itself with `str()` in the canonical fully-parenthesized form
used by precedence tests and the REPL.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .token_types import Tok


class Node:
    token: Tok

    def token_literal(self) -> str:
        return self.token.literal

    def pretty(self, indent: str = '  ') -> str:
        """Return an indented outline of the tree, one node per line."""
        def _pretty(node: Node, level: int) -> str:
            lines = [f'{indent * level}{type(node).__name__}\t{node.token_literal()!r}\n']
            for child in node.children():
                lines.append(_pretty(child, level + 1))
            return ''.join(lines)
        return _pretty(self, 0)

    def children(self) -> List[Node]:
        return []


class Statement(Node):
    pass


class Expression(Node):
    pass


# ---------- Expressions ----------

@dataclass(eq=False)
class Identifier(Expression):
    token: Tok
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(eq=False)
class IntegerLiteral(Expression):
    token: Tok
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass(eq=False)
class Boolean(Expression):
    token: Tok
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass(eq=False)
class StringLiteral(Expression):
    token: Tok
    value: str

    def __str__(self) -> str:
        return self.token.literal


@dataclass(eq=False)
class PrefixExpression(Expression):
    token: Tok
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"

    def children(self) -> List[Node]:
        return [self.right]


@dataclass(eq=False)
class InfixExpression(Expression):
    token: Tok
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"

    def children(self) -> List[Node]:
        return [self.left, self.right]


@dataclass(eq=False)
class IfExpression(Expression):
    token: Tok
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if{self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f"else {self.alternative}"
        return out

    def children(self) -> List[Node]:
        nodes: List[Node] = [self.condition, self.consequence]
        if self.alternative is not None:
            nodes.append(self.alternative)
        return nodes


@dataclass(eq=False)
class FunctionLiteral(Expression):
    token: Tok
    parameters: List[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"

    def children(self) -> List[Node]:
        return [*self.parameters, self.body]


@dataclass(eq=False)
class CallExpression(Expression):
    token: Tok
    function: Expression
    arguments: List[Expression]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"

    def children(self) -> List[Node]:
        return [self.function, *self.arguments]


@dataclass(eq=False)
class ArrayLiteral(Expression):
    token: Tok
    elements: List[Expression]

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"

    def children(self) -> List[Node]:
        return list(self.elements)


@dataclass(eq=False)
class IndexExpression(Expression):
    token: Tok
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"

    def children(self) -> List[Node]:
        return [self.left, self.index]


@dataclass(eq=False)
class HashLiteral(Expression):
    token: Tok
    pairs: List[Tuple[Expression, Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}:{v}" for k, v in self.pairs) + "}"

    def children(self) -> List[Node]:
        return [n for pair in self.pairs for n in pair]


# ---------- Statements ----------

@dataclass(eq=False)
class LetStatement(Statement):
    token: Tok
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"

    def children(self) -> List[Node]:
        return [self.name, self.value]


@dataclass(eq=False)
class ReturnStatement(Statement):
    token: Tok
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.value};"

    def children(self) -> List[Node]:
        return [self.value]


@dataclass(eq=False)
class ExpressionStatement(Statement):
    token: Tok
    value: Expression

    def __str__(self) -> str:
        return str(self.value)

    def children(self) -> List[Node]:
        return [self.value]


@dataclass(eq=False)
class BlockStatement(Statement):
    token: Tok
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def children(self) -> List[Node]:
        return list(self.statements)


@dataclass(eq=False)
class Program(Node):
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def children(self) -> List[Node]:
        return list(self.statements)
