"""
Token Types for the Monkey front end

Shared between lexer and parser to avoid circular dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class TT(Enum):
    """Token Types. Values are the names used in parser error messages."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"

    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"

    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self) -> str:
        return self.value


@dataclass
class Tok:
    """Token with position info"""

    type: TT
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.literal!r}, {self.line}:{self.column})"
