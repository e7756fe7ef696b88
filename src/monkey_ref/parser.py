"""
Pratt Parser for Monkey

Structure:
- Token navigation: `current` + `peek`, advanced one token at a time
- Statements: let / return / expression, trailing `;` optional
- Expressions: precedence climbing over per-token prefix/infix handlers

Syntax errors are collected in `Parser.errors` instead of escaping to the
caller. A failing construct raises `ParseError` internally; the statement
loop records the message, skips to the end of the statement and carries on.
"""

from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .lexer import tokenize
from .token_types import TT, Tok
from .trace import Tracer, traced
from .tree import (
    ArrayLiteral,
    BlockStatement,
    Boolean,
    CallExpression,
    Expression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
    StringLiteral,
)
from .types import ParseError

INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x)
    INDEX = 8        # a[i]


PRECEDENCES: Dict[TT, Precedence] = {
    TT.EQ: Precedence.EQUALS,
    TT.NOT_EQ: Precedence.EQUALS,
    TT.LT: Precedence.LESSGREATER,
    TT.GT: Precedence.LESSGREATER,
    TT.PLUS: Precedence.SUM,
    TT.MINUS: Precedence.SUM,
    TT.SLASH: Precedence.PRODUCT,
    TT.ASTERISK: Precedence.PRODUCT,
    TT.LPAREN: Precedence.CALL,
    TT.LBRACKET: Precedence.INDEX,
}

PrefixFn = Callable[[], Expression]
InfixFn = Callable[[Expression], Expression]


class Parser:
    """
    Operator-precedence parser for Monkey.

    Expression precedence (lowest to highest):
    1. equality (==, !=)
    2. comparison (<, >)
    3. sum (+, -)
    4. product (*, /)
    5. prefix (-x, !x)
    6. call (f(x))
    7. index (a[i])
    """

    def __init__(self, tokens: List[Tok], tracer: Optional[Tracer] = None):
        self.tokens = tokens
        self.pos = 0
        self.tracer = tracer
        self.errors: List[str] = []
        self.block_depth = 0

        self.prefix_parse_fns: Dict[TT, PrefixFn] = {
            TT.IDENT: self.parse_identifier,
            TT.INT: self.parse_integer_literal,
            TT.STRING: self.parse_string_literal,
            TT.BANG: self.parse_prefix_expression,
            TT.MINUS: self.parse_prefix_expression,
            TT.TRUE: self.parse_boolean,
            TT.FALSE: self.parse_boolean,
            TT.LPAREN: self.parse_grouped_expression,
            TT.IF: self.parse_if_expression,
            TT.FUNCTION: self.parse_function_literal,
            TT.LBRACKET: self.parse_array_literal,
            TT.LBRACE: self.parse_hash_literal,
        }

        self.infix_parse_fns: Dict[TT, InfixFn] = {
            TT.PLUS: self.parse_infix_expression,
            TT.MINUS: self.parse_infix_expression,
            TT.SLASH: self.parse_infix_expression,
            TT.ASTERISK: self.parse_infix_expression,
            TT.EQ: self.parse_infix_expression,
            TT.NOT_EQ: self.parse_infix_expression,
            TT.LT: self.parse_infix_expression,
            TT.GT: self.parse_infix_expression,
            TT.LPAREN: self.parse_call_expression,
            TT.LBRACKET: self.parse_index_expression,
        }

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def _token_at(self, idx: int) -> Tok:
        if idx < len(self.tokens):
            return self.tokens[idx]
        last = self.tokens[-1] if self.tokens else None
        return Tok(TT.EOF, '', last.line if last else 0, last.column if last else 0)

    @property
    def current(self) -> Tok:
        return self._token_at(self.pos)

    @property
    def peek(self) -> Tok:
        return self._token_at(self.pos + 1)

    def advance(self) -> Tok:
        """Move current and peek forward one token, return the old current"""
        prev = self.current
        if self.pos < len(self.tokens):
            self.pos += 1
        return prev

    def cur_is(self, token_type: TT) -> bool:
        return self.current.type == token_type

    def peek_is(self, token_type: TT) -> bool:
        return self.peek.type == token_type

    def expect_peek(self, token_type: TT) -> None:
        """Advance onto the next token if it has the expected type, else fail"""
        if not self.peek_is(token_type):
            raise ParseError(
                f"expected next token to be {token_type}, got {self.peek.type} instead"
            )
        self.advance()

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.current.type, Precedence.LOWEST)

    def _recover(self, exc: ParseError) -> None:
        """Record the errors and skip the rest of the broken statement.

        Braces opened while skipping are matched. Stops on the statement's
        `;`, or in front of (or on) the `}` of the enclosing block so that
        block can still close.
        """
        self.errors.extend(exc.errors)
        depth = 0

        while not self.cur_is(TT.EOF):
            if self.cur_is(TT.LBRACE):
                depth += 1
            elif self.cur_is(TT.RBRACE) and depth > 0:
                depth -= 1
            elif depth == 0 and (self.cur_is(TT.SEMICOLON) or self.cur_is(TT.RBRACE)):
                return

            if depth == 0 and self.block_depth > 0 and self.peek_is(TT.RBRACE):
                return
            if self.peek_is(TT.EOF):
                return
            self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse_program(self) -> Program:
        """Parse entire program"""
        program = Program()

        while not self.cur_is(TT.EOF):
            try:
                program.statements.append(self.parse_statement())
            except ParseError as exc:
                self._recover(exc)
            self.advance()

        return program

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Statement:
        if self.cur_is(TT.LET):
            return self.parse_let_statement()
        if self.cur_is(TT.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        """let <ident> = <expr>[;]"""
        with traced(self.tracer, "parseLetStatement"):
            token = self.current

            self.expect_peek(TT.IDENT)
            name = Identifier(self.current, self.current.literal)

            self.expect_peek(TT.ASSIGN)
            self.advance()
            value = self.parse_expression(Precedence.LOWEST)

            if self.peek_is(TT.SEMICOLON):
                self.advance()

            return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        """return <expr>[;]"""
        with traced(self.tracer, "parseReturnStatement"):
            token = self.current
            self.advance()
            value = self.parse_expression(Precedence.LOWEST)

            if self.peek_is(TT.SEMICOLON):
                self.advance()

            return ReturnStatement(token, value)

    def parse_expression_statement(self) -> ExpressionStatement:
        with traced(self.tracer, "parseExpressionStatement"):
            token = self.current
            value = self.parse_expression(Precedence.LOWEST)

            if self.peek_is(TT.SEMICOLON):
                self.advance()

            return ExpressionStatement(token, value)

    def parse_block_statement(self) -> BlockStatement:
        """{ <stmt>* } with current on the opening brace"""
        with traced(self.tracer, "parseBlockStatement"):
            block = BlockStatement(self.current)
            self.advance()
            self.block_depth += 1

            try:
                while not self.cur_is(TT.RBRACE):
                    if self.cur_is(TT.EOF):
                        raise ParseError(
                            f"expected next token to be {TT.RBRACE}, got {TT.EOF} instead"
                        )

                    try:
                        block.statements.append(self.parse_statement())
                    except ParseError as exc:
                        self._recover(exc)
                        if self.cur_is(TT.RBRACE):
                            break
                    self.advance()
            finally:
                self.block_depth -= 1

            return block

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expression(self, precedence: Precedence) -> Expression:
        with traced(self.tracer, "parseExpression"):
            prefix = self.prefix_parse_fns.get(self.current.type)
            if prefix is None:
                raise ParseError(
                    f"no prefix parse function for {self.current.type} found"
                )
            left = prefix()

            while not self.peek_is(TT.SEMICOLON) and precedence < self.peek_precedence():
                infix = self.infix_parse_fns.get(self.peek.type)
                if infix is None:
                    return left

                self.advance()
                left = infix(left)

            return left

    def parse_identifier(self) -> Expression:
        return Identifier(self.current, self.current.literal)

    def parse_integer_literal(self) -> Expression:
        with traced(self.tracer, "parseIntegerLiteral"):
            token = self.current
            try:
                value = int(token.literal, 10)
            except ValueError:
                value = None

            if value is None or value > INT64_MAX:
                raise ParseError(f'could not parse "{token.literal}" as integer')

            return IntegerLiteral(token, value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.current, self.current.literal)

    def parse_boolean(self) -> Expression:
        return Boolean(self.current, self.cur_is(TT.TRUE))

    def parse_prefix_expression(self) -> Expression:
        with traced(self.tracer, "parsePrefixExpression"):
            token = self.advance()
            right = self.parse_expression(Precedence.PREFIX)
            return PrefixExpression(token, token.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression:
        with traced(self.tracer, "parseInfixExpression"):
            token = self.current
            precedence = self.cur_precedence()
            self.advance()
            right = self.parse_expression(precedence)
            return InfixExpression(token, left, token.literal, right)

    def parse_grouped_expression(self) -> Expression:
        self.advance()
        expr = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TT.RPAREN)
        return expr

    def parse_if_expression(self) -> Expression:
        """if (<expr>) { <block> } [else { <block> }]"""
        with traced(self.tracer, "parseIfExpression"):
            token = self.current

            self.expect_peek(TT.LPAREN)
            self.advance()
            condition = self.parse_expression(Precedence.LOWEST)
            self.expect_peek(TT.RPAREN)

            self.expect_peek(TT.LBRACE)
            consequence = self.parse_block_statement()

            alternative = None
            if self.peek_is(TT.ELSE):
                self.advance()
                self.expect_peek(TT.LBRACE)
                alternative = self.parse_block_statement()

            return IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression:
        """fn (<params>) { <block> }"""
        with traced(self.tracer, "parseFunctionLiteral"):
            token = self.current

            self.expect_peek(TT.LPAREN)
            parameters = self.parse_function_parameters()

            self.expect_peek(TT.LBRACE)
            body = self.parse_block_statement()

            return FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self) -> List[Identifier]:
        params: List[Identifier] = []

        if self.peek_is(TT.RPAREN):
            self.advance()
            return params

        self.expect_peek(TT.IDENT)
        params.append(Identifier(self.current, self.current.literal))

        while self.peek_is(TT.COMMA):
            self.advance()
            self.expect_peek(TT.IDENT)
            params.append(Identifier(self.current, self.current.literal))

        self.expect_peek(TT.RPAREN)
        return params

    def parse_call_expression(self, function: Expression) -> Expression:
        with traced(self.tracer, "parseCallExpression"):
            token = self.current
            arguments = self.parse_expression_list(TT.RPAREN)
            return CallExpression(token, function, arguments)

    def parse_expression_list(self, end: TT) -> List[Expression]:
        """Comma-separated expressions up to the `end` delimiter"""
        items: List[Expression] = []

        if self.peek_is(end):
            self.advance()
            return items

        self.advance()
        items.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_is(TT.COMMA):
            self.advance()
            self.advance()
            items.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(end)
        return items

    def parse_array_literal(self) -> Expression:
        token = self.current
        return ArrayLiteral(token, self.parse_expression_list(TT.RBRACKET))

    def parse_index_expression(self, left: Expression) -> Expression:
        with traced(self.tracer, "parseIndexExpression"):
            token = self.current
            self.advance()
            index = self.parse_expression(Precedence.LOWEST)
            self.expect_peek(TT.RBRACKET)
            return IndexExpression(token, left, index)

    def parse_hash_literal(self) -> Expression:
        """{ <expr>: <expr>, ... }"""
        with traced(self.tracer, "parseHashLiteral"):
            token = self.current
            pairs: List[Tuple[Expression, Expression]] = []

            while not self.peek_is(TT.RBRACE):
                self.advance()
                key = self.parse_expression(Precedence.LOWEST)

                self.expect_peek(TT.COLON)
                self.advance()
                value = self.parse_expression(Precedence.LOWEST)
                pairs.append((key, value))

                if not self.peek_is(TT.RBRACE):
                    self.expect_peek(TT.COMMA)

            self.expect_peek(TT.RBRACE)
            return HashLiteral(token, pairs)


# ============================================================================
# Entry points
# ============================================================================

def parse_tokens(tokens: List[Tok], tracer: Optional[Tracer] = None) -> Tuple[Program, List[str]]:
    parser = Parser(tokens, tracer=tracer)
    try:
        program = parser.parse_program()
    except RecursionError:
        return Program(), [*parser.errors, "expression nested too deeply"]
    return program, parser.errors


def parse_source(source: str, tracer: Optional[Tracer] = None) -> Tuple[Program, List[str]]:
    """
    Parse Monkey source code to a Program.

    Returns the program together with the collected syntax errors; the
    program must not be evaluated when the error list is non-empty.
    """
    return parse_tokens(tokenize(source), tracer=tracer)
