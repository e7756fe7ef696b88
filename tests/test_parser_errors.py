from __future__ import annotations

from typing import List

import pytest

from monkey_ref.parser import Parser, parse_source
from monkey_ref.lexer import tokenize
from monkey_ref.tree import ExpressionStatement, FunctionLiteral, LetStatement
from monkey_ref.types import ParseError
from tests.support.harness import parse_errors


@pytest.mark.parametrize(
    "source, expected",
    [
        pytest.param(
            "let = 5;",
            ["expected next token to be IDENT, got = instead"],
            id="let-missing-name",
        ),
        pytest.param(
            "let x 5;",
            ["expected next token to be =, got INT instead"],
            id="let-missing-assign",
        ),
        pytest.param(
            "let x = 5; let = 10; let 838383;",
            [
                "expected next token to be IDENT, got = instead",
                "expected next token to be IDENT, got INT instead",
            ],
            id="several-bad-lets",
        ),
        pytest.param(
            "5 + ;",
            ["no prefix parse function for ; found"],
            id="dangling-infix",
        ),
        pytest.param(
            "@",
            ["no prefix parse function for ILLEGAL found"],
            id="illegal-char",
        ),
        pytest.param(
            "let x = 99999999999999999999;",
            ['could not parse "99999999999999999999" as integer'],
            id="int-overflow",
        ),
        pytest.param(
            "let x = 9223372036854775808;",
            ['could not parse "9223372036854775808" as integer'],
            id="int64-max-plus-one",
        ),
        pytest.param(
            "fn(1) { 1 }",
            ["expected next token to be IDENT, got INT instead"],
            id="non-ident-param",
        ),
        pytest.param(
            "if (true) { 1",
            ["expected next token to be }, got EOF instead"],
            id="unclosed-block",
        ),
        pytest.param(
            "[1, 2",
            ["expected next token to be ], got EOF instead"],
            id="unclosed-array",
        ),
        pytest.param(
            "add(1, 2",
            ["expected next token to be ), got EOF instead"],
            id="unclosed-call",
        ),
        pytest.param(
            '{"a" 1}',
            ["expected next token to be :, got INT instead"],
            id="hash-missing-colon",
        ),
        pytest.param(
            "(1 + 2",
            ["expected next token to be ), got EOF instead"],
            id="unclosed-group",
        ),
    ],
)
def test_parser_error_messages(source: str, expected: List[str]) -> None:
    assert parse_errors(source) == expected


def test_skipped_braces_are_matched() -> None:
    assert parse_errors("if (x { x }") == ["expected next token to be ), got { instead"]
    assert parse_errors("fn(1) { 1 }; 2") == ["expected next token to be IDENT, got INT instead"]


def test_nested_error_keeps_enclosing_block() -> None:
    parser = Parser(tokenize("fn() { fn(1) { 1 }; 2 }; 3"))
    program = parser.parse_program()

    assert parser.errors == ["expected next token to be IDENT, got INT instead"]
    assert len(program.statements) == 2
    assert str(program.statements[0].value.body) == "2"


def test_stray_closing_brace() -> None:
    assert parse_errors("} 1") == ["no prefix parse function for } found"]


def test_valid_statements_after_error_still_parse() -> None:
    parser = Parser(tokenize("let = 1; let y = 2; y"))
    program = parser.parse_program()

    assert parser.errors == ["expected next token to be IDENT, got = instead"]
    assert [type(s) for s in program.statements] == [LetStatement, ExpressionStatement]
    assert program.statements[0].name.value == "y"


def test_block_recovers_per_statement() -> None:
    parser = Parser(tokenize("fn() { let = 1; 2 }; 3"))
    program = parser.parse_program()

    assert parser.errors == ["expected next token to be IDENT, got = instead"]
    assert len(program.statements) == 2

    fn = program.statements[0].value
    assert isinstance(fn, FunctionLiteral)
    assert str(fn.body) == "2"
    assert str(program.statements[1]) == "3"


def test_error_list_is_empty_for_valid_program() -> None:
    assert parse_errors("let a = fn(x) { x * 2 }; a(3);") == []


def test_parse_error_carries_messages() -> None:
    exc = ParseError(["first", "second"])
    assert exc.errors == ["first", "second"]
    assert str(exc) == "first\nsecond"


def test_parse_error_accepts_single_message() -> None:
    exc = ParseError("only")
    assert exc.errors == ["only"]


def test_runaway_nesting_is_a_parse_error() -> None:
    source = "(" * 100_000 + "1" + ")" * 100_000
    program, errors = parse_source(source)

    assert errors[-1] == "expression nested too deeply"
    assert program.statements == []
