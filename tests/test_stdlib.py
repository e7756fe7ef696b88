from __future__ import annotations

import io

import pytest

from monkey_ref.environment import Environment
from monkey_ref.runtime import Builtins, lookup_builtin
from monkey_ref.types import MkBuiltin
from tests.support.harness import eval_source, run_runtime_case

SCENARIOS = [
    pytest.param('len("")', ("integer", 0), None, id="len-empty-string"),
    pytest.param('len("four")', ("integer", 4), None, id="len-string"),
    pytest.param('len("hello world")', ("integer", 11), None, id="len-string-space"),
    pytest.param("len([1, 2, 3])", ("integer", 3), None, id="len-array"),
    pytest.param("len([])", ("integer", 0), None, id="len-empty-array"),
    pytest.param(
        "len(1)",
        ("error", "argument to `len` not supported, got INTEGER"),
        None,
        id="len-int",
    ),
    pytest.param(
        'len("one", "two")',
        ("error", "wrong number of arguments. got=2, want=1"),
        None,
        id="len-arity",
    ),
    pytest.param("first([1, 2, 3])", ("integer", 1), None, id="first"),
    pytest.param("first([])", ("null", None), None, id="first-empty"),
    pytest.param(
        "first(1)",
        ("error", "argument to `first` must be ARRAY, got INTEGER"),
        None,
        id="first-int",
    ),
    pytest.param("last([1, 2, 3])", ("integer", 3), None, id="last"),
    pytest.param("last([])", ("null", None), None, id="last-empty"),
    pytest.param(
        'last("abc")',
        ("error", "argument to `last` must be ARRAY, got STRING"),
        None,
        id="last-string",
    ),
    pytest.param("rest([1, 2, 3])", ("array", [2, 3]), None, id="rest"),
    pytest.param("rest([1, 2])", ("array", [2]), None, id="rest-pair"),
    pytest.param("rest([1])", ("null", None), None, id="rest-singleton"),
    pytest.param("rest([])", ("null", None), None, id="rest-empty"),
    pytest.param(
        "rest(true)",
        ("error", "argument to `rest` must be ARRAY, got BOOLEAN"),
        None,
        id="rest-bool",
    ),
    pytest.param("push([], 1)", ("array", [1]), None, id="push-empty"),
    pytest.param("push([1, 2], 3)", ("array", [1, 2, 3]), None, id="push"),
    pytest.param(
        "push(1, 1)",
        ("error", "argument to `push` must be ARRAY, got INTEGER"),
        None,
        id="push-int",
    ),
    pytest.param(
        "push([1])",
        ("error", "wrong number of arguments. got=1, want=2"),
        None,
        id="push-arity",
    ),
    pytest.param("let a = [1, 2]; push(a, 3); a", ("array", [1, 2]), None, id="push-leaves-original"),
    pytest.param("let a = [1, 2, 3]; rest(a); a", ("array", [1, 2, 3]), None, id="rest-leaves-original"),
    pytest.param('puts("hello")', ("null", None), None, id="puts-returns-null"),
    pytest.param("let len = fn(x) { 42 }; len([1])", ("integer", 42), None, id="user-binding-shadows-builtin"),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_builtins(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_puts_writes_display_forms_to_environment_output() -> None:
    out = io.StringIO()
    result = eval_source('puts("hello", 1, [1, "a"], true); puts()', Environment(output=out))

    assert result.inspect() == "null"
    assert out.getvalue() == "hello\n1\n[1, a]\ntrue\n"


def test_puts_inside_function_uses_root_output() -> None:
    out = io.StringIO()
    eval_source('let say = fn(x) { puts(x) }; say("hi")', Environment(output=out))
    assert out.getvalue() == "hi\n"


def test_puts_defaults_to_stdout(capsys) -> None:
    eval_source('puts("to stdout")')
    assert capsys.readouterr().out == "to stdout\n"


def test_builtin_table() -> None:
    assert lookup_builtin("len") is not None
    assert set(Builtins.functions) == {"len", "first", "last", "rest", "push", "puts"}
    assert lookup_builtin("nope") is None


def test_builtin_value() -> None:
    value = eval_source("len")
    assert isinstance(value, MkBuiltin)
    assert value.name == "len"
    assert value.inspect() == "builtin function"
