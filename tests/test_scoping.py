from __future__ import annotations

import io

import pytest

from monkey_ref.environment import Environment
from monkey_ref.evaluator import eval_program
from monkey_ref.types import MkInteger
from tests.support.harness import eval_source, parse_ok, run_runtime_case

SCENARIOS = [
    pytest.param("let a = 5; a;", ("integer", 5), None, id="let-int"),
    pytest.param("let a = 5 * 5; a;", ("integer", 25), None, id="let-expr"),
    pytest.param("let a = 5; let b = a; b;", ("integer", 5), None, id="let-from-binding"),
    pytest.param("let a = 5; let b = a; let c = a + b + 5; c;", ("integer", 15), None, id="let-chain"),
    pytest.param("let a = 1; let a = 2; a", ("integer", 2), None, id="rebind-same-scope"),
    pytest.param(
        "let x = 1; let f = fn() { let x = 2; x }; f() + x",
        ("integer", 3),
        None,
        id="let-in-function-shadows",
    ),
    pytest.param(
        "let f = fn(x) { x }; let x = 5; f(1) + x",
        ("integer", 6),
        None,
        id="param-shadows-outer",
    ),
    pytest.param(
        "let f = fn() { let inner = 1; inner }; f(); inner",
        ("error", "identifier not found: inner"),
        None,
        id="function-locals-are-private",
    ),
    pytest.param(
        "let x = 10; let f = fn() { x }; let g = fn() { let x = 20; f() }; g()",
        ("integer", 10),
        None,
        id="lexical-not-dynamic",
    ),
    pytest.param(
        "let counter = fn(n) { fn() { n } }; let a = counter(1); let b = counter(2); a() + b()",
        ("integer", 3),
        None,
        id="separate-closure-scopes",
    ),
]


@pytest.mark.parametrize("source, expectation, expected_exc", SCENARIOS)
def test_scoping(source: str, expectation, expected_exc) -> None:
    run_runtime_case(source, expectation, expected_exc)


def test_environment_lookup_walks_outward() -> None:
    outer = Environment()
    outer.set("a", MkInteger(1))
    inner = Environment.new_enclosed(outer)
    inner.set("b", MkInteger(2))

    assert inner.get("a") == MkInteger(1)
    assert inner.get("b") == MkInteger(2)
    assert outer.get("b") is None
    assert inner.get("c") is None


def test_environment_set_only_touches_current_scope() -> None:
    outer = Environment()
    outer.set("a", MkInteger(1))
    inner = Environment.new_enclosed(outer)

    returned = inner.set("a", MkInteger(2))

    assert returned == MkInteger(2)
    assert inner.get("a") == MkInteger(2)
    assert outer.get("a") == MkInteger(1)


def test_enclosed_scope_inherits_output() -> None:
    out = io.StringIO()
    inner = Environment.new_enclosed(Environment(output=out))
    inner.write("x")
    assert out.getvalue() == "x\n"


def test_root_environment_persists_between_programs() -> None:
    env = Environment()
    eval_source("let a = 2;", env)
    eval_source("let double = fn(x) { x * 2 };", env)
    assert eval_source("double(a)", env) == MkInteger(4)


def test_same_tree_twice_against_fresh_environments() -> None:
    program = parse_ok("let a = [1, 2]; let b = push(a, 3); [a, b, len(b)]")
    first = eval_program(program, Environment())
    second = eval_program(program, Environment())

    assert first.inspect() == second.inspect() == "[[1, 2], [1, 2, 3], 3]"


def test_eval_program_defaults_to_fresh_environment() -> None:
    program = parse_ok("let a = 1; a")
    assert eval_program(program) == MkInteger(1)
    assert eval_program(program) == MkInteger(1)
