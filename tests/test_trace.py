from __future__ import annotations

import io

from monkey_ref.parser import parse_source
from monkey_ref.trace import Tracer, traced
from monkey_ref.utils import TRACE_ENV, make_tracer, set_trace_enabled, trace_enabled


def test_trace_lines_nest_by_depth() -> None:
    out = io.StringIO()
    _, errors = parse_source("1 + 2", tracer=Tracer(out))

    assert errors == []
    assert out.getvalue().splitlines() == [
        "BEGIN parseExpressionStatement",
        "\tBEGIN parseExpression",
        "\t\tBEGIN parseIntegerLiteral",
        "\t\tEND parseIntegerLiteral",
        "\t\tBEGIN parseInfixExpression",
        "\t\t\tBEGIN parseExpression",
        "\t\t\t\tBEGIN parseIntegerLiteral",
        "\t\t\t\tEND parseIntegerLiteral",
        "\t\t\tEND parseExpression",
        "\t\tEND parseInfixExpression",
        "\tEND parseExpression",
        "END parseExpressionStatement",
    ]


def test_trace_level_unwinds_on_error() -> None:
    tracer = Tracer(io.StringIO())
    _, errors = parse_source("let = 1;", tracer=tracer)

    assert errors
    assert tracer.level == 0
    assert tracer.out.getvalue().splitlines() == [
        "BEGIN parseLetStatement",
        "END parseLetStatement",
    ]


def test_independent_tracers() -> None:
    first, second = io.StringIO(), io.StringIO()
    parse_source("x", tracer=Tracer(first))
    parse_source("x", tracer=None)
    parse_source("-x", tracer=Tracer(second))

    assert "parsePrefixExpression" not in first.getvalue()
    assert "parsePrefixExpression" in second.getvalue()


def test_traced_without_tracer_is_noop() -> None:
    with traced(None, "anything"):
        pass


def test_trace_env_toggle(monkeypatch) -> None:
    assert not trace_enabled()
    assert make_tracer() is None

    monkeypatch.setenv(TRACE_ENV, "yes")
    assert trace_enabled()
    assert isinstance(make_tracer(), Tracer)
    assert make_tracer(False) is None

    set_trace_enabled(False)
    assert not trace_enabled()
    set_trace_enabled(True)
    assert trace_enabled()
    assert isinstance(make_tracer(), Tracer)
