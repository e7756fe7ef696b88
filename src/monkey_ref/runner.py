from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .environment import Environment
from .evaluator import eval_program
from .parser import parse_source
from .trace import Tracer
from .tree import LetStatement, Program
from .types import MkError, MkValue, ParseError
from .utils import ensure_recursion_limit, make_tracer


def parse(src: str, tracer: Optional[Tracer] = None) -> Program:
    """Parse or raise ParseError carrying every collected message."""
    program, errors = parse_source(src, tracer=tracer)
    if errors:
        raise ParseError(errors)
    return program


def run(src: str, env: Optional[Environment] = None, tracer: Optional[Tracer] = None) -> MkValue:
    ensure_recursion_limit()
    program = parse(src, tracer=tracer)
    return eval_program(program, env if env is not None else Environment())


def repl_eval(src: str, env: Environment, tracer: Optional[Tracer] = None) -> Tuple[MkValue, bool]:
    """Evaluate one REPL entry. Returns (result, ended_with_let)."""
    ensure_recursion_limit()
    program = parse(src, tracer=tracer)
    result = eval_program(program, env)
    ends_with_let = bool(program.statements) and isinstance(program.statements[-1], LetStatement)
    return result, ends_with_let


def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.exists():
        return candidate.read_text(encoding="utf-8")

    return arg


def main(argv: Optional[List[str]] = None) -> int:
    trace: Optional[bool] = None
    arg = None

    for token in (sys.argv[1:] if argv is None else argv):
        if token == "--trace":
            trace = True
            continue

        if token == "--no-trace":
            trace = False
            continue

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    source = _load_source(arg or "-")

    try:
        result = run(source, tracer=make_tracer(trace))
    except ParseError as exc:
        for msg in exc.errors:
            print(f"parse error: {msg}", file=sys.stderr)
        return 1

    if isinstance(result, MkError):
        print(result.inspect(), file=sys.stderr)
        return 1

    print(result.inspect())
    return 0


if __name__ == "__main__":
    sys.exit(main())
