"""Interactive REPL for Monkey, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from typing import List, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .environment import Environment
from .lexer import tokenize
from .repl_highlight import MonkeyHighlighter
from .runner import repl_eval
from .token_types import TT
from .types import ParseError
from .utils import make_tracer, set_trace_enabled, trace_enabled

PROMPT = ">> "

MONKEY_FACE = r'''            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-"""""""-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'
'''

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/reset": ("Reset the REPL environment", ""),
    "/trace": ("Toggle parser tracing", "[on|off]"),
}

_DEPTH_OPEN = {TT.LPAREN, TT.LBRACKET, TT.LBRACE}
_DEPTH_CLOSE = {TT.RPAREN, TT.RBRACKET, TT.RBRACE}


def open_depth(text: str) -> int:
    """Unclosed (, [ and { in *text*; never negative."""
    depth = 0

    for tok in tokenize(text):
        if tok.type in _DEPTH_OPEN:
            depth += 1
        elif tok.type in _DEPTH_CLOSE:
            depth = max(depth - 1, 0)

    return depth


def print_parser_errors(out: TextIO, errors: List[str]) -> None:
    out.write(MONKEY_FACE)
    print("Woops! We ran into some monkey business here!", file=out)
    print(" parser errors:", file=out)
    for msg in errors:
        print("\t" + msg, file=out)


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for name, (desc, hint) in _SLASH_CMDS.items():
            if name.startswith(text):
                yield Completion(
                    name,
                    start_position=-len(text),
                    display=f"{name} {hint}".rstrip(),
                    display_meta=desc,
                )


def handle_slash(line: str, env_box: List[Environment], out: Optional[TextIO] = None) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    out = out if out is not None else sys.stdout
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    cmd, _, arg = stripped.partition(" ")
    arg = arg.strip().lower()

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/trace":
        if arg in ("on", "1", "true", "yes"):
            set_trace_enabled(True)
        elif arg in ("off", "0", "false", "no"):
            set_trace_enabled(False)
        elif arg == "":
            set_trace_enabled(not trace_enabled())
        else:
            print("Usage: /trace [on|off]", file=sys.stderr)
            return True

        state = "on" if trace_enabled() else "off"
        print(f"Parser tracing: {state}", file=out)
        return True

    if cmd == "/reset":
        env_box[0] = Environment()
        print("Environment reset.", file=out)
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def eval_entry(text: str, env: Environment, out: Optional[TextIO] = None) -> None:
    """Evaluate one submitted entry and print what the user should see."""
    out = out if out is not None else sys.stdout
    try:
        result, ended_with_let = repl_eval(text, env, tracer=make_tracer())
    except ParseError as exc:
        print_parser_errors(out, exc.errors)
        return

    if not ended_with_let:
        print(result.inspect(), file=out)


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    # Use a mutable box so /reset can swap the environment.
    env_box: List[Environment] = [Environment()]

    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer

        # Keep reading while a bracket is still open.
        if open_depth(buf.text) > 0:
            buf.insert_text("\n" + "    ")
            return

        buf.validate_and_handle()

    session: PromptSession[str] = PromptSession(
        history=InMemoryHistory(),
        lexer=MonkeyHighlighter(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation=".. ",
    )

    print("monkey repl. Ctrl-D to exit, / for commands")

    while True:
        try:
            text = session.prompt(PROMPT)
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        if handle_slash(text, env_box):
            continue

        eval_entry(text, env_box[0])


if __name__ == "__main__":
    repl()
