"""prompt_toolkit lexer for live Monkey syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer import KEYWORDS, Lexer as MonkeyLexer
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "builtin": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

BUILTIN_NAMES = frozenset({"len", "first", "last", "rest", "push", "puts"})

_TT_GROUP = {tt: "keyword" for tt in KEYWORDS.values()}
_TT_GROUP.update({
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.INT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.ILLEGAL: "error",
})
for _tt in (TT.ASSIGN, TT.PLUS, TT.MINUS, TT.BANG, TT.ASTERISK, TT.SLASH,
            TT.LT, TT.GT, TT.EQ, TT.NOT_EQ):
    _TT_GROUP[_tt] = "operator"


def token_group(tok: Tok) -> str:
    if tok.type == TT.IDENT and tok.literal in BUILTIN_NAMES:
        return "builtin"
    return _TT_GROUP.get(tok.type, "punctuation")


def _source_width(tok: Tok, line: str) -> int:
    # STRING literals are stored without their quotes; the closing one may be missing.
    if tok.type == TT.STRING:
        close = tok.column + len(tok.literal)
        return len(tok.literal) + (2 if line[close:close + 1] == '"' else 1)
    return len(tok.literal)


def highlight_line(line: str) -> StyleAndTextTuples:
    fragments: StyleAndTextTuples = []
    pos = 0

    for tok in MonkeyLexer(line).iter_tokens():
        start = tok.column - 1
        if start > pos:
            fragments.append(("", line[pos:start]))

        end = start + _source_width(tok, line)
        fragments.append((GROUP_STYLE[token_group(tok)], line[start:end]))
        pos = end

    if pos < len(line):
        fragments.append(("", line[pos:]))

    return fragments


class MonkeyHighlighter(Lexer):
    """Line-at-a-time highlighter driven by the real lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return highlight_line(lines[lineno])

        return get_line
