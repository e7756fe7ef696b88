"""
Lexer for Monkey

Tokenizes source text into a flat list of `Tok` terminated by EOF.

The terminal set is expressed as a lark grammar and run through lark's
basic lexer, so keyword/identifier collisions and longest-operator matching
are handled by lark itself. The lexer never fails: characters that start no
token come out as ILLEGAL and are reported by the parser.
"""

from functools import lru_cache
from typing import Iterator, List

from lark import Lark
from lark import Token as LarkToken

from .token_types import TT, Tok

KEYWORDS = {
    'fn': TT.FUNCTION,
    'let': TT.LET,
    'true': TT.TRUE,
    'false': TT.FALSE,
    'if': TT.IF,
    'else': TT.ELSE,
    'return': TT.RETURN,
}

# Fixed-text terminals. Keyword values are the source spelling; everything
# else is spelled the way it prints.
_LITERAL_TERMINALS = [tt for tt in TT if tt.value in {
    '=', '+', '-', '!', '*', '/', '<', '>', '==', '!=',
    ',', ';', ':', '(', ')', '{', '}', '[', ']',
}]

_PATTERN_TERMINALS = {
    TT.IDENT: r'/[A-Za-z_][A-Za-z0-9_]*/',
    TT.INT: r'/[0-9]+/',
    TT.STRING: r'/"[^"]*"?/',
}


def _grammar() -> str:
    lines = []
    names = []

    for word, tt in KEYWORDS.items():
        lines.append(f'{tt.name}: "{word}"')
        names.append(tt.name)

    for tt in _LITERAL_TERMINALS:
        lines.append(f'{tt.name}: "{tt.value}"')
        names.append(tt.name)

    for tt, pattern in _PATTERN_TERMINALS.items():
        lines.append(f'{tt.name}: {pattern}')
        names.append(tt.name)

    # Catch-all, tried after every other terminal.
    lines.append(f'{TT.ILLEGAL.name}.-1: /./')
    names.append(TT.ILLEGAL.name)

    # Every terminal has to be reachable or lark drops it from the lexer.
    head = [
        'start: _token*',
        '_token: ' + ' | '.join(names),
    ]
    tail = [
        '%ignore /\\s+/',
    ]
    return '\n'.join(head + lines + tail) + '\n'


@lru_cache(maxsize=1)
def _lark() -> Lark:
    return Lark(_grammar(), parser='lalr', lexer='basic')


def _convert(tok: LarkToken) -> Tok:
    kind = TT[tok.type]
    literal = str(tok.value)

    # An unterminated string runs to the end of the input.
    if kind is TT.STRING:
        literal = literal[1:-1] if len(literal) > 1 and literal.endswith('"') else literal[1:]

    return Tok(kind, literal, tok.line or 0, tok.column or 0)


class Lexer:
    """Source text -> token list."""

    def __init__(self, source: str):
        self.source = source

    def iter_tokens(self) -> Iterator[Tok]:
        """Yield tokens without the trailing EOF"""
        for tok in _lark().lex(self.source):
            yield _convert(tok)

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        tokens = list(self.iter_tokens())
        line = self.source.count('\n') + 1
        column = len(self.source) - self.source.rfind('\n')
        tokens.append(Tok(TT.EOF, '', line, column))
        return tokens


def tokenize(source: str) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source).tokenize()
