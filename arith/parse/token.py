"""Lexical vocabulary of arithmetic expressions.

```
<number>   ::= <digit>+ ["." <digit>*] | "." <digit>+
<operator> ::= "+" | "-" | "*" | "/" | "^"
<paren>    ::= "(" | ")"
```

Every token also carries a precedence, which is what the parser climbs on. Numbers and parentheses sit at the lowest
level. NEGATIVE is never the precedence of a token: it is only used by the parser for unary minus, and being the
highest level means `-2^2` is read as `(-2)^2`.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional


class Precedence(IntEnum):
    """Operator precedence, lowest to highest."""
    DEFAULT_ZERO = 0
    ADD_SUB = 1
    MUL_DIV = 2
    POWER = 3
    NEGATIVE = 4


class TokenKind(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    CARET = "^"
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    NUM = "<num>"
    EOF = "<eof>"


PRECEDENCES = {
    TokenKind.ADD: Precedence.ADD_SUB,
    TokenKind.SUBTRACT: Precedence.ADD_SUB,
    TokenKind.MULTIPLY: Precedence.MUL_DIV,
    TokenKind.DIVIDE: Precedence.MUL_DIV,
    TokenKind.CARET: Precedence.POWER,
}

SYMBOLS = {kind.value: kind for kind in TokenKind if kind not in (TokenKind.NUM, TokenKind.EOF)}


@dataclass(frozen=True)
class Token:
    """A single lexical unit. value is only set for NUM tokens. start and end delimit the token's text in its
    expression; they are only used for error messages and are ignored when comparing tokens.
    """
    kind: TokenKind
    value: Optional[float] = None
    start: int = field(default=-1, compare=False)
    end: int = field(default=-1, compare=False)

    @classmethod
    def num(cls, value, start=-1, end=-1):
        return cls(TokenKind.NUM, float(value), start, end)

    @property
    def precedence(self):
        return PRECEDENCES.get(self.kind, Precedence.DEFAULT_ZERO)

    @property
    def text(self):
        if self.kind is TokenKind.NUM:
            return f"{self.value:g}"
        elif self.kind is TokenKind.EOF:
            return "end of input"
        return self.kind.value

    def __str__(self):
        if self.kind is TokenKind.EOF:
            return self.text
        return f"'{self.text}'"
