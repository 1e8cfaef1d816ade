"""Turns an expression into a lazy stream of Tokens.

The tokenizer never yields an EOF token. It simply stops, either because the expression is exhausted or because it hit
a character it doesn't know; at_end tells the two apart. Mapping the first case to EOF is left to the parser.
"""

from arith.lang.error import UnableToParse
from arith.parse.token import SYMBOLS, Token


class Tokenizer:
    """Single pass, single cursor iterator over the Tokens of expr. Not restartable."""
    DIGITS = "0123456789"
    POINT = "."

    def __init__(self, expr):
        self.expr = expr
        self.pos = 0  # cursor; once iteration stops on an unknown character, it stays on that character

    @property
    def at_end(self):
        """Whether or not every character of expr has been consumed."""
        return self.pos >= len(self.expr)

    @property
    def current_char(self):
        return None if self.at_end else self.expr[self.pos]

    def __iter__(self):
        return self

    def __next__(self):
        while not self.at_end and self.current_char.isspace():
            self.pos += 1

        char = self.current_char
        if char is None:
            raise StopIteration

        if char in Tokenizer.DIGITS or char == Tokenizer.POINT:
            return self._number()

        if char in SYMBOLS:
            self.pos += 1
            return Token(SYMBOLS[char], start=self.pos - 1, end=self.pos)

        raise StopIteration

    def _number(self):
        """Consumes digits and at most one decimal point starting at the cursor."""
        start = self.pos
        seen_point = False

        while not self.at_end:
            char = self.current_char
            if char == Tokenizer.POINT and not seen_point:
                seen_point = True
            elif char not in Tokenizer.DIGITS:
                break
            self.pos += 1

        text = self.expr[start:self.pos]
        try:
            return Token.num(text, start, self.pos)
        except ValueError:
            raise UnableToParse(f"'{text}' is not a valid number", self.expr, start, self.pos)
