"""Recursive descent parser for arithmetic expressions, using precedence climbing.

```
<expr>    ::= <primary> (<binop> <expr>)*   ; climbs while the operator binds tighter than the caller's level
<primary> ::= "-" <expr>                    ; parsed at NEGATIVE, so unary minus only takes the tightest operand
            | <number>
            | "(" <expr> ")" ["(" <expr> ")"]  ; adjacent groups multiply: (2)(3) = 6
<binop>   ::= "+" | "-" | "*" | "/" | "^"
```

Every binary operator recurses at its own precedence, which makes all of them left-associative, "^" included:
`2^3^2` is `(2^3)^2`. Tokens left over once the top-level expression is complete are ignored.
"""

from arith.lang.error import InvalidOperator, UnableToParse
from arith.parse.ast import Add, Caret, Divide, Multiply, Negative, Number, Subtract
from arith.parse.token import Precedence, Token, TokenKind
from arith.parse.tokenizer import Tokenizer


class Parser:
    """Builds an AST from an expression, holding exactly one token of lookahead. Good for one parse only."""
    BINARY_OPS = {
        TokenKind.ADD: Add,
        TokenKind.SUBTRACT: Subtract,
        TokenKind.MULTIPLY: Multiply,
        TokenKind.DIVIDE: Divide,
        TokenKind.CARET: Caret,
    }

    def __init__(self, expr):
        self.expr = expr
        self.tokenizer = Tokenizer(expr)

        try:
            self.current_token = next(self.tokenizer)
        except StopIteration:
            if self.tokenizer.at_end:
                raise InvalidOperator("expression is empty", expr)
            raise self._invalid_character()

    def parse(self):
        """Parses self.expr, returning the root Node of its AST."""
        try:
            return self.generate_ast(Precedence.DEFAULT_ZERO)
        except RecursionError:
            raise UnableToParse("expression is nested too deeply", self.expr, diagnosis=False)

    def generate_ast(self, precedence):
        """Parses a primary, then folds in every following operator that binds tighter than precedence."""
        left_expr = self.parse_primary()

        while precedence < self.current_token.precedence:
            if self.current_token.kind is TokenKind.EOF:
                break
            left_expr = self.convert_token_to_node(left_expr)

        return left_expr

    def parse_primary(self):
        """Parses a number, a negated expression, or a parenthesized group (possibly followed by another group)."""
        token = self.current_token

        if token.kind is TokenKind.SUBTRACT:
            self.get_next_token()
            return Negative(self.generate_ast(Precedence.NEGATIVE))

        elif token.kind is TokenKind.NUM:
            self.get_next_token()
            return Number(token.value)

        elif token.kind is TokenKind.LEFT_PAREN:
            self.get_next_token()
            expr = self.generate_ast(Precedence.DEFAULT_ZERO)
            self.check_parenthesis(TokenKind.RIGHT_PAREN)

            if self.current_token.kind is TokenKind.LEFT_PAREN:
                return Multiply(expr, self.generate_ast(Precedence.MUL_DIV))
            return expr

        raise UnableToParse(f"expected a number or '(' but got {token}", self.expr, *self._span(token))

    def convert_token_to_node(self, left_expr):
        """Consumes the current operator and its right operand, returning both joined to left_expr."""
        token = self.current_token
        if token.kind not in Parser.BINARY_OPS:
            raise InvalidOperator(f"please enter a valid operator, got {token}", self.expr, *self._span(token))

        self.get_next_token()
        right_expr = self.generate_ast(token.precedence)
        return Parser.BINARY_OPS[token.kind](left_expr, right_expr)

    def check_parenthesis(self, expected):
        """Consumes the current token if it is of kind expected."""
        if self.current_token.kind is not expected:
            msg = f"expected '{expected.value}' got {self.current_token}"
            raise InvalidOperator(msg, self.expr, *self._span(self.current_token))
        self.get_next_token()

    def get_next_token(self):
        """Advances the lookahead. Running out of input gives an EOF token; anything else the tokenizer stops on is an
        error.
        """
        if self.current_token.kind is TokenKind.EOF:
            raise InvalidOperator("unexpected end of input", self.expr, len(self.expr))

        try:
            self.current_token = next(self.tokenizer)
        except StopIteration:
            if not self.tokenizer.at_end:
                raise self._invalid_character()
            self.current_token = Token(TokenKind.EOF, start=len(self.expr), end=len(self.expr) + 1)

    def _invalid_character(self):
        pos = self.tokenizer.pos
        return InvalidOperator(f"invalid character '{self.expr[pos]}'", self.expr, pos, pos + 1)

    def _span(self, token):
        if token.start == -1:
            return 0, -1
        return token.start, token.end
