"""Abstract syntax tree of arithmetic expressions, and its reduction to a float.

```
<node> ::= Number(value)
         | Add(<node>, <node>) | Subtract(<node>, <node>)
         | Multiply(<node>, <node>) | Divide(<node>, <node>)
         | Caret(<node>, <node>)        ; base, exponent
         | Negative(<node>)
```

Trees are built bottom-up by the parser and never change afterwards: a node owns its children and nothing else refers
to them. Evaluation follows IEEE 754 double semantics throughout, so dividing by zero or raising a negative number to a
fractional power produces inf/nan rather than an exception.
"""

from abc import ABC, abstractmethod
import math
import operator


def is_odd_integer(num):
    return math.isfinite(num) and num.is_integer() and num % 2 == 1


def divide(dividend, divisor):
    """IEEE 754 division: x/0 is a signed infinity, 0/0 is nan."""
    try:
        return dividend / divisor
    except ZeroDivisionError:
        if dividend == 0 or math.isnan(dividend):
            return math.nan
        return math.copysign(math.inf, dividend) * math.copysign(1.0, divisor)


def power(base, exponent):
    """IEEE 754 pow. math.pow already agrees with C's pow everywhere except where it raises instead of returning
    nan/inf.
    """
    try:
        return math.pow(base, exponent)
    except ValueError:
        if base == 0:  # zero to a negative power
            return math.copysign(math.inf, base) if is_odd_integer(exponent) else math.inf
        return math.nan  # negative base, non-integer exponent
    except OverflowError:
        return -math.inf if base < 0 and is_odd_integer(exponent) else math.inf


class Node(ABC):
    """Superclass of every node in an expression tree."""

    def __init__(self, *nodes):
        self._nodes = tuple(nodes)
        self._cls = type(self).__name__

    @property
    def nodes(self):
        """Children of this node, left to right."""
        return self._nodes

    @property
    @abstractmethod
    def expr(self):
        """Fully parenthesized infix form of this node."""

    @abstractmethod
    def evaluate(self):
        """Recursively reduces this node to a float."""

    def display(self, indents=0):
        """Recursively displays Node tree with readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.display()

    def __eq__(self, other):
        return type(other) is type(self) and self.nodes == other.nodes

    def __hash__(self):
        return hash((self._cls, self.nodes))


class Number(Node):
    """Leaf holding a literal."""

    def __init__(self, value):
        super().__init__()
        self._value = float(value)

    @property
    def value(self):
        return self._value

    @property
    def expr(self):
        return repr(self.value)

    def evaluate(self):
        return self.value

    def __eq__(self, other):
        return type(other) is type(self) and self.value == other.value

    def __hash__(self):
        return hash((self._cls, self.value))


class BinaryOp(Node):
    """Node with a left and right operand. Subclasses set symbol and operate."""
    symbol = None

    def __init__(self, left, right):
        super().__init__(left, right)

    @property
    def left(self):
        return self.nodes[0]

    @property
    def right(self):
        return self.nodes[1]

    @property
    def expr(self):
        return f"({self.left.expr} {self.symbol} {self.right.expr})"

    @staticmethod
    @abstractmethod
    def operate(left, right):
        """Applies this operator to two evaluated operands."""

    def evaluate(self):
        return self.operate(self.left.evaluate(), self.right.evaluate())


class Add(BinaryOp):
    symbol = "+"
    operate = staticmethod(operator.add)


class Subtract(BinaryOp):
    symbol = "-"
    operate = staticmethod(operator.sub)


class Multiply(BinaryOp):
    symbol = "*"
    operate = staticmethod(operator.mul)


class Divide(BinaryOp):
    symbol = "/"
    operate = staticmethod(divide)


class Caret(BinaryOp):
    """Exponentiation: left is the base and right the exponent."""
    symbol = "^"
    operate = staticmethod(power)

    @property
    def base(self):
        return self.left

    @property
    def exponent(self):
        return self.right


class Negative(Node):
    """Unary minus."""

    def __init__(self, operand):
        super().__init__(operand)

    @property
    def operand(self):
        return self.nodes[0]

    @property
    def expr(self):
        return f"(-{self.operand.expr})"

    def evaluate(self):
        return -self.operand.evaluate()


def evaluate(node):
    """Reduces the tree rooted at node to a float. Never mutates the tree."""
    return node.evaluate()
