"""Session control for arith. Ties the tokenizer, parser and evaluator together, either for the interactive shell or
for a file of expressions (one per line).
"""

import math

from arith.lang.error import GenericException, UnableToParse
from arith.parse import ast
from arith.parse.parser import Parser


def preprocess_line(line):
    """Removes all whitespace from line."""
    return "".join(line.split())


def parse(expr):
    """Returns the AST of expr. Raises UnableToParse or InvalidOperator if expr is not a valid expression."""
    return Parser(preprocess_line(expr)).parse()


def reduce(tree, expr=""):
    """Evaluates tree. Anything that goes wrong while reducing is reported as UnableToParse."""
    try:
        return ast.evaluate(tree)
    except (ArithmeticError, RecursionError):
        raise UnableToParse("unable to reduce expression to a number", expr, diagnosis=False)


def evaluate(expr):
    """Full pipeline: expression text in, float out."""
    expr = preprocess_line(expr)
    return reduce(Parser(expr).parse(), expr)


def format_number(num):
    """Formats a result: integral values without a trailing '.0', nan as NaN."""
    if math.isnan(num):
        return "NaN"
    elif math.isfinite(num) and num.is_integer():
        return f"{num:.0f}"
    return repr(num)


class Session:
    """Governs an arith session: parses lines as they are added and evaluates them on run."""
    SH_FILE = "<in>"  # command-line interpreter filename
    RESULT = "The computed number is {}"

    def __init__(self, error_handler, path, cmd_line, show_ast=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # whether or not to print each AST as it is built

        self.lines = []    # list of (line, line num) read from path
        self.to_eval = {}  # dict of line num: (expr, AST) to evaluate
        self.results = []

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        if preprocess_line(line):
                            self.lines.append((line.rstrip("\n"), line_num + 1))
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    def add(self, line, line_num):
        """Parses line and queues its AST. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        expr = preprocess_line(line)
        tree = Parser(expr).parse()
        if self.show_ast:
            print(f"The generated AST is\n{tree.display()}")

        self.to_eval[line_num] = (expr, tree)
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates every queued AST, appending the numbers to self.results. Will raise any errors that are
        encountered.
        """
        for line_num, (expr, tree) in list(self.to_eval.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            try:
                result = reduce(tree, expr)
            finally:
                del self.to_eval[line_num]

            if not math.isfinite(result):
                self.error_handler.warn("'{}' evaluated to {}", (expr, format_number(result)), diagnosis=False)

            self.results.append(result)
            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest result, formatted for display."""
        return Session.RESULT.format(format_number(self.results.pop(0)))
