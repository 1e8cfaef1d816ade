"""Error handling for arith. Only GenericExceptions should be encountered while evaluating: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Parsing fails in exactly two ways, UnableToParse and InvalidOperator. Both are raised where the problem is detected and
travel up to the ErrorHandler guarding the shell or the file being run.
"""

import sys

from termcolor import colored


def escape(text):
    """Escapes text so that it survives str.format."""
    return str(text).replace("{", "{{").replace("}", "}}")


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an arith error/warning. Essentially just a
    wrapper around parse_args.
    """
    kind = None  # shown in front of "error:" when set

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(GenericException):
    """Raised when an expression can't be turned into a number. description is the bare reason, without the
    expression or any formatting.
    """

    def __init__(self, description, expr="", start=0, end=-1, diagnosis=True):
        self.description = description
        super().__init__("Error in evaluating '{}': " + escape(description), expr, start, end, diagnosis)


class UnableToParse(ParseError):
    """The current token can't start an expression, a number is malformed, or the tree couldn't be reduced."""
    kind = "unable to parse"


class InvalidOperator(ParseError):
    """An expected token wasn't found, or the input ran out or contained an unknown character where a token was
    required.
    """
    kind = "invalid operator"


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom arith errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}
        self._reported = None  # last internal error thrown, so nested handlers only report it once

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        start = min(error.start, len(error.expr))
        end = max(error.end, start + 1)

        diagnosis = "  " + error.expr[:start]
        diagnosis += colored(error.expr[start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def location(self):
        """Returns 'file:line: ' for the line currently being run, or '' if no line is registered."""
        for file, (line, line_num) in self.traceback.items():
            if line:
                return f"{file}:{line_num}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = colored(self.location(), attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        label = f"error [{error.kind}]: " if error.kind else "error: "
        error_msg += colored(label, ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {k: (None, None) for k in self.traceback}  # if error occurred, reset traceback

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            return True

        do_exit = False
        if issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, RecursionError):
            self.throw(GenericException("expression is nested too deeply"))
        elif issubclass(exc_type, UnicodeError):
            self.throw(GenericException("unable to read input: '{}'", str(exc_val), diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_val is not self._reported:
            self._reported = exc_val
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {escape(exc_val)}'", internal=True))
            do_exit = True
        else:
            do_exit = True

        return not do_exit
