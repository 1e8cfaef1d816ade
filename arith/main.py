"""Evaluates arithmetic expressions from a file (one per line) or in command-line mode. Also uses error handling context
manager. Called from the arith executable script.
"""

import argparse

from arith.lang.error import ErrorHandler
from arith.lang.session import Session
from arith.lang.shell import Shell


def run_file(error_handler, path, show_ast=False):
    """Evaluates and prints every expression in path. The first error ends the run."""
    sess = Session(error_handler, path, cmd_line=False, show_ast=show_ast)

    for line, line_num in sess.lines:
        sess.add(line, line_num)
        sess.run()
        print(sess.pop())


def run_shell(error_handler, show_ast=False):
    """Runs the shell until it is exited. Errors raised while reading input don't end it."""
    shell = Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=show_ast))

    while not shell.exited:
        with error_handler:
            shell.cmdloop()
        shell.intro = ""  # only greet once


def main(argv=None):
    """Runs arith. Called from the arith executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="arith", description="Arithmetic expression evaluator.")
        parser.add_argument("file", help="file of expressions to evaluate (if empty, goes to command-line mode)",
                            nargs="?")
        parser.add_argument("--ast", help="print the syntax tree of every expression", action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            run_file(error_handler, args.file, args.ast)
        else:
            run_shell(error_handler, args.ast)


if __name__ == "__main__":
    main()
