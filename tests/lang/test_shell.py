from contextlib import redirect_stdout
import io
import re
import unittest

from arith.lang.error import ErrorHandler
from arith.lang.session import Session
from arith.lang.shell import Shell


def plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True), stdout=io.StringIO())

    def onecmd(self, line):
        out = io.StringIO()
        with redirect_stdout(out):
            stop = self.shell.onecmd(line)
        return stop, plain(out.getvalue())

    def test_default(self):
        cases = {
            "2+3*4": "The computed number is 14\n",
            "(2 + 3) * 4": "The computed number is 20\n",
            "-2^2": "The computed number is 4\n",
            "(2)(3)": "The computed number is 6\n",
        }
        for line, expected in cases.items():
            stop, output = self.onecmd(line)
            self.assertFalse(stop, line)
            self.assertEqual(expected, output, line)

    def test_errors_do_not_stop(self):
        stop, output = self.onecmd("2+")
        self.assertFalse(stop)
        self.assertIn("error [unable to parse]", output)
        self.assertIn("File '<in>', line 1:", output)

        stop, output = self.onecmd("(2+3")
        self.assertFalse(stop)
        self.assertIn("error [invalid operator]: Error in evaluating '(2+3': expected ')' got end of input", output)

        stop, output = self.onecmd("1+1")
        self.assertEqual("The computed number is 2\n", output)
        self.assertEqual(3, self.shell.line_num)

    def test_non_finite(self):
        __, output = self.onecmd("1/0")
        self.assertIn("warning: '1/0' evaluated to inf", output)
        self.assertTrue(output.endswith("The computed number is inf\n"))

        __, output = self.onecmd("0/0")
        self.assertIn("warning: '0/0' evaluated to NaN", output)
        self.assertTrue(output.endswith("The computed number is NaN\n"))

    def test_emptyline(self):
        self.onecmd("1+1")
        stop, output = self.onecmd("")
        self.assertFalse(stop)
        self.assertEqual("", output)

        stop, output = self.onecmd(" \t ")
        self.assertFalse(stop)
        self.assertEqual("", output)
        self.assertEqual(1, self.shell.line_num)

    def test_help(self):
        __, output = self.onecmd("help")
        self.assertIn("'-2^2' is 4", output)
        self.assertIn("blank lines", output)

    def test_exit(self):
        stop, __ = self.onecmd("exit")
        self.assertTrue(stop)
        self.assertTrue(self.shell.exited)

    def test_cmdloop(self):
        shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True),
                      stdin=io.StringIO("2+3\n2+\n8/4/2\n"), stdout=io.StringIO())
        shell.use_rawinput = False

        out = io.StringIO()
        with redirect_stdout(out):
            shell.cmdloop()
        output = plain(out.getvalue())

        self.assertTrue(shell.exited)
        self.assertIn("The computed number is 5", output)
        self.assertIn("error [unable to parse]", output)
        self.assertIn("The computed number is 1", output)
        self.assertIn("Welcome to Arithmetic expression evaluator", shell.stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
