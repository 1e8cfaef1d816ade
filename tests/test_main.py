from contextlib import redirect_stdout
import io
import os
import re
import tempfile
import unittest
from unittest import mock

from arith.main import main


def plain(text):
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, text):
        path = os.path.join(self.tmp.name, "exprs.txt")
        with open(path, "w") as file:
            file.write(text)
        return path

    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(argv)
        return plain(out.getvalue())

    def test_file(self):
        output = self.run_main([self.write("2+3*4\n\n(2)(3)\n")])
        self.assertEqual("The computed number is 14\nThe computed number is 6\n", output)

    def test_file_ast(self):
        output = self.run_main(["--ast", self.write("-2^2\n")])
        self.assertIn("The generated AST is\nCaret(expr='((-2.0) ^ 2.0)'", output)
        self.assertTrue(output.endswith("The computed number is 4\n"))

    def test_file_error(self):
        path = self.write("1+1\n(2+3\n4\n")

        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main([path])
        output = plain(out.getvalue())

        self.assertEqual(1, ctx.exception.code)
        self.assertTrue(output.startswith("The computed number is 2\n"))
        self.assertIn(f"File '{path}', line 2:", output)
        self.assertIn("error [invalid operator]", output)
        self.assertNotIn("The computed number is 4", output)

    def test_missing_file(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main([os.path.join(self.tmp.name, "missing.txt")])
        self.assertEqual(1, ctx.exception.code)
        self.assertIn("could not be opened", plain(out.getvalue()))

    def test_shell(self):
        with mock.patch("sys.stdin", io.StringIO("2+3*4\n)\n")):
            output = self.run_main([])

        self.assertIn("Welcome to Arithmetic expression evaluator", output)
        self.assertIn("The computed number is 14", output)
        self.assertIn("error [unable to parse]", output)


if __name__ == '__main__':
    unittest.main()
