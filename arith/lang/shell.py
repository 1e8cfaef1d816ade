"""Handles interactive/command-line mode for arith. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """Arithmetic expression evaluator shell."""
    intro = ("Hello! Welcome to Arithmetic expression evaluator.\n"
             "You can calculate value for expression such as 2*3+(4-5)+2^3/4.\n"
             "Allowed numbers: positive, negative and decimals.\n"
             "Supported operations: Add, Subtract, Multiply, Divide, PowerOf(^).\n"
             "Enter your arithmetic expression below (type 'help' for more information):")
    prompt = ">> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self.line_num = 0
        self.exited = False

    def default(self, line):
        """Evaluates an arbitrary expression."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Prints a short guide to the expression syntax."""
        print("Type an arithmetic expression and press enter to evaluate it.\n\n"
              "Numbers are decimals such as 2, 0.5 or .5. Operators, from loosest to tightest:\n"
              "  + -    addition, subtraction\n"
              "  * /    multiplication, division ('(2)(3)' multiplies too)\n"
              "  ^      power\n"
              "  -x     negation, which binds tighter than '^': '-2^2' is 4\n\n"
              "All operators group from the left, so '2^3^2' is 64. Spaces are ignored, and so are blank lines.\n"
              "Type 'exit' or press Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        self.exited = True
        return True
