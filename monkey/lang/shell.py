"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd
import getpass

from termcolor import colored

from monkey.lang.error import ErrorHandler
from monkey.runtime.objects import is_error


def username():
    """Login name of the current user, or "Unknown" if it can't be determined."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "Unknown"


class Shell(cmd.Cmd):
    """Monkey language shell."""
    intro = "Hello {}! This is the Monkey programming language!\nFeel free to type in commands!\n"
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations
    goodbye = "Bye!!!"

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.intro = Shell.intro.format(username())

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Monkey source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            self.sess.add(line, self.line_num - line.count("\n"))  # number of the first line of the entry
            self.sess.run()

            while self.sess.results:
                self.display(self.sess.pop())

    def display(self, result):
        """Prints the output of a LineResult, errors in red."""
        if result.output is None:
            return
        if is_error(result.value):
            print(colored(result.output, ErrorHandler.ERROR))
        else:
            print(result.output)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, arrays, hashes and first-class functions. \n"
              "Bind values with 'let', e.g. 'let add = fn(a, b) { a + b };', then call them: \n"
              "'add(1, 2)'. Builtins: len, head, last, tail, init, push, prepend.\n"
              "Bindings last for the whole session. Type 'exit', an empty line or Ctrl-D to leave.")

    def emptyline(self):
        """An empty line continues an unfinished entry, otherwise it exits the interpreter."""
        if self._tmp_line:
            self.default("")
            return False
        return self.do_exit("")

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        print(self.goodbye)
        return True
