"""Runs the Monkey interpreter on a file, on a single line of source, or in command-line mode. Also uses error
handling context manager. Called from the monkey console script.

Python version must be >=3.7: error handling requires that dicts are insertion-ordered, and LineResult uses
namedtuple defaults.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey programming language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-e", "--eval", dest="source", help="evaluate SOURCE and print the result")
    parser.add_argument("--recursion-limit", type=int, default=None,
                        help="maximum depth of the Python stack (deeply recursive Monkey functions need more)")
    parser.add_argument("--ast", action="store_true",
                        help="print the syntax tree of FILE or SOURCE instead of evaluating it")
    return parser


def main(argv=None):
    """Runs Monkey interpreter. Called from monkey console script."""
    assert sys.version_info >= (3, 7), "monkey cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)

        if args.recursion_limit is not None:
            sys.setrecursionlimit(args.recursion_limit)

        if args.source is not None:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True)
            error_handler.fatal = True
            sess.add(args.source, 1)

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()
            return

        if args.ast:
            for program in sess.to_exec.values():
                print(program.display())
            return

        sess.run()
        for result in sess.results:
            if result.output is not None:
                print(result.output)


if __name__ == "__main__":
    main()
