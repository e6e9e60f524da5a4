"""Host-level error handling for the Monkey interpreter. Monkey programs report their own failures as Error values
(see monkey.runtime.objects); this module only deals with what goes wrong around them: unreadable files, lines that
don't parse, interrupts, runaway recursion. Only GenericExceptions should be encountered during running: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


MONKEY_FACE = "\n".join([
    "            __,__",
    "   .--.  .-\"     \"-.  .--.",
    "  / .. \\/  .-. .-.  \\/ .. \\",
    " | |  '|  /   Y   \\  |'  | |",
    " | \\   \\  \\ 0 | 0 /  /   / |",
    "  \\ '- ,\\.-\"\"\"\"\"\"\"-./, -' /",
    "   ''-' /_   ^ ^   _\\ '-''",
    "       |  \\._   _./  |",
    "       \\   \\ '~' /   /",
    "        '._ '-=-' _.'",
    "           '-----'",
])


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a Monkey error/warning. The "{}"
    placeholders in msg are filled with exprs, highlighted in bold. exprs[0] is the offending snippet; start and end
    delimit the part of it that diagnose underlines (end=-1 means up to its end).
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        exprs = [exprs] if isinstance(exprs, str) else list(exprs or [""])

        self.msg = msg.format(*[colored(expr, attrs=["bold"]) for expr in exprs])
        self.expr = exprs[0]
        self.start = start
        self.end = len(self.expr) if end == -1 else end

        self.diagnosis = diagnosis
        self.internal = internal
        super().__init__(self.msg)


class ParseErrors(GenericException):
    """Raised when a source text has syntax errors. errors is the parser's list of messages, in order; expr is the
    source line of the first one, with start:end spanning the token it choked on.
    """

    def __init__(self, errors, expr="", start=0, end=-1):
        super().__init__("could not parse '{}'", expr, start, end)
        self.errors = list(errors)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report Monkey errors/warnings instead."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

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
        """Returns error.expr with its offending part highlighted, and a caret line underneath pointing at it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        end = max(error.end, 1)

        before, offending, after = error.expr[:error.start], error.expr[error.start:end], error.expr[end:]
        marker = "^" + "~" * (end - error.start - 1)

        source_line = "  " + before + colored(offending, color, attrs=["bold"]) + after
        marker_line = "  " + " " * error.start + colored(marker, color, attrs=["bold"])
        return source_line + "\n" + marker_line

    def _location(self):
        """Returns "file:line_num: " of the innermost registered line, or "" if no line is registered."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def _traceback_text(self):
        """Returns the registered lines, outermost first, as "File ..., line ...:" entries."""
        entries = [f"  File '{file}', line {line_num}:\n    {line}\n"
                   for file, (line, line_num) in self.traceback.items() if line]  # dicts are insertion-ordered
        if len(entries) > 1:
            entries.insert(0, "Traceback:\n")
        return "".join(entries)

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        warning = GenericException(*args, **kwargs)

        print(colored(self._location(), attrs=["bold"]) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"])
              + warning.msg)
        if not warning.internal and warning.expr and warning.diagnosis:
            print(ErrorHandler.diagnose(warning, warning=True))

    def throw(self, error):
        """Reports error (a GenericException) along with the lines registered in self.traceback. Exits if fatal,
        otherwise clears the registered lines so the session can go on.
        """
        error_msg = self._traceback_text()

        if isinstance(error, ParseErrors):
            print(colored(MONKEY_FACE, ErrorHandler.ERROR))
            print("Woops! We ran into some monkey business here!\n")
            error_msg += colored("parse errors:", ErrorHandler.ERROR, attrs=["bold"])
            error_msg += "".join("\n  " + message for message in error.errors)
            print(error_msg)

            if error.expr:
                print(ErrorHandler.diagnose(error))

        else:
            if error.internal:
                error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
            print(error_msg + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg)

            if not error.internal and error.expr and error.diagnosis:
                print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Reports Monkey-level failures and swallows them. SystemExit passes through; unknown exceptions are reported
        as internal errors and then re-raised.
        """
        if exc_type is None or exc_type is SystemExit:
            return False

        if issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type in HOST_ERRORS:
            self.throw(GenericException(HOST_ERRORS[exc_type]))
        else:
            details = str(exc_val).replace("{", "{{").replace("}", "}}")
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {details}'", internal=True))
            return False

        return True


# Python exceptions that a Monkey program can legitimately trigger
HOST_ERRORS = {
    KeyboardInterrupt: "keyboard interrupt",
    RecursionError: "maximum recursion depth exceeded (try --recursion-limit)",
}
