"""Session control for the Monkey interpreter: runs source text through lexer, parser and evaluator against one
environment that lives as long as the session, either line by line (shell) or as a whole file.
"""

from collections import namedtuple

from monkey.lang.error import GenericException, ParseErrors
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import evaluate
from monkey.runtime.objects import NULL
from monkey.syntax.lexical import Lexer, tokenize
from monkey.syntax.parser import Parser, parse
from monkey.syntax.tokens import TokenKind
from monkey.syntax.tree import LetStatement

# output is the text to print (None if there is nothing to print); parse_errors is None unless parsing failed; value
# is the evaluated Object, when there is one
LineResult = namedtuple("LineResult", ["output", "parse_errors", "value"], defaults=[None, None, None])

OPENERS = {TokenKind.LPAREN, TokenKind.LBRACE, TokenKind.LBRACKET}
CLOSERS = {TokenKind.RPAREN, TokenKind.RBRACE, TokenKind.RBRACKET}


def create_session():
    """Returns a fresh top-level environment."""
    return Environment()


def parse_source(source):
    """Like parse, but returns the Parser itself instead of its messages, so that callers can see error_tokens."""
    parser = Parser(Lexer(source))
    return parser.parse_program(), parser


def locate(source, position):
    """Returns the source line containing the character at position, the number of lines before it, and the column of
    position within it.
    """
    line_start = source.rfind("\n", 0, position) + 1
    line_end = source.find("\n", position)
    if line_end == -1:
        line_end = len(source)
    return source[line_start:line_end], source.count("\n", 0, line_start), position - line_start


def execute(program, env):
    """Evaluates an already parsed program in env. Returns LineResult."""
    value = evaluate(program, env)
    if not program.statements:
        return LineResult()
    if isinstance(program.statements[-1], LetStatement) and value is NULL:
        return LineResult(value=value)
    return LineResult(output=str(value), value=value)


def run_line(source, env):
    """Parses and evaluates source in env. Parse errors prevent evaluation of the whole source."""
    program, errors = parse(source)
    if errors:
        return LineResult(parse_errors=errors)
    return execute(program, env)


class Session:
    """Governs a Monkey session, with control over the scope shared by its lines."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = create_session()
        self.to_exec = {}  # dict of line num: parsed Programs to execute
        self.results = []  # LineResults of executed Programs, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to the unfinished source prev (if any). Returns the joined source and whether it still has
        unclosed brackets, in which case the caller should ask for another line before calling add.
        """
        line = line.rstrip()
        if prev:
            line = prev + "\n" + line

        kinds = [token.kind for token in tokenize(line)]  # brackets inside string literals don't count
        balance = sum(kind in OPENERS for kind in kinds) - sum(kind in CLOSERS for kind in kinds)
        return line, balance > 0

    def add(self, source, line_num):
        """Parses source and queues it for execution. Evaluation is delayed until run is called. Raises ParseErrors
        if source has syntax errors.
        """
        display = source.strip().splitlines()[0] if source.strip() else source
        self.error_handler.register_line(self.path, display, line_num)  # in case error is raised

        program, parser = parse_source(source)
        if parser.errors:
            token = parser.error_tokens[0]
            position = len(source.rstrip()) if token.kind is TokenKind.EOF else token.position
            line, line_offset, column = locate(source, position)

            self.error_handler.register_line(self.path, line, line_num + line_offset)
            raise ParseErrors(parser.errors, line, column, column + max(len(token.literal), 1))

        for statement in program.statements:
            if isinstance(statement, LetStatement) and statement.name.value in BUILTINS:
                name = statement.name.value
                line, line_offset, column = locate(source, statement.name.token.position)

                self.error_handler.register_line(self.path, line, line_num + line_offset)
                self.error_handler.warn("'{1}' shadows builtin function", [line, name], column, column + len(name))

        self.to_exec[line_num] = program
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Executes queued programs in order, collecting their LineResults in self.results."""
        for line_num, program in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, str(program), line_num)
            try:
                self.results.append(execute(program, self.env))
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the oldest LineResult."""
        return self.results.pop(0)
