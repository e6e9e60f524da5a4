"""Operator-precedence (Pratt) parser for the Monkey language.

The parser reads tokens one at a time with two-token lookahead (current and peek). Each token kind that can start an
expression has a prefix parse function; each token kind that can continue one (binary operators, call "(", index "[")
has an infix parse function and a precedence:

```
LOWEST < EQUALS (== !=) < LESSGREATER (< >) < SUM (+ -) < PRODUCT (* /) < PREFIX (-x !x) < CALL (f(x)) < INDEX (a[i])
```

Parsing is best-effort: a malformed statement produces one message in Parser.errors and no node, and the parser then
resumes at the next token so that several independent errors can be reported from one source.
"""

import enum

from monkey.syntax import tree
from monkey.syntax.lexical import Lexer
from monkey.syntax.tokens import EOF_TOKEN, TokenKind


class Precedence(enum.IntEnum):
    LOWEST = enum.auto()
    EQUALS = enum.auto()       # == !=
    LESSGREATER = enum.auto()  # < >
    SUM = enum.auto()          # + -
    PRODUCT = enum.auto()      # * /
    PREFIX = enum.auto()       # -x !x
    CALL = enum.auto()         # fn(x)
    INDEX = enum.auto()        # array[index]


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
    TokenKind.LBRACKET: Precedence.INDEX,
}


class ParseError(Exception):
    """Raised inside a production to abandon the statement being parsed. Never escapes Parser. token is the token the
    production choked on.
    """

    def __init__(self, message, token):
        super().__init__(message)
        self.token = token


class Parser:
    """Builds a tree.Program from a stream of tokens. tokens may be a Lexer or any iterable of Tokens."""

    def __init__(self, tokens):
        self.tokens = iter(tokens)
        self.errors = []
        self.error_tokens = []  # offending token of each message in errors

        self.current = EOF_TOKEN
        self.peek = EOF_TOKEN

        self.prefix_fns = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean_literal,
            TokenKind.FALSE: self.parse_boolean_literal,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
            TokenKind.LBRACKET: self.parse_array_literal,
            TokenKind.LBRACE: self.parse_hash_literal,
        }
        self.infix_fns = {kind: self.parse_infix_expression for kind in PRECEDENCES}
        self.infix_fns[TokenKind.LPAREN] = self.parse_call_expression
        self.infix_fns[TokenKind.LBRACKET] = self.parse_index_expression

        # fill current and peek
        self.next_token()
        self.next_token()

    def next_token(self):
        self.current = self.peek
        self.peek = next(self.tokens, EOF_TOKEN)

    def current_is(self, kind):
        return self.current.kind is kind

    def peek_is(self, kind):
        return self.peek.kind is kind

    def expect_peek(self, kind):
        """Advances if peek is of the given kind, otherwise abandons the current production."""
        if not self.peek_is(kind):
            raise ParseError(f"Next token expected to be {kind}, but found {self.peek.kind} instead.", self.peek)
        self.next_token()

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek.kind, Precedence.LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current.kind, Precedence.LOWEST)

    def parse_program(self):
        """Parses every statement until EOF. Statements that fail to parse are left out and reported in errors."""
        statements = []
        while not self.current_is(TokenKind.EOF):
            statement = self.parse_statement()
            if statement is not None:
                statements.append(statement)
            self.next_token()
        return tree.Program(statements)

    def parse_statement(self):
        """Returns the statement starting at current, or None (with a recorded error) if it is malformed. On return,
        current is the last token of the statement.
        """
        try:
            if self.current_is(TokenKind.LET):
                return self.parse_let_statement()
            if self.current_is(TokenKind.RETURN):
                return self.parse_return_statement()
            return self.parse_expression_statement()
        except ParseError as error:
            self.errors.append(str(error))
            self.error_tokens.append(error.token)
            return None

    def parse_let_statement(self):
        token = self.current

        self.expect_peek(TokenKind.IDENT)
        name = tree.Identifier(self.current, self.current.literal)

        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(TokenKind.SEMICOLON):
            self.next_token()
        return tree.LetStatement(token, name, value)

    def parse_return_statement(self):
        token = self.current

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(TokenKind.SEMICOLON):
            self.next_token()
        return tree.ReturnStatement(token, value)

    def parse_expression_statement(self):
        token = self.current
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_is(TokenKind.SEMICOLON):
            self.next_token()
        return tree.ExpressionStatement(token, expression)

    def parse_block_statement(self):
        """Parses `{ <statement>* }` with current on "{". Leaves current on the closing "}"."""
        token = self.current
        statements = []

        self.next_token()
        while not self.current_is(TokenKind.RBRACE):
            if self.current_is(TokenKind.EOF):
                raise ParseError(f"Next token expected to be {TokenKind.RBRACE}, but found {TokenKind.EOF} instead.",
                                 self.current)

            statement = self.parse_statement()
            if statement is None:
                # an inner statement failed: its error is already recorded, abandon the enclosing one too
                raise ParseError(self.errors.pop(), self.error_tokens.pop())
            statements.append(statement)
            self.next_token()

        return tree.BlockStatement(token, statements)

    def parse_expression(self, precedence):
        """The Pratt loop: parse a prefix expression, then keep extending it with infix operators that bind tighter
        than precedence.
        """
        prefix = self.prefix_fns.get(self.current.kind)
        if prefix is None:
            raise ParseError(f"no prefix parser found for {self.current.kind}", self.current)
        left = prefix()

        while not self.peek_is(TokenKind.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_fns.get(self.peek.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    # -----------------------------------------------------------------------------------------------------------------
    # Prefix parse functions

    def parse_identifier(self):
        return tree.Identifier(self.current, self.current.literal)

    def parse_integer_literal(self):
        try:
            value = int(self.current.literal)
        except ValueError:
            raise ParseError(f"could not parse {self.current.literal} as integer", self.current)
        return tree.IntegerLiteral(self.current, value)

    def parse_string_literal(self):
        return tree.StringLiteral(self.current, self.current.literal)

    def parse_boolean_literal(self):
        return tree.BooleanLiteral(self.current, self.current_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        token = self.current
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return tree.PrefixExpression(token, token.literal, right)

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        return expression

    def parse_if_expression(self):
        token = self.current

        self.expect_peek(TokenKind.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)

        self.expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_is(TokenKind.ELSE):
            self.next_token()
            self.expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()

        return tree.IfExpression(token, condition, consequence, alternative)

    def parse_function_literal(self):
        token = self.current

        self.expect_peek(TokenKind.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenKind.LBRACE)
        body = self.parse_block_statement()

        return tree.FunctionLiteral(token, parameters, body)

    def parse_function_parameters(self):
        """Parses `(<ident> ("," <ident>)*)` with current on "(". Leaves current on ")"."""
        parameters = []

        if self.peek_is(TokenKind.RPAREN):
            self.next_token()
            return parameters

        self.expect_peek(TokenKind.IDENT)
        parameters.append(tree.Identifier(self.current, self.current.literal))

        while self.peek_is(TokenKind.COMMA):
            self.next_token()
            self.expect_peek(TokenKind.IDENT)
            parameters.append(tree.Identifier(self.current, self.current.literal))

        self.expect_peek(TokenKind.RPAREN)
        return parameters

    def parse_array_literal(self):
        token = self.current
        return tree.ArrayLiteral(token, self.parse_expression_list(TokenKind.RBRACKET))

    def parse_hash_literal(self):
        token = self.current
        pairs = self.parse_expression_list(TokenKind.RBRACE, self.parse_hash_pair)
        return tree.HashLiteral(token, pairs)

    def parse_lowest_expression(self):
        return self.parse_expression(Precedence.LOWEST)

    def parse_hash_pair(self):
        key = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.COLON)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        return key, value

    def parse_expression_list(self, end, parse_item=None):
        """Parses a comma-separated list of items up to the closing token end, with current on the opening token.
        Used for call arguments, array elements and (with parse_item=parse_hash_pair) hash literal pairs. Leaves
        current on end.
        """
        if parse_item is None:
            parse_item = self.parse_lowest_expression

        items = []
        if self.peek_is(end):
            self.next_token()
            return items

        self.next_token()
        items.append(parse_item())

        while self.peek_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            items.append(parse_item())

        self.expect_peek(end)
        return items

    # -----------------------------------------------------------------------------------------------------------------
    # Infix parse functions

    def parse_infix_expression(self, left):
        token = self.current
        precedence = self.current_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return tree.InfixExpression(token, left, token.literal, right)

    def parse_call_expression(self, function):
        token = self.current
        return tree.CallExpression(token, function, self.parse_expression_list(TokenKind.RPAREN))

    def parse_index_expression(self, left):
        token = self.current
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RBRACKET)
        return tree.IndexExpression(token, left, index)


def parse(source):
    """Parses source (a string, a Lexer or any iterable of Tokens). Returns (Program, list of error messages)."""
    if isinstance(source, str):
        source = Lexer(source)

    parser = Parser(source)
    program = parser.parse_program()
    return program, parser.errors
