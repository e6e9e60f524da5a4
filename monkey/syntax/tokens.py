"""Token model for the Monkey language. The lexer produces Tokens, the parser consumes them.

A token is just a kind paired with the literal text it was read from:

```
<token>   ::= <kind> <literal>
<kind>    ::= meta | identifier/literal | operator | delimiter | keyword
```

The value of every TokenKind is the name shown in parser error messages.
"""

import enum


class TokenKind(enum.Enum):
    # Meta
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"
    # Identifiers and literals
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"
    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="
    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"

    def __str__(self):
        return self.value


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

# single characters that map directly onto a token kind
PUNCTUATION = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    ":": TokenKind.COLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
}


def lookup_identifier(literal):
    """Returns the keyword kind of literal, or IDENT if literal is not reserved."""
    return KEYWORDS.get(literal, TokenKind.IDENT)


class Token:
    """Lexical unit. Two tokens are equal if they have the same kind and literal, wherever they were read from.
    position is the offset of the token in its source, or None for tokens not read from source.
    """

    def __init__(self, kind, literal, position=None):
        self.kind = kind
        self.literal = literal
        self.position = position

    def __repr__(self):
        return f"Token({self.kind.name}, '{self.literal}')"

    def __str__(self):
        return self.literal

    def __eq__(self, other):
        return isinstance(other, Token) and (self.kind, self.literal) == (other.kind, other.literal)

    def __hash__(self):
        return hash((self.kind, self.literal))


EOF_TOKEN = Token(TokenKind.EOF, "")
