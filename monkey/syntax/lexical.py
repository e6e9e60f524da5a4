"""Lexical analysis for the Monkey language: turns source text into a flat stream of Tokens.

Recognized lexemes:

```
<ident>   ::= (<letter> | "_")+             ; looked up in the keyword table first
<int>     ::= <digit>+
<string>  ::= '"' <char except '"'>* '"'    ; raw, no escape sequences
<op>      ::= "=" | "==" | "!" | "!=" | "+" | "-" | "*" | "/" | "<" | ">"
<delim>   ::= "," | ";" | ":" | "(" | ")" | "{" | "}" | "[" | "]"
```

Anything else becomes a single-character ILLEGAL token: the lexer itself never fails.
"""

from string import ascii_letters, digits

from monkey.syntax.tokens import PUNCTUATION, Token, TokenKind, lookup_identifier

LETTERS = set(ascii_letters + "_")
DIGITS = set(digits)


class Lexer:
    """Pull-based tokenizer. Call next_token repeatedly, or iterate over the lexer to get every token up to (and
    including) EOF. Iteration is not restartable: it shares the cursor with next_token.
    """

    def __init__(self, source):
        self.source = source
        self.position = 0  # index of the character under examination

    @property
    def char(self):
        """Character under the cursor, or "" at end of input."""
        if self.position >= len(self.source):
            return ""
        return self.source[self.position]

    def peek_char(self):
        if self.position + 1 >= len(self.source):
            return ""
        return self.source[self.position + 1]

    def next_token(self):
        """Returns the next Token in source. Once the input is exhausted, keeps returning EOF tokens."""
        self._skip_whitespace()
        start = self.position
        kind, literal = self._read_token()
        return Token(kind, literal, start)

    def _read_token(self):
        """Consumes one lexeme at the cursor. Returns its (kind, literal)."""
        char = self.char

        if not char:
            return TokenKind.EOF, ""

        if char == "=" or char == "!":
            if self.peek_char() == "=":
                self.position += 2
                return (TokenKind.EQ if char == "=" else TokenKind.NOT_EQ), char + "="
            self.position += 1
            return (TokenKind.ASSIGN if char == "=" else TokenKind.BANG), char

        if char in PUNCTUATION:
            self.position += 1
            return PUNCTUATION[char], char

        if char == "\"":
            return TokenKind.STRING, self._read_string()

        if char in LETTERS:
            literal = self._read_while(LETTERS)
            return lookup_identifier(literal), literal

        if char in DIGITS:
            return TokenKind.INT, self._read_while(DIGITS)

        self.position += 1
        return TokenKind.ILLEGAL, char

    def _skip_whitespace(self):
        while self.char and self.char.isspace():
            self.position += 1

    def _read_while(self, allowed):
        """Consumes the maximal run of characters in allowed and returns it."""
        start = self.position
        while self.char and self.char in allowed:
            self.position += 1
        return self.source[start:self.position]

    def _read_string(self):
        """Consumes a string literal (cursor on the opening quote) and returns its raw contents. An unterminated
        string extends to the end of input.
        """
        start = self.position + 1
        end = self.source.find("\"", start)
        if end == -1:
            end = len(self.source)

        self.position = end + 1
        return self.source[start:end]

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return


def tokenize(source):
    """Returns list of all Tokens in source, ending with EOF."""
    return list(Lexer(source))
