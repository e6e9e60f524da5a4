"""Abstract syntax tree for the Monkey language.

Every node keeps the token it was built from and renders to canonical, source-like text via str(). The rendering
fully parenthesizes operator expressions (`-a * b` -> `((-a) * b)`) and is itself valid Monkey source: parsing
str(program) gives back a tree with the same rendering.

```
<program>    ::= <statement>*
<statement>  ::= "let" <ident> "=" <expr> [";"]
               | "return" <expr> [";"]
               | <expr> [";"]
<block>      ::= "{" <statement>* "}"
<expr>       ::= <ident> | <int> | <string> | "true" | "false"
               | <prefix-op> <expr> | <expr> <infix-op> <expr> | "(" <expr> ")"
               | "if" "(" <expr> ")" <block> ["else" <block>]
               | "fn" "(" [<ident> ("," <ident>)*] ")" <block>
               | <expr> "(" [<expr> ("," <expr>)*] ")"
               | "[" [<expr> ("," <expr>)*] "]" | <expr> "[" <expr> "]"
               | "{" [<expr> ":" <expr> ("," <expr> ":" <expr>)*] "}"
```
"""

from abc import ABC, abstractmethod


def join_statements(statements):
    """Renders statements so that re-parsing the text yields the same statements: every statement but the last is
    terminated by a semicolon.
    """
    rendered = [str(statement) for statement in statements]
    for idx, text in enumerate(rendered[:-1]):
        if not text.endswith(";"):
            rendered[idx] = text + ";"
    return " ".join(rendered)


class Node(ABC):
    """Superclass of every AST node."""

    def __init__(self, token):
        self.token = token
        self._cls = type(self).__name__

    def token_literal(self):
        return self.token.literal

    @property
    def nodes(self):
        """Child nodes, in source order."""
        return []

    @abstractmethod
    def __str__(self):
        """Canonical source rendering of this node."""

    def display(self, indents=0):
        """Recursively displays the tree with readable format.

        Format:
        <Node>('<str>', nodes=[
            <Node>('<str>', nodes=[
                ...
                <Node>('<str>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}('{self}'"
        nodes = self.nodes
        if nodes:
            result += ", nodes=["
            for node in nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self}')"

    def __eq__(self, other):
        return isinstance(other, type(self)) and str(self) == str(other)

    def __hash__(self):
        return hash((self._cls, str(self)))


class Statement(Node):
    """Superclass for statements."""


class Expression(Node):
    """Superclass for expressions."""


class Program(Node):
    """Root of every tree: the statements of one source text."""

    def __init__(self, statements=()):
        super().__init__(None)
        self.statements = tuple(statements)

    def token_literal(self):
        if not self.statements:
            return ""
        return self.statements[0].token_literal()

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return join_statements(self.statements)


# ---------------------------------------------------------------------------------------------------------------------
# Statements


class LetStatement(Statement):

    def __init__(self, token, name, value):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        return f"{self.token_literal()} {self.name} = {self.value};"


class ReturnStatement(Statement):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return [self.value]

    def __str__(self):
        return f"{self.token_literal()} {self.value};"


class ExpressionStatement(Statement):
    """Wraps an expression used in statement position, e.g. `x + 10;`."""

    def __init__(self, token, expression):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        return str(self.expression)


class BlockStatement(Statement):
    """Braced statement list. Renders without its braces: the owning node adds them."""

    def __init__(self, token, statements):
        super().__init__(token)
        self.statements = tuple(statements)

    @property
    def nodes(self):
        return list(self.statements)

    def __str__(self):
        return join_statements(self.statements)


def braced(block):
    body = str(block)
    return f"{{ {body} }}" if body else "{ }"


# ---------------------------------------------------------------------------------------------------------------------
# Expressions


class Identifier(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.value


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return str(self.value)


class StringLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return f"\"{self.value}\""


class BooleanLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return "true" if self.value else "false"


class PrefixExpression(Expression):
    """`<operator><right>`, where operator is "!" or "-"."""

    def __init__(self, token, operator, right):
        super().__init__(token)
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        return f"({self.operator}{self.right})"


class InfixExpression(Expression):

    def __init__(self, token, left, operator, right):
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class IfExpression(Expression):
    """`if (<condition>) { <consequence> } else { <alternative> }`; alternative may be None."""

    def __init__(self, token, condition, consequence, alternative=None):
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    @property
    def nodes(self):
        nodes = [self.condition, self.consequence]
        if self.alternative is not None:
            nodes.append(self.alternative)
        return nodes

    def __str__(self):
        result = f"if ({self.condition}) {braced(self.consequence)}"
        if self.alternative is not None:
            result += f" else {braced(self.alternative)}"
        return result


class FunctionLiteral(Expression):

    def __init__(self, token, parameters, body):
        super().__init__(token)
        self.parameters = tuple(parameters)
        self.body = body

    @property
    def nodes(self):
        return [*self.parameters, self.body]

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"{self.token_literal()}({params}) {braced(self.body)}"


class CallExpression(Expression):

    def __init__(self, token, function, arguments):
        super().__init__(token)
        self.function = function
        self.arguments = tuple(arguments)

    @property
    def nodes(self):
        return [self.function, *self.arguments]

    def __str__(self):
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.function} ({args})"


class ArrayLiteral(Expression):

    def __init__(self, token, elements):
        super().__init__(token)
        self.elements = tuple(elements)

    @property
    def nodes(self):
        return list(self.elements)

    def __str__(self):
        return "[" + ", ".join(str(element) for element in self.elements) + "]"


class IndexExpression(Expression):

    def __init__(self, token, left, index):
        super().__init__(token)
        self.left = left
        self.index = index

    @property
    def nodes(self):
        return [self.left, self.index]

    def __str__(self):
        return f"({self.left}[{self.index}])"


class HashLiteral(Expression):
    """Hash literal. pairs is an ordered sequence of (key expression, value expression) tuples."""

    def __init__(self, token, pairs):
        super().__init__(token)
        self.pairs = tuple(pairs)

    @property
    def nodes(self):
        return [node for pair in self.pairs for node in pair]

    def __str__(self):
        return "{" + ", ".join(f"{key}: {value}" for key, value in self.pairs) + "}"
