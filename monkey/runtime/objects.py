"""Runtime values of the Monkey language.

Every value has a `type` name (used in error messages) and a canonical str() rendering (used by the shell). Booleans
and null are singletons (TRUE, FALSE, NULL) so that they can be compared by identity. Integers, strings and booleans
are hashable: they provide hash_key() and can be used as keys of a Hash.

Errors are values too. Evaluation never raises for Monkey-level failures; it returns an Error that every caller
checks with is_error and passes upward unchanged.
"""

from abc import ABC
from collections import namedtuple

from monkey.syntax.tree import braced


# the type name is part of the key, otherwise 1 and true would collide (True == 1 in Python)
HashKey = namedtuple("HashKey", ["type", "value"])
HashPair = namedtuple("HashPair", ["key", "value"])


class Object(ABC):
    """Superclass for every runtime value."""
    type = "OBJECT"

    def __repr__(self):
        return f"{type(self).__name__}({self})"


class Hashable(Object):
    """Value usable as a Hash key."""
    value = None

    def hash_key(self):
        return HashKey(self.type, self.value)


class Integer(Hashable):
    type = "INTEGER"

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and other.value == self.value

    def __hash__(self):
        return hash(self.hash_key())


class String(Hashable):
    type = "STRING"

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return self.value

    def __eq__(self, other):
        return isinstance(other, String) and other.value == self.value

    def __hash__(self):
        return hash(self.hash_key())


class Boolean(Hashable):
    """Use TRUE/FALSE (or native_bool) rather than instantiating this class."""
    type = "BOOLEAN"

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return "true" if self.value else "false"


class Null(Object):
    type = "NULL"

    def __str__(self):
        return "NULL"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Returns the Boolean singleton corresponding to Python bool value."""
    return TRUE if value else FALSE


class ReturnValue(Object):
    """Wraps the value of a `return` statement while it unwinds to the enclosing function call or program."""
    type = "RETURN_VALUE"

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return str(self.value)


class Error(Object):
    type = "ERROR"

    def __init__(self, message):
        self.message = message

    def __str__(self):
        return f"ERROR: {self.message}"

    def __eq__(self, other):
        return isinstance(other, Error) and other.message == self.message

    def __hash__(self):
        return hash(self.message)


def is_error(obj):
    return isinstance(obj, Error)


def is_interrupt(obj):
    """True for the values that stop evaluation of every enclosing expression: Errors and pending returns."""
    return isinstance(obj, (Error, ReturnValue))


class Function(Object):
    """Closure: parameters and body of a function literal, plus the environment it was defined in."""
    type = "FUNCTION"

    def __init__(self, parameters, body, env):
        self.parameters = parameters
        self.body = body
        self.env = env

    def __str__(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn ({params}) {braced(self.body)}"


class Builtin(Object):
    """Native function. fn takes the evaluated arguments as positional args and returns an Object."""
    type = "BUILTIN"

    def __init__(self, name, fn):
        self.name = name
        self.fn = fn

    def __call__(self, *args):
        return self.fn(*args)

    def __str__(self):
        return f"[builtin function {self.name}]"


class Array(Object):
    type = "ARRAY"

    def __init__(self, elements):
        self.elements = list(elements)

    def __str__(self):
        return "[" + ",".join(str(element) for element in self.elements) + "]"


class Hash(Object):
    type = "HASH"

    def __init__(self, pairs=None):
        self.pairs = pairs if pairs is not None else {}  # dict of HashKey: HashPair

    def get(self, key):
        """Returns value stored under hashable key, or NULL."""
        pair = self.pairs.get(key.hash_key())
        return NULL if pair is None else pair.value

    def __str__(self):
        return "{ " + ", ".join(f"{pair.key} = {pair.value}" for pair in self.pairs.values()) + " }"
