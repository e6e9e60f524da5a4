"""Lexical scopes. A scope only ever writes to itself: `let` inside a function shadows outer bindings instead of
reassigning them. Closures keep their defining scope alive by holding a reference to it.
"""


class Environment:
    """Mapping of names to runtime Objects, chained to an optional enclosing scope."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    def get(self, name):
        """Looks name up in this scope, then in the enclosing ones. Returns None if it is bound nowhere."""
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name, value):
        self.store[name] = value
        return value

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer is not None})"


def new_enclosed_environment(outer):
    """Scope for a function call, enclosed by the function's defining scope."""
    return Environment(outer)
