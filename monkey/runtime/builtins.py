"""Native functions available to every Monkey program. Builtins validate their arguments and report misuse as Error
values, never by raising.
"""

from monkey.runtime.objects import Array, Builtin, Error, Integer, NULL, String


def check_args(name, args, count, *types):
    """Returns an Error if args doesn't have count items, or if the leading args don't have the given types.
    Returns None if args are fine.
    """
    if len(args) != count:
        return Error(f"Wrong number of arguments. Expected: {count}. Got: {len(args)}")

    for arg, expected in zip(args, types):
        if not isinstance(arg, expected):
            return Error(f"Unexpected type passed to \"{name}\" builtin. Called with: {arg.type}")


def monkey_len(*args):
    error = check_args("len", args, 1)
    if error:
        return error

    arg, = args
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, String):
        return Integer(len(arg.value))
    return Error(f"Unexpected type passed to \"len\" builtin. Called with: {arg.type}")


def head(*args):
    error = check_args("head", args, 1, Array)
    if error:
        return error

    elements = args[0].elements
    return elements[0] if elements else NULL


def last(*args):
    error = check_args("last", args, 1, Array)
    if error:
        return error

    elements = args[0].elements
    return elements[-1] if elements else NULL


def tail(*args):
    error = check_args("tail", args, 1, Array)
    return error or Array(args[0].elements[1:])


def init(*args):
    error = check_args("init", args, 1, Array)
    return error or Array(args[0].elements[:-1])


def push(*args):
    error = check_args("push", args, 2, Array)
    if error:
        return error

    array, element = args
    return Array(array.elements + [element])


def prepend(*args):
    error = check_args("prepend", args, 2, Array)
    if error:
        return error

    array, element = args
    return Array([element] + array.elements)


BUILTINS = {
    name: Builtin(name, fn) for name, fn in [
        ("len", monkey_len),
        ("head", head),
        ("last", last),
        ("tail", tail),
        ("init", init),
        ("push", push),
        ("prepend", prepend),
    ]
}
