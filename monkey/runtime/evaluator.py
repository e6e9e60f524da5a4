"""Tree-walking evaluator for the Monkey language.

evaluate(node, env) dispatches on the node's class and returns a runtime Object. Two Objects steer control flow:

- ReturnValue wraps the value of a `return` until a function call (or the program) unwraps it.
- Error carries a failure all the way up to the program.

Both stop evaluation of the node that produced them and of every node above it: each step that evaluates a child
checks is_interrupt on the result before doing anything else, left to right. A `return` nested in an expression
(`let x = if (c) { return 1; };`) therefore still leaves the function.
"""

from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import new_enclosed_environment
from monkey.runtime.objects import (Array, Builtin, Error, FALSE, Function, Hash, Hashable, HashPair, Integer,
                                    NULL, ReturnValue, String, is_interrupt, native_bool)
from monkey.syntax import tree


def evaluate(node, env):
    """Evaluates node in env. Top-level `let`s bind into env, which is how a session keeps its state."""
    try:
        evaluator = EVALUATORS[type(node)]
    except KeyError:
        raise TypeError(f"cannot evaluate {type(node).__name__}")
    return evaluator(node, env)


def is_truthy(obj):
    """Only false and null are falsy."""
    return obj is not NULL and obj is not FALSE


# ---------------------------------------------------------------------------------------------------------------------
# Statements


def evaluate_program(program, env):
    result = NULL
    for statement in program.statements:
        result = evaluate(statement, env)

        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, Error):
            return result
    return result


def evaluate_block_statement(block, env):
    """Like evaluate_program, but leaves ReturnValue wrapped so that it keeps unwinding to the enclosing call."""
    result = NULL
    for statement in block.statements:
        result = evaluate(statement, env)

        if is_interrupt(result):
            return result
    return result


def evaluate_expression_statement(statement, env):
    return evaluate(statement.expression, env)


def evaluate_let_statement(statement, env):
    value = evaluate(statement.value, env)
    if is_interrupt(value):
        return value

    env.set(statement.name.value, value)
    return NULL


def evaluate_return_statement(statement, env):
    value = evaluate(statement.value, env)
    if is_interrupt(value):
        return value
    return ReturnValue(value)


# ---------------------------------------------------------------------------------------------------------------------
# Literals


def evaluate_integer_literal(node, env):
    return Integer(node.value)


def evaluate_string_literal(node, env):
    return String(node.value)


def evaluate_boolean_literal(node, env):
    return native_bool(node.value)


def evaluate_function_literal(node, env):
    return Function(node.parameters, node.body, env)


def evaluate_array_literal(node, env):
    elements = evaluate_expressions(node.elements, env)
    if is_interrupt(elements):
        return elements
    return Array(elements)


def evaluate_hash_literal(node, env):
    pairs = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_interrupt(key):
            return key
        if not isinstance(key, Hashable):
            return Error(f"Unusable hash key: {key.type}")

        value = evaluate(value_node, env)
        if is_interrupt(value):
            return value

        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)


def evaluate_expressions(nodes, env):
    """Evaluates nodes left to right. Returns list of Objects, or the first Error encountered."""
    results = []
    for node in nodes:
        evaluated = evaluate(node, env)
        if is_interrupt(evaluated):
            return evaluated
        results.append(evaluated)
    return results


# ---------------------------------------------------------------------------------------------------------------------
# Operators


def evaluate_prefix_expression(node, env):
    right = evaluate(node.right, env)
    if is_interrupt(right):
        return right

    if node.operator == "!":
        return native_bool(not is_truthy(right))
    if node.operator == "-":
        if not isinstance(right, Integer):
            return Error(f"Unknown operator: -{right.type}")
        return Integer(-right.value)
    return Error(f"Unknown operator: {node.operator}{right.type}")


def evaluate_infix_expression(node, env):
    left = evaluate(node.left, env)
    if is_interrupt(left):
        return left

    right = evaluate(node.right, env)
    if is_interrupt(right):
        return right

    return infix_operation(left, node.operator, right)


def infix_operation(left, operator, right):
    if left.type != right.type:
        return Error(f"Unexpected type on operation: {left.type} {operator} {right.type}")

    if isinstance(left, Integer):
        return integer_operation(left, operator, right)

    if isinstance(left, String):
        if operator == "+":
            return String(left.value + right.value)

    elif operator == "==":
        return native_bool(left is right)
    elif operator == "!=":
        return native_bool(left is not right)

    return Error(f"Unknown operator: {left.type} {operator} {right.type}")


def integer_operation(left, operator, right):
    a, b = left.value, right.value

    if operator == "+":
        return Integer(a + b)
    if operator == "-":
        return Integer(a - b)
    if operator == "*":
        return Integer(a * b)
    if operator == "/":
        if b == 0:
            return Error(f"Division by zero: {a} / {b}")
        return Integer(a // b)
    if operator == "<":
        return native_bool(a < b)
    if operator == ">":
        return native_bool(a > b)
    if operator == "==":
        return native_bool(a == b)
    if operator == "!=":
        return native_bool(a != b)
    return Error(f"Unknown operator: {left.type} {operator} {right.type}")


# ---------------------------------------------------------------------------------------------------------------------
# Control flow, names and calls


def evaluate_if_expression(node, env):
    condition = evaluate(node.condition, env)
    if is_interrupt(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def evaluate_identifier(node, env):
    value = env.get(node.value)
    if value is not None:
        return value

    builtin = BUILTINS.get(node.value)
    if builtin is not None:
        return builtin

    return Error(f"Identifier not found: {node.value}")


def evaluate_call_expression(node, env):
    function = evaluate(node.function, env)
    if is_interrupt(function):
        return function

    args = evaluate_expressions(node.arguments, env)
    if is_interrupt(args):
        return args

    return apply_function(function, args)


def apply_function(function, args):
    """Calls a Function (in a new scope enclosed by its closure) or a Builtin with already evaluated args. Arity is
    not checked: missing parameters stay unbound and extra arguments are ignored.
    """
    if isinstance(function, Function):
        call_env = new_enclosed_environment(function.env)
        for param, arg in zip(function.parameters, args):
            call_env.set(param.value, arg)

        result = evaluate(function.body, call_env)
        if isinstance(result, ReturnValue):
            return result.value
        return result

    if isinstance(function, Builtin):
        return function(*args)

    return Error(f"Not a function: {function}")


def evaluate_index_expression(node, env):
    left = evaluate(node.left, env)
    if is_interrupt(left):
        return left

    index = evaluate(node.index, env)
    if is_interrupt(index):
        return index

    if isinstance(left, Array):
        return array_index(left, index)
    if isinstance(left, Hash):
        if not isinstance(index, Hashable):
            return Error(f"Unusable hash key: {index.type}")
        return left.get(index)
    return Error(f"Index operator not supported: {left.type}")


def array_index(array, index):
    """Negative indices count from the end of array, as in Python."""
    if not isinstance(index, Integer):
        return Error(f"Invalid index: {index.type}")

    length = len(array.elements)
    if not -length <= index.value < length:
        return Error(f"Index access out of bounds. Index: {index.value}. Array len: {length}")
    return array.elements[index.value]


EVALUATORS = {
    tree.Program: evaluate_program,
    tree.BlockStatement: evaluate_block_statement,
    tree.ExpressionStatement: evaluate_expression_statement,
    tree.LetStatement: evaluate_let_statement,
    tree.ReturnStatement: evaluate_return_statement,
    tree.IntegerLiteral: evaluate_integer_literal,
    tree.StringLiteral: evaluate_string_literal,
    tree.BooleanLiteral: evaluate_boolean_literal,
    tree.FunctionLiteral: evaluate_function_literal,
    tree.ArrayLiteral: evaluate_array_literal,
    tree.HashLiteral: evaluate_hash_literal,
    tree.PrefixExpression: evaluate_prefix_expression,
    tree.InfixExpression: evaluate_infix_expression,
    tree.IfExpression: evaluate_if_expression,
    tree.Identifier: evaluate_identifier,
    tree.CallExpression: evaluate_call_expression,
    tree.IndexExpression: evaluate_index_expression,
}
