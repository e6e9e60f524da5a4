import unittest

from monkey.syntax import tree
from monkey.syntax.lexical import Lexer, tokenize
from monkey.syntax.parser import Parser, parse


def parse_ok(testcase, source):
    program, errors = parse(source)
    testcase.assertEqual([], errors, source)
    return program


def single_expression(testcase, source):
    program = parse_ok(testcase, source)
    testcase.assertEqual(1, len(program.statements), source)
    statement = program.statements[0]
    testcase.assertIsInstance(statement, tree.ExpressionStatement, source)
    return statement.expression


class StatementTestCase(unittest.TestCase):

    def test_let_statements(self):
        cases = {
            "let x = 5;": ("x", "5"),
            "let y = true;": ("y", "true"),
            "let foobar = y": ("foobar", "y"),
            "let s = \"str\";": ("s", "\"str\""),
        }
        for case, (name, value) in cases.items():
            statement, = parse_ok(self, case).statements
            self.assertIsInstance(statement, tree.LetStatement, case)
            self.assertEqual("let", statement.token_literal(), case)
            self.assertEqual(name, statement.name.value, case)
            self.assertEqual(value, str(statement.value), case)

    def test_return_statements(self):
        cases = {
            "return 5;": "5",
            "return true;": "true",
            "return x + y": "(x + y)",
        }
        for case, value in cases.items():
            statement, = parse_ok(self, case).statements
            self.assertIsInstance(statement, tree.ReturnStatement, case)
            self.assertEqual(value, str(statement.value), case)

    def test_multiple_statements(self):
        program = parse_ok(self, "let x = 5; let y = 10; x + y;")
        self.assertEqual(3, len(program.statements))
        self.assertEqual("let", program.token_literal())

    def test_empty_program(self):
        program = parse_ok(self, "")
        self.assertEqual([], list(program.statements))
        self.assertEqual("", program.token_literal())


class ExpressionTestCase(unittest.TestCase):

    def test_literals(self):
        cases = {
            "foobar;": (tree.Identifier, "foobar"),
            "5;": (tree.IntegerLiteral, 5),
            "\"hello world\";": (tree.StringLiteral, "hello world"),
            "true;": (tree.BooleanLiteral, True),
            "false;": (tree.BooleanLiteral, False),
        }
        for case, (cls, value) in cases.items():
            expression = single_expression(self, case)
            self.assertIsInstance(expression, cls, case)
            self.assertEqual(value, expression.value, case)

    def test_prefix_expressions(self):
        cases = {
            "!5;": ("!", "5"),
            "-15;": ("-", "15"),
            "!true;": ("!", "true"),
            "!foobar;": ("!", "foobar"),
        }
        for case, (operator, right) in cases.items():
            expression = single_expression(self, case)
            self.assertIsInstance(expression, tree.PrefixExpression, case)
            self.assertEqual(operator, expression.operator, case)
            self.assertEqual(right, str(expression.right), case)

    def test_infix_expressions(self):
        for operator in ["+", "-", "*", "/", ">", "<", "==", "!="]:
            case = f"5 {operator} 6;"
            expression = single_expression(self, case)
            self.assertIsInstance(expression, tree.InfixExpression, case)
            self.assertEqual(5, expression.left.value, case)
            self.assertEqual(operator, expression.operator, case)
            self.assertEqual(6, expression.right.value, case)

    def test_operator_precedence(self):
        cases = {
            "-a * b": "((-a) * b)",
            "!-a": "(!(-a))",
            "a + b + c": "((a + b) + c)",
            "a + b - c": "((a + b) - c)",
            "a * b * c": "((a * b) * c)",
            "a * b / c": "((a * b) / c)",
            "a + b / c": "(a + (b / c))",
            "a + b * c + d / e - f": "(((a + (b * c)) + (d / e)) - f)",
            "3 + 4; -5 * 5": "(3 + 4); ((-5) * 5)",
            "5 > 4 == 3 < 4": "((5 > 4) == (3 < 4))",
            "5 < 4 != 3 > 4": "((5 < 4) != (3 > 4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))",
            "3 > 5 == false": "((3 > 5) == false)",
            "1 + (2 + 3) + 4": "((1 + (2 + 3)) + 4)",
            "(5 + 5) * 2": "((5 + 5) * 2)",
            "2 / (5 + 5)": "(2 / (5 + 5))",
            "-(5 + 5)": "(-(5 + 5))",
            "!(true == true)": "(!(true == true))",
            "a + add(b * c) + d": "((a + add ((b * c))) + d)",
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))": "add (a, b, 1, (2 * 3), (4 + 5), add (6, (7 * 8)))",
            "add(a + b + c * d / f + g)": "add ((((a + b) + ((c * d) / f)) + g))",
            "a * [1, 2, 3, 4][b * c] * d": "((a * ([1, 2, 3, 4][(b * c)])) * d)",
            "add(a * b[2], b[1], 2 * [1, 2][1])": "add ((a * (b[2])), (b[1]), (2 * ([1, 2][1])))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(parse_ok(self, case)), case)

    def test_if_expression(self):
        expression = single_expression(self, "if (x < y) { x }")
        self.assertIsInstance(expression, tree.IfExpression)
        self.assertEqual("(x < y)", str(expression.condition))
        self.assertEqual("x", str(expression.consequence))
        self.assertIsNone(expression.alternative)

    def test_if_else_expression(self):
        expression = single_expression(self, "if (x < y) { x } else { y; z }")
        self.assertEqual("x", str(expression.consequence))
        self.assertEqual(2, len(expression.alternative.statements))
        self.assertEqual("if ((x < y)) { x } else { y; z }", str(expression))

    def test_function_literal(self):
        expression = single_expression(self, "fn(x, y) { x + y; }")
        self.assertIsInstance(expression, tree.FunctionLiteral)
        self.assertEqual(["x", "y"], [param.value for param in expression.parameters])
        self.assertEqual("(x + y)", str(expression.body))

    def test_function_parameters(self):
        cases = {
            "fn() {};": [],
            "fn(x) {};": ["x"],
            "fn(x, y, z) {};": ["x", "y", "z"],
        }
        for case, expected in cases.items():
            expression = single_expression(self, case)
            self.assertEqual(expected, [param.value for param in expression.parameters], case)

    def test_call_expression(self):
        expression = single_expression(self, "add(1, 2 * 3, 4 + 5);")
        self.assertIsInstance(expression, tree.CallExpression)
        self.assertEqual("add", str(expression.function))
        self.assertEqual(["1", "(2 * 3)", "(4 + 5)"], [str(arg) for arg in expression.arguments])

    def test_call_without_arguments(self):
        expression = single_expression(self, "f()")
        self.assertEqual([], list(expression.arguments))

    def test_array_literal(self):
        expression = single_expression(self, "[1, 2 * 2, 3 + 3]")
        self.assertIsInstance(expression, tree.ArrayLiteral)
        self.assertEqual(["1", "(2 * 2)", "(3 + 3)"], [str(element) for element in expression.elements])

        self.assertEqual([], list(single_expression(self, "[]").elements))

    def test_index_expression(self):
        expression = single_expression(self, "myArray[1 + 1]")
        self.assertIsInstance(expression, tree.IndexExpression)
        self.assertEqual("myArray", str(expression.left))
        self.assertEqual("(1 + 1)", str(expression.index))

    def test_hash_literals(self):
        cases = {
            "{\"one\": 1, \"two\": 2, \"three\": 3}": [("\"one\"", "1"), ("\"two\"", "2"), ("\"three\"", "3")],
            "{}": [],
            "{\"one\": 0 + 1, true: 10 - 8, 3: 15 / 5}": [("\"one\"", "(0 + 1)"), ("true", "(10 - 8)"),
                                                          ("3", "(15 / 5)")],
        }
        for case, expected in cases.items():
            expression = single_expression(self, case)
            self.assertIsInstance(expression, tree.HashLiteral, case)
            self.assertEqual(expected, [(str(key), str(value)) for key, value in expression.pairs], case)


class ParserErrorTestCase(unittest.TestCase):

    def test_error_accumulation(self):
        program, errors = parse("let y 10; let 10;")
        self.assertEqual([
            "Next token expected to be =, but found INT instead.",
            "Next token expected to be IDENT, but found INT instead.",
        ], errors)
        self.assertTrue(all("Next token expected to be" in error for error in errors))

    def test_recovers_after_errors(self):
        program, errors = parse("let x = 5; let = 10; let 838383;")
        self.assertEqual([
            "Next token expected to be IDENT, but found = instead.",
            "no prefix parser found for =",
            "Next token expected to be IDENT, but found INT instead.",
        ], errors)
        self.assertEqual("let x = 5; 10; 838383", str(program))

    def test_first_error(self):
        cases = {
            "(1 + 2": "Next token expected to be ), but found EOF instead.",
            "fn(x, 1) {}": "Next token expected to be IDENT, but found INT instead.",
            "{1: 2": "Next token expected to be }, but found EOF instead.",
            "{1 2}": "Next token expected to be :, but found INT instead.",
            "if (x) { 1": "Next token expected to be }, but found EOF instead.",
            "if x { 1 }": "Next token expected to be (, but found IDENT instead.",
            "#": "no prefix parser found for ILLEGAL",
            "let x = ;": "no prefix parser found for ;",
            "[1, 2": "Next token expected to be ], but found EOF instead.",
            "a[1": "Next token expected to be ], but found EOF instead.",
        }
        for case, expected in cases.items():
            program, errors = parse(case)
            self.assertTrue(errors, case)
            self.assertEqual(expected, errors[0], case)

    def test_malformed_block_drops_enclosing_statement(self):
        program, errors = parse("let f = fn() { let }; 5")
        self.assertEqual("Next token expected to be IDENT, but found } instead.", errors[0])
        self.assertFalse(any(isinstance(statement, tree.LetStatement) for statement in program.statements))

    def test_error_tokens(self):
        parser = Parser(Lexer("let y 10; let 10;"))
        parser.parse_program()
        self.assertEqual(len(parser.errors), len(parser.error_tokens))
        self.assertEqual([("10", 6), ("10", 14)], [(token.literal, token.position) for token in parser.error_tokens])

        cases = {
            "(1 + 2": ("", 6),
            "a @ b": ("@", 2),
            "if (x) { let 5; }": ("5", 13),
        }
        for case, expected in cases.items():
            parser = Parser(Lexer(case))
            parser.parse_program()
            token = parser.error_tokens[0]
            self.assertEqual(expected, (token.literal, token.position), case)


class ParserInputTestCase(unittest.TestCase):

    def test_accepts_lexer_tokens_and_strings(self):
        source = "let a = [1, 2][0];"
        expected = "let a = ([1, 2][0]);"
        self.assertEqual(expected, str(parse(source)[0]))
        self.assertEqual(expected, str(parse(Lexer(source))[0]))
        self.assertEqual(expected, str(parse(tokenize(source))[0]))

    def test_parser_errors_attribute(self):
        parser = Parser(Lexer("let 1"))
        parser.parse_program()
        self.assertEqual(["Next token expected to be IDENT, but found INT instead."], parser.errors)


if __name__ == '__main__':
    unittest.main()
