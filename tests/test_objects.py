import unittest

from monkey.runtime.environment import Environment
from monkey.runtime.objects import (Array, Builtin, Error, FALSE, Function, Hash, HashPair, Integer, NULL,
                                    ReturnValue, String, TRUE, is_error, is_interrupt, native_bool)
from monkey.syntax.parser import parse


class ObjectTestCase(unittest.TestCase):

    def test_str(self):
        fn_literal = parse("fn(x, y) { x + y }")[0].statements[0].expression
        cases = [
            (Integer(-42), "-42"),
            (String("hello world"), "hello world"),
            (TRUE, "true"),
            (FALSE, "false"),
            (NULL, "NULL"),
            (Error("Identifier not found: x"), "ERROR: Identifier not found: x"),
            (ReturnValue(Integer(1)), "1"),
            (Function(fn_literal.parameters, fn_literal.body, Environment()), "fn (x, y) { (x + y) }"),
            (Builtin("len", len), "[builtin function len]"),
            (Array([Integer(1), String("two"), TRUE]), "[1,two,true]"),
            (Array([]), "[]"),
            (Hash(), "{  }"),
        ]
        for obj, expected in cases:
            self.assertEqual(expected, str(obj), repr(obj))

    def test_hash_str(self):
        pairs = {}
        for key, value in [(String("a"), Integer(1)), (Integer(2), TRUE)]:
            pairs[key.hash_key()] = HashPair(key, value)
        self.assertEqual("{ a = 1, 2 = true }", str(Hash(pairs)))

    def test_types(self):
        cases = {
            "INTEGER": Integer(1),
            "STRING": String(""),
            "BOOLEAN": TRUE,
            "NULL": NULL,
            "ERROR": Error(""),
            "ARRAY": Array([]),
            "HASH": Hash(),
        }
        for expected, obj in cases.items():
            self.assertEqual(expected, obj.type)

    def test_hash_keys(self):
        self.assertEqual(String("name").hash_key(), String("name").hash_key())
        self.assertEqual(Integer(1).hash_key(), Integer(1).hash_key())
        self.assertNotEqual(String("1").hash_key(), Integer(1).hash_key())
        self.assertNotEqual(TRUE.hash_key(), Integer(1).hash_key())
        self.assertNotEqual(FALSE.hash_key(), Integer(0).hash_key())
        self.assertNotEqual(TRUE.hash_key(), FALSE.hash_key())

    def test_hash_get(self):
        pairs = {String("foo").hash_key(): HashPair(String("foo"), Integer(5))}
        self.assertEqual(Integer(5), Hash(pairs).get(String("foo")))
        self.assertIs(NULL, Hash(pairs).get(String("bar")))

    def test_native_bool(self):
        self.assertIs(TRUE, native_bool(True))
        self.assertIs(FALSE, native_bool(0))

    def test_is_error(self):
        self.assertTrue(is_error(Error("x")))
        self.assertFalse(is_error(NULL))
        self.assertFalse(is_error(String("ERROR: x")))
        self.assertFalse(is_error(ReturnValue(Integer(1))))

    def test_is_interrupt(self):
        self.assertTrue(is_interrupt(Error("x")))
        self.assertTrue(is_interrupt(ReturnValue(NULL)))
        for obj in [NULL, FALSE, Integer(0), Array([]), String("ERROR: x")]:
            self.assertFalse(is_interrupt(obj), obj)


class EnvironmentTestCase(unittest.TestCase):

    def test_get_set(self):
        env = Environment()
        self.assertIsNone(env.get("x"))
        self.assertEqual(Integer(1), env.set("x", Integer(1)))
        self.assertEqual(Integer(1), env.get("x"))

    def test_enclosed_lookup(self):
        outer = Environment()
        outer.set("x", Integer(1))

        inner = Environment(outer)
        self.assertEqual(Integer(1), inner.get("x"))
        self.assertIsNone(inner.get("y"))

    def test_set_never_touches_outer(self):
        outer = Environment()
        outer.set("x", Integer(1))

        first, second = Environment(outer), Environment(outer)
        first.set("x", Integer(2))

        self.assertEqual(Integer(2), first.get("x"))
        self.assertEqual(Integer(1), second.get("x"))
        self.assertEqual(Integer(1), outer.get("x"))

    def test_falsy_values_are_found(self):
        env = Environment()
        env.set("f", FALSE)
        self.assertIs(FALSE, Environment(env).get("f"))


if __name__ == '__main__':
    unittest.main()
