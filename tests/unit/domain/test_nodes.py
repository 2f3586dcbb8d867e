"""Unit tests for the node model, ParentMap and walk()."""

import unittest

from jqlint.domain.nodes import (
    CallExpression,
    Identifier,
    Literal,
    MemberExpression,
    OtherNode,
    ParentMap,
    walk,
)


class TestNodes(unittest.TestCase):
    def test_types(self) -> None:
        self.assertEqual(Identifier("a").type, "Identifier")
        self.assertEqual(Literal(1).type, "Literal")
        self.assertEqual(OtherNode("ObjectExpression").type, "ObjectExpression")

    def test_literal_kinds(self) -> None:
        self.assertTrue(Literal("fx").is_string)
        self.assertTrue(Literal(1.5).is_number)
        self.assertFalse(Literal(True).is_number)
        self.assertFalse(Literal(None).is_string)

    def test_property_name(self) -> None:
        obj = Identifier("$div")
        self.assertEqual(MemberExpression(obj, Identifier("find")).property_name, "find")
        self.assertIsNone(MemberExpression(obj, Identifier("key"), computed=True).property_name)
        self.assertIsNone(MemberExpression(obj, Literal(0), computed=True).property_name)
        self.assertIsNone(MemberExpression(obj, OtherNode("PrivateIdentifier")).property_name)

    def test_identity_hashing(self) -> None:
        a, b = Identifier("x"), Identifier("x")
        self.assertNotEqual(a, b)
        self.assertEqual(len({a, b}), 2)


class TestParentMap(unittest.TestCase):
    def setUp(self) -> None:
        self.obj = Identifier("$div")
        self.member = MemberExpression(self.obj, Identifier("find"))
        self.arg = Literal("p")
        self.call = CallExpression(self.member, (self.arg,))
        self.parents = ParentMap.build(self.call)

    def test_parent_of(self) -> None:
        self.assertIs(self.parents.parent_of(self.member), self.call)
        self.assertIs(self.parents.parent_of(self.obj), self.member)
        self.assertIsNone(self.parents.parent_of(self.call))

    def test_is_callee(self) -> None:
        self.assertTrue(self.parents.is_callee(self.member))
        self.assertFalse(self.parents.is_callee(self.arg))
        self.assertFalse(self.parents.is_callee(self.obj))


class TestWalk(unittest.TestCase):
    def test_enter_and_exit_order(self) -> None:
        obj = Identifier("$div")
        prop = Identifier("size")
        member = MemberExpression(obj, prop)
        call = CallExpression(member)
        events = [(node.type, entering) for node, entering in walk(call)]
        self.assertEqual(
            events,
            [
                ("CallExpression", True),
                ("MemberExpression", True),
                ("Identifier", True),
                ("Identifier", False),
                ("Identifier", True),
                ("Identifier", False),
                ("MemberExpression", False),
                ("CallExpression", False),
            ],
        )
