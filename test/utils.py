"""
Tests for the shared helpers.

This module verifies semantic guarantees of argspell.utils:
- Unset singleton identity, falsy semantics and representation.
- Finality (UnsetType cannot be subclassed).
- coalesce() only replaces Unset.
- rename() in both function and decorator forms.
- mirror() read-only properties and frozen container snapshots.
"""
import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from argspell.conversions import int8
from argspell.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` sentinel.
    """

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(UnsetType(), UnsetType())

    def testFalsyButNotNone(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, 0)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")
        self.assertEqual(str(Unset), "Unset")

    def testCopyKeepsIdentity(self):
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testSubclassingRejected(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testUnionWithTypes(self):
        self.assertTrue(isinstance("text", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(1, str | Unset))


class CoalesceTest(TestCase):

    def testReplacesUnset(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))

    def testPreservesFalseyValues(self):
        for value in (None, 0, "", [], False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)


class RenameTest(TestCase):

    def testFunctionForm(self):
        def original():
            pass

        renamed = rename(original, "renamed")
        self.assertIs(renamed, original)
        self.assertEqual(renamed.__name__, "renamed")
        self.assertEqual(renamed.__qualname__, "renamed")

    def testDecoratorForm(self):
        @rename("shown")
        def hidden():
            pass

        self.assertEqual(hidden.__name__, "shown")

    def testArgumentValidation(self):
        with self.assertRaises(TypeError):
            rename(42, "name")
        with self.assertRaises(TypeError):
            rename(lambda: None, 42)
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename("name")(42)


class MirrorTest(TestCase):

    class Holder:
        items = mirror("items")
        table = mirror("table")
        tags = mirror("tags")
        bounds = mirror("bounds")
        label = mirror("label")

        def __init__(self):
            self._items = [1, 2]
            self._table = {"a": 1}
            self._tags = {"x"}
            self._bounds = int8
            self._label = "label"

    def testReadOnly(self):
        holder = self.Holder()
        with self.assertRaises(AttributeError):
            holder.label = "changed"

    def testContainersAreFrozenSnapshots(self):
        holder = self.Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        self.assertEqual(holder.tags, frozenset({"x"}))
        holder._items.append(3)
        self.assertEqual(holder.items, (1, 2, 3))

    def testImmutableValuesPassThrough(self):
        holder = self.Holder()
        self.assertIs(holder.bounds, int8)
        self.assertIs(holder.label, "label")

    def testPropertyName(self):
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testNameMustBeString(self):
        with self.assertRaises(TypeError):
            mirror(1)


if __name__ == "__main__":
    unittest.main()
