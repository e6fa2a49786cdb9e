"""
Utils module behavioral tests (Unset sentinel, coalesce, rename, mirror, strip_dashes, ModelType).

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from types import MappingProxyType
from unittest import TestCase

from argot.utils import Unset, UnsetType, ModelType, coalesce, rename, mirror, strip_dashes


class TestUnset(TestCase):

    def testUnsetIsSingletonAndFalsey(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnsetIsSealed(self):
        with self.assertRaises(TypeError):
            type("Subclass", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce("x", "y"), "x")
        self.assertEqual(coalesce(Unset, "y"), "y")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "y"))
        self.assertEqual(coalesce(0, 1), 0)


class TestHelpers(TestCase):

    def testStripDashes(self):
        self.assertEqual(strip_dashes("--all"), "all")
        self.assertEqual(strip_dashes("-a"), "a")
        self.assertEqual(strip_dashes("a-b"), "a-b")
        self.assertEqual(strip_dashes("---"), "")

    def testRename(self):
        def function():
            pass

        self.assertIs(rename(function, "renamed"), function)
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(rename("other")(function).__qualname__, "other")

    def testRenameRejectsBadArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename(1)

    def testMirrorFreezesContainers(self):
        class Holder:
            items = mirror("items")
            table = mirror("table")

        holder = Holder()
        holder._items = [1, 2]
        holder._table = {"a": 1}
        self.assertEqual(holder.items, (1, 2))
        self.assertIsInstance(holder.table, MappingProxyType)
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestModelType(TestCase):

    def testGeneratedMembers(self):
        class SampleModel(metaclass=ModelType):
            __introspectable__ = ("name",)

            def __init__(self, name):
                self._name = name

        model = SampleModel("x")
        self.assertEqual(SampleModel.__typename__, "sample-model")
        self.assertEqual(model.name, "x")
        self.assertEqual(repr(model), "sample-model(name='x')")
        self.assertEqual(list(model.__rich_repr__()), [("name", "x")])


if __name__ == "__main__":
    unittest.main()
