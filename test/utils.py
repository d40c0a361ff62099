"""
Tests for the internal helpers (Unset sentinel, coalesce, rename, mirror).
"""
import copy
import unittest
from types import MappingProxyType
from unittest import TestCase

from optable.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self) -> None:
        """
        Unset is falsy but distinct from None.
        """
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self) -> None:
        """
        `str | Unset` can be used in isinstance checks.
        """
        self.assertTrue(isinstance("text", str | Unset))
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertFalse(isinstance(None, str | Unset))

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Subclass(UnsetType):
                pass


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), rename() and mirror().
    """

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)

    def testRenameFunctionForm(self) -> None:
        def function():
            pass

        rename(function, "renamed")
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")

    def testRenameDecoratorForm(self) -> None:
        @rename("renamed")
        def function():
            pass

        self.assertEqual(function.__name__, "renamed")

    def testRenameRejectsBadArguments(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "name")
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezesContainers(self) -> None:
        class Holder:
            items = mirror("items")
            mapping = mirror("mapping")
            label = mirror("label")

            def __init__(self):
                self._items = ["a", "b"]
                self._mapping = {"a": 1}
                self._label = "x"

        holder = Holder()
        self.assertEqual(holder.items, ("a", "b"))
        self.assertIsInstance(holder.mapping, MappingProxyType)
        self.assertEqual(holder.label, "x")
        with self.assertRaises(AttributeError):
            holder.items = ()


if __name__ == "__main__":
    unittest.main()
