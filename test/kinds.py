"""
Kind flag tests (bit values, composition, rendering).

Scope
- Validate the stable bit values of every kind and modifier flag.
- Validate the kinds/modifiers split of composed masks.
- Validate describe() in canonical order, with narrowing tags and all=True.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argscheme import (
    Kind,
    STRING,
    FUNCTION,
    INT,
    FLOAT,
    BUFFER,
    OBJECT,
    DATE,
    BOOL,
    ELEMENT,
    ARRAY,
    OPTIONAL,
    REQUIRED,
    NOTNULL,
    KINDS,
    MODIFIERS,
    describe,
)


class Photo:
    pass


class TestKindValues(TestCase):
    """Bit values are part of the public contract."""

    def testKindBits(self):
        self.assertEqual(
            [int(flag) for flag in (STRING, FUNCTION, INT, FLOAT, BUFFER, OBJECT, DATE, BOOL, ELEMENT, ARRAY)],
            [1, 2, 4, 8, 16, 32, 64, 128, 256, 512],
        )

    def testModifierBits(self):
        self.assertEqual(int(OPTIONAL), 1024)
        self.assertEqual(int(REQUIRED), 2048)

    def testNotNullIsRequired(self):
        self.assertIs(NOTNULL, REQUIRED)

    def testFlagsAreDistinct(self):
        flags = list(Kind)
        self.assertEqual(len(flags), 12)
        for index, flag in enumerate(flags):
            for other in flags[index + 1:]:
                self.assertFalse(flag & other)

    def testKindsAndModifiersPartition(self):
        self.assertFalse(KINDS & MODIFIERS)
        self.assertEqual(int(KINDS | MODIFIERS), 0xFFF)


class TestKindComposition(TestCase):
    """Masks split into kind flags and modifier flags."""

    def testKinds(self):
        mask = STRING | INT | REQUIRED
        self.assertEqual(mask.kinds, STRING | INT)
        self.assertEqual(mask.modifiers, REQUIRED)

    def testModifierOnly(self):
        self.assertFalse(OPTIONAL.kinds)
        self.assertEqual(OPTIONAL.modifiers, OPTIONAL)

    def testPlainIntegersCompose(self):
        self.assertEqual(Kind(1 | 4 | 2048), STRING | INT | REQUIRED)


class TestDescribe(TestCase):
    """Rendering of masks for fault messages."""

    def testSingle(self):
        self.assertEqual(describe(STRING), "String")
        self.assertEqual(describe(ELEMENT), "UI Element")

    def testFirstInCanonicalOrder(self):
        self.assertEqual(describe(STRING | INT), "String")
        self.assertEqual(describe(BOOL | INT | STRING), "String")
        # ARRAY has the higher bit but renders before BUFFER
        self.assertEqual(describe(BUFFER | ARRAY), "Array")

    def testModifiersIgnored(self):
        self.assertEqual(describe(DATE | OPTIONAL), "Date")

    def testNarrowedObject(self):
        self.assertEqual(describe(OBJECT, Photo), "Object (Photo)")
        self.assertEqual(describe(OBJECT), "Object")

    def testNarrowIgnoredWithoutObject(self):
        self.assertEqual(describe(STRING, Photo), "String")

    def testAll(self):
        self.assertEqual(describe(BOOL | INT | STRING | REQUIRED, all=True), "String | Int | Bool")
        self.assertEqual(describe(FLOAT | OBJECT, Photo, all=True), "Float | Object (Photo)")

    def testUnknown(self):
        self.assertEqual(describe(REQUIRED), "unknown")
        self.assertEqual(describe(Kind(0), all=True), "unknown")

    def testPlainInteger(self):
        self.assertEqual(describe(8), "Float")


if __name__ == "__main__":
    unittest.main()
