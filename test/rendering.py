# python
"""
Rendering behavioral tests (usage block, version line).

Scope
- Validate the exact plain layout of the usage block: columns, continuation
  lines, built-ins, positionals section and footer variants.
- Validate the hidden "type::" accept convention.
- Validate that rendering is pure and that printing goes to the given console.

Conventions
- Test method names follow CamelCase per project convention.
- Expected layouts are spelled out with explicit padding so column widths stay visible.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from optable import (
    AppInfo,
    OptionSpec,
    format_usage,
    format_version,
    longest_long,
    longest_metavar,
    print_usage,
    print_version,
)
from optable.utils import Unset


def capture():
    return Console(file=io.StringIO(), width=200, color_system=None)


class TestColumns(TestCase):
    """Behavioral tests for the column width helpers."""

    def testLongColumnNeverNarrowerThanVersion(self):
        self.assertEqual(longest_long(()), len("version"))
        self.assertEqual(longest_long((OptionSpec("o", "out"),)), len("version"))

    def testLongColumnFollowsLongestName(self):
        self.assertEqual(longest_long((OptionSpec("c", "configuration"),)), len("configuration"))

    def testMetavarColumnCoversPositionals(self):
        table = (OptionSpec("o", "output", metavar="FILE"), OptionSpec(metavar="DIRECTORY"))
        self.assertEqual(longest_metavar(table), len("DIRECTORY"))

    def testMetavarColumnEmpty(self):
        self.assertEqual(longest_metavar((OptionSpec("v", "verbose"),)), 0)


class TestUsage(TestCase):
    """Behavioral tests for format_usage()."""

    def setUp(self):
        self.table = (
            OptionSpec("o", "output", metavar="FILE", descr="Write the result to FILE", default="stdout"),
            OptionSpec("v", "verbose", descr="Talk more"),
            OptionSpec(metavar="INPUT", descr="File to read"),
        )
        self.info = AppInfo(
            "tool",
            description="Convert INPUT.",
            license="MIT",
            year=2024,
            author="Jane Doe",
            email="jane@example.org",
            url="https://example.org",
        )

    def testFullLayout(self):
        # padl = 7 ("version"), padv = 5 ("INPUT")
        expected = (
            "Usage: tool [options] INPUT \n"
            "\n"
            "Convert INPUT.\n"
            "\n"
            "Options:\n"
            "  -o, --output  FILE  Write the result to FILE.\n"
            + " " * 22 + "Default: stdout\n"
            "  -v, --verbose " + " " * 6 + "Talk more.\n"
            "  -h, --help    " + " " * 6 + "Prints this message.\n"
            "  -V, --version " + " " * 6 + "Prints the version.\n"
            "\n"
            "Positionals:\n"
            + " " * 16 + "INPUT File to read.\n"
            "\n"
            "MIT License Copyright (c) 2024 Jane Doe <jane@example.org>.\n"
            "Visit https://example.org for more details.\n"
        )
        self.assertEqual(format_usage(self.table, self.info).plain, expected)

    def testMinimalLayout(self):
        expected = (
            "Usage: tool [options] \n"
            "\n"
            "Options:\n"
            "  -h, --help     Prints this message.\n"
            "  -V, --version  Prints the version.\n"
            "\n"
        )
        self.assertEqual(format_usage((), AppInfo("tool")).plain, expected)

    def testFlagWithoutMetavarColumn(self):
        # with no metavar anywhere the declared description lands one column
        # before the built-in ones
        usage = format_usage((OptionSpec("v", "verbose", descr="Talk more"),), AppInfo("tool")).plain
        self.assertIn("\n  -v, --verbose Talk more.\n", usage)
        self.assertIn("\n  -V, --version  Prints the version.\n", usage)

    def testShortOnlyAndLongOnly(self):
        table = (
            OptionSpec("q", descr="Quiet"),
            OptionSpec(Unset, "dry-run", descr="Change nothing"),
        )
        usage = format_usage(table, AppInfo("tool")).plain
        # short only: "  -q " then the empty long column ("  " + padl + "  ")
        self.assertIn("\n  -q " + "  " + " " * 7 + "  " + "Quiet.\n", usage)
        # long only: six blanks stand in for the short column
        self.assertIn("\n" + " " * 6 + "--dry-run Change nothing.\n", usage)

    def testAcceptShown(self):
        table = (OptionSpec("m", "mode", metavar="M", accepts="fast|slow", descr="Pick a mode"),)
        usage = format_usage(table, AppInfo("tool")).plain
        # indent = 8 + padl (7) + padv (1) + 2
        self.assertIn("  -m, --mode    M Pick a mode.\n" + " " * 18 + "Accept: fast|slow\n", usage)

    def testHiddenAcceptOmitted(self):
        table = (OptionSpec(metavar="INPUT", accepts="type::path"),)
        usage = format_usage(table, AppInfo("tool")).plain
        self.assertNotIn("Accept", usage)
        self.assertNotIn("type::", usage)

    def testAcceptBeforeDefault(self):
        table = (OptionSpec("l", "level", metavar="N", accepts="0-9", default="3"),)
        usage = format_usage(table, AppInfo("tool")).plain
        self.assertLess(usage.index("Accept: 0-9"), usage.index("Default: 3"))

    def testPositionalsListedInOrderOnUsageLine(self):
        table = (OptionSpec(metavar="SRC"), OptionSpec("v", "verbose"), OptionSpec(metavar="DST"))
        usage = format_usage(table, AppInfo("tool")).plain
        self.assertTrue(usage.startswith("Usage: tool [options] SRC DST \n"))

    def testNoPositionalsSection(self):
        usage = format_usage((OptionSpec("v", "verbose"),), AppInfo("tool")).plain
        self.assertNotIn("Positionals:", usage)

    def testFooterWithoutCopyright(self):
        usage = format_usage((), AppInfo("tool", url="https://example.org")).plain
        self.assertTrue(usage.endswith("Prints the version.\n\nVisit https://example.org for more details.\n"))

    def testFooterPartialCopyright(self):
        usage = format_usage((), AppInfo("tool", author="Jane Doe")).plain
        self.assertTrue(usage.endswith("Prints the version.\n\nJane Doe.\n"))
        usage = format_usage((), AppInfo("tool", license="BSD", email="jane@example.org")).plain
        self.assertTrue(usage.endswith("\nBSD License Copyright (c) <jane@example.org>.\n"))

    def testNoneTableIsEmpty(self):
        self.assertEqual(format_usage(None, self.info).plain, "")

    def testPure(self):
        self.assertEqual(format_usage(self.table, self.info), format_usage(self.table, self.info))

    def testPlainCarriesNoStyles(self):
        self.assertFalse(format_usage(self.table, self.info).spans)

    def testColorfulKeepsLayout(self):
        colorful = format_usage(self.table, self.info, colorful=True)
        self.assertTrue(colorful.spans)
        self.assertEqual(colorful.plain, format_usage(self.table, self.info).plain)


class TestPrinting(TestCase):
    """Behavioral tests for print_usage()/print_version()."""

    def testPrintUsageMatchesFormat(self):
        table = (OptionSpec("o", "output", metavar="FILE", descr="Write the result to FILE"),)
        info = AppInfo("tool")
        console = capture()
        print_usage(table, info, console=console)
        self.assertEqual(console.file.getvalue(), format_usage(table, info).plain)

    def testPrintUsageKeepsTextVerbatim(self):
        table = (OptionSpec("v", "verbose", descr="  Talk  more"),)
        info = AppInfo("tool", description="First line.\n  Second line.")
        console = capture()
        print_usage(table, info, console=console)
        self.assertEqual(console.file.getvalue(), format_usage(table, info).plain)
        self.assertIn("\nFirst line.\n  Second line.\n", console.file.getvalue())
        self.assertIn("--verbose   Talk  more.\n", console.file.getvalue())

    def testPrintUsageNoneTable(self):
        console = capture()
        print_usage(None, AppInfo("tool"), console=console)
        self.assertEqual(console.file.getvalue(), "")

    def testVersion(self):
        self.assertEqual(format_version(AppInfo("tool", version=(1, 2))), "1.2")
        self.assertEqual(format_version(AppInfo("tool", version=(1, 2, 3))), "1.2.3")

    def testPrintVersion(self):
        console = capture()
        print_version(AppInfo("tool", version=(3, 1, 4)), console=console)
        self.assertEqual(console.file.getvalue(), "3.1.4\n")


if __name__ == "__main__":
    unittest.main()
