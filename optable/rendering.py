"""
Usage and version rendering for option tables.

Layout (plain form, with the column widths derived from the table)

    Usage: tool [options] INPUT

    Convert INPUT into something else.

    Options:
      -o, --output  FILE  Write the result to FILE.
                          Default: stdout
      -v, --verbose       Talk more.
      -h, --help          Prints this message.
      -V, --version       Prints the version.

    Positionals:
                    INPUT File to read.

    MIT License Copyright (c) 2024 Jane Doe <jane@example.org>.
    Visit https://example.org for more details.

Column widths
- the long-name column is as wide as the longest declared long name, and never
  narrower than "version" so the built-in line stays aligned.
- the metavar column is as wide as the longest declared metavar (0 if none).

Streams
- usage goes to the diagnostic console (stderr).
- the version goes to the primary console (stdout), so `tool --version` can be
  captured by scripts.

Styling
- format_usage() returns a rich Text; with colorful=False it carries no styles
  and its .plain form is the exact output. Palette entries can be overridden
  with a __styles__ mapping in __main__.
"""
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .specs import HIDDEN_PREFIX, LONG_PREFIX, SHORT_PREFIX
from .utils import Unset, coalesce

stdout = Console()
stderr = Console(stderr=True)


def longest_long(table, /):
    """
    Width of the long-name column: the longest long name, at least len("version").
    """
    return max(len("version"), max((len(spec.long) for spec in table if spec.long is not None), default=0))


def longest_metavar(table, /):
    """
    Width of the metavar column: the longest metavar over every spec, 0 if none.
    """
    return max((len(spec.metavar) for spec in table if spec.metavar is not None), default=0)


def _palette(colorful, /):
    styles = defaultdict(str, {
        # === Head ===
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "description-section": "italic #A3A3A3",

        # === Sections ===
        "section-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "argument-description": "#9CA3AF",
        "accept-label": "#22C55E",
        "default-label": "#36C5F0",

        # === Footer ===
        "copyright-section": "#737373",
        "homepage-section": "underline #00E6FF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def format_usage(table, info, /, *, colorful=False):
    """
    Build the full usage block for a table and its application info.

    Pure function of its inputs: the same table and info always produce the
    same Text. A None table yields an empty Text.
    """
    if table is None:
        return Text()

    table = tuple(table)
    styler = _palette(colorful)
    padl = longest_long(table)
    padv = longest_metavar(table)
    positionals = [spec for spec in table if spec.positional]

    text = Text()

    def pad(fragment, width, style=""):
        # left-justify like printf("%-*s"); longer fragments are never truncated
        text.append(fragment, style)
        text.append(" " * (width - len(fragment)))

    # Usage line: every positional metavar is listed in declaration order.
    text.append("Usage", styler("usage-label")).append(": ")
    text.append(info.program, styler("program-name")).append(" [options] ")
    for spec in positionals:
        text.append(spec.metavar, styler("metavar")).append(" ")
    text.append("\n")

    if info.description:
        text.append("\n").append(info.description, styler("description-section")).append("\n")

    def details(spec):
        if spec.metavar is not None:
            pad(spec.metavar, padv, styler("metavar"))
            text.append(" ")
        elif padv:
            pad("", padv)
            text.append(" ")

        if spec.descr:
            text.append(spec.descr, styler("argument-description")).append(".")

        indent = " " * 8 + " " * (padl + padv) + "  "
        if spec.accepts and not spec.accepts.startswith(HIDDEN_PREFIX):
            text.append("\n" + indent).append("Accept", styler("accept-label")).append(": " + spec.accepts)
        if spec.default:
            text.append("\n" + indent).append("Default", styler("default-label")).append(": " + spec.default)
        text.append("\n")

    text.append("\n").append("Options", styler("section-label")).append(":\n")
    for spec in table:
        if spec.positional:
            continue

        if spec.short is not None:
            text.append("  ").append(SHORT_PREFIX + spec.short, styler("option-name"))
            text.append("," if spec.long is not None else "").append(" ")
        else:
            text.append(" " * 6)

        if spec.long is not None:
            text.append(LONG_PREFIX, styler("option-name"))
            pad(spec.long, padl, styler("option-name"))
            text.append(" ")
        else:
            text.append("  " + " " * padl + "  ")

        details(spec)

    # Built-ins always close the options block, using the same columns.
    for short, long, descr in (("h", "help", "Prints this message"), ("V", "version", "Prints the version")):
        text.append("  ").append(SHORT_PREFIX + short, styler("option-name")).append(", ")
        text.append(LONG_PREFIX, styler("option-name"))
        pad(long, padl, styler("option-name"))
        text.append(" ")
        pad("", padv)
        text.append(" ").append(descr, styler("argument-description")).append(".\n")

    if positionals:
        text.append("\n").append("Positionals", styler("section-label")).append(":\n")
        for spec in positionals:
            text.append(" " * 9 + " " * padl)
            details(spec)

    # Footer: copyright pieces joined by single spaces, or a lone blank line.
    pieces = []
    if info.license:
        pieces.append(f"{info.license} License Copyright (c)")
    if info.year:
        pieces.append(info.year)
    if info.author:
        pieces.append(info.author)
    if info.email:
        pieces.append(f"<{info.email}>")

    text.append("\n")
    if pieces:
        text.append(" ".join(pieces), styler("copyright-section")).append(".\n")

    if info.url:
        text.append("Visit ").append(info.url, styler("homepage-section")).append(" for more details.\n")

    return text


def format_version(info, /):
    """
    Return "major.minor", plus ".patch" only when patch is nonzero.
    """
    return str(info.version)


def print_usage(table, info, /, *, console=Unset, colorful=False):
    """
    Write the usage block to the diagnostic console (stderr by default).
    """
    if table is None:
        return
    coalesce(console, stderr).print(
        format_usage(table, info, colorful=colorful),
        end="",
        soft_wrap=True,
        highlight=False,
    )


def print_version(info, /, *, console=Unset):
    """
    Write the version line to the primary console (stdout by default).
    """
    coalesce(console, stdout).out(format_version(info), highlight=False)


def usage(state, /):
    """
    Print usage for a ParserState: its table and info, to its stderr console.

    Hooks receive the state and may call this before reporting a failure.
    """
    print_usage(state.table, state.info, console=state.stderr, colorful=state.colorful)


__all__ = (
    "longest_long",
    "longest_metavar",
    "format_usage",
    "format_version",
    "print_usage",
    "print_version",
    "usage",
)
