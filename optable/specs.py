"""
optable option specifications and application metadata.

Overview
- OptionSpec: one declared entry of an option table.
  • named flag:       OptionSpec("v", "verbose")
  • named option:     OptionSpec("o", "output", metavar="FILE")
  • positional slot:  OptionSpec(metavar="INPUT")
- Version / GitInfo: small named tuples describing the running program.
- AppInfo: immutable record feeding the usage footer and the version line.

Tables
- An option table is any ordered iterable of OptionSpec; it is frozen into a
  tuple when handed to a ParserState. Declaration order is significant: the
  matcher scans it front to back and positionals are filled in that order.

Reserved conventions
- LONG_PREFIX ("--") and SHORT_PREFIX ("-") are never part of a stored name.
- HIDDEN_PREFIX ("type::") on an `accepts` text keeps it out of help output.

Validation highlights
- Every text field must be a non-blank string when provided; passing None
  explicitly is rejected (omit the argument instead). Text is kept verbatim
  and cannot hold control characters other than newlines.
- Names cannot start with "-" nor contain whitespace.
- A spec without any name must declare a metavar (it is a positional slot).

Quick example:
    >>> table = (
    ...     OptionSpec("o", "output", metavar="FILE", descr="Write the result to FILE"),
    ...     OptionSpec("v", "verbose", descr="Talk more"),
    ...     OptionSpec(metavar="INPUT", descr="File to read"),
    ... )
"""
import functools
import operator
import os.path
import re
import sys
from collections import namedtuple

from rich.text import Text

from .utils import *

LONG_PREFIX = "--"
SHORT_PREFIX = "-"
HIDDEN_PREFIX = "type::"

_CONTROL = re.compile(r"[\x00-\x09\x0b-\x1f\x7f]")


class SpecType(type):
    """
    Metaclass that gives specs stable introspection.

    Responsibilities
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in validation messages.
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" field (see mirror()).
    - Provide compact __repr__/__rich_repr__ implementations.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_text(cls, metadata, name, /):
    """
    Internal: validate one optional text field in place.

    - Unset stays "not provided" and becomes None.
    - str is stored verbatim; it must hold more than whitespace and no control
      character other than a newline (rich would rewrite those on output).
    - anything else (None included) is a TypeError.
    """
    if not isinstance(value := metadata[name], str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} must be a string")
    elif isinstance(value, str) and not value.strip():
        raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
    elif isinstance(value, str) and _CONTROL.search(value):
        raise ValueError(f"{cls.__typename__} {name!r} cannot contain control characters")
    metadata[name] = coalesce(value)


def _sanitize_names(cls, metadata, /):
    """
    Internal: validate the short/long names of an option spec.

    Names are stored bare (without prefixes). Only the first character of a
    short name takes part in matching, but the whole string is kept and shown
    in help.
    """
    for name in ("short", "long"):
        _sanitize_text(cls, metadata, name)
        if (value := metadata[name]) is None:
            continue
        if value.startswith(SHORT_PREFIX):
            raise ValueError(f"{cls.__typename__} {name!r} name must be given without leading dashes")
        if re.search(r"\s", value):
            raise ValueError(f"{cls.__typename__} {name!r} name cannot contain whitespace")


def _sanitize_hook(cls, metadata, /):
    if (hook := metadata["hook"]) is not Unset and not callable(hook):
        raise TypeError(f"{cls.__typename__} 'hook' must be callable")
    metadata["hook"] = coalesce(hook)


class OptionSpec(metaclass=SpecType):
    """
    One accepted argument of an option table.

    Kinds
    - named flag: has a short and/or long name and no metavar.
    - named option: has a name and a metavar; consumes the following token.
    - positional: no name, a metavar; consumes one unmatched token by position.

    Help-only metadata
    - accepts: free text shown as "Accept: ..." (hidden when it starts with "type::").
    - default: free text shown as "Default: ..."; never applied automatically.
    - descr: one sentence; help appends the trailing period.

    Hook
    - hook(state) is called on every match with state.key/state.value set.
      It returns 0 (or None) on success; anything else aborts the parse.
    """

    __introspectable__ = (
        "short",
        "long",
        "metavar",
        "accepts",
        "default",
        "descr",
        "hook",
    )

    def __new__(
            cls,
            short=Unset,
            long=Unset,
            /,
            metavar=Unset,
            accepts=Unset,
            default=Unset,
            descr=Unset,
            hook=Unset,
    ):
        metadata = {
            "short": short,
            "long": long,
            "metavar": metavar,
            "accepts": accepts,
            "default": default,
            "descr": descr,
            "hook": hook,
        }
        _sanitize_names(cls, metadata)
        for name in ("metavar", "accepts", "default", "descr"):
            _sanitize_text(cls, metadata, name)
        _sanitize_hook(cls, metadata)

        if metadata["short"] is None and metadata["long"] is None and metadata["metavar"] is None:
            raise TypeError(f"{cls.__typename__} without a name must specify a 'metavar' (positional)")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def named(self):
        """
        True when the spec can be matched by a short or long name.
        """
        return self._short is not None or self._long is not None

    @property
    def positional(self):
        """
        True when the spec is an unnamed slot filled by position.
        """
        return not self.named

    @property
    def label(self):
        """
        The name used in diagnostics: long name first, then short name, then metavar.
        """
        return self._long or self._short or self._metavar

    def __rich__(self):
        names = []
        if self._short is not None:
            names.append(SHORT_PREFIX + self._short)
        if self._long is not None:
            names.append(LONG_PREFIX + self._long)
        if self._metavar is not None:
            names.append(self._metavar)
        return Text(" ".join(names))


class Version(namedtuple("Version", ("major", "minor", "patch"), defaults=(0,))):
    """
    Semantic version of the application.

    str(version) yields "major.minor" and appends ".patch" only when patch is nonzero.
    """
    __slots__ = ()

    def __new__(cls, major, minor, patch=0):
        for name, value in (("major", major), ("minor", minor), ("patch", patch)):
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"version {name!r} must be an integer")
            if value < 0:
                raise ValueError(f"version {name!r} cannot be negative")
        return super().__new__(cls, major, minor, patch)

    def __str__(self):
        if self.patch:
            return "%d.%d.%d" % self
        return "%d.%d" % self[:2]


GitInfo = namedtuple("GitInfo", ("url", "sha"), defaults=(None, None))
GitInfo.__doc__ = "Version-control coordinates of the build (data only)."


class AppInfo(metaclass=SpecType):
    """
    Static application metadata, supplied once by the caller.

    Fields
    - program: name shown on the usage line (defaults to basename of sys.argv[0]).
    - version: Version or a (major, minor[, patch]) tuple.
    - description: paragraph printed under the usage line.
    - license, year, author, email: assembled into the copyright footer.
    - url: homepage, printed as "Visit <url> for more details.".
    - commit, git: version-control details, kept for the embedding application.
    """

    __introspectable__ = (
        "program",
        "version",
        "description",
        "license",
        "author",
        "email",
        "year",
        "url",
        "commit",
        "git",
    )

    def __new__(
            cls,
            program=Unset,
            /,
            version=(0, 0, 0),
            description=Unset,
            license=Unset,
            author=Unset,
            email=Unset,
            year=Unset,
            url=Unset,
            commit=Unset,
            git=Unset,
    ):
        if isinstance(year, int) and not isinstance(year, bool):
            year = str(year)

        metadata = {
            "program": coalesce(program, os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program"),
            "version": version,
            "description": description,
            "license": license,
            "author": author,
            "email": email,
            "year": year,
            "url": url,
            "commit": commit,
            "git": git,
        }
        for name in ("program", "description", "license", "author", "email", "year", "url", "commit"):
            _sanitize_text(cls, metadata, name)

        match version:
            case Version():
                pass
            case tuple() | list() if len(version) in (2, 3):
                metadata["version"] = Version(*version)
            case _:
                raise TypeError(f"{cls.__typename__} 'version' must be a Version or a (major, minor[, patch]) tuple")

        match git:
            case UnsetType():
                metadata["git"] = GitInfo()
            case GitInfo():
                pass
            case _:
                raise TypeError(f"{cls.__typename__} 'git' must be a GitInfo")

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self


__all__ = (
    "OptionSpec",
    "Version",
    "GitInfo",
    "AppInfo",
    "LONG_PREFIX",
    "SHORT_PREFIX",
    "HIDDEN_PREFIX",
)
