"""
optable matcher: walk an argument vector against an option table.

What this module provides
- ParserState: the per-invocation record (table, argv, info, default hook,
  scan cursor, remaining positional slots, current match).
- parse(state): the single-pass matching-and-dispatch loop.
- invoke(table, argv): convenience that builds a fresh state and parses it.

Matching rules
- "--name" matches a spec whose long name is exactly "name".
- "-x..." matches a spec whose short name starts with "x"; only the first
  character after the dash is compared, so "-xyz" also matches "x".
- tokens without a dash never match a name.
- "-h"/"--help" and "-V"/"--version" are built-ins: they are looked for across
  the whole argv before any matching (skipping option values) and end the
  parse with Outcome.HANDLED.
- a token no declared name claims fills the next positional slot, whatever it
  looks like; once the slots run out it is an error.

Outcome
- SUCCESS (0), HANDLED (1), FAILURE (-1), MISUSE (-EINVAL).
  SUCCESS is the only falsey outcome:

    if outcome := parse(state):
        sys.exit(0 if outcome is Outcome.HANDLED else 1)

Quick start
    from optable import OptionSpec, AppInfo, invoke

    def on_output(state):
        print("output ->", state.value)

    table = (
        OptionSpec("o", "output", metavar="FILE", hook=on_output),
        OptionSpec(metavar="INPUT"),
    )
    invoke(table, ["tool", "-o", "out.txt", "in.txt"], info=AppInfo("tool", version=(1, 2)))
"""
import errno
import logging
import sys
from collections import namedtuple
from enum import Enum, IntEnum

from .faults import *
from .hooks import select
from .rendering import print_version, usage
from .rendering import stderr as _stderr, stdout as _stdout
from .specs import AppInfo, LONG_PREFIX, OptionSpec, SHORT_PREFIX
from .utils import *

logger = logging.getLogger(__name__)

BUILTINS = (
    ("h", "help"),
    ("V", "version"),
)


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    PLAIN = "plain"


class Outcome(IntEnum):
    """
    result of a parse.

    - SUCCESS: every token was consumed and every hook accepted its match.
    - HANDLED: a built-in (help/version) ran; the application should stop.
    - FAILURE: a user error was reported (or raised, outside shell mode).
    - MISUSE: the state itself is unusable (no table or no argv); nothing printed.
    """
    SUCCESS = 0
    HANDLED = 1
    FAILURE = -1
    MISUSE = -errno.EINVAL


Match = namedtuple("Match", ("spec", "key", "value", "index"))
Match.__doc__ = """
Extraction result handed to a hook.

- key: the matched token for named specs, None for positionals.
- value: the following token for value-bearing named specs, the token itself
  for positionals, None for flags.
- index: position of the matched token in argv.
"""


def classify(token, /):
    """
    Classify a raw token by its prefix: LONG ("--"), SHORT ("-") or PLAIN.
    """
    if token.startswith(LONG_PREFIX):
        return TokenKind.LONG
    if token.startswith(SHORT_PREFIX):
        return TokenKind.SHORT
    return TokenKind.PLAIN


def is_arg(short, long, token, /):
    """
    Tell whether a token names the option with the given short/long names.

    Short matching compares one character only: "-vvv" matches short "v" and
    a stored short "vx" matches "-v".
    """
    if token is None:
        return False
    match classify(token):
        case TokenKind.LONG:
            return long is not None and token[len(LONG_PREFIX):] == long
        case TokenKind.SHORT:
            return short is not None and token[len(SHORT_PREFIX):][:1] == short[:1]
        case _:
            return False


def count_positionals(table, /):
    return sum(1 for spec in table if spec.positional)


def find_positional(table, index, /):
    """
    Return the index-th positional spec in declaration order, or None.
    """
    for count, spec in enumerate(spec for spec in table if spec.positional):
        if count == index:
            return spec
    return None


def _sanitize_table(table, /):
    if table is None:
        return None
    try:
        table = tuple(table)
    except TypeError:
        raise TypeError("option table must be an iterable of OptionSpec") from None
    for spec in table:
        if not isinstance(spec, OptionSpec):
            raise TypeError("option table must be an iterable of OptionSpec")
    return table


def _sanitize_argv(argv, /):
    if argv is Unset:
        return tuple(sys.argv)
    if argv is None:
        return None
    if isinstance(argv, str):
        raise TypeError("argv must be a sequence of strings, not a string")
    argv = tuple(argv)
    for token in argv:
        if not isinstance(token, str):
            raise TypeError("argv must be a sequence of strings")
    return argv


def _check_shadowing(table, /):
    """
    Warn about declared names that a built-in always wins against.
    """
    for spec in table:
        for short, long in BUILTINS:
            if (spec.short or "")[:1] == short or spec.long == long:
                trigger(ShadowedOptionWarning(
                    "option <%s> is shadowed by the built-in -%s/--%s and can never match" % (spec.label, short, long),
                    code=FaultCode.SHADOWED_OPTION,
                    spec=spec,
                ), stacklevel=5)


class ParserState:
    """
    Mutable record of one parse.

    Construction
    - table: iterable of OptionSpec (frozen into a tuple), or None.
    - argv: full argument vector, program name first (defaults to sys.argv), or None.
    - info: AppInfo for usage/version (defaults to AppInfo()).
    - hook: default hook, called for matches whose spec has no hook.
    - shell: print faults and return FAILURE (True) or raise them (False).
    - colorful: style the usage output.
    - stdout/stderr: rich consoles for version and diagnostics.

    Cursor (reset by every parse)
    - index: position of the token being processed.
    - positional: number of positional slots still unclaimed.
    - spec: the OptionSpec currently being processed.
    - match: the Match handed to the running hook; None outside hook calls,
      so key and value never leak from one match to the next.

    A state belongs to one parse at a time. Sharing it between threads, or
    parsing it from inside one of its own hooks, is not supported; callers that
    reuse a state across threads must synchronize externally.
    """

    table = mirror("table")
    argv = mirror("argv")
    info = mirror("info")
    hook = mirror("hook")

    def __init__(
            self,
            table,
            argv=Unset,
            /,
            info=Unset,
            hook=Unset,
            *,
            shell=True,
            colorful=False,
            stdout=Unset,
            stderr=Unset,
    ):
        self._table = _sanitize_table(table)
        self._argv = _sanitize_argv(argv)

        if not isinstance(info := coalesce(info, AppInfo()), AppInfo):
            raise TypeError("ParserState 'info' must be an AppInfo")
        self._info = info

        if hook is not Unset and not callable(hook):
            raise TypeError("ParserState 'hook' must be callable")
        self._hook = coalesce(hook)

        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.stdout = coalesce(stdout, _stdout)
        self.stderr = coalesce(stderr, _stderr)

        self.index = 0
        self.positional = 0
        self.spec = None
        self.match = None

        if self._table:
            _check_shadowing(self._table)

    @property
    def key(self):
        """
        The matched token while a hook runs (None for positionals and outside hooks).
        """
        return self.match.key if self.match else None

    @property
    def value(self):
        """
        The extracted value while a hook runs (None for flags and outside hooks).
        """
        return self.match.value if self.match else None

    def __repr__(self):
        return "parser-state(index=%d, positional=%d, spec=%r)" % (self.index, self.positional, self.spec)


def _fail(state, fault, /, *, quiet=False):
    """
    Report a fault once, then the usage block, and return FAILURE.

    quiet faults (a hook that returned nonzero) only print usage in shell mode;
    outside shell mode every fault is raised.
    """
    logger.debug("parse failed at index %d: %s", state.index, fault.message)
    if not (quiet and state.shell):
        trigger(fault, shell=state.shell, colorful=state.colorful, console=state.stderr)
    usage(state)
    return Outcome.FAILURE


def _builtin(state, token, /):
    if is_arg("h", "help", token):
        logger.debug("built-in help intercepted at index %d", state.index)
        usage(state)
        return Outcome.HANDLED
    if is_arg("V", "version", token):
        logger.debug("built-in version intercepted at index %d", state.index)
        print_version(state.info, console=state.stdout)
        return Outcome.HANDLED
    return None


def _consume(state, spec, /):
    """
    Extract key/value for a matched spec and run its hook.
    """
    state.spec = spec
    start = state.index

    if spec.named and spec.metavar is not None and len(state.argv) <= state.index + 1:
        return _fail(state, MissingValueError(
            "Option <%s> needs a value." % (spec.long or spec.short),
            code=FaultCode.MISSING_VALUE,
            spec=spec,
            index=start,
        ))

    if spec.named:
        key, value = state.argv[state.index], None
        if spec.metavar is not None:
            state.index += 1
            value = state.argv[state.index]
    else:
        key, value = None, state.argv[state.index]

    hook = select(spec, state.hook)
    logger.debug("matched %r at index %d (key=%r, value=%r) via %r", spec.label, start, key, value, hook)

    state.match = Match(spec, key, value, start)
    try:
        result = hook.handle(state)
    except Exception as exception:
        return _fail(state, HookFailedError(
            "%s <%s> failed." % ("Option" if spec.named else "Positional", spec.label),
            code=FaultCode.HOOK_FAILED,
            spec=spec,
            index=start,
            exception=exception,
        ))
    finally:
        state.match = None

    if result:
        return _fail(state, HookFailedError(
            "%s <%s> failed." % ("Option" if spec.named else "Positional", spec.label),
            code=FaultCode.HOOK_FAILED,
            spec=spec,
            index=start,
            result=result,
        ), quiet=True)

    return Outcome.SUCCESS


def parse(state, /):
    """
    Consume state.argv (after the program name) against state.table.

    Built-ins
    - before anything is matched, the first "-h"/"--help" or "-V"/"--version"
      token anywhere in argv prints usage or the version and the parse returns
      HANDLED; no hook runs. A token standing in the value slot of a
      value-bearing option is that option's value, not a built-in.

    Per token
    1. the first spec (declaration order) whose name matches claims the token;
       value-bearing specs also take the following token.
    2. otherwise the next positional slot claims it, if any is left.
    3. otherwise "Option <token> unknown!" is reported and the parse fails.

    Any failure prints the fault (shell mode), then the usage, and returns
    FAILURE; nothing after the failing token is looked at.
    """
    if state is None or state.argv is None:
        return Outcome.MISUSE
    if not state.argv:
        return Outcome.SUCCESS
    if state.table is None:
        return Outcome.MISUSE

    state.positional = count_positionals(state.table)
    state.spec = None
    state.match = None

    # Built-ins win wherever they appear, even behind tokens that would fail,
    # but never in the value slot of an option that takes one.
    state.index = 1
    while state.index < len(state.argv):
        token = state.argv[state.index]
        if outcome := _builtin(state, token):
            return outcome
        spec = next((spec for spec in state.table if is_arg(spec.short, spec.long, token)), None)
        if spec is not None and spec.named and spec.metavar is not None:
            state.index += 1
        state.index += 1

    claimed = 0
    state.index = 1
    while state.index < len(state.argv):
        token = state.argv[state.index]

        spec = next((spec for spec in state.table if is_arg(spec.short, spec.long, token)), None)

        if spec is None and state.positional > 0:
            state.positional -= 1
            spec = find_positional(state.table, claimed)
            claimed += 1
            logger.debug("token %r claimed by positional #%d", token, claimed)

        if spec is None:
            return _fail(state, UnknownOptionError(
                "Option <%s> unknown!" % token,
                code=FaultCode.UNKNOWN_OPTION,
                token=token,
                index=state.index,
            ))

        if outcome := _consume(state, spec):
            return outcome

        state.index += 1

    return Outcome.SUCCESS


def invoke(table, argv=Unset, /, info=Unset, hook=Unset, **options):
    """
    Build a fresh ParserState and parse it.

    Parameters
    - table: iterable of OptionSpec.
    - argv: argument vector, program name first (defaults to sys.argv).
    - info: AppInfo; hook: default hook; options: forwarded to ParserState.

    Returns
    - Outcome
    """
    return parse(ParserState(table, argv, info, hook, **options))


__all__ = (
    "TokenKind",
    "Outcome",
    "Match",
    "ParserState",
    "classify",
    "is_arg",
    "count_positionals",
    "find_positional",
    "parse",
    "invoke",
)
