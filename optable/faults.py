"""
optable faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues.
- ParseError / ParseWarning: base types that carry message + options and know
  how to render and surface themselves.
- trigger(): central entry point to surface any fault.

Wording
- Errors keep the classic one-line form, followed by a blank line so the usage
  block that comes next stands apart:
      Error: Option <output> needs a value.
      Error: Option <--frobnicate> unknown!

Integration
- The matcher builds a fault and calls trigger(fault, shell=..., colorful=..., console=...).
- In shell mode the fault is printed to the diagnostic console; otherwise it is
  raised for the caller to handle.
- Warnings are programming notices (e.g. a declared name that a built-in shadows)
  and always go through warnings.warn.
"""
import copy
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    codes are carried in a fault's options for callers that handle faults
    programmatically; the rendered error line never shows them.

    grouping
    - matching errors (111xx)
      • UNKNOWN_OPTION, MISSING_VALUE
    - delegated errors (1113x)
      • HOOK_FAILED
    - warnings (121xx)
      • SHADOWED_OPTION
    """
    # --- matching errors (11xxx) ---
    UNKNOWN_OPTION  = 11112
    MISSING_VALUE   = 11117

    # --- delegated errors (11xxx) ---
    HOOK_FAILED     = 11131

    # --- warnings (12xxx) ---
    SHADOWED_OPTION = 12113


def _styles(defaults, /):
    return defaultdict(str, defaults | getattr(__import__("__main__"), "__styles__", {}))


class ParseError(Exception):
    """
    base class for user-facing parse errors.

    options
    - code: FaultCode
    - shell: print instead of raising (default True)
    - colorful: style the rendered line
    - console: destination console (defaults to the module stderr console)
    - any extra context (token, spec, index, exception, ...)
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _styles({
            "error-label": "bold red",
            "error-message": "",
        })
        colorful = self.options.get("colorful", False)
        return Text.assemble(
            Text("Error", styles["error-label"] if colorful else ""),
            ": ",
            Text(str(self.message), styles["error-message"] if colorful else ""),
        )

    def __trigger__(self):
        if not self.options.get("shell", True):
            raise self from self.options.get("exception")
        self.options.get("console", console).print(self, end="\n\n", soft_wrap=True, highlight=False)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingValueError(ParseError): ...
class UnknownOptionError(ParseError): ...
class HookFailedError(ParseError): ...


class ParseWarning(Warning):
    """
    base class for non-fatal notices about an option table.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __rich__(self):
        styles = _styles({
            "warning-label": "bold yellow",
            "warning-message": "",
        })
        colorful = self.options.get("colorful", False)
        return Text.assemble(
            Text("Warning", styles["warning-label"] if colorful else ""),
            ": ",
            Text(str(self.message), styles["warning-message"] if colorful else ""),
        )

    def __trigger__(self):
        warnings.warn(self, stacklevel=self.options.get("stacklevel", 2))

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class ShadowedOptionWarning(ParseWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace() before triggering.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


__all__ = (
    "FaultCode",
    "ParseError",
    "MissingValueError",
    "UnknownOptionError",
    "HookFailedError",
    "ParseWarning",
    "ShadowedOptionWarning",
    "trigger",
)
