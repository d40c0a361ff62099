"""
Parse hooks: the single extension point of the matcher.

A hook is any callable taking the ParserState and returning an int, where 0
(or None) means "accepted" and anything else aborts the parse. The matcher
never calls user callables directly; it selects a Hook capability first:

- OptionHook: the hook declared on the matched OptionSpec.
- DefaultHook: the fallback hook declared on the ParserState.
- NoHook: nothing to call, the match is accepted as-is.
"""
from abc import ABC, abstractmethod


def _normalize(result, /):
    """
    Map a hook's return value onto the 0/nonzero contract.
    """
    match result:
        case None | False:
            return 0
        case True:
            return 1
        case int():
            return int(result)
        case _:
            raise TypeError(f"hook must return an integer, not {type(result).__name__!r}")


class Hook(ABC):
    """
    capability interface: handle(state) -> int (0 on success).
    """
    __slots__ = ()

    @abstractmethod
    def handle(self, state, /):
        raise NotImplementedError


class _CallbackHook(Hook):
    __slots__ = ("callback",)

    def __init__(self, callback, /):
        if not callable(callback):
            raise TypeError(f"{type(self).__name__}() argument must be callable")
        self.callback = callback

    def handle(self, state, /):
        return _normalize(self.callback(state))

    def __repr__(self):
        return f"{type(self).__name__}({getattr(self.callback, '__qualname__', self.callback)!r})"


class OptionHook(_CallbackHook):
    """
    The hook attached to an OptionSpec.
    """
    __slots__ = ()


class DefaultHook(_CallbackHook):
    """
    The state-wide fallback, used when the matched spec has no hook of its own.
    """
    __slots__ = ()


class NoHook(Hook):
    """
    Accept every match without calling anything.
    """
    __slots__ = ()

    def handle(self, state, /):
        return 0

    def __repr__(self):
        return "NoHook()"


def select(spec, default=None, /):
    """
    Pick the hook capability for a matched spec.

    priority: the spec's own hook, then the default hook, then NoHook.
    """
    match getattr(spec, "hook", None), default:
        case None, None:
            return NoHook()
        case None, fallback:
            return DefaultHook(fallback)
        case hook, _:
            return OptionHook(hook)


__all__ = (
    "Hook",
    "OptionHook",
    "DefaultHook",
    "NoHook",
    "select",
)
