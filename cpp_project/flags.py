"""Flag registry and parser used by the ``cpp_project`` command line.

The command line has exactly one positional argument (the project name)
followed by a flat set of flags.  Flags are written either as ``-x`` or
``--xyz`` and may carry a value using ``--flag=value`` syntax.

Implementation details
----------------------
* :class:`FlagRegistry` is an ordered, append-only list of :class:`Flag`
  entries.  Lookup is an exact, case-sensitive match against the long name
  or the optional short alias of each entry; the first entry wins.
* :func:`parse_token` turns a raw token into a :class:`ParsedFlag`.
* :class:`FlagParser` dispatches parsed tokens to the registered handlers.
  Handlers never touch global state: they receive the context object that
  was passed to :meth:`FlagParser.dispatch`.
* Unknown flags are ignored and only reported at ``DEBUG`` level.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

import typer

log = logging.getLogger(__name__)

__all__ = ["Flag", "FlagRegistry", "ParsedFlag", "FlagParser", "parse_token", "handle_args", "echo_usage", "HELP_FLAG", ]

HELP_FLAG = "help"

Handler = Callable[[Any, str | None], None]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


@dataclass(frozen = True)
class Flag:
    """A registered flag: a long name, an optional short alias and a handler."""

    name: str
    handler: Handler
    short: str | None = None

    def matches(self, name: str) -> bool:
        if not name:
            return False
        return name == self.name or name == self.short


class FlagRegistry:
    """Ordered mapping from flag names to handlers.

    Names are not checked for uniqueness.  Registering the same name twice
    keeps both entries and :meth:`lookup` returns the first one.
    """

    def __init__(self) -> None:
        self._flags: list[Flag] = []

    def register(
            self, name: str, handler: Handler, short: str | None = None
            ) -> Flag:
        """Append a new flag and return the created entry."""
        flag = Flag(name = name, handler = handler, short = short)
        self._flags.append(flag)
        return flag

    def lookup(self, name: str) -> Flag | None:
        """Return the first flag whose long name or short alias equals *name*."""
        for flag in self._flags:
            if flag.matches(name):
                return flag
        return None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __iter__(self) -> Iterator[Flag]:
        return iter(self._flags)

    def __len__(self) -> int:
        return len(self._flags)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@dataclass(frozen = True)
class ParsedFlag:
    """Name and optional value extracted from a single command-line token."""

    name: str
    value: str | None = None


def parse_token(token: str) -> ParsedFlag:
    """Split a raw token into a flag name and an optional value.

    Leading dashes are stripped without distinguishing ``-x`` from
    ``--xyz``.  The token is split at the first ``=``; an ``=`` at the very
    start is part of the name and an ``=`` with nothing after it yields no
    value, so ``--name=`` parses the same as ``--name``.
    """
    stripped = token.lstrip("-")
    name, sep, value = stripped.partition("=")
    if not sep or not name:
        return ParsedFlag(stripped)
    return ParsedFlag(name, value or None)


def echo_usage(context: Any, usage: str | None) -> None:
    """Default ``help`` handler: print the usage text as-is."""
    typer.echo(usage or "", nl = False)


class FlagParser:
    """Dispatch raw tokens to the handlers of a :class:`FlagRegistry`."""

    def __init__(self, registry: FlagRegistry, usage: str) -> None:
        self.registry = registry
        self.usage = usage

    def dispatch(self, token: str, context: Any) -> Flag | None:
        """Parse *token* and invoke the matching handler with *context*.

        Returns the matched flag, or ``None`` when the token is not a
        registered flag (the token is then ignored).
        """
        parsed = parse_token(token)
        flag = self.registry.lookup(parsed.name)
        if flag is None:
            log.debug("Ignoring unrecognised flag %r", token)
            return None

        value = parsed.value
        if flag.name == HELP_FLAG:
            value = self.usage

        log.debug("Dispatching flag %r with value %r", flag.name, value)
        flag.handler(context, value)
        return flag


def handle_args(
        args: Sequence[str], registry: FlagRegistry, context: Any, usage: str, required_params: int = 1, ) -> bool:
    """Process the command-line arguments *args* (program name excluded).

    A ``help`` flag printing *usage* is registered if the registry has none.

    Returns ``True`` when the caller should go on with the positional
    arguments, ``False`` when the run is over: no arguments were given (the
    usage is shown) or the first argument was itself a flag (it is handled
    and nothing else is processed).
    """
    if registry.lookup(HELP_FLAG) is None:
        registry.register(HELP_FLAG, echo_usage, short = "h")

    parser = FlagParser(registry, usage)

    if not args:
        parser.dispatch(HELP_FLAG, context)
        return False

    if args[0].startswith("-"):
        parser.dispatch(args[0], context)
        return False

    for token in args[required_params:]:
        parser.dispatch(token, context)
    return True
