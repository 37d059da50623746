# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Argfork.

Build-time problems (bad names, malformed arity strings, reserved literals) are
raised while a grammar is constructed and prevent any parse from happening.
Parse-time hard errors abort a single `parse` call. Recoverable failures such as
an argument that cannot be converted are stored as reasons on candidate
branches and surface as diagnostics, never as raised exceptions.

Exception Hierarchy:
- ArgforkError
    ├── GrammarError
    │     ├── EmptyNameError
    │     ├── ArityFormatError
    │     └── ReservedNameError
    ├── ResolutionError
    │     ├── MissingRequiredFlagError
    │     ├── BranchLimitExceededError
    │     └── AmbiguousCommandError
    ├── ArgumentFailure
    │     ├── NotEnoughArgumentsError
    │     ├── ArgumentParseError
    │     └── FlagCallbackError
    ├── CommandNotFoundError
    ├── EmptyArgumentsError
    └── ConfigError
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from argfork.parser.results import ParsedCommand


class ArgforkError(Exception):
    """Base exception for Argfork."""


class GrammarError(ArgforkError):
    """Raised when a grammar declaration is invalid.

    `position` is the 1-based index of the offending declaration inside its
    builder, and `kind` names what was being declared ("argument", "flag" or
    "command"). Nested builders prefix the message with each level.
    """

    def __init__(
        self, message: str, *, kind: str | None = None, position: int | None = None
    ) -> None:
        self.kind = kind
        self.position = position
        if kind and position is not None:
            message = f"{kind} #{position}: {message}"
        super().__init__(message)

    def at(self, kind: str, position: int) -> GrammarError:
        """Return a copy of this error located inside an enclosing declaration."""
        return type(self)(str(self), kind=kind, position=position)


class EmptyNameError(GrammarError):
    """Raised when an argument, flag or command is declared without a name."""


class ArityFormatError(GrammarError):
    """Raised when an arity string cannot be parsed or has max < min."""


class ReservedNameError(GrammarError):
    """Raised when a user declares a command or flag named "help"."""


class ResolutionError(ArgforkError):
    """Raised when a parse must be rejected outright."""


class MissingRequiredFlagError(ResolutionError):
    """Raised when a required flag literal does not appear in the tokens."""

    def __init__(self, flag: str) -> None:
        self.flag = flag
        super().__init__(f"missing required flag {flag!r}")


class BranchLimitExceededError(ResolutionError):
    """Raised when the number of live branches grows past the configured ceiling."""

    def __init__(self, limit: int, flag: str) -> None:
        self.limit = limit
        self.flag = flag
        super().__init__(
            f"more than {limit} candidate interpretations while resolving flag {flag!r}"
        )


class AmbiguousCommandError(ResolutionError):
    """Raised by strict callers when several interpretations rank equally."""

    def __init__(self, name: str, candidates: Sequence[ParsedCommand]) -> None:
        self.name = name
        self.candidates = tuple(candidates)
        super().__init__(
            f"command {name!r} is ambiguous: {len(self.candidates)} equally ranked "
            "interpretations"
        )


class ArgumentFailure(ArgforkError):
    """Base class for recoverable failures attached to a candidate branch."""


class NotEnoughArgumentsError(ArgumentFailure):
    """The window of a flag is shorter than an argument's minimum arity."""

    def __init__(self, argument: str, expected: int, got: int) -> None:
        self.argument = argument
        self.expected = expected
        self.got = got
        super().__init__(
            f"not enough arguments for {argument!r}: expected at least {expected}, "
            f"got {got}"
        )


class ArgumentParseError(ArgumentFailure):
    """An argument's parse function rejected every candidate slice."""

    def __init__(self, argument: str, tokens: Sequence[str], cause: Exception) -> None:
        self.argument = argument
        self.tokens = tuple(tokens)
        self.cause = cause
        super().__init__(f"invalid value for {argument!r} {list(self.tokens)}: {cause}")


class FlagCallbackError(ArgumentFailure):
    """A flag's post-processing callback rejected its parsed arguments."""

    def __init__(self, flag: str, cause: Exception) -> None:
        self.flag = flag
        self.cause = cause
        super().__init__(f"flag {flag!r} rejected its arguments: {cause}")


class CommandNotFoundError(ArgforkError):
    """Raised when the first token does not name a known command."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"command {command!r} not found")


class EmptyArgumentsError(ArgforkError):
    """Raised when the top-level parser receives no tokens at all."""


class ConfigError(ArgforkError):
    """Raised when a grammar file cannot be loaded or validated."""
