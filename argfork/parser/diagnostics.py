# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Ignorable diagnostics attached to an otherwise usable parse result.

A diagnostic never prevents a `ParsedCommand` from being executed; callers
decide whether to warn, proceed, or reject.

Kinds:
    EXTRA_ARGUMENTS: Some tokens were not claimed by any flag argument.
    AMBIGUOUS: More than one interpretation ranked first.
    EMPTY_RESULT: No interpretation survived; the result binds no flags.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DiagnosticKind(Enum):
    """Classifies an ignorable diagnostic."""

    EXTRA_ARGUMENTS = "extra_arguments"
    AMBIGUOUS = "ambiguous"
    EMPTY_RESULT = "empty_result"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """
    A non-fatal condition found while resolving a command.

    Attributes:
        kind (DiagnosticKind): What happened.
        message (str): Human-readable description.
        tokens (tuple[str, ...]): Raw tokens involved, if any.
        cause (Exception | None): The failure that led to this diagnostic, if any.
    """

    kind: DiagnosticKind
    message: str
    tokens: tuple[str, ...] = ()
    cause: Exception | None = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


def extra_arguments(tokens: tuple[str, ...]) -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.EXTRA_ARGUMENTS,
        f"extra arguments provided: {' '.join(tokens)}",
        tokens=tokens,
    )


def ambiguous(count: int) -> Diagnostic:
    return Diagnostic(
        DiagnosticKind.AMBIGUOUS,
        f"{count} interpretations rank equally; the first one was selected",
    )


def empty_result(cause: Exception | None = None) -> Diagnostic:
    message = "no valid arguments were found" if cause else "no flags were given"
    return Diagnostic(DiagnosticKind.EMPTY_RESULT, message, cause=cause)
