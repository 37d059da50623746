# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Locates flag literals inside a token stream.

Tokens are scanned right to left and compared to the command's flag names by
exact string equality. Tokens that match no flag are not boundaries; they fall
into the window of whichever flag precedes them.

`require_flags` must run before any argument matching: a missing required flag
rejects the parse without exploring a single window.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from argfork.exceptions import MissingRequiredFlagError
from argfork.parser.flag import FlagSpec


@dataclass(frozen=True)
class FlagOccurrence:
    """A flag literal found at `position` in the token stream."""

    position: int
    flag: FlagSpec


def locate_flags(
    tokens: Sequence[str], flags: Sequence[FlagSpec]
) -> list[FlagOccurrence]:
    """
    Find every flag literal in `tokens`.

    Returns:
        list[FlagOccurrence]: Occurrences ordered right to left.
    """
    by_name = {flag.name: flag for flag in flags}
    occurrences = []
    for position in range(len(tokens) - 1, -1, -1):
        flag = by_name.get(tokens[position])
        if flag is not None:
            occurrences.append(FlagOccurrence(position, flag))
    return occurrences


def require_flags(
    occurrences: Sequence[FlagOccurrence], flags: Sequence[FlagSpec]
) -> None:
    """
    Check that every required flag occurs at least once.

    Raises:
        MissingRequiredFlagError: For the first required flag not found.
    """
    seen = {occurrence.flag.name for occurrence in occurrences}
    for flag in flags:
        if flag.required and flag.name not in seen:
            raise MissingRequiredFlagError(flag.name)
