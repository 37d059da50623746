# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Ranks surviving branches and turns them into a `ParseOutcome`.

Branches are ordered by the number of successfully bound flags, then by the
total number of parsed values, both descending. Sorting is stable, so equal
branches keep the order in which the search discovered them. Every branch
sharing the top key is a candidate; more than one candidate means the command
is ambiguous.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from argfork.exceptions import AmbiguousCommandError
from argfork.logger import logger
from argfork.parser import diagnostics
from argfork.parser.diagnostics import Diagnostic, DiagnosticKind
from argfork.parser.results import Branch, CommandCallback, ParsedCommand


def rank_key(branch: Branch) -> tuple[int, int]:
    return (-branch.bound_flags, -branch.value_count)


def rank_branches(branches: Sequence[Branch]) -> list[Branch]:
    """Return `branches` best first; ties keep their discovery order."""
    return sorted(branches, key=rank_key)


def top_ranked(branches: Sequence[Branch]) -> list[Branch]:
    """Return every branch tied for first place, best first."""
    ranked = rank_branches(branches)
    if not ranked:
        return []
    best = rank_key(ranked[0])
    return [branch for branch in ranked if rank_key(branch) == best]


def unclaimed_tokens(tokens: Sequence[str], branch: Branch) -> tuple[str, ...]:
    consumed = branch.consumed
    return tuple(
        token for position, token in enumerate(tokens) if position not in consumed
    )


@dataclass(frozen=True)
class ParseOutcome:
    """
    The result of resolving one command.

    Attributes:
        command (ParsedCommand): The top-ranked interpretation.
        candidates (tuple[ParsedCommand, ...]): Every interpretation tied for
            first place; `command` is always `candidates[0]`.
    """

    command: ParsedCommand
    candidates: tuple[ParsedCommand, ...]

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.command.diagnostics

    @property
    def clean(self) -> bool:
        """True when the result carries no diagnostic at all."""
        return not self.diagnostics

    def has(self, kind: DiagnosticKind) -> bool:
        return any(diagnostic.kind == kind for diagnostic in self.diagnostics)

    def unambiguous(self) -> ParsedCommand:
        """
        Return the single best interpretation.

        Raises:
            AmbiguousCommandError: If several interpretations tie.
        """
        if self.ambiguous:
            raise AmbiguousCommandError(self.command.name, self.candidates)
        return self.command

    def execute(self) -> Any:
        return self.command.execute()


def finalize(
    name: str,
    callback: CommandCallback,
    tokens: Sequence[str],
    branches: Sequence[Branch],
    reason: Exception | None = None,
) -> ParseOutcome:
    """
    Build the `ParseOutcome` for a command from the surviving branches.

    With no surviving branch the outcome is an explicit empty result whose
    only diagnostic explains why.
    """
    winners = top_ranked(branches)
    if not winners:
        logger.debug("Command '%s' resolved to an empty result: %s", name, reason)
        empty = ParsedCommand(
            name, callback=callback, diagnostics=(diagnostics.empty_result(reason),)
        )
        return ParseOutcome(empty, (empty,))

    tied = len(winners) > 1
    if tied:
        logger.warning(
            "Command '%s' is ambiguous: %d interpretations rank equally",
            name,
            len(winners),
        )

    candidates = []
    for branch in winners:
        found: list[Diagnostic] = []
        extra = unclaimed_tokens(tokens, branch)
        if extra:
            found.append(diagnostics.extra_arguments(extra))
        if tied:
            found.append(diagnostics.ambiguous(len(winners)))
        candidates.append(
            ParsedCommand.from_branch(name, branch, callback, tuple(found))
        )
    return ParseOutcome(candidates[0], tuple(candidates))
