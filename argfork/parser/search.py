# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The branch search engine.

Flag occurrences are processed right to left. Each occurrence is matched
against its window and its candidate outcomes are merged into the pool of
branches:

- A flag not yet bound in a branch forks the branch once per candidate.
- A flag seen again follows the merge table:

    existing  | new       | result
    ----------|-----------|------------------------------------------
    Ok        | Ok        | keep the branch and fork one per new Ok
    Err       | Err       | keep one copy holding the latest error
    Err       | Ok        | replace the error, one branch per new Ok
    Ok        | Err       | keep the branch unchanged

Once every occurrence is merged, branches missing a required flag or
carrying an `Err` are pruned. The number of live branches is capped by
`max_branches`; exceeding it raises `BranchLimitExceededError`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from argfork.exceptions import BranchLimitExceededError, MissingRequiredFlagError
from argfork.logger import logger
from argfork.parser.locator import FlagOccurrence
from argfork.parser.matcher import match_flag
from argfork.parser.results import Branch, Err, FlagOutcome, Ok

if TYPE_CHECKING:
    from argfork.parser.flag import FlagSpec


def merge_outcomes(
    branch: Branch, flag: str, outcomes: Sequence[FlagOutcome]
) -> list[Branch]:
    """Combine one branch with the outcomes of a newly matched flag."""
    previous = branch.get(flag)
    failed = isinstance(outcomes[0], Err)

    if previous is None:
        return [branch.bind(flag, outcome) for outcome in outcomes]

    if isinstance(previous, Err):
        if failed:
            return [branch.bind(flag, outcomes[0])]
        return [branch.bind(flag, outcome) for outcome in outcomes]

    if failed:
        return [branch]
    return [branch, *(branch.bind(flag, outcome) for outcome in outcomes)]


@dataclass
class SearchResult:
    """Branches that survived pruning and, if none did, why."""

    branches: list[Branch] = field(default_factory=list)
    reason: Exception | None = None
    explored: int = 0


class BranchSearch:
    """
    Explores every interpretation of a token stream for one command.

    Args:
        flags: The command's flags.
        tokens: The token stream after the command name.
        occurrences: Flag occurrences, right to left.
        max_branches: Ceiling on live branches.
    """

    def __init__(
        self,
        flags: Sequence[FlagSpec],
        tokens: Sequence[str],
        occurrences: Sequence[FlagOccurrence],
        max_branches: int,
    ) -> None:
        self.flags = tuple(flags)
        self.tokens = tuple(tokens)
        self.occurrences = tuple(occurrences)
        self.max_branches = max_branches

    def run(self) -> SearchResult:
        pool = self._explore()
        survivors, reason = self._prune(pool)
        logger.debug(
            "Search kept %d of %d branch(es)", len(survivors), len(pool)
        )
        return SearchResult(survivors, reason, explored=len(pool))

    def _explore(self) -> list[Branch]:
        pool: list[Branch] = []
        boundary = len(self.tokens)

        for index, occurrence in enumerate(self.occurrences):
            name = occurrence.flag.name
            outcomes = match_flag(
                self.tokens, occurrence, boundary, limit=self.max_branches
            )
            if isinstance(outcomes[0], Ok):
                boundary = occurrence.position

            if index == 0:
                pool = [Branch().bind(name, outcome) for outcome in outcomes]
            else:
                merged: list[Branch] = []
                for branch in pool:
                    merged.extend(merge_outcomes(branch, name, outcomes))
                    if len(merged) > self.max_branches:
                        raise BranchLimitExceededError(self.max_branches, name)
                pool = merged

            if len(pool) > self.max_branches:
                raise BranchLimitExceededError(self.max_branches, name)
            logger.debug("After flag '%s': %d live branch(es)", name, len(pool))

        return pool

    def _prune(self, pool: list[Branch]) -> tuple[list[Branch], Exception | None]:
        survivors = []
        reason: Exception | None = None
        for branch in pool:
            problem = self._problem(branch)
            if problem is None:
                survivors.append(branch)
            elif reason is None:
                reason = problem
        return survivors, reason

    def _problem(self, branch: Branch) -> Exception | None:
        for flag in self.flags:
            if not flag.required:
                continue
            outcome = branch.get(flag.name)
            if outcome is None:
                return MissingRequiredFlagError(flag.name)
            if isinstance(outcome, Err):
                return outcome.reason
        failure = branch.failure
        return failure.reason if failure is not None else None
