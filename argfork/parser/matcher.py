# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Matches the arguments of one flag against the tokens of its window.

`match_argument` tries every count allowed by an argument's arity, from
`min` to `max` (clipped to the window), on the prefix of the window and keeps
each count whose parse function succeeds. Ambiguity is not resolved here:
every successful count becomes a candidate.

`match_flag` chains the arguments of a flag left to right. Each candidate of
one argument starts the next argument where it stopped consuming, so a flag
may yield several candidate `FlagResult`s. Each complete candidate then goes
through the flag callback.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from argfork.exceptions import (
    ArgumentFailure,
    ArgumentParseError,
    BranchLimitExceededError,
    FlagCallbackError,
    NotEnoughArgumentsError,
)
from argfork.logger import logger
from argfork.parser.argument import ArgumentSpec
from argfork.parser.locator import FlagOccurrence
from argfork.parser.results import Err, FlagOutcome, FlagResult, Ok


@dataclass(frozen=True)
class ArgumentCandidate:
    """`count` tokens of the window parsed into `values`."""

    count: int
    values: tuple[Any, ...]


def match_argument(
    window: Sequence[str], spec: ArgumentSpec
) -> list[ArgumentCandidate]:
    """
    Enumerate the prefix slices of `window` that `spec` accepts.

    Returns:
        list[ArgumentCandidate]: Successful candidates in ascending count order.

    Raises:
        NotEnoughArgumentsError: If the window is shorter than the minimum arity.
        ArgumentParseError: If no count parses; carries the failure of the
            largest count attempted.
    """
    window = tuple(window)
    if len(window) < spec.arity.min:
        raise NotEnoughArgumentsError(spec.name, spec.arity.min, len(window))

    candidates = []
    failure: ArgumentParseError | None = None
    for count in spec.arity.counts(len(window)):
        tokens = window[:count]
        try:
            values = tuple(spec.parse(tokens))
        except Exception as error:
            failure = ArgumentParseError(spec.name, tokens, error)
            continue
        candidates.append(ArgumentCandidate(count, values))

    if not candidates:
        if failure is None:
            raise RuntimeError(f"no count attempted for argument {spec.name!r}")
        raise failure
    return candidates


@dataclass(frozen=True)
class _Partial:
    cursor: int
    values: dict[str, tuple[Any, ...]]


def match_flag(
    tokens: Sequence[str],
    occurrence: FlagOccurrence,
    boundary: int,
    limit: int | None = None,
) -> list[FlagOutcome]:
    """
    Evaluate one flag occurrence over the window `tokens[position + 1:boundary]`.

    Args:
        tokens: The full token stream after the command name.
        occurrence: Where the flag literal was found.
        boundary: Exclusive end of the window.
        limit: Maximum number of partial candidates kept alive.

    Returns:
        list[FlagOutcome]: Every successful candidate as `Ok`, or a single `Err`
        holding the most informative failure when none succeeded.
    """
    flag = occurrence.flag
    offset = occurrence.position + 1
    window = tuple(tokens[offset:boundary])

    partials = [_Partial(0, {})]
    failure: ArgumentFailure | None = None
    for spec in flag.arguments:
        extended = []
        for partial in partials:
            try:
                candidates = match_argument(window[partial.cursor :], spec)
            except ArgumentFailure as error:
                failure = error
                continue
            for candidate in candidates:
                extended.append(
                    _Partial(
                        partial.cursor + candidate.count,
                        {**partial.values, spec.name: candidate.values},
                    )
                )
        if limit is not None and len(extended) > limit:
            raise BranchLimitExceededError(limit, flag.name)
        partials = extended
        if not partials:
            break

    outcomes: list[FlagOutcome] = []
    for partial in partials:
        try:
            values = flag.bind(partial.values)
        except Exception as error:
            failure = FlagCallbackError(flag.name, error)
            continue
        positions = (occurrence.position, *range(offset, offset + partial.cursor))
        outcomes.append(
            Ok(
                FlagResult(
                    flag=flag.name,
                    values=values,
                    consumed=window[: partial.cursor],
                    positions=positions,
                )
            )
        )

    if outcomes:
        logger.debug(
            "Flag '%s' at %d: %d candidate(s) over %d token(s)",
            flag.name,
            occurrence.position,
            len(outcomes),
            len(window),
        )
        return outcomes

    if failure is None:
        raise RuntimeError(f"flag {flag.name!r} produced no candidate and no failure")
    logger.debug(
        "Flag '%s' at %d failed: %s", flag.name, occurrence.position, failure
    )
    return [Err(failure)]
