# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandSpec`, the immutable description of one command, and its
`parse` entry point.

Parsing runs in four steps:

1. Locate flag literals right to left and reject the parse at once if a
   required flag is absent.
2. Match each occurrence against its window, producing candidate flag results.
3. Merge the candidates into branches, forking on ambiguity and pruning
   invalid branches.
4. Rank the survivors and bind the best one(s) to the command callback.

Example:
    command = CommandSpec(
        "sum",
        flags=(
            FlagSpec(
                "--n",
                required=True,
                arguments=(ArgumentSpec.from_declaration("values 1-", per_token(int)),),
            ),
        ),
        callback=lambda args: sum(args["--n"]["values"]),
    )
    outcome = command.parse(["--n", "1", "2", "3"])
    outcome.execute()  # 6
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from argfork.exceptions import AmbiguousCommandError, EmptyNameError
from argfork.logger import logger
from argfork.options import ResolverConfig
from argfork.parser.flag import FlagSpec, unique_by_name
from argfork.parser.locator import locate_flags, require_flags
from argfork.parser.ranking import ParseOutcome, finalize
from argfork.parser.results import CommandCallback, no_command_callback
from argfork.parser.search import BranchSearch


@dataclass(frozen=True)
class CommandSpec:
    """
    Represents a command.

    Attributes:
        name (str): The command name (the first token on a command line).
        flags (tuple[FlagSpec, ...]): Accepted flags, de-duplicated by name.
        callback (CommandCallback): Called with `{flag: {argument: values}}`.
        description (tuple[str, ...]): Help lines.
    """

    name: str
    flags: tuple[FlagSpec, ...] = ()
    callback: CommandCallback = no_command_callback
    description: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyNameError("command name must not be empty")
        object.__setattr__(self, "flags", unique_by_name(self.flags))
        object.__setattr__(self, "description", tuple(self.description))

    def get_flag(self, name: str) -> FlagSpec | None:
        return next((flag for flag in self.flags if flag.name == name), None)

    @property
    def required_flags(self) -> tuple[FlagSpec, ...]:
        return tuple(flag for flag in self.flags if flag.required)

    def parse(
        self, tokens: Sequence[str], config: ResolverConfig | None = None
    ) -> ParseOutcome:
        """
        Resolve `tokens` (the tokens after the command name) against this command.

        Parse functions and callbacks must be deterministic and free of side
        effects; they may be called several times on overlapping slices and the
        order of those calls is not part of the contract.

        Args:
            tokens: Already split tokens; no shell splitting is performed.
            config: Resolver options. Defaults to `ResolverConfig()`.

        Returns:
            ParseOutcome: The best interpretation, its ties, and diagnostics.

        Raises:
            MissingRequiredFlagError: A required flag literal is absent.
            BranchLimitExceededError: The search exceeded `config.max_branches`.
            AmbiguousCommandError: `config.strict` is set and several
                interpretations tie.
        """
        config = config or ResolverConfig()
        tokens = tuple(tokens)

        occurrences = locate_flags(tokens, self.flags)
        require_flags(occurrences, self.required_flags)
        logger.debug(
            "Resolving '%s' over %d token(s), %d flag occurrence(s)",
            self.name,
            len(tokens),
            len(occurrences),
        )

        search = BranchSearch(self.flags, tokens, occurrences, config.max_branches)
        result = search.run()
        outcome = finalize(
            self.name, self.callback, tokens, result.branches, result.reason
        )
        if config.strict and outcome.ambiguous:
            raise AmbiguousCommandError(self.name, outcome.candidates)
        return outcome

    def usage(self) -> str:
        return " ".join([self.name, *(flag.usage() for flag in self.flags)])
