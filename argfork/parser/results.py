# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Result types produced while resolving a command.

- `FlagResult`: parsed values of one flag plus the tokens it consumed.
- `Ok` / `Err`: the outcome of one flag in one branch, as an explicit sum type.
- `Branch`: one candidate interpretation of the whole token stream. Branches
  are immutable; `Branch.bind` returns a new branch and never touches the
  original, so forked branches cannot alias each other.
- `ParsedCommand`: the bound, callable result handed back to callers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Union

from argfork.parser.diagnostics import Diagnostic

CommandArguments = Mapping[str, Mapping[str, tuple[Any, ...]]]
CommandCallback = Callable[[CommandArguments], Any]


@dataclass(frozen=True)
class FlagResult:
    """
    Immutable snapshot of one parsed flag.

    Attributes:
        flag (str): Name of the flag.
        values (Mapping[str, tuple]): Argument name to parsed values.
        consumed (tuple[str, ...]): Raw argument tokens consumed, in order.
        positions (tuple[int, ...]): Absolute token positions claimed,
            including the flag literal itself.
    """

    flag: str
    values: Mapping[str, tuple[Any, ...]]
    consumed: tuple[str, ...] = ()
    positions: tuple[int, ...] = ()

    @property
    def value_count(self) -> int:
        return sum(len(values) for values in self.values.values())


@dataclass(frozen=True)
class Ok:
    result: FlagResult


@dataclass(frozen=True)
class Err:
    reason: Exception


FlagOutcome = Union[Ok, Err]


@dataclass(frozen=True)
class Branch:
    """One candidate interpretation: flag name to `Ok`/`Err` outcome."""

    bindings: Mapping[str, FlagOutcome] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def bind(self, flag: str, outcome: FlagOutcome) -> Branch:
        """Return a new branch with `flag` bound to `outcome`."""
        bindings = dict(self.bindings)
        bindings[flag] = outcome
        return Branch(MappingProxyType(bindings))

    def get(self, flag: str) -> FlagOutcome | None:
        return self.bindings.get(flag)

    @property
    def results(self) -> dict[str, FlagResult]:
        return {
            name: outcome.result
            for name, outcome in self.bindings.items()
            if isinstance(outcome, Ok)
        }

    @property
    def failure(self) -> Err | None:
        """The first unrecovered failure carried by this branch, if any."""
        return next(
            (outcome for outcome in self.bindings.values() if isinstance(outcome, Err)),
            None,
        )

    @property
    def consumed(self) -> frozenset[int]:
        positions: set[int] = set()
        for result in self.results.values():
            positions.update(result.positions)
        return frozenset(positions)

    @property
    def bound_flags(self) -> int:
        return len(self.results)

    @property
    def value_count(self) -> int:
        return sum(result.value_count for result in self.results.values())


def no_command_callback(arguments: CommandArguments) -> Any:
    return None


@dataclass(frozen=True)
class ParsedCommand:
    """
    A fully bound command ready to be executed.

    Attributes:
        name (str): The command name.
        arguments (CommandArguments): Flag name to its argument map.
        callback (CommandCallback): The command callback.
        diagnostics (tuple[Diagnostic, ...]): Ignorable conditions found while resolving.
    """

    name: str
    arguments: CommandArguments = field(default_factory=lambda: MappingProxyType({}))
    callback: CommandCallback = field(default=no_command_callback, compare=False)
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_branch(
        cls,
        name: str,
        branch: Branch,
        callback: CommandCallback,
        diagnostics: tuple[Diagnostic, ...] = (),
    ) -> ParsedCommand:
        arguments = MappingProxyType(
            {flag: result.values for flag, result in branch.results.items()}
        )
        return cls(name, arguments, callback, diagnostics)

    @property
    def is_empty(self) -> bool:
        return not self.arguments

    def execute(self) -> Any:
        """Call the command callback with the bound arguments."""
        return self.callback(self.arguments)

    def to_dict(self) -> dict[str, dict[str, list[Any]]]:
        """Plain nested-dict view of the bound arguments."""
        return {
            flag: {name: list(values) for name, values in values_map.items()}
            for flag, values_map in self.arguments.items()
        }
