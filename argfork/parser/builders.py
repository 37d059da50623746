# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builders that accumulate grammar declarations and validate them on `build()`.

Builders chain, nest (a `CmdBuilder` takes `FlagBuilder`s, which take
`ArgBuilder`s), and report errors with the 1-based position of the offending
declaration at every level:

    flags = (
        FlagBuilder()
        .add("--out", required=True, arguments=ArgBuilder().add("path"))
        .add("--level", arguments=ArgBuilder().add("n 0-1", per_token(int)))
    )
    commands = CmdBuilder().add("run", callback=run, flags=flags).build()

When a name is declared twice in the same builder, the last declaration wins
and takes the slot of the first one. `build()` leaves the builder untouched;
call `reset()` to reuse it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Union

from argfork.exceptions import GrammarError, ReservedNameError
from argfork.parser.argument import ArgumentParser, ArgumentSpec
from argfork.parser.command import CommandSpec
from argfork.parser.flag import FlagCallback, FlagSpec, no_flag_callback, unique_by_name
from argfork.parser.results import CommandCallback, no_command_callback

HELP_OPCODE = "help"

ArgumentsLike = Union["ArgBuilder", Sequence[Union[ArgumentSpec, str]], None]
FlagsLike = Union["FlagBuilder", Sequence[FlagSpec], None]


def check_reserved_name(name: str, kind: str) -> None:
    """
    Reject user declarations of the reserved `help` literal.

    Raises:
        ReservedNameError: If `name` is "help".
    """
    if name == HELP_OPCODE:
        raise ReservedNameError(f'{kind} name "{HELP_OPCODE}" is reserved')


def _lines(description: str | Iterable[str] | None) -> tuple[str, ...]:
    if description is None:
        return ()
    if isinstance(description, str):
        return tuple(description.splitlines())
    return tuple(description)


class ArgBuilder:
    """Accumulates argument declarations for one flag."""

    def __init__(self) -> None:
        self._declarations: list[tuple[str, ArgumentParser | None]] = []

    def add(self, declaration: str, parse: ArgumentParser | None = None) -> ArgBuilder:
        """
        Declare an argument.

        Args:
            declaration (str): `"<name>"` or `"<name> <arity>"`.
            parse (ArgumentParser | None): Converts token slices; tokens are
                kept as strings when omitted.
        """
        self._declarations.append((declaration, parse))
        return self

    def build(self) -> tuple[ArgumentSpec, ...]:
        arguments = []
        for position, (declaration, parse) in enumerate(self._declarations, start=1):
            try:
                arguments.append(ArgumentSpec.from_declaration(declaration, parse))
            except GrammarError as error:
                raise error.at("argument", position) from error
        return unique_by_name(arguments)

    def reset(self) -> None:
        self._declarations.clear()

    def __len__(self) -> int:
        return len(self._declarations)


@dataclass
class _FlagDeclaration:
    name: str
    required: bool
    description: tuple[str, ...]
    callback: FlagCallback | None
    arguments: ArgumentsLike


class FlagBuilder:
    """Accumulates flag declarations for one command."""

    def __init__(self) -> None:
        self._declarations: list[_FlagDeclaration] = []

    def add(
        self,
        name: str,
        required: bool = False,
        description: str | Iterable[str] | None = None,
        callback: FlagCallback | None = None,
        arguments: ArgumentsLike = None,
    ) -> FlagBuilder:
        """
        Declare a flag.

        Args:
            name (str): The flag literal, matched exactly against tokens.
            required (bool): Whether the flag must be present.
            description: Help text, as a string or a list of lines.
            callback (FlagCallback | None): Post-processes the parsed argument map.
            arguments: An `ArgBuilder`, or a list of `ArgumentSpec`s or declarations.
        """
        self._declarations.append(
            _FlagDeclaration(name, required, _lines(description), callback, arguments)
        )
        return self

    @staticmethod
    def _build_arguments(arguments: ArgumentsLike) -> tuple[ArgumentSpec, ...]:
        if arguments is None:
            return ()
        if isinstance(arguments, ArgBuilder):
            return arguments.build()
        specs = []
        for position, argument in enumerate(arguments, start=1):
            if isinstance(argument, ArgumentSpec):
                specs.append(argument)
                continue
            try:
                specs.append(ArgumentSpec.from_declaration(argument))
            except GrammarError as error:
                raise error.at("argument", position) from error
        return unique_by_name(specs)

    def build(self) -> tuple[FlagSpec, ...]:
        flags = []
        for position, declaration in enumerate(self._declarations, start=1):
            try:
                check_reserved_name(declaration.name, "flag")
                flags.append(
                    FlagSpec(
                        name=declaration.name,
                        required=declaration.required,
                        arguments=self._build_arguments(declaration.arguments),
                        callback=declaration.callback or no_flag_callback,
                        description=declaration.description,
                    )
                )
            except GrammarError as error:
                raise error.at("flag", position) from error
        return unique_by_name(flags)

    def reset(self) -> None:
        self._declarations.clear()

    def __len__(self) -> int:
        return len(self._declarations)


@dataclass
class _CommandDeclaration:
    name: str
    description: tuple[str, ...]
    callback: CommandCallback | None
    flags: FlagsLike


class CmdBuilder:
    """Accumulates command declarations for a `CommandLineParser`."""

    def __init__(self) -> None:
        self._declarations: list[_CommandDeclaration] = []

    def add(
        self,
        name: str,
        description: str | Iterable[str] | None = None,
        callback: CommandCallback | None = None,
        flags: FlagsLike = None,
    ) -> CmdBuilder:
        """
        Declare a command.

        Args:
            name (str): The command name.
            description: Help text, as a string or a list of lines.
            callback (CommandCallback | None): Receives the bound flag arguments.
            flags: A `FlagBuilder` or a list of `FlagSpec`s.
        """
        self._declarations.append(
            _CommandDeclaration(name, _lines(description), callback, flags)
        )
        return self

    def build(self) -> tuple[CommandSpec, ...]:
        commands = []
        for position, declaration in enumerate(self._declarations, start=1):
            try:
                check_reserved_name(declaration.name, "command")
                if isinstance(declaration.flags, FlagBuilder):
                    flags = declaration.flags.build()
                else:
                    flags = tuple(declaration.flags or ())
                    for flag in flags:
                        check_reserved_name(flag.name, "flag")
                commands.append(
                    CommandSpec(
                        name=declaration.name,
                        flags=flags,
                        callback=declaration.callback or no_command_callback,
                        description=declaration.description,
                    )
                )
            except GrammarError as error:
                raise error.at("command", position) from error
        return unique_by_name(commands)

    def reset(self) -> None:
        self._declarations.clear()

    def __len__(self) -> int:
        return len(self._declarations)
