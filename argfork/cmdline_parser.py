# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandLineParser`, the registry that picks a command from the first
token of a command line and resolves the rest against it.

Every parser owns a built-in `help` command. Without flags it renders the
program overview; each user command name is also an optional flag of `help`,
so `help build test` renders the pages of `build` and `test`.

Example:
    commands = CmdBuilder().add("greet", flags=FlagBuilder().add("--name", True, arguments=["who"]))
    parser = CommandLineParser("tool", "Example tool.", commands)
    outcome = parser.parse(["greet", "--name", "Ada"])
    outcome.command.arguments  # {'--name': {'who': ('Ada',)}}
"""
from __future__ import annotations

from typing import Iterable, Sequence

from argfork.exceptions import CommandNotFoundError, EmptyArgumentsError
from argfork.help import render_command_help, render_program_help
from argfork.logger import logger
from argfork.options import ResolverConfig
from argfork.parser.builders import HELP_OPCODE, CmdBuilder, check_reserved_name
from argfork.parser.command import CommandSpec
from argfork.parser.flag import FlagSpec, unique_by_name
from argfork.parser.ranking import ParseOutcome
from argfork.parser.results import CommandArguments

DEFAULT_WIDTH = 80


class CommandLineParser:
    """
    Resolves full command lines (command name first) against a set of commands.

    Args:
        program (str): Executable name shown in help.
        description (str | Iterable[str] | None): Program description.
        commands (CmdBuilder | Sequence[CommandSpec] | None): The user commands.
        config (ResolverConfig | None): Default options for `parse`.
        width (int): Width used when rendering help.
    """

    def __init__(
        self,
        program: str,
        description: str | Iterable[str] | None = None,
        commands: CmdBuilder | Sequence[CommandSpec] | None = None,
        config: ResolverConfig | None = None,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        if width <= 0:
            raise ValueError(f"width must be positive, got {width}")
        self.program = program
        if description is None:
            self.description: tuple[str, ...] = ()
        elif isinstance(description, str):
            self.description = tuple(description.splitlines())
        else:
            self.description = tuple(description)
        self.config = config or ResolverConfig()
        self.width = width

        if isinstance(commands, CmdBuilder):
            user_commands = commands.build()
        else:
            user_commands = tuple(commands or ())
            for command in user_commands:
                check_reserved_name(command.name, "command")
                for flag in command.flags:
                    check_reserved_name(flag.name, "flag")
        self._commands: tuple[CommandSpec, ...] = unique_by_name(user_commands)
        self._help_command = self._build_help_command()

    @property
    def commands(self) -> tuple[CommandSpec, ...]:
        """User commands in declaration order, without the built-in help."""
        return self._commands

    @property
    def help_command(self) -> CommandSpec:
        return self._help_command

    def get_command(self, name: str) -> CommandSpec | None:
        if name == HELP_OPCODE:
            return self._help_command
        return next((command for command in self._commands if command.name == name), None)

    def parse(
        self, argv: Sequence[str], config: ResolverConfig | None = None
    ) -> ParseOutcome:
        """
        Resolve a command line whose first token is the command name.

        Raises:
            EmptyArgumentsError: If `argv` is empty.
            CommandNotFoundError: If the first token names no command.
            ResolutionError: Any hard error raised by `CommandSpec.parse`.
        """
        if not argv:
            raise EmptyArgumentsError("no arguments provided")
        command = self.get_command(argv[0])
        if command is None:
            raise CommandNotFoundError(argv[0])
        logger.debug("Dispatching %r to command '%s'", list(argv[1:]), command.name)
        return command.parse(argv[1:], config or self.config)

    def render_help(self, names: Iterable[str] = ()) -> str:
        """
        Render the program overview, or the pages of the named commands.

        Raises:
            CommandNotFoundError: If a name is not a known command.
        """
        names = list(names)
        if not names:
            return render_program_help(self, self.width)
        pages = []
        for name in names:
            command = self.get_command(name)
            if command is None:
                raise CommandNotFoundError(name)
            pages.append(render_command_help(command, self.width))
        return "\n".join(pages)

    def _help_callback(self, arguments: CommandArguments) -> str:
        order = [HELP_OPCODE, *(command.name for command in self._commands)]
        return self.render_help(name for name in order if name in arguments)

    def _build_help_command(self) -> CommandSpec:
        flags = [
            FlagSpec(
                HELP_OPCODE,
                description=(f'Displays help information for the "{HELP_OPCODE}" command.',),
            )
        ]
        for command in self._commands:
            flags.append(
                FlagSpec(
                    command.name,
                    description=(
                        f'Displays help information for the "{command.name}" command.',
                    ),
                )
            )
        return CommandSpec(
            HELP_OPCODE,
            flags=tuple(flags),
            callback=self._help_callback,
            description=("Displays help information for the console.",),
        )

    def __str__(self) -> str:
        return (
            f"CommandLineParser(program={self.program!r}, "
            f"commands={len(self._commands)}, max_branches={self.config.max_branches})"
        )

    def __repr__(self) -> str:
        return str(self)
