# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-based help rendering for Argfork grammars.

The renderer only reads the grammar model; it is used by the built-in `help`
command of `CommandLineParser` and by the `argfork` tool. Output is captured
and returned as plain text so callers can print, page, or test it.
"""
from __future__ import annotations

from io import StringIO
from typing import TYPE_CHECKING, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from argfork.console import ARGFORK_THEME
from argfork.parser.command import CommandSpec
from argfork.parser.flag import FlagSpec

if TYPE_CHECKING:
    from argfork.cmdline_parser import CommandLineParser

NO_DESCRIPTION = "[No description provided]"


def _capture(width: int) -> Console:
    return Console(
        file=StringIO(), width=width, theme=ARGFORK_THEME, color_system=None
    )


def _print_description(console: Console, lines: Iterable[str]) -> None:
    lines = list(lines)
    if not lines:
        console.print(f"Description: {escape(NO_DESCRIPTION)}")
        return
    console.print("Description:")
    for line in lines:
        console.print(f"    {escape(line)}")


def _flag_table(flags: Iterable[FlagSpec]) -> Table:
    table = Table(box=None, show_header=True, header_style="bold", pad_edge=False)
    table.add_column("Flag", style="argfork.flag", no_wrap=True)
    table.add_column("Arguments", style="argfork.argument")
    table.add_column("Required")
    table.add_column("Description")
    for flag in flags:
        arguments = " ".join(argument.usage() for argument in flag.arguments)
        description = "\n".join(flag.description) or NO_DESCRIPTION
        table.add_row(
            escape(flag.name),
            escape(arguments),
            "Yes" if flag.required else "No",
            escape(description),
        )
    return table


def render_command_help(command: CommandSpec, width: int = 80) -> str:
    """Render the help page of one command."""
    console = _capture(width)
    console.print(f"[argfork.command]{escape(command.name)}[/]")
    console.print(f"Usage: {escape(command.usage())}")
    console.print()
    _print_description(console, command.description)
    console.print()
    if command.flags:
        console.print("Flags:")
        console.print(_flag_table(command.flags))
    else:
        console.print("Flags: [No flags provided]", markup=False)
    return console.file.getvalue()  # type: ignore[attr-defined]


def render_program_help(parser: CommandLineParser, width: int = 80) -> str:
    """Render the overview page of a command-line parser."""
    console = _capture(width)
    console.print(escape(f"Usage: {parser.program} <command> [flags]"))
    console.print()
    _print_description(console, parser.description)
    console.print()
    if not parser.commands:
        console.print("Commands: No commands provided.")
        return console.file.getvalue()  # type: ignore[attr-defined]

    console.print("Commands:")
    table = Table(box=None, show_header=False, pad_edge=False)
    table.add_column("Command", style="argfork.command", no_wrap=True)
    table.add_column("Description")
    for command in parser.commands:
        summary = command.description[0] if command.description else NO_DESCRIPTION
        table.add_row(f"  {escape(command.name)}", escape(summary))
    console.print(table)
    return console.file.getvalue()  # type: ignore[attr-defined]
