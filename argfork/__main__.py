"""
Argfork CLI Resolver

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging
import shlex
import sys
from argparse import REMAINDER, ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Sequence

from prompt_toolkit import PromptSession
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from argfork.cmdline_parser import CommandLineParser
from argfork.completer import ArgforkCompleter
from argfork.config import find_grammar, loader
from argfork.console import console
from argfork.exceptions import AmbiguousCommandError, ArgforkError
from argfork.logger import logger
from argfork.options import ResolverConfig
from argfork.parser.builders import HELP_OPCODE
from argfork.parser.ranking import ParseOutcome
from argfork.utils import setup_logging
from argfork.version import __version__

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_AMBIGUOUS = 2


def get_root_parser(
    prog: str | None = "argfork",
    description: str | None = "Argfork CLI - Resolve command lines against a grammar.",
    epilog: str | None = "Tip: Run 'argfork help' to list the commands of a grammar.",
) -> ArgumentParser:
    """
    Construct the root-level ArgumentParser for the Argfork CLI.

    Everything after the first positional token is handed to the grammar
    untouched, so flags of the resolved command never clash with these options.
    """
    parser = ArgumentParser(prog=prog, description=description, epilog=epilog)
    parser.add_argument(
        "-g",
        "--grammar",
        type=Path,
        help="Grammar file (YAML or TOML). Searched in the usual locations if omitted.",
    )
    parser.add_argument(
        "--max-branches",
        type=int,
        help="Override the ceiling on candidate interpretations.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat an ambiguous command line as an error.",
    )
    parser.add_argument(
        "-x",
        "--execute",
        action="store_true",
        help="Run the command callback after resolving.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help=f"Enable debug logging for {prog}."
    )
    parser.add_argument(
        "--log-mode",
        choices=["cli", "json"],
        help="Logging output mode.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "tokens",
        nargs=REMAINDER,
        help="Command line to resolve. Starts an interactive shell when omitted.",
    )
    return parser


def bootstrap(grammar: Path | None) -> Path | None:
    grammar_path = grammar or find_grammar()
    if grammar_path and str(grammar_path.parent) not in sys.path:
        sys.path.insert(0, str(grammar_path.parent))
    return grammar_path


def resolver_config(parser: CommandLineParser, args: Namespace) -> ResolverConfig:
    update: dict[str, Any] = {}
    if args.max_branches is not None:
        update["max_branches"] = args.max_branches
    if args.strict:
        update["strict"] = True
    return ResolverConfig.model_validate(parser.config.model_dump() | update)


def render_outcome(outcome: ParseOutcome, target: Console = console) -> None:
    """Print the bound arguments and diagnostics of `outcome`."""
    command = outcome.command
    if command.is_empty:
        target.print(f"[argfork.command]{escape(command.name)}[/] bound no flags")
    else:
        table = Table(title=escape(command.name), title_justify="left", show_lines=False)
        table.add_column("Flag", style="argfork.flag")
        table.add_column("Argument", style="argfork.argument")
        table.add_column("Values")
        for flag, values_map in command.arguments.items():
            if not values_map:
                table.add_row(escape(flag), "", "")
            for name, values in values_map.items():
                rendered = " ".join(repr(value) for value in values)
                table.add_row(escape(flag), escape(name), escape(rendered))
        target.print(table)

    for diagnostic in outcome.diagnostics:
        target.print(
            f"[argfork.diagnostic]{diagnostic.kind}[/]: {escape(str(diagnostic))}"
        )


def resolve(
    parser: CommandLineParser,
    tokens: Sequence[str],
    config: ResolverConfig,
    execute: bool = False,
) -> int:
    """Resolve one command line and print the result. Returns an exit code."""
    try:
        outcome = parser.parse(tokens, config)
    except AmbiguousCommandError as error:
        console.print(f"[argfork.error]error[/]: {escape(str(error))}")
        return EXIT_AMBIGUOUS
    except ArgforkError as error:
        console.print(f"[argfork.error]error[/]: {escape(str(error))}")
        return EXIT_ERROR

    if outcome.command.name == HELP_OPCODE:
        console.print(outcome.execute(), markup=False, highlight=False)
        return EXIT_OK

    render_outcome(outcome)
    if execute:
        result = outcome.execute()
        if result is not None:
            console.print(result, markup=False, highlight=False)
    return EXIT_OK


def run_shell(
    parser: CommandLineParser,
    config: ResolverConfig,
    execute: bool = False,
    session: PromptSession | None = None,
) -> int:
    """Read command lines interactively until EOF or `exit`."""
    session = session or PromptSession(
        message=f"{parser.program} > ", completer=ArgforkCompleter(parser)
    )
    while True:
        try:
            line = session.prompt()
        except (EOFError, KeyboardInterrupt):
            break
        try:
            tokens = shlex.split(line)
        except ValueError as error:
            console.print(f"[argfork.error]error[/]: {escape(str(error))}")
            continue
        if not tokens:
            continue
        if tokens[0] in ("exit", "quit"):
            break
        resolve(parser, tokens, config, execute)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = get_root_parser().parse_args(argv)
    setup_logging(
        mode=args.log_mode,
        console_log_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    grammar_path = bootstrap(args.grammar)
    if grammar_path is None:
        console.print(
            "[argfork.error]error[/]: no grammar file found. "
            "Pass one with --grammar or create argfork.yaml."
        )
        return EXIT_ERROR
    try:
        parser = loader(grammar_path)
        config = resolver_config(parser, args)
    except (ArgforkError, FileNotFoundError, ValueError) as error:
        console.print(f"[argfork.error]error[/]: {escape(str(error))}")
        return EXIT_ERROR
    logger.debug("Using %s", parser)

    tokens = list(args.tokens)
    if tokens and tokens[0] == "--":
        tokens = tokens[1:]
    if not tokens:
        return run_shell(parser, config, args.execute)
    return resolve(parser, tokens, config, args.execute)


if __name__ == "__main__":
    sys.exit(main())
