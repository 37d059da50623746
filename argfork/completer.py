# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `ArgforkCompleter`, a Prompt Toolkit completer for the interactive
`argfork` shell.

This completer supports:
- Command name completion (including the built-in `help`)
- Flag literal completion for the command on the line, skipping flags already typed
- Longest-common-prefix insertion when several completions share a prefix

Argument values are never completed: their parse functions are opaque.
"""
from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable, Sequence

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from argfork.parser.builders import HELP_OPCODE

if TYPE_CHECKING:
    from argfork.cmdline_parser import CommandLineParser
    from argfork.parser.command import CommandSpec


class ArgforkCompleter(Completer):
    """
    Prompt Toolkit completer for Argfork command lines.

    Args:
        parser (CommandLineParser): Provides command names and their flags.
    """

    def __init__(self, parser: CommandLineParser):
        self.parser = parser

    def get_completions(self, document: Document, complete_event) -> Iterable[Completion]:
        """
        Compute completions for the current input.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, not used here.

        Yields:
            Completion: Completions matching the current stub.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = text.endswith((" ", "\t"))

        if not tokens or (len(tokens) == 1 and not cursor_at_end_of_token):
            stub = tokens[0] if tokens else ""
            yield from self._yield_lcp_completions(self.command_names(), stub)
            return

        command = self.parser.get_command(tokens[0])
        if command is None:
            return

        typed = tokens[1:] if cursor_at_end_of_token else tokens[1:-1]
        stub = "" if cursor_at_end_of_token else tokens[-1]
        yield from self._yield_lcp_completions(self.suggest_flags(command, typed), stub)

    def command_names(self) -> list[str]:
        return [command.name for command in self.parser.commands] + [HELP_OPCODE]

    def suggest_flags(self, command: CommandSpec, typed: Sequence[str]) -> list[str]:
        """Flags of `command` not yet present in `typed`, required ones first."""
        seen = set(typed)
        remaining = [flag for flag in command.flags if flag.name not in seen]
        remaining.sort(key=lambda flag: not flag.required)
        return [flag.name for flag in remaining]

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: Sequence[str], stub: str
    ) -> Iterable[Completion]:
        matches = [suggestion for suggestion in suggestions if suggestion.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)
        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
            return
        if len(lcp) > len(stub) and not lcp.startswith("-"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
