"""
Argfork CLI Resolver

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import ArgumentSpec, no_argument_parser, per_token
from .arity import Arity, parse_arity
from .builders import HELP_OPCODE, ArgBuilder, CmdBuilder, FlagBuilder
from .command import CommandSpec
from .diagnostics import Diagnostic, DiagnosticKind
from .flag import FlagSpec
from .ranking import ParseOutcome
from .results import Branch, Err, FlagResult, Ok, ParsedCommand

__all__ = [
    "Arity",
    "ArgBuilder",
    "ArgumentSpec",
    "Branch",
    "CmdBuilder",
    "CommandSpec",
    "Diagnostic",
    "DiagnosticKind",
    "Err",
    "FlagBuilder",
    "FlagResult",
    "FlagSpec",
    "HELP_OPCODE",
    "Ok",
    "ParseOutcome",
    "ParsedCommand",
    "no_argument_parser",
    "parse_arity",
    "per_token",
]
