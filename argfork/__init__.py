"""
Argfork CLI Resolver

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .cmdline_parser import CommandLineParser
from .exceptions import (
    AmbiguousCommandError,
    ArgforkError,
    BranchLimitExceededError,
    CommandNotFoundError,
    GrammarError,
    MissingRequiredFlagError,
)
from .logger import logger
from .options import ResolverConfig
from .parser import (
    ArgBuilder,
    ArgumentSpec,
    CmdBuilder,
    CommandSpec,
    DiagnosticKind,
    FlagBuilder,
    FlagSpec,
    ParsedCommand,
    ParseOutcome,
    per_token,
)
from .version import __version__

__all__ = [
    "AmbiguousCommandError",
    "ArgBuilder",
    "ArgforkError",
    "ArgumentSpec",
    "BranchLimitExceededError",
    "CmdBuilder",
    "CommandLineParser",
    "CommandNotFoundError",
    "CommandSpec",
    "DiagnosticKind",
    "FlagBuilder",
    "FlagSpec",
    "GrammarError",
    "MissingRequiredFlagError",
    "ParseOutcome",
    "ParsedCommand",
    "ResolverConfig",
    "__version__",
    "logger",
    "per_token",
]
