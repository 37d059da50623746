# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Grammar file loader for Argfork.

A grammar file (YAML or TOML) declares a program and its commands:

    program: deploy
    description: Deployment helper.
    resolver:
      max_branches: 512
    commands:
      - name: push
        description: Push a release.
        callback: mytool.commands.push
        flags:
          - name: --env
            required: true
            arguments: ["name"]
          - name: --replicas
            arguments:
              - spec: "count 0-1"
                type: int

Arguments are declaration strings (`"<name> [<arity>]"`) or mappings with a
`spec` plus either a `type` (builtin name or dotted path to a single-token
converter) or a `parser` (dotted path to a function over token slices).
Callbacks are dotted import paths.
"""
from __future__ import annotations

import importlib
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from argfork.cmdline_parser import CommandLineParser
from argfork.exceptions import ConfigError
from argfork.logger import logger
from argfork.options import ResolverConfig
from argfork.parser.argument import ArgumentParser, per_token
from argfork.parser.builders import ArgBuilder, CmdBuilder, FlagBuilder
from argfork.parser.utils import coerce_value

BUILTIN_TYPES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "datetime": datetime,
    "path": Path,
}


def import_callable(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"Invalid import path: {dotted_path!r}")
    try:
        module = importlib.import_module(module_path)
    except ImportError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(
            f"Could not import {dotted_path!r}: {error}. Ensure the module is "
            "installed and discoverable via PYTHONPATH."
        ) from error
    try:
        target = getattr(module, attr)
    except AttributeError as error:
        raise ConfigError(f"Module {module_path!r} has no attribute {attr!r}") from error
    if not callable(target):
        raise ConfigError(f"{dotted_path!r} is not callable")
    return target


def converter_for(type_name: str) -> ArgumentParser:
    """Return a parse function coercing every token to `type_name`."""
    target = BUILTIN_TYPES.get(type_name)
    if target is None:
        target = import_callable(type_name)

    def _convert(value: str) -> Any:
        return coerce_value(value, target)

    _convert.__name__ = type_name
    return per_token(_convert)


class RawArgument(BaseModel):
    """Argument entry of a grammar file."""

    model_config = ConfigDict(extra="forbid")

    spec: str
    type: str | None = None
    parser: str | None = None

    @field_validator("parser")
    @classmethod
    def validate_exclusive(
        cls, value: str | None, info: ValidationInfo
    ) -> str | None:
        if value is not None and info.data.get("type") is not None:
            raise ValueError("an argument takes either 'type' or 'parser', not both")
        return value

    def to_parse_function(self) -> ArgumentParser | None:
        if self.parser:
            return import_callable(self.parser)
        if self.type:
            return converter_for(self.type)
        return None


class RawFlag(BaseModel):
    """Flag entry of a grammar file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    required: bool = False
    description: str | list[str] = ""
    callback: str | None = None
    arguments: list[str | RawArgument] = Field(default_factory=list)


class RawCommand(BaseModel):
    """Command entry of a grammar file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    description: str | list[str] = ""
    callback: str | None = None
    flags: list[RawFlag] = Field(default_factory=list)


class GrammarConfig(BaseModel):
    """Argfork grammar file model."""

    model_config = ConfigDict(extra="forbid")

    program: str = "argfork"
    description: str | list[str] = ""
    resolver: ResolverConfig = Field(default_factory=ResolverConfig)
    commands: list[RawCommand] = Field(default_factory=list)

    def _arguments(self, raw_flag: RawFlag) -> ArgBuilder:
        builder = ArgBuilder()
        for raw_argument in raw_flag.arguments:
            if isinstance(raw_argument, str):
                builder.add(raw_argument)
            else:
                builder.add(raw_argument.spec, raw_argument.to_parse_function())
        return builder

    def to_builder(self) -> CmdBuilder:
        commands = CmdBuilder()
        for raw_command in self.commands:
            flags = FlagBuilder()
            for raw_flag in raw_command.flags:
                flags.add(
                    raw_flag.name,
                    required=raw_flag.required,
                    description=raw_flag.description or None,
                    callback=(
                        import_callable(raw_flag.callback) if raw_flag.callback else None
                    ),
                    arguments=self._arguments(raw_flag),
                )
            commands.add(
                raw_command.name,
                description=raw_command.description or None,
                callback=(
                    import_callable(raw_command.callback) if raw_command.callback else None
                ),
                flags=flags,
            )
        return commands

    def to_parser(self) -> CommandLineParser:
        return CommandLineParser(
            program=self.program,
            description=self.description or None,
            commands=self.to_builder(),
            config=self.resolver,
        )


def find_grammar() -> Path | None:
    """Return the first grammar file found in the usual locations."""
    candidates = [
        Path.cwd() / "argfork.yaml",
        Path.cwd() / "argfork.toml",
        Path.cwd() / ".argfork.yaml",
        Path.cwd() / ".argfork.toml",
        Path(os.environ.get("ARGFORK_GRAMMAR", "argfork.yaml")),
        Path.home() / ".config" / "argfork" / "argfork.yaml",
        Path.home() / ".config" / "argfork" / "argfork.toml",
    ]
    return next((path for path in candidates if path.is_file()), None)


def read_grammar(file_path: Path | str) -> dict[str, Any]:
    """Read a YAML or TOML grammar file into a dictionary."""
    if not isinstance(file_path, (str, Path)):
        raise TypeError("file_path must be a string or Path object.")
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such grammar file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as grammar_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(grammar_file)
            elif suffix == ".toml":
                raw_config = toml.load(grammar_file)
            else:
                raise ConfigError(f"Unsupported grammar format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Grammar file must contain a mapping with a list of commands.\n"
            "Example:\n"
            "program: 'tool'\n"
            "commands:\n"
            "  - name: 'run'\n"
            "    flags:\n"
            "      - name: '--target'\n"
            "        arguments: ['path']"
        )
    return raw_config


def loader(file_path: Path | str) -> CommandLineParser:
    """
    Load a `CommandLineParser` from a YAML or TOML grammar file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed or validated.
        GrammarError: If a declaration is invalid (empty name, bad arity, "help").
    """
    raw_config = read_grammar(file_path)
    try:
        grammar = GrammarConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(f"Invalid grammar file {file_path}:\n{error}") from error
    logger.debug(
        "Loaded grammar '%s' with %d command(s) from %s",
        grammar.program,
        len(grammar.commands),
        file_path,
    )
    return grammar.to_parser()
