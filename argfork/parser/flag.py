# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `FlagSpec`, the immutable description of one flag of a command.

A flag is matched by exact string equality against raw tokens. Its arguments
consume the tokens that follow it, in declaration order, and its optional
callback may post-process (or reject) the aggregated argument map.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping

from argfork.exceptions import EmptyNameError
from argfork.parser.argument import ArgumentSpec

ArgumentMap = Mapping[str, tuple[Any, ...]]
FlagCallback = Callable[[ArgumentMap], ArgumentMap]


def no_flag_callback(arguments: ArgumentMap) -> ArgumentMap:
    """Return the argument map unchanged."""
    return arguments


def unique_by_name(items) -> tuple:
    """Keep the last declaration of every name in the slot of the first one."""
    slots: dict[str, Any] = {}
    for item in items:
        slots[item.name] = item
    return tuple(slots.values())


@dataclass(frozen=True)
class FlagSpec:
    """
    Represents a flag accepted by a command.

    Attributes:
        name (str): The literal that introduces the flag, e.g. `--verbose`.
        required (bool): Whether the flag must appear in the tokens.
        arguments (tuple[ArgumentSpec, ...]): Arguments in consumption order.
        callback (FlagCallback): Post-processes the parsed argument map.
        description (tuple[str, ...]): Help lines.
    """

    name: str
    required: bool = False
    arguments: tuple[ArgumentSpec, ...] = ()
    callback: FlagCallback = no_flag_callback
    description: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyNameError("flag name must not be empty")
        object.__setattr__(
            self, "arguments", unique_by_name(self.arguments)
        )
        object.__setattr__(self, "description", tuple(self.description))

    def bind(self, values: Mapping[str, tuple[Any, ...]]) -> ArgumentMap:
        """Run the callback over parsed values and freeze what it returns."""
        result = self.callback(MappingProxyType(dict(values)))
        return MappingProxyType(
            {
                key: tuple(value) if isinstance(value, (list, tuple)) else (value,)
                for key, value in result.items()
            }
        )

    def usage(self) -> str:
        parts = [self.name, *(arg.usage() for arg in self.arguments)]
        text = " ".join(parts)
        return text if self.required else f"[{text}]"
