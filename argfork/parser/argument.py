# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentSpec`, the immutable description of one argument of a flag.

An argument owns an `Arity` and a parse function. The parse function receives
the candidate slice of raw tokens as a tuple and returns the typed values; it
signals failure by raising. Parse functions must be deterministic and free of
side effects, because the resolver may call them many times with different
slices while it explores alternative interpretations.

Arguments are usually declared with a compact string, `"<name> <arity>"`:

    ArgumentSpec.from_declaration("files 1-", per_token(Path))
    ArgumentSpec.from_declaration("count", per_token(int))   # exactly one token
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Sequence

from argfork.exceptions import ArityFormatError, EmptyNameError
from argfork.parser.arity import Arity, parse_arity

ArgumentParser = Callable[[tuple[str, ...]], Sequence[Any]]


def no_argument_parser(tokens: tuple[str, ...]) -> tuple[str, ...]:
    """Return the raw tokens unchanged."""
    return tokens


def per_token(converter: Callable[[str], Any]) -> ArgumentParser:
    """
    Lift a single-token converter into an argument parse function.

    The returned function applies `converter` to every token of the slice and
    fails as soon as one token is rejected.

    Example:
        per_token(int)(("1", "2")) → (1, 2)
    """

    def _parse(tokens: tuple[str, ...]) -> tuple[Any, ...]:
        return tuple(converter(token) for token in tokens)

    _parse.__name__ = f"per_token({getattr(converter, '__name__', repr(converter))})"
    return _parse


@dataclass(frozen=True)
class ArgumentSpec:
    """
    Represents one argument of a flag.

    Attributes:
        name (str): The name of the argument, used as key in parsed results.
        arity (Arity): How many raw tokens the argument may consume.
        parse (ArgumentParser): Converts a token slice into typed values.
    """

    name: str
    arity: Arity = field(default_factory=Arity)
    parse: ArgumentParser = no_argument_parser

    def __post_init__(self) -> None:
        if not self.name:
            raise EmptyNameError("argument name must not be empty")

    @classmethod
    def from_declaration(
        cls, declaration: str, parse: ArgumentParser | None = None
    ) -> ArgumentSpec:
        """
        Build an argument from a `"<name> [<arity>]"` declaration.

        Raises:
            EmptyNameError: If the declaration is blank.
            ArityFormatError: If there are more than two fields or the arity is malformed.
        """
        fields = declaration.split()
        if not fields:
            raise EmptyNameError("argument declaration must not be empty")
        if len(fields) > 2:
            raise ArityFormatError(
                f"expected '<name> [<arity>]', got {len(fields)} fields in {declaration!r}"
            )
        arity = parse_arity(fields[1]) if len(fields) == 2 else Arity(1, 1)
        return cls(name=fields[0], arity=arity, parse=parse or no_argument_parser)

    def usage(self) -> str:
        """Return the usage text of the argument.

        Brackets show optionality: `<x>` required, `[x]` optional,
        `{x}` one or more, `(x)` any number.
        """
        text = self.name
        if self.arity != Arity(1, 1):
            text = f"{text}:{self.arity}"
        if self.arity.unbounded:
            return f"({text})" if self.arity.min == 0 else f"{{{text}}}"
        return f"[{text}]" if self.arity.min == 0 else f"<{text}>"

    def __str__(self) -> str:
        return self.usage()
