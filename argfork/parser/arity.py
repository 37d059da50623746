# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Arity`, the inclusive count range of raw tokens an argument may
consume, and the compact arity-string grammar used to declare it.

Format:
    ""        → [1, 1]
    "n"       → [n, n]
    "min-max" → [min, max]   (max must be >= min)
    "min-"    → [min, unbounded]
    "-max"    → [0, max]
    "-"       → [0, unbounded]

Example:
    parse_arity("2-5") → Arity(min=2, max=5)
    parse_arity("1-")  → Arity(min=1, max=None)
"""
from __future__ import annotations

from dataclasses import dataclass

from argfork.exceptions import ArityFormatError


@dataclass(frozen=True)
class Arity:
    """Inclusive token count range. `max` is None when unbounded."""

    min: int = 1
    max: int | None = 1

    def __post_init__(self) -> None:
        if self.min < 0:
            raise ArityFormatError(f"min must be >= 0, got {self.min}")
        if self.max is not None and self.max < self.min:
            raise ArityFormatError(f"max ({self.max}) is less than min ({self.min})")

    @property
    def unbounded(self) -> bool:
        return self.max is None

    def counts(self, available: int) -> range:
        """Return the candidate counts for a window of `available` tokens.

        The upper bound is clipped to the window length. The range is empty
        when fewer than `min` tokens are available.
        """
        upper = available if self.max is None else min(self.max, available)
        return range(self.min, upper + 1)

    def __str__(self) -> str:
        if self.max is None:
            return f"{self.min}-" if self.min else "-"
        if self.min == self.max:
            return str(self.min)
        if self.min == 0:
            return f"-{self.max}"
        return f"{self.min}-{self.max}"


def _parse_bound(text: str, label: str, source: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ArityFormatError(f"{label} bound {text!r} in {source!r} is not a number")
    return int(text)


def parse_arity(text: str) -> Arity:
    """
    Parse an arity string into an `Arity`.

    Args:
        text (str): The arity string, without the argument name.

    Returns:
        Arity: The parsed range.

    Raises:
        ArityFormatError: If the string is malformed or max < min.
    """
    text = text.strip()
    if not text:
        return Arity(1, 1)

    fields = text.split("-")
    if len(fields) > 2:
        raise ArityFormatError(f"expected at most one '-' in arity {text!r}")

    if len(fields) == 1:
        count = _parse_bound(fields[0], "count", text)
        return Arity(count, count)

    low, high = fields
    minimum = _parse_bound(low, "min", text) if low else 0
    maximum = _parse_bound(high, "max", text) if high else None
    return Arity(minimum, maximum)
