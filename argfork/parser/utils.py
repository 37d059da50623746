# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion utilities for Argfork argument converters.

These helpers turn a single raw token into a typed value and are the building
blocks of the converters referenced by name in grammar files.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string or raw value to an Enum instance.
- coerce_value: General-purpose coercion to a target type (unions, literals, enums).
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off'.
    Anything else is rejected so that a boolean argument never swallows an
    unrelated token.

    Raises:
        ValueError: If the string is not a recognised boolean literal.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Tries to resolve by name, value, or coerced base type.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        try:
            return enum_type[value]
        except KeyError:
            pass

    base_type = type(next(iter(enum_type)).value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        values = [str(enum.value) for enum in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles typing constructs such as Union, Literal, Enum, and datetime.

    Args:
        value (str): The input string to convert.
        target_type (type): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        if value not in args:
            raise ValueError(
                f"Value '{value}' is not a valid literal for type {target_type}"
            )
        return value

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            try:
                return coerce_value(value, arg)
            except (ValueError, TypeError):
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    return target_type(value)
