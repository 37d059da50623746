from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from argfork.parser.utils import coerce_bool, coerce_value


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


class Status(Enum):
    SUCCESS = 0
    FAILURE = 1


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("3.14", float, 3.14),
        ("hello", str, "hello"),
        ("42", int | float, 42),
        ("3.14", int | float, 3.14),
        ("abc", Union[int, str], "abc"),
        ("1", bool | str, True),
        ("dev", Literal["dev", "prod"], "dev"),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_value_union_failure():
    with pytest.raises(ValueError) as excinfo:
        coerce_value("abc", int | float)
    assert "could not be coerced" in str(excinfo.value)


def test_coerce_value_literal_failure():
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_coerce_value_enum():
    assert coerce_value("dev", Mode) == Mode.DEV
    assert coerce_value("PROD", Mode) == Mode.PROD
    assert coerce_value("1", Status) == Status.FAILURE
    with pytest.raises(ValueError):
        coerce_value("staging", Mode)
    with pytest.raises(ValueError):
        coerce_value("3", Status)


def test_coerce_value_path_and_datetime():
    assert coerce_value("/tmp/x.txt", Path) == Path("/tmp/x.txt")
    result = coerce_value("2023-10-01T13:00:00", datetime)
    assert (result.year, result.month, result.hour) == (2023, 10, 13)
    with pytest.raises(ValueError):
        coerce_value("not-a-date", datetime)


@pytest.mark.parametrize("value", ["true", "T", "1", "yes", "on"])
def test_coerce_bool_truthy(value):
    assert coerce_bool(value) is True


@pytest.mark.parametrize("value", ["false", "F", "0", "no", "off"])
def test_coerce_bool_falsy(value):
    assert coerce_bool(value) is False


def test_coerce_bool_rejects_other_tokens():
    with pytest.raises(ValueError):
        coerce_bool("--flag")
