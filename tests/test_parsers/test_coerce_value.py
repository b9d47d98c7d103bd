from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from aaparser.parser.utils import coerce_bool, coerce_value, typed


class Mode(Enum):
    DEV = "dev"
    PROD = "prod"


class Level(Enum):
    LOW = 1
    HIGH = 2


@pytest.mark.parametrize(
    "raw, target_type, expected",
    [
        ("42", int, 42),
        ("3.5", float, 3.5),
        ("hello", str, "hello"),
        ("42", int | float, 42),
        ("3.5", int | float, 3.5),
        ("abc", int | str, "abc"),
        ("123", Union[int, str], 123),
        ("dev", Literal["dev", "prod"], "dev"),
        ("dev", Mode, Mode.DEV),
        ("PROD", Mode, Mode.PROD),
        ("2", Level, Level.HIGH),
        ("LOW", Level, Level.LOW),
    ],
)
def test_coerce_value(raw, target_type, expected):
    assert coerce_value(raw, target_type) == expected


@pytest.mark.parametrize(
    "raw, target_type",
    [
        ("abc", int | float),
        ("staging", Literal["dev", "prod"]),
        ("staging", Mode),
        ("3", Level),
        ("not-a-date", datetime),
    ],
)
def test_coerce_value_rejects(raw, target_type):
    with pytest.raises(ValueError):
        coerce_value(raw, target_type)


def test_path_and_datetime_coercion():
    path = coerce_value("/tmp/report.txt", Path)
    assert isinstance(path, Path)
    assert str(path) == "/tmp/report.txt"

    moment = coerce_value("2023-10-01T13:00:00", datetime)
    assert (moment.year, moment.month, moment.hour) == (2023, 10, 13)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("true", True),
        ("Yes", True),
        ("on", True),
        ("1", True),
        ("false", False),
        ("off", False),
        ("0", False),
        ("", False),
    ],
)
def test_coerce_bool(raw, expected):
    assert coerce_bool(raw) is expected
    assert coerce_value(raw, bool) is expected


def test_typed_coercion():
    to_int = typed(int)
    assert to_int("7", None, None) == 7
    assert to_int.__name__ == "typed_int"

    collect_ints = typed(int, collect_values=True)
    assert collect_ints("2", [1], []) == [1, 2]
    assert collect_ints("3", None, [0]) == [0, 3]
