# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the coercion functions used to update option values during parsing.

A coercion has the signature `(raw, current, default) -> new`: it receives the raw token
that was consumed for the option, the option's value so far in this parse and the
declared default, and returns the new value. Built-in coercions are pure and total over
string input; they never raise. Malformed input is rejected by validators before a
coercion runs.

Functions:
- collect: Append the value to a copy of the current list.
- count: Increment a counter (the raw token is ignored).
- kv: Merge a `key=value` pair into a copy of the current mapping.
- listing: Split a comma separated value into a list.
- numeric_range: Parse `start..end` into a tuple of numbers.
- value: Return the raw value unchanged.
- typed: Build a coercion converting values with `coerce_value`.
- coerce_bool / coerce_enum / coerce_value: Type conversion helpers used by `typed`.
"""
import math
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Callable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

Coercion = Callable[[Any, Any, Any], Any]


def collect(raw: Any, current: Any, default: Any) -> list[Any]:
    """Append `raw` to a copy of the current list."""
    if isinstance(current, list):
        collection = list(current)
    elif isinstance(default, list):
        collection = list(default)
    else:
        collection = []
    collection.append(raw)
    return collection


def count(raw: Any, current: Any, default: Any) -> int:
    """Increment a counter by one."""
    if isinstance(current, int) and not isinstance(current, bool):
        return current + 1
    if isinstance(default, int) and not isinstance(default, bool):
        return default + 1
    return 1


def kv(raw: str, current: Any, default: Any) -> dict[str, str | None]:
    """Merge `key=value` into a copy of the current mapping."""
    if isinstance(current, dict):
        collection = dict(current)
    elif isinstance(default, dict):
        collection = dict(default)
    else:
        collection = {}
    key, separator, item = raw.partition("=")
    collection[key] = item if separator else None
    return collection


def listing(raw: str, current: Any = None, default: Any = None) -> list[str]:
    """Split a value on commas, stripping spaces around each part."""
    return [part.strip(" ") for part in raw.split(",")]


def _to_number(text: str) -> int | float:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return math.nan


def numeric_range(
    raw: str, current: Any = None, default: Any = None
) -> tuple[int | float, ...]:
    """Parse `start..end` into a tuple of numbers; unparsable parts become NaN."""
    return tuple(_to_number(part) for part in raw.split(".."))


def value(raw: Any, current: Any = None, default: Any = None) -> Any:
    """Store the raw value as-is."""
    return raw


COERCIONS: dict[str, Coercion] = {
    "collect": collect,
    "count": count,
    "kv": kv,
    "listing": listing,
    "range": numeric_range,
    "value": value,
}


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.

    Args:
        value (str): The input string or boolean.

    Returns:
        bool: Parsed boolean result.
    """
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in {"true", "t", "1", "yes", "on"}:
        return True
    elif value in {"false", "f", "0", "no", "off"}:
        return False
    return bool(value)


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
            except Exception:
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


def typed(target_type: Any, collect_values: bool = False) -> Coercion:
    """
    Build a coercion that converts the raw value to `target_type`.

    Pair it with the `convertible(target_type)` validator so that conversion errors are
    reported as invalid values before the coercion runs. With `collect_values=True` the
    converted value is appended to the current list instead of replacing it.
    """

    def coerce(raw: str, current: Any, default: Any) -> Any:
        converted = coerce_value(raw, target_type)
        if collect_values:
            return collect(converted, current, default)
        return converted

    coerce.__name__ = f"typed_{getattr(target_type, '__name__', 'value')}"
    return coerce
