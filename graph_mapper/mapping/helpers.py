"""
Prebuilt path configurations for common conversions.

Each helper returns a path configuration (``{"from": [...], "read": ...,
"write": ...}``) ready to be placed in a mapper's `to` table:

    GraphMapper({"to": {
        "full_name": helpers.join(["FirstName", "LastName"]),
        "active": helpers.boolean_from_int("IsActive"),
    }})
"""

import functools
import json
from collections.abc import Callable, Mapping
from typing import Any

import pandas as pd
from bs4 import BeautifulSoup

from graph_mapper.mapping.paths import MISSING


def when_defined(fn: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Skip `fn` for absent values, passing `MISSING` through."""

    @functools.wraps(fn)
    def wrapper(value):
        if value is MISSING:
            return MISSING
        return fn(value)

    return wrapper


def transform(key: str, source_to_target: Mapping[Any, Any]) -> dict[str, Any]:
    """Translate source values through a lookup table (read only)."""
    return {
        "from": [key],
        "read": when_defined(lambda value: source_to_target.get(value, MISSING)),
    }


def transform_with_write(key: str, source_to_target: Mapping[Any, Any]) -> dict[str, Any]:
    """Translate through a lookup table on read, and through its inverse on write."""
    target_to_source = {target: source for source, target in source_to_target.items()}
    return {
        "from": [key],
        "read": when_defined(lambda value: source_to_target.get(value, MISSING)),
        "write": when_defined(lambda value: target_to_source.get(value, MISSING)),
    }


def value(key: str, default_value: Any) -> dict[str, Any]:
    """Use `default_value` when the source value is absent."""
    return {
        "from": [key],
        "read": lambda source_value: default_value if source_value is MISSING else source_value,
    }


def boolean(key: str) -> dict[str, Any]:
    return {"from": [key], "read": when_defined(bool)}


def boolean_from_int(key: str) -> dict[str, Any]:
    """1/0 in the source, True/False in the target."""

    def read(source_value):
        if source_value == 1:
            return True
        if source_value == 0:
            return False
        return MISSING

    def write(target_value):
        if target_value is True:
            return 1
        if target_value is False:
            return 0
        return MISSING

    return {"from": [key], "read": read, "write": write}


def opposite_from_int(key: str) -> dict[str, Any]:
    """1/0 in the source, False/True in the target."""

    def read(source_value):
        if source_value == 1:
            return False
        if source_value == 0:
            return True
        return MISSING

    return {
        "from": [key],
        "read": read,
        "write": when_defined(lambda target_value: 0 if target_value else 1),
    }


def join(keys: list[str], join_with: str = " ") -> dict[str, Any]:
    """Join several source strings into one; split it again on write."""

    def read(*source_values):
        joined = join_with.join(str(v) for v in source_values if v)
        return joined or MISSING

    def write(target_value):
        if not isinstance(target_value, str):
            return target_value
        return target_value.split(join_with)

    return {"from": list(keys), "read": read, "write": write}


def iso_date(key: str) -> dict[str, Any]:
    """Parse a date or datetime string and normalize it to ISO 8601."""
    return {
        "from": [key],
        "read": lambda source_value: (
            pd.Timestamp(source_value).isoformat() if source_value else source_value
        ),
    }


def number(key: str) -> dict[str, Any]:
    """Parse a numeric string into a plain int or float."""

    def read(source_value):
        parsed = pd.to_numeric(source_value)
        # numpy scalar -> Python scalar
        return parsed.item() if hasattr(parsed, "item") else parsed

    return {"from": [key], "read": when_defined(read)}


def integer(key: str) -> dict[str, Any]:
    return {"from": [key], "read": when_defined(int)}


def floating(key: str) -> dict[str, Any]:
    return {"from": [key], "read": when_defined(float)}


def strip_html(key: str, default_value: Any = None) -> dict[str, Any]:
    """Remove markup on read; `default_value` when no text is left."""

    def read(source_value):
        if not source_value:
            return default_value
        text = BeautifulSoup(source_value, "html.parser").get_text()
        return text or default_value

    return {"from": [key], "read": when_defined(read)}


def json_parse(key: str) -> dict[str, Any]:
    return {
        "from": [key],
        "read": lambda source_value: json.loads(source_value) if source_value else source_value,
    }


def _not_null(config: dict[str, Any]) -> dict[str, Any]:
    original_read = config["read"]

    def read(source_value):
        if source_value is None:
            return original_read(MISSING)
        return original_read(source_value)

    return {**config, "read": read}


class _Modifier:
    """Namespace exposing every helper with its config passed through `modify`."""

    def __init__(self, modify: Callable[[dict[str, Any]], dict[str, Any]]):
        self._modify = modify

    def __getattr__(self, name: str):
        helper = _HELPERS.get(name)
        if helper is None:
            raise AttributeError(name)

        @functools.wraps(helper)
        def modified(*args, **kwargs):
            return self._modify(helper(*args, **kwargs))

        return modified


_HELPERS: dict[str, Callable[..., dict[str, Any]]] = {
    "transform": transform,
    "transform_with_write": transform_with_write,
    "value": value,
    "boolean": boolean,
    "boolean_from_int": boolean_from_int,
    "opposite_from_int": opposite_from_int,
    "join": join,
    "iso_date": iso_date,
    "number": number,
    "integer": integer,
    "floating": floating,
    "strip_html": strip_html,
    "json_parse": json_parse,
}

# Helpers that treat a None source value as absent
not_null = _Modifier(_not_null)
