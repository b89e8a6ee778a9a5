"""JSON-to-record decoding.

Converts parsed CLI output into typed record dataclasses, raising
``DecodeError`` whenever the payload shape does not match the target.
"""

from __future__ import annotations

import json
import typing
from dataclasses import MISSING, fields, is_dataclass
from functools import lru_cache

from .errors import DecodeError


@lru_cache(maxsize=None)
def _field_plan(record_type: type) -> tuple[tuple[str, str, type, object], ...]:
    """Return ``(attr, json_key, scalar_type, default)`` for each record field."""
    hints = typing.get_type_hints(record_type)
    plan: list[tuple[str, str, type, object]] = []
    for item in fields(record_type):
        default = item.default if item.default is not MISSING else None
        plan.append((item.name, item.metadata.get("json_key", item.name), hints[item.name], default))
    return tuple(plan)


def _coerce_int(value: object, where: str) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise DecodeError(f"{where}: expected integer, got {type(value).__name__} {value!r}")


def _coerce_str(value: object, where: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise DecodeError(f"{where}: expected string, got {type(value).__name__}")


def decode_record(payload: object, record_type: type):
    """Build one ``record_type`` instance from a decoded JSON object."""
    if not is_dataclass(record_type):
        raise TypeError(f"{record_type!r} is not a record dataclass")
    if not isinstance(payload, dict):
        raise DecodeError(f"{record_type.__name__}: expected JSON object, got {type(payload).__name__}")

    values: dict[str, object] = {}
    for attr, key, scalar_type, default in _field_plan(record_type):
        raw = payload.get(key)
        where = f"{record_type.__name__}.{key}"
        if raw is None:
            values[attr] = default
        elif scalar_type is int:
            values[attr] = _coerce_int(raw, where)
        else:
            values[attr] = _coerce_str(raw, where)
    return record_type(**values)


def decode_records(payload: object, record_type: type) -> list:
    """Decode a JSON array into a list of ``record_type`` instances."""
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise DecodeError(f"expected JSON array of {record_type.__name__}, got {type(payload).__name__}")
    return [decode_record(entry, record_type) for entry in payload]


def decode_target(payload: object, target: type | tuple[type]):
    """Decode ``payload`` for a fetch target.

    ``(Record,)`` means "list of Record", a bare dataclass means one object.
    """
    if isinstance(target, tuple):
        (record_type,) = target
        return decode_records(payload, record_type)
    return decode_record(payload, target)


def parse_json(output: str, context: str) -> object:
    """Parse CLI stdout as JSON, mapping failures to ``DecodeError``."""
    text = output.strip()
    if not text:
        raise DecodeError(f"{context}: empty output")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"{context}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
