"""orjson-backed JSON helpers for log records and wire payloads."""

from __future__ import annotations

from typing import Any

import orjson


def _strict_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    raise TypeError(f"Type is not JSON serializable: {type(value).__name__}")


def _lenient_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return repr(value)


def dumps_bytes(
    payload: Any,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
    lenient: bool = False,
) -> bytes:
    """Serialize payload to UTF-8 JSON bytes.

    Dataclasses and enums serialize natively; sets become sorted lists. With
    ``lenient`` anything else falls back to its ``repr`` instead of raising.
    """
    options = 0
    if pretty:
        options |= orjson.OPT_INDENT_2
    if sort_keys:
        options |= orjson.OPT_SORT_KEYS
    default = _lenient_default if lenient else _strict_default
    return orjson.dumps(payload, default=default, option=options)


def dumps_text(
    payload: Any,
    *,
    pretty: bool = False,
    sort_keys: bool = False,
    lenient: bool = False,
) -> str:
    return dumps_bytes(payload, pretty=pretty, sort_keys=sort_keys, lenient=lenient).decode("utf-8")


def loads(data: bytes | str) -> Any:
    return orjson.loads(data)


__all__ = ["dumps_bytes", "dumps_text", "loads"]
