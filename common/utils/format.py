from __future__ import annotations

from enum import Enum

_STR_VALUE_LIMIT = 20


def _fmt_value(value) -> str | None:
    """Short form of the value, None for the values that are skipped: empty, false, callable."""
    if (value is None) or callable(value):
        return None
    elif isinstance(value, bool):
        return str(value) if value else None
    elif isinstance(value, Enum):
        return value.name
    elif isinstance(value, (list, tuple, set)):
        return f"{type(value).__name__}(len={len(value)})" if value else None
    elif isinstance(value, (str, bytes, bytearray)):
        if not value:
            return None
        if not isinstance(value, str):
            value = value.hex()
        if len(value) > _STR_VALUE_LIMIT:
            value = value[:_STR_VALUE_LIMIT] + "..."
        return "'" + value + "'"

    value = str(value)
    return value or None


def str_fmt_object(obj, skip_underscore_prefix=True, name="") -> str:
    """Render attributes of an object (or items of a dict) as `Name(key=value, ...)`."""
    if obj is None:
        return "None"

    if hasattr(obj, "__dict__"):
        item_dict = obj.__dict__
    elif isinstance(obj, dict):
        item_dict = obj
    else:
        return _fmt_value(obj) or "?"

    item_list: list[str] = list()
    for key, value in item_dict.items():
        key = str(key)
        if skip_underscore_prefix and key.startswith("_"):
            continue

        value = _fmt_value(value)
        if value is not None:
            item_list.append(key + "=" + value)

    return (name or type(obj).__name__) + "(" + ", ".join(item_list) + ")"


def hex_to_bytes(value: str | bytes | bytearray | None, default: bytes | None = bytes()) -> bytes | None:
    if not value:
        return default
    elif isinstance(value, bytes):
        return value
    elif isinstance(value, bytearray):
        return bytes(value)
    elif not isinstance(value, str):
        raise ValueError(f"Wrong input type {type(value).__name__}")

    if has_hex_start(value):
        value = value[2:]
    result = bytes.fromhex(value)
    if len(result) * 2 != len(value):
        raise ValueError(f"Input has wrong length {len(value)}")

    return result


def bytes_to_hex(value: str | bytes | bytearray | None, prefix: str = "0x") -> str:
    if not value:
        return prefix

    elif isinstance(value, str):
        value = hex_to_bytes(value)

    return prefix + value.hex()


def has_hex_start(value: str) -> bool:
    return isinstance(value, str) and value[:2] in ("0x", "0X")
