"""Encode/decode Python values to/from Firestore REST API 'fields' format.

Also builds commit writes: dotted keys ("unreadCount.uid") become nested
maps plus a field mask, and Increment / SERVER_TIMESTAMP sentinels become
field transforms.
"""

import base64
import re
from datetime import datetime
from typing import Any

_SIMPLE_SEGMENT = re.compile(r"[A-Za-z_][A-Za-z_0-9]*")


class Increment:
    """Sentinel: atomically add amount to a numeric field (FieldValue.increment)."""

    __slots__ = ("amount",)

    def __init__(self, amount: int | float = 1) -> None:
        self.amount = amount

    def __repr__(self) -> str:
        return f"Increment({self.amount!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Increment) and other.amount == self.amount


class _ServerTimestamp:
    """Sentinel: set the field to the commit time on the server."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def _encode_value(v: Any) -> dict:
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        return {"timestampValue": v.strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def encode_document(data: dict[str, Any]) -> dict:
    """Convert a Python dict to Firestore REST Document.fields format."""
    return {"fields": {k: _encode_value(v) for k, v in data.items()}}


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return obj["doubleValue"]
    if "timestampValue" in obj:
        return datetime.fromisoformat(obj["timestampValue"].replace("Z", "+00:00"))
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_document(fields: dict | None) -> dict:
    """Convert Firestore REST Document.fields (the inner map) to a Python dict."""
    if not fields:
        return {}
    return {k: _decode_value(v) for k, v in fields.items()}


def quote_field_path(path: str) -> str:
    """Backtick-quote dotted path segments that are not plain identifiers.

    User IDs used as map keys (e.g. unreadCount.<uid>) may contain hyphens
    or start with a digit, which Firestore only accepts quoted.
    """
    quoted = []
    for segment in path.split("."):
        if _SIMPLE_SEGMENT.fullmatch(segment):
            quoted.append(segment)
        else:
            escaped = segment.replace("\\", "\\\\").replace("`", "\\`")
            quoted.append(f"`{escaped}`")
    return ".".join(quoted)


def nest_dotted(data: dict[str, Any]) -> dict[str, Any]:
    """Expand dotted keys into nested dicts: {"a.b": 1} -> {"a": {"b": 1}}."""
    nested: dict[str, Any] = {}
    for key, value in data.items():
        parts = key.split(".")
        target = nested
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value
    return nested


def split_transforms(data: dict[str, Any]) -> tuple[dict[str, Any], list[dict]]:
    """Separate plain values from Increment / SERVER_TIMESTAMP sentinels.

    Returns:
        (plain values keyed as given, list of REST fieldTransforms)
    """
    plain: dict[str, Any] = {}
    transforms: list[dict] = []
    for key, value in data.items():
        if isinstance(value, Increment):
            transforms.append(
                {"fieldPath": quote_field_path(key), "increment": _encode_value(value.amount)}
            )
        elif value is SERVER_TIMESTAMP:
            transforms.append(
                {"fieldPath": quote_field_path(key), "setToServerValue": "REQUEST_TIME"}
            )
        else:
            plain[key] = value
    return plain, transforms


def build_write(
    name: str,
    data: dict[str, Any],
    *,
    mask: bool,
    exists: bool | None = None,
) -> dict:
    """Build one REST Write for documents:commit.

    Args:
        name: Full document resource name.
        data: Values to write; keys may be dotted when mask is True.
        mask: True to touch only the given fields (update / merge), False to replace.
        exists: Optional precondition (True for update, False for create).
    """
    plain, transforms = split_transforms(data)
    write: dict[str, Any] = {
        "update": {"name": name, **encode_document(nest_dotted(plain) if mask else plain)},
    }
    if mask:
        write["updateMask"] = {"fieldPaths": [quote_field_path(k) for k in plain]}
    if transforms:
        write["updateTransforms"] = transforms
    if exists is not None:
        write["currentDocument"] = {"exists": exists}
    return write
