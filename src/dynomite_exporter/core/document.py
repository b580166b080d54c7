"""Decoding of the Dynomite stats JSON into a StatusDocument.

Decoding is tolerant: unknown keys are ignored and missing or ``null`` keys
keep the field's zero value. A value of the wrong JSON type for a known key
is a decode error.
"""

import json
import re
from dataclasses import fields
from typing import Any

from dynomite_exporter.core.errors import DocumentDecodeError
from dynomite_exporter.core.models import DynOMiteStats, StatusDocument

# JSON keys that are not valid identifiers, mapped to their attribute names
_KEY_ALIASES = {
    "99_cross_region_rtt": "p99_cross_region_rtt",
    "99_cross_zone_latency": "p99_cross_zone_latency",
    "99_server_latency": "p99_server_latency",
    "99_cross_region_queue_wait": "p99_cross_region_queue_wait",
    "99_cross_zone_queue_wait": "p99_cross_zone_queue_wait",
    "99_server_queue_wait": "p99_server_queue_wait",
}
_ALIASED_ATTRS = frozenset(_KEY_ALIASES.values())

_NESTED_KEY = "dyn_o_mite"

# Integer fields are signed 64-bit on the Dynomite side
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_LONE_SURROGATE_RE = re.compile("[\ud800-\udfff]")


def _decode_int(key: str, value: Any) -> int:
    # bool is a subclass of int but a distinct JSON type
    if isinstance(value, bool):
        raise DocumentDecodeError(f"field {key!r}: expected number, got bool")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise DocumentDecodeError(
            f"field {key!r}: expected integer, got {type(value).__name__}"
        )
    if not INT64_MIN <= value <= INT64_MAX:
        raise DocumentDecodeError(f"field {key!r}: integer out of 64-bit range")
    return value


def _decode_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise DocumentDecodeError(
            f"field {key!r}: expected string, got {type(value).__name__}"
        )
    # json.loads keeps unpaired \ud800-style escapes, which cannot be encoded
    return _LONE_SURROGATE_RE.sub("\ufffd", value)


def _decode_fields(cls: type, data: dict[str, Any], aliases: dict[str, str]) -> dict:
    """Build constructor kwargs for a flat dataclass from decoded JSON."""
    known = {f.name: f for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        attr = aliases.get(key, key)
        f = known.get(attr)
        if f is None or key in _ALIASED_ATTRS or attr == _NESTED_KEY or value is None:
            continue
        if f.type in (str, "str"):
            kwargs[attr] = _decode_str(key, value)
        else:
            kwargs[attr] = _decode_int(key, value)
    return kwargs


def decode_document(data: Any) -> StatusDocument:
    """Decode an already-parsed JSON value into a StatusDocument.

    Args:
        data: The parsed JSON value.

    Returns:
        StatusDocument with missing fields set to their zero value.

    Raises:
        DocumentDecodeError: If the value is not an object or a known field
            has the wrong type.
    """
    if not isinstance(data, dict):
        raise DocumentDecodeError(
            f"expected JSON object, got {type(data).__name__}"
        )
    kwargs = _decode_fields(StatusDocument, data, _KEY_ALIASES)

    nested = data.get(_NESTED_KEY)
    if nested is not None:
        if not isinstance(nested, dict):
            raise DocumentDecodeError(
                f"field {_NESTED_KEY!r}: expected object, got {type(nested).__name__}"
            )
        kwargs[_NESTED_KEY] = DynOMiteStats(**_decode_fields(DynOMiteStats, nested, {}))

    return StatusDocument(**kwargs)


def parse_document(body: bytes | str) -> StatusDocument:
    """Parse a raw response body into a StatusDocument.

    Raises:
        DocumentDecodeError: If the body is not valid JSON or does not decode.
    """
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise DocumentDecodeError(f"invalid JSON body: {e}") from e
    return decode_document(data)


def read_field(document: StatusDocument, key: str) -> Any:
    """Read a field by its JSON key; nested keys use dots (``dyn_o_mite.x``).

    Raises:
        AttributeError: If the key does not name a document field.
    """
    value: Any = document
    for part in key.split("."):
        value = getattr(value, _KEY_ALIASES.get(part, part))
    return value
