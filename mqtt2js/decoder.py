"""JSON payload decoding.

A message is a JSON object such as ``{"type": 1, "number": 0, "value": 1}``.
"""
import json
import math
from dataclasses import dataclass

from mqtt2js.errors import DecodeError

# Checked in this order, the first missing one is reported
FIELDS = ("value", "type", "number")

# Integers saturate to the int32 range, as json-c does
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class InboundEvent:
    kind: int
    index: int
    value: int


def _saturate(number: int) -> int:
    return max(INT_MIN, min(INT_MAX, number))


def _from_float(number: float) -> int:
    if math.isinf(number):
        return INT_MAX if number > 0 else INT_MIN
    return _saturate(int(number))


def _get_int(data: dict, key: str) -> int:
    if key not in data:
        raise DecodeError(f"Missing key `{key}`")
    field = data[key]
    # json also accepts true/false, treat them as 1/0
    if isinstance(field, (bool, int)):
        return _saturate(int(field))
    try:
        if isinstance(field, float):
            return _from_float(field)
        if isinstance(field, str):
            return _from_float(float(field.strip()))
    except ValueError:
        pass
    raise DecodeError(f"Key `{key}` is not an integer: {field!r}")


def decode_payload(payload: bytes) -> InboundEvent:
    """Decode a raw MQTT payload into an InboundEvent.

    Raises DecodeError on invalid UTF-8 / JSON, on a document that is not an
    object, and on a missing or non numeric field.
    """
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise DecodeError(f"Invalid JSON object: {payload!r}") from None

    if not isinstance(data, dict):
        raise DecodeError(f"Invalid JSON object: {payload!r}")

    value, kind, index = (_get_int(data, key) for key in FIELDS)
    return InboundEvent(kind=kind, index=index, value=value)
