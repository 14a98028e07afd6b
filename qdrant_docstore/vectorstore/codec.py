"""Conversion between metadata values and Qdrant payload values.

Qdrant payloads are JSON documents, so the wire representation of a value is
one of: ``None``, ``bool``, ``int`` (64-bit), ``float`` (finite), ``str``, a
string-keyed object or an ordered list of wire values. Anything else has no
wire counterpart and raises ``ConversionError``; nothing is dropped or
silently coerced.
"""

import math
from collections.abc import Mapping
from typing import Any, TypeAlias

from qdrant_docstore.exceptions import ConversionError

WireValue: TypeAlias = (
    None | bool | int | float | str | dict[str, "WireValue"] | list["WireValue"]
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def to_wire_value(value: Any, path: str = "$") -> WireValue:
    """Convert a metadata value to its payload form.

    Args:
        value: Value to convert.
        path: Location of the value, used in error details.

    Returns:
        The payload value.

    Raises:
        ConversionError: If the value's type has no payload counterpart.
    """
    if value is None or isinstance(value, (bool, str)):
        return value
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ConversionError(
                f"Integer at {path} does not fit in 64 bits",
                details={"path": path, "value": str(value)},
            )
        return int(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ConversionError(
                f"Non-finite float at {path} cannot be stored",
                details={"path": path, "value": repr(value)},
            )
        return float(value)
    if isinstance(value, Mapping):
        return to_wire_map(value, path)
    if isinstance(value, (list, tuple)):
        return [to_wire_value(item, f"{path}[{i}]") for i, item in enumerate(value)]

    raise ConversionError(
        f"Unsupported value type {type(value).__name__} at {path}",
        details={"path": path, "type": type(value).__name__},
    )


def to_wire_map(values: Mapping[str, Any], path: str = "$") -> dict[str, WireValue]:
    """Convert a metadata mapping to a payload mapping.

    Raises:
        ConversionError: If a key is not a string or a value is unsupported.
    """
    wire: dict[str, WireValue] = {}
    for key, value in values.items():
        if not isinstance(key, str):
            raise ConversionError(
                f"Payload keys must be strings, got {type(key).__name__} at {path}",
                details={"path": path, "key": repr(key)},
            )
        wire[key] = to_wire_value(value, f"{path}.{key}")
    return wire


def to_generic_value(value: Any, path: str = "$") -> Any:
    """Convert a payload value returned by Qdrant back to a metadata value."""
    if isinstance(value, Mapping):
        return to_generic_map(value, path)
    if isinstance(value, list):
        return [to_generic_value(item, f"{path}[{i}]") for i, item in enumerate(value)]
    if value is None or isinstance(value, (bool, int, float, str)):
        return value

    raise ConversionError(
        f"Unexpected payload value type {type(value).__name__} at {path}",
        details={"path": path, "type": type(value).__name__},
    )


def to_generic_map(values: Mapping[str, Any], path: str = "$") -> dict[str, Any]:
    """Convert a payload mapping back to a metadata mapping."""
    return {
        str(key): to_generic_value(value, f"{path}.{key}")
        for key, value in values.items()
    }
