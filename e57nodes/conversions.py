"""Conversion of values into the element type of a user buffer.

Each function returns the value as it would be stored in a buffer whose
elements have the given :class:`MemoryRepresentation`. It raises
:class:`E57Exception` where the value cannot be stored that way.
"""

from __future__ import annotations

import math
import struct

from .errors import E57Exception, ErrorCode
from .representation import MemoryRepresentation

Stored = int | float | bool


def _to_float32(value: float) -> float:
    """Round a double to the nearest single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _require_conversion(do_conversion: bool, path_name: str) -> None:
    if not do_conversion:
        raise E57Exception(ErrorCode.CONVERSION_REQUIRED, f"pathName={path_name}")


def _expecting_numeric(path_name: str) -> E57Exception:
    return E57Exception(ErrorCode.EXPECTING_NUMERIC, f"pathName={path_name}")


def store_int64(
    representation: MemoryRepresentation,
    value: int,
    do_conversion: bool = False,
    path_name: str = "",
) -> Stored:
    """Convert a raw integer from the file into the buffer's element type."""
    rep = representation
    if rep is MemoryRepresentation.USTRING:
        raise _expecting_numeric(path_name)
    if rep.is_integer:
        if not rep.in_range(value):
            raise E57Exception(
                ErrorCode.VALUE_NOT_REPRESENTABLE, f"pathName={path_name} value={value}"
            )
        return int(value)
    if rep is MemoryRepresentation.BOOL:
        return value == 0
    _require_conversion(do_conversion, path_name)
    if rep is MemoryRepresentation.REAL32:
        return _to_float32(float(value))
    return float(value)


def store_scaled_int64(
    representation: MemoryRepresentation,
    value: int,
    scale: float,
    offset: float,
    do_conversion: bool = False,
    path_name: str = "",
) -> Stored:
    """Apply ``value * scale + offset`` and convert into the buffer's element type.

    Integer destinations receive the result rounded to the nearest integer,
    halves rounded up; floating point destinations keep full resolution.
    """
    rep = representation
    if rep.is_real:
        scaled = value * scale + offset
    else:
        scaled = math.floor(value * scale + offset + 0.5) if math.isfinite(
            value * scale + offset
        ) else value * scale + offset

    if rep is MemoryRepresentation.USTRING:
        raise _expecting_numeric(path_name)
    if rep.is_integer:
        if not math.isfinite(scaled) or not rep.in_range(scaled):
            raise E57Exception(
                ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE,
                f"pathName={path_name} scaledValue={scaled}",
            )
        return int(scaled)
    if rep is MemoryRepresentation.BOOL:
        return scaled == 0
    _require_conversion(do_conversion, path_name)
    if rep is MemoryRepresentation.REAL32:
        if not MemoryRepresentation.REAL64.in_range(scaled):
            raise E57Exception(
                ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE,
                f"pathName={path_name} scaledValue={scaled}",
            )
        return _to_float32(float(scaled))
    return float(scaled)


def store_real(
    representation: MemoryRepresentation,
    value: float,
    is_double: bool = True,
    do_conversion: bool = False,
    path_name: str = "",
) -> Stored:
    """Convert a floating point value from the file into the buffer's element type.

    ``is_double`` tells whether the value came from a double precision field;
    a single precision value is stored into a float buffer unchecked.
    """
    rep = representation
    if rep is MemoryRepresentation.USTRING:
        raise _expecting_numeric(path_name)
    if rep.is_integer:
        _require_conversion(do_conversion, path_name)
        if math.isnan(value) or not rep.in_range(value):
            raise E57Exception(
                ErrorCode.VALUE_NOT_REPRESENTABLE, f"pathName={path_name} value={value}"
            )
        return int(value)
    if rep is MemoryRepresentation.BOOL:
        _require_conversion(do_conversion, path_name)
        return value == 0
    if rep is MemoryRepresentation.REAL32:
        if is_double and not MemoryRepresentation.REAL64.in_range(value):
            raise E57Exception(
                ErrorCode.VALUE_NOT_REPRESENTABLE, f"pathName={path_name} value={value}"
            )
        return _to_float32(float(value))
    return float(value)