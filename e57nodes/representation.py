"""Memory representations of values held in user buffers."""

from __future__ import annotations

import sys
from enum import Enum

_FLOAT32_MAX = 3.4028234663852886e38
_DOUBLE_MAX = sys.float_info.max


class MemoryRepresentation(Enum):
    """Element type of a user buffer."""

    INT8 = 1
    UINT8 = 2
    INT16 = 3
    UINT16 = 4
    INT32 = 5
    UINT32 = 6
    INT64 = 7
    BOOL = 8
    REAL32 = 9
    REAL64 = 10
    USTRING = 11

    @property
    def is_integer(self) -> bool:
        """True for the fixed-width integer types."""
        return self in _INTEGER_LIMITS

    @property
    def is_real(self) -> bool:
        """True for the floating point types."""
        return self in (MemoryRepresentation.REAL32, MemoryRepresentation.REAL64)

    @property
    def minimum(self) -> int | float | None:
        """Smallest representable value, or None when unbounded or not numeric."""
        limits = _LIMITS.get(self)
        return None if limits is None else limits[0]

    @property
    def maximum(self) -> int | float | None:
        """Largest representable value, or None when unbounded or not numeric."""
        limits = _LIMITS.get(self)
        return None if limits is None else limits[1]

    @property
    def type_name(self) -> str:
        """Conventional name of the element type."""
        return _TYPE_NAMES[self]

    def in_range(self, value: int | float) -> bool:
        """Return whether ``value`` lies within the limits of this type.

        Booleans accept any number; strings accept none. A NaN is never
        rejected by the comparisons, matching the bounds checks it feeds.
        """
        if self is MemoryRepresentation.USTRING:
            return False
        limits = _LIMITS.get(self)
        if limits is None:
            return True
        low, high = limits
        return not (value < low or high < value)


_INTEGER_LIMITS = {
    MemoryRepresentation.INT8: (-(2**7), 2**7 - 1),
    MemoryRepresentation.UINT8: (0, 2**8 - 1),
    MemoryRepresentation.INT16: (-(2**15), 2**15 - 1),
    MemoryRepresentation.UINT16: (0, 2**16 - 1),
    MemoryRepresentation.INT32: (-(2**31), 2**31 - 1),
    MemoryRepresentation.UINT32: (0, 2**32 - 1),
    MemoryRepresentation.INT64: (-(2**63), 2**63 - 1),
}

_LIMITS: dict[MemoryRepresentation, tuple[int | float, int | float]] = {
    **_INTEGER_LIMITS,
    MemoryRepresentation.REAL32: (-_FLOAT32_MAX, _FLOAT32_MAX),
    MemoryRepresentation.REAL64: (-_DOUBLE_MAX, _DOUBLE_MAX),
}

_TYPE_NAMES = {
    MemoryRepresentation.INT8: "int8_t",
    MemoryRepresentation.UINT8: "uint8_t",
    MemoryRepresentation.INT16: "int16_t",
    MemoryRepresentation.UINT16: "uint16_t",
    MemoryRepresentation.INT32: "int32_t",
    MemoryRepresentation.UINT32: "uint32_t",
    MemoryRepresentation.INT64: "int64_t",
    MemoryRepresentation.BOOL: "bool",
    MemoryRepresentation.REAL32: "float",
    MemoryRepresentation.REAL64: "double",
    MemoryRepresentation.USTRING: "ustring",
}