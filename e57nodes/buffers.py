"""User buffers that supply values to, or receive values from, an E57 tree."""

from __future__ import annotations

import math
import struct
from collections.abc import MutableSequence
from typing import Any

from .conversions import store_int64, store_real, store_scaled_int64
from .errors import E57Exception, ErrorCode
from .representation import MemoryRepresentation
from .structure import ImageFile

_INT64 = MemoryRepresentation.INT64
_REAL64 = MemoryRepresentation.REAL64


def _round_float32(value: float) -> float:
    """Round a double to the nearest single precision value."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class SourceDestBuffer:
    """A typed view on a user sequence, read or written one element at a time.

    ``data`` is a mutable sequence; element ``i`` of the buffer lives at
    ``data[i * stride]``. The capacity is the number of such positions.
    """

    def __init__(
        self,
        dest_image_file: ImageFile,
        path_name: str,
        data: MutableSequence[Any] | None,
        representation: MemoryRepresentation = MemoryRepresentation.REAL64,
        do_conversion: bool = False,
        do_scaling: bool = False,
        stride: int = 1,
    ) -> None:
        self.dest_image_file = dest_image_file
        self.path_name = path_name
        self.representation = MemoryRepresentation(representation)
        self.do_conversion = bool(do_conversion)
        self.do_scaling = bool(do_scaling)
        self.stride = stride
        self._data = data
        self._next_index = 0
        if data is None or stride < 1:
            self.capacity = 0
        else:
            self.capacity = (len(data) + stride - 1) // stride
        self._check_state()

    @classmethod
    def for_strings(
        cls,
        dest_image_file: ImageFile,
        path_name: str,
        strings: MutableSequence[str] | None,
    ) -> SourceDestBuffer:
        """Create a buffer over a list of strings."""
        if strings is None:
            raise E57Exception(ErrorCode.BAD_BUFFER, f"sdbuf.pathName={path_name}")
        return cls(dest_image_file, path_name, strings, MemoryRepresentation.USTRING)

    @property
    def data(self) -> MutableSequence[Any] | None:
        """The user sequence behind this buffer."""
        return self._data

    @property
    def next_index(self) -> int:
        """Number of elements transferred since the last rewind."""
        return self._next_index

    def _check_state(self) -> None:
        imf = self.dest_image_file
        if not imf.is_open:
            raise E57Exception(ErrorCode.IMAGEFILE_NOT_OPEN, f"fileName={imf.file_name}")
        imf.path_name_check_well_formed(self.path_name)
        if self._data is None:
            raise E57Exception(ErrorCode.BAD_BUFFER, f"pathName={self.path_name}")
        if self.representation is not MemoryRepresentation.USTRING and self.stride < 1:
            raise E57Exception(ErrorCode.BAD_BUFFER, f"pathName={self.path_name}")

    def rewind(self) -> None:
        """Start transferring from the first element again."""
        self._next_index = 0

    def _check_room(self) -> None:
        if self._next_index >= self.capacity:
            raise E57Exception(ErrorCode.INTERNAL, f"pathName={self.path_name}")

    def _position(self) -> int:
        return self._next_index * self.stride

    def _current(self) -> Any:
        return self._data[self._position()]  # type: ignore[index]

    def _store(self, value: Any) -> None:
        self._data[self._position()] = value  # type: ignore[index]
        self._next_index += 1

    def _require_conversion(self) -> None:
        if not self.do_conversion:
            raise E57Exception(ErrorCode.CONVERSION_REQUIRED, f"pathName={self.path_name}")

    def _expecting_numeric(self) -> E57Exception:
        return E57Exception(ErrorCode.EXPECTING_NUMERIC, f"pathName={self.path_name}")

    def get_next_int64(self, scale: float | None = None, offset: float = 0.0) -> int:
        """Return the next element as a raw integer.

        With a scale, and when the buffer was made with ``do_scaling``, the
        value is unscaled as ``(x - offset) / scale`` rounded half up.
        """
        if scale is None or not self.do_scaling:
            return self._get_raw_int64()
        if scale == 0:
            raise E57Exception(ErrorCode.INTERNAL, f"pathName={self.path_name}")
        self._check_room()

        rep = self.representation
        if rep is MemoryRepresentation.USTRING:
            raise self._expecting_numeric()
        item = self._current()
        if rep.is_integer:
            number: float | int = int(item)
        elif rep is MemoryRepresentation.BOOL:
            number = 1 if item else 0
        else:
            self._require_conversion()
            number = float(item)

        quotient = (number - offset) / scale + 0.5
        if not math.isfinite(quotient):
            raise E57Exception(
                ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE,
                f"pathName={self.path_name} value={quotient}",
            )
        raw = math.floor(quotient)
        if not _INT64.in_range(raw):
            raise E57Exception(
                ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE,
                f"pathName={self.path_name} value={float(raw)}",
            )
        self._next_index += 1
        return int(raw)

    def _get_raw_int64(self) -> int:
        self._check_room()
        rep = self.representation
        if rep is MemoryRepresentation.USTRING:
            raise self._expecting_numeric()
        item = self._current()
        if rep.is_integer:
            value = int(item)
        elif rep is MemoryRepresentation.BOOL:
            self._require_conversion()
            value = 1 if item else 0
        else:
            self._require_conversion()
            number = float(item)
            if not math.isfinite(number):
                raise E57Exception(
                    ErrorCode.VALUE_NOT_REPRESENTABLE,
                    f"pathName={self.path_name} value={number}",
                )
            value = int(number)
        self._next_index += 1
        return value

    def get_next_float(self) -> float:
        """Return the next element as a single precision value."""
        self._check_room()
        rep = self.representation
        if rep is MemoryRepresentation.USTRING:
            raise self._expecting_numeric()
        item = self._current()
        if rep.is_integer:
            self._require_conversion()
            value = _round_float32(float(int(item)))
        elif rep is MemoryRepresentation.BOOL:
            self._require_conversion()
            value = 1.0 if item else 0.0
        elif rep is MemoryRepresentation.REAL32:
            value = float(item)
        else:
            number = float(item)
            if not _REAL64.in_range(number):
                raise E57Exception(
                    ErrorCode.REAL64_TOO_LARGE,
                    f"pathName={self.path_name} value={number}",
                )
            value = _round_float32(number)
        self._next_index += 1
        return value

    def get_next_double(self) -> float:
        """Return the next element as a double precision value."""
        self._check_room()
        rep = self.representation
        if rep is MemoryRepresentation.USTRING:
            raise self._expecting_numeric()
        item = self._current()
        if rep.is_integer:
            self._require_conversion()
            value = float(int(item))
        elif rep is MemoryRepresentation.BOOL:
            self._require_conversion()
            value = 1.0 if item else 0.0
        else:
            value = float(item)
        self._next_index += 1
        return value

    def get_next_string(self) -> str:
        """Return the next element of a string buffer."""
        if self.representation is not MemoryRepresentation.USTRING:
            raise E57Exception(ErrorCode.EXPECTING_USTRING, f"pathName={self.path_name}")
        self._check_room()
        value = self._current()
        self._next_index += 1
        return value

    def set_next_int64(self, value: int, scale: float | None = None, offset: float = 0.0) -> None:
        """Store a raw integer, scaled as ``value * scale + offset`` when enabled."""
        self._check_room()
        if scale is None or not self.do_scaling:
            stored = store_int64(self.representation, value, self.do_conversion, self.path_name)
        else:
            stored = store_scaled_int64(
                self.representation, value, scale, offset, self.do_conversion, self.path_name
            )
        self._store(stored)

    def set_next_float(self, value: float) -> None:
        """Store a single precision value."""
        self._check_room()
        self._store(
            store_real(self.representation, value, False, self.do_conversion, self.path_name)
        )

    def set_next_double(self, value: float) -> None:
        """Store a double precision value."""
        self._check_room()
        self._store(
            store_real(self.representation, value, True, self.do_conversion, self.path_name)
        )

    def set_next_string(self, value: str) -> None:
        """Store a string into a string buffer."""
        if self.representation is not MemoryRepresentation.USTRING:
            raise E57Exception(ErrorCode.EXPECTING_USTRING, f"pathName={self.path_name}")
        self._check_room()
        self._store(value)

    def check_compatible(self, other: SourceDestBuffer) -> None:
        """Raise unless ``other`` describes a buffer of the same shape."""
        if self.path_name != other.path_name:
            raise E57Exception(
                ErrorCode.BUFFERS_NOT_COMPATIBLE,
                f"pathName={self.path_name} newPathName={other.path_name}",
            )
        if self.representation is not other.representation:
            raise E57Exception(
                ErrorCode.BUFFERS_NOT_COMPATIBLE,
                f"memoryRepresentation={self.representation.type_name} "
                f"newMemoryType={other.representation.type_name}",
            )
        if self.capacity != other.capacity:
            raise E57Exception(
                ErrorCode.BUFFERS_NOT_COMPATIBLE,
                f"capacity={self.capacity} newCapacity={other.capacity}",
            )
        if self.do_conversion != other.do_conversion:
            raise E57Exception(
                ErrorCode.BUFFERS_NOT_COMPATIBLE,
                f"doConversion={int(self.do_conversion)} "
                f"newDoConversion={int(other.do_conversion)}",
            )
        if self.stride != other.stride:
            raise E57Exception(
                ErrorCode.BUFFERS_NOT_COMPATIBLE,
                f"stride={self.stride} newStride={other.stride}",
            )