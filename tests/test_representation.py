import math

import pytest

from e57nodes.representation import MemoryRepresentation

INTEGER_TYPES = [
    MemoryRepresentation.INT8,
    MemoryRepresentation.UINT8,
    MemoryRepresentation.INT16,
    MemoryRepresentation.UINT16,
    MemoryRepresentation.INT32,
    MemoryRepresentation.UINT32,
    MemoryRepresentation.INT64,
]


def test_int8_limits():
    rep = MemoryRepresentation.INT8
    assert rep.minimum == -128
    assert rep.maximum == 127
    assert rep.in_range(-128)
    assert rep.in_range(127)
    assert not rep.in_range(-129)
    assert not rep.in_range(128)


def test_uint16_maximum():
    rep = MemoryRepresentation.UINT16
    assert rep.maximum == 65535
    assert rep.in_range(65535)
    assert not rep.in_range(65536)


@pytest.mark.parametrize("rep", INTEGER_TYPES)
def test_integer_bounds_inclusive(rep):
    assert MemoryRepresentation.in_range(rep, rep.minimum)
    assert MemoryRepresentation.in_range(rep, rep.maximum)
    assert not MemoryRepresentation.in_range(rep, rep.minimum - 1)
    assert not MemoryRepresentation.in_range(rep, rep.maximum + 1)


@pytest.mark.parametrize("rep", INTEGER_TYPES)
def test_integer_flags(rep):
    assert rep.is_integer
    assert not rep.is_real
    assert not MemoryRepresentation.in_range(rep, rep.maximum + 0.5)


def test_unsigned_rejects_negative():
    assert not MemoryRepresentation.UINT8.in_range(-1)
    assert not MemoryRepresentation.UINT32.in_range(-0.5)


def test_fractional_values_checked_against_bounds():
    assert MemoryRepresentation.INT8.in_range(127.0)
    assert not MemoryRepresentation.INT8.in_range(127.5)


def test_real32_rejects_values_beyond_single_precision():
    rep = MemoryRepresentation.REAL32
    assert rep.in_range(rep.maximum)
    assert not rep.in_range(rep.maximum * 2)
    assert rep.is_real and not rep.is_integer


def test_real64_rejects_infinity():
    assert not MemoryRepresentation.REAL64.in_range(math.inf)
    assert not MemoryRepresentation.REAL64.in_range(-math.inf)
    assert MemoryRepresentation.REAL64.in_range(1e300)


def test_nan_is_not_rejected():
    assert MemoryRepresentation.INT16.in_range(math.nan)


def test_bool_accepts_any_number():
    assert MemoryRepresentation.BOOL.in_range(12345)
    assert MemoryRepresentation.BOOL.minimum is None


def test_ustring_accepts_no_number():
    assert not MemoryRepresentation.USTRING.in_range(0)
    assert MemoryRepresentation.USTRING.maximum is None


def test_type_names_unique():
    names = {rep.type_name for rep in MemoryRepresentation}
    assert len(names) == len(MemoryRepresentation)
    rep = MemoryRepresentation.REAL64
    assert rep.type_name == "double"
    assert rep.in_range(-1e300)
    assert not rep.in_range(math.inf)