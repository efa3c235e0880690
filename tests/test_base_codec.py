"""
Tests for the Base Codec
"""

import pytest

from pistorage.base_codec import (
    AlphanumericRenderer,
    CodePointRenderer,
    base_digits_to_integer,
    from_base_string,
    integer_to_base_digits,
    renderer_for,
    to_base_string
)
from pistorage.errors import InvalidBaseError, InvalidDigitError, RangeError


def test_zero_is_single_digit():
    assert integer_to_base_digits(0, 2) == [0]
    assert integer_to_base_digits(0, 65536) == [0]


def test_most_significant_first():
    assert integer_to_base_digits(255, 16) == [15, 15]
    assert integer_to_base_digits(256, 16) == [1, 0, 0]
    assert integer_to_base_digits(5, 2) == [1, 0, 1]
    assert integer_to_base_digits(65536, 65536) == [1, 0]


@pytest.mark.parametrize("base", [2, 3, 10, 16, 36, 37, 256, 65535, 65536])
@pytest.mark.parametrize("value", [0, 1, 35, 36, 1234567, 2 ** 100 + 17])
def test_round_trip(value, base):
    digits = integer_to_base_digits(value, base)
    assert all(0 <= d < base for d in digits)
    assert base_digits_to_integer(digits, base) == value


def test_fixed_width_matches_plain_conversion():
    """Divide-and-conquer splitting agrees with repeated divmod"""
    value = 3 ** 2000
    plain = integer_to_base_digits(value, 7)
    padded = integer_to_base_digits(value, 7, width=len(plain) + 5)
    assert padded == [0] * 5 + plain


def test_fixed_width_rejects_overflow():
    with pytest.raises(ValueError):
        integer_to_base_digits(256, 16, width=2)


@pytest.mark.parametrize("base", [0, 1, 65537, -16, 16.0, True])
def test_invalid_base(base):
    with pytest.raises(InvalidBaseError):
        integer_to_base_digits(10, base)


def test_negative_value_rejected():
    with pytest.raises(RangeError):
        integer_to_base_digits(-1, 10)


def test_invalid_digit():
    with pytest.raises(InvalidDigitError) as exc_info:
        base_digits_to_integer([1, 16], 16)
    assert exc_info.value.digit == 16
    assert exc_info.value.base == 16
    assert exc_info.value.operation == "base_digits_to_integer"

    with pytest.raises(InvalidDigitError):
        base_digits_to_integer([-1], 10)


def test_renderer_threshold():
    assert isinstance(renderer_for(2), AlphanumericRenderer)
    assert isinstance(renderer_for(36), AlphanumericRenderer)
    assert isinstance(renderer_for(37), CodePointRenderer)
    assert isinstance(renderer_for(65536), CodePointRenderer)


def test_alphanumeric_rendering():
    assert to_base_string(255, 16) == "FF"
    assert to_base_string(35, 36) == "Z"
    assert to_base_string(0, 10) == "0"
    assert from_base_string("ff", 16) == 255
    assert from_base_string("Ff", 16) == 255
    assert from_base_string("z", 36) == 35


def test_code_point_rendering():
    assert to_base_string(65, 256) == "A"
    assert to_base_string(256 + 66, 256) == "\x01B"
    assert from_base_string("\x01B", 256) == 322


def test_parse_rejects_bad_characters():
    with pytest.raises(InvalidDigitError):
        from_base_string("G", 16)
    with pytest.raises(InvalidDigitError):
        from_base_string("12!", 10)
    with pytest.raises(InvalidDigitError):
        from_base_string("", 10)
    with pytest.raises(InvalidDigitError):
        from_base_string("Ā", 256)
