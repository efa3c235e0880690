"""
Base Codec
Converts unsigned integers to and from digit sequences in any base from 2 to 65536
Renders digits as 0-9A-Z for base <= 36 and as raw code points above that
"""

from .constants import (
    MIN_BASE,
    MAX_BASE,
    ALPHANUMERIC_MAX_BASE,
    ALPHANUMERIC_ALPHABET
)
from .errors import InvalidBaseError, InvalidDigitError, RangeError

# Widths at or below this use plain repeated divmod
_SPLIT_THRESHOLD = 64


def validate_base(base, operation=None):
    """
    Check that base is an integer in [MIN_BASE, MAX_BASE].

    Args:
        base: Candidate base
        operation: Name of the calling operation (for error context)

    Returns:
        int: The validated base

    Raises:
        InvalidBaseError: If base is not an int or is out of range
    """
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(base, operation)
    if base < MIN_BASE or base > MAX_BASE:
        raise InvalidBaseError(base, operation)
    return base


def _fixed_width_digits(value, base, width, out):
    if width <= _SPLIT_THRESHOLD:
        chunk = [0] * width
        for i in range(width - 1, -1, -1):
            value, chunk[i] = divmod(value, base)
        out.extend(chunk)
        return

    low_width = width // 2
    high, low = divmod(value, base ** low_width)
    _fixed_width_digits(high, base, width - low_width, out)
    _fixed_width_digits(low, base, low_width, out)


def integer_to_base_digits(value, base, width=None):
    """
    Convert a non-negative integer to base digit values, most significant first.

    Args:
        value: Integer to convert (>= 0)
        base: Target base (2..65536)
        width: Optional fixed digit count; the result is left-padded with zeros.
            Large widths are split divide-and-conquer style.

    Returns:
        list: Digit values, each in [0, base)

    Raises:
        InvalidBaseError: If base is out of range
        RangeError: If value is negative
        ValueError: If value does not fit in width digits
    """
    validate_base(base, "integer_to_base_digits")
    if value < 0:
        raise RangeError("value", value, "integer_to_base_digits")

    if width is not None:
        if value >= base ** width:
            raise ValueError(f"{value} does not fit in {width} base-{base} digits")
        digits = []
        _fixed_width_digits(value, base, width, digits)
        return digits

    if value == 0:
        return [0]

    result = []
    while value > 0:
        value, remainder = divmod(value, base)
        result.append(remainder)

    result.reverse()
    return result


def base_digits_to_integer(digits, base):
    """
    Convert base digit values back to an integer.

    Args:
        digits: Sequence of digit values, most significant first
        base: Source base (2..65536)

    Returns:
        int: Decoded integer

    Raises:
        InvalidDigitError: If any digit is outside [0, base)
    """
    validate_base(base, "base_digits_to_integer")

    result = 0
    for digit in digits:
        if digit < 0 or digit >= base:
            raise InvalidDigitError(digit, base, "base_digits_to_integer")
        result = result * base + digit

    return result


class AlphanumericRenderer:
    """Renders digits 0-35 as 0-9A-Z, parsing letters case-insensitively."""

    def render_digit(self, digit):
        return ALPHANUMERIC_ALPHABET[digit]

    def parse_char(self, char, base):
        value = ALPHANUMERIC_ALPHABET.find(char.upper())
        if value < 0 or value >= base:
            raise InvalidDigitError(char, base, "from_base_string")
        return value


class CodePointRenderer:
    """Renders each digit as the character with that code point."""

    def render_digit(self, digit):
        return chr(digit)

    def parse_char(self, char, base):
        value = ord(char)
        if value >= base:
            raise InvalidDigitError(char, base, "from_base_string")
        return value


_ALPHANUMERIC = AlphanumericRenderer()
_CODE_POINT = CodePointRenderer()


def renderer_for(base):
    """
    Select the digit renderer for a base.

    Args:
        base: Numeral base (2..65536)

    Returns:
        AlphanumericRenderer for base <= 36, CodePointRenderer otherwise
    """
    validate_base(base, "renderer_for")
    if base <= ALPHANUMERIC_MAX_BASE:
        return _ALPHANUMERIC
    return _CODE_POINT


def to_base_string(value, base):
    """
    Render a non-negative integer as text in the given base.

    Args:
        value: Integer to render
        base: Target base

    Returns:
        str: Textual representation (e.g. 255 in base 16 -> "FF")
    """
    renderer = renderer_for(base)
    return ''.join(renderer.render_digit(d) for d in integer_to_base_digits(value, base))


def from_base_string(text, base):
    """
    Parse text produced by to_base_string (or typed by a user) back to an integer.

    Args:
        text: Encoded string
        base: Source base

    Returns:
        int: Decoded integer

    Raises:
        InvalidDigitError: If text is empty or has a character not valid in base
    """
    renderer = renderer_for(base)
    if not text:
        raise InvalidDigitError(text, base, "from_base_string")

    digits = [renderer.parse_char(char, base) for char in text]
    return base_digits_to_integer(digits, base)
