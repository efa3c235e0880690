"""
Message Codec
Converts text messages to code-point sequences and back
"""

from .constants import MAX_CODE_POINT, SURROGATE_MAX, SURROGATE_MIN
from .errors import InvalidCodePointError


def is_character(code_point):
    """True if code_point is a Unicode scalar value (surrogates excluded)."""
    return 0 <= code_point <= MAX_CODE_POINT and not SURROGATE_MIN <= code_point <= SURROGATE_MAX


def message_to_sequence(text):
    """
    Map each character of text to its code point, preserving order.

    Args:
        text: Message string

    Returns:
        list: Code points (ints)

    Raises:
        InvalidCodePointError: If text holds a lone surrogate
    """
    sequence = [ord(char) for char in text]
    for code_point in sequence:
        if not is_character(code_point):
            raise InvalidCodePointError(code_point, "message_to_sequence")
    return sequence


def sequence_to_message(sequence):
    """
    Rebuild text from a code-point sequence.

    Args:
        sequence: Iterable of non-negative integers (numpy integers accepted)

    Returns:
        str: Decoded message

    Raises:
        InvalidCodePointError: If a value is not an integer in [0, 0x10FFFF]
            or falls in the surrogate block 0xD800-0xDFFF
    """
    chars = []
    for value in sequence:
        try:
            code_point = int(value)
        except (TypeError, ValueError):
            raise InvalidCodePointError(value, "sequence_to_message")

        if code_point != value or not is_character(code_point):
            raise InvalidCodePointError(value, "sequence_to_message")
        chars.append(chr(code_point))

    return ''.join(chars)
