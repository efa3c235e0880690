"""
Pi Storage Package
Locates messages inside the digit expansions of mathematical constants
Contains the digit generator, base/message codecs and sequence locator
"""

from .constants import (
    MIN_BASE,
    MAX_BASE,
    DEFAULT_CONSTANTS,
    DEFAULT_BASES,
    DEFAULT_SEARCH_LIMIT,
    DEFAULT_MAX_WORKERS
)

from .errors import (
    PiStorageError,
    EmptyMessageError,
    UnknownConstantError,
    InvalidBaseError,
    InvalidDigitError,
    InvalidCodePointError,
    SequenceNotFoundError,
    RangeError,
    DecodeLimitError
)

from .constant_series import known_constants, validate_constant

from .base_codec import (
    integer_to_base_digits,
    base_digits_to_integer,
    renderer_for,
    to_base_string,
    from_base_string,
    validate_base
)

from .message_codec import message_to_sequence, sequence_to_message

from .sequence_locator import locate

from .digit_generator import DigitGenerator, DigitStream, compute_fraction_digits

__all__ = [
    # Constants
    'MIN_BASE',
    'MAX_BASE',
    'DEFAULT_CONSTANTS',
    'DEFAULT_BASES',
    'DEFAULT_SEARCH_LIMIT',
    'DEFAULT_MAX_WORKERS',

    # Errors
    'PiStorageError',
    'EmptyMessageError',
    'UnknownConstantError',
    'InvalidBaseError',
    'InvalidDigitError',
    'InvalidCodePointError',
    'SequenceNotFoundError',
    'RangeError',
    'DecodeLimitError',

    # Constant registry
    'known_constants',
    'validate_constant',

    # Base Codec
    'integer_to_base_digits',
    'base_digits_to_integer',
    'renderer_for',
    'to_base_string',
    'from_base_string',
    'validate_base',

    # Message Codec
    'message_to_sequence',
    'sequence_to_message',

    # Sequence Locator
    'locate',

    # Digit Generator
    'DigitGenerator',
    'DigitStream',
    'compute_fraction_digits'
]
