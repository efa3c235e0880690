"""
Digit Generator
Deterministic, arbitrary-precision fractional digits of the registered constants in any base

Digits are extracted from an error-bounded fixed-point evaluation: both ends of
the error interval must yield the same digits, otherwise precision is raised
and the evaluation repeated. The result never depends on a seed string and
never contains a guessed digit.
"""

import logging

from digitcache.digit_cache import DigitCache
from .base_codec import integer_to_base_digits, validate_base
from .constant_series import fixed_point, validate_constant
from .constants import (
    GUARD_BITS,
    MAX_PRECISION_RETRIES,
    MIN_PREFIX_DIGITS,
    PREFIX_GROWTH_FACTOR,
    DEFAULT_SEARCH_LIMIT
)
from .errors import RangeError
from .sequence_locator import locate

logger = logging.getLogger(__name__)


def compute_fraction_digits(constant, base, count):
    """
    Compute the first count fractional digits of a constant from scratch.

    Args:
        constant: Registered constant name
        base: Numeral base (2..65536)
        count: Number of digits

    Returns:
        list: Digit values, each in [0, base)

    Raises:
        UnknownConstantError: If constant is not registered
        InvalidBaseError: If base is out of range
    """
    validate_constant(constant, "compute_fraction_digits")
    validate_base(base, "compute_fraction_digits")
    if count <= 0:
        return []

    guard = GUARD_BITS
    for _attempt in range(MAX_PRECISION_RETRIES):
        # bit_length() >= log2(base), so bits always covers base**count
        bits = count * base.bit_length() + guard
        approx, err = fixed_point(constant, bits)
        low, high = approx - err, approx + err

        whole = low >> bits
        if high >> bits == whole:
            scale = base ** count
            digits_low = ((low - (whole << bits)) * scale) >> bits
            digits_high = ((high - (whole << bits)) * scale) >> bits
            if digits_low == digits_high:
                return integer_to_base_digits(digits_low, base, width=count)

        logger.debug(
            f"{constant}/base {base}: {count} digits ambiguous at {bits} bits, "
            f"raising guard to {guard * 2}"
        )
        guard *= 2

    raise RuntimeError(
        f"Could not resolve {count} digits of {constant} in base {base} "
        f"after {MAX_PRECISION_RETRIES} precision increases"
    )


def _grow(have):
    return max(have * PREFIX_GROWTH_FACTOR, MIN_PREFIX_DIGITS)


class DigitStream:
    """Read handle on one (constant, base) expansion, backed by a DigitGenerator."""

    def __init__(self, generator, constant, base):
        self.generator = generator
        self.constant = constant
        self.base = base

    def read(self, start, count):
        """Digits [start, start + count) of the stream (0-indexed)."""
        return self.generator.read(self.constant, self.base, start, count)

    def __repr__(self):
        return f"DigitStream({self.constant!r}, base={self.base})"


class DigitGenerator:
    """
    Cached access to constant digit expansions.

    Prefixes are materialized through a DigitCache so that repeated and
    overlapping requests extend one append-only prefix per (constant, base).
    """

    def __init__(self, cache=None):
        """
        Initialize the generator.

        Args:
            cache: DigitCache to materialize prefixes into (default: a new private cache)
        """
        self.cache = cache if cache is not None else DigitCache()

    def _prefix(self, constant, base, count, operation):
        validate_constant(constant, operation)
        validate_base(base, operation)
        return self.cache.get_or_extend(
            constant,
            base,
            count,
            compute=lambda new_count: compute_fraction_digits(constant, base, new_count),
            target=_grow
        )

    def read(self, constant, base, start, count):
        """
        Read a window of the DigitStream.

        Args:
            constant: Constant name
            base: Numeral base
            start: 0-indexed offset of the first digit
            count: Number of digits

        Returns:
            np.ndarray: Read-only digits [start, start + count)

        Raises:
            RangeError: If start or count is negative
        """
        if start < 0:
            raise RangeError("start", start, "read")
        if count < 0:
            raise RangeError("count", count, "read")

        prefix = self._prefix(constant, base, start + count, "read")
        return prefix[start:start + count]

    def digits(self, constant, base, count):
        """
        First count fractional digits of a constant.

        Returns:
            list: Digit values as Python ints
        """
        if count < 0:
            raise RangeError("count", count, "digits")
        return self._prefix(constant, base, count, "digits").tolist()

    def digit_at(self, constant, base, n):
        """
        Digit at 1-indexed position n of the constant's fractional part.

        Example:
            digit_at('pi', 10, 1) -> 1  (pi = 3.1415...)

        Raises:
            RangeError: If n < 1
        """
        if n < 1:
            raise RangeError("n", n, "digit_at", minimum=1)
        return int(self._prefix(constant, base, n, "digit_at")[n - 1])

    def stream(self, constant, base):
        """Validated DigitStream handle for the locator."""
        validate_constant(constant, "stream")
        validate_base(base, "stream")
        return DigitStream(self, constant, base)

    def locate(self, target, constant, base, search_limit=DEFAULT_SEARCH_LIMIT):
        """
        Find the first occurrence of target in a constant's base-`base` expansion.

        Returns:
            dict: {'found': True, 'start': s} or {'found': False}
        """
        return locate(target, self.stream(constant, base), search_limit=search_limit)
