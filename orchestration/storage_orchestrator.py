"""
Storage Orchestrator
Encodes messages as (constant, base, start, length) coordinates and decodes them back
Coordinates the digit generator, codecs, sequence locator and shared digit cache
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional

from digitcache.digit_cache import DigitCache
from pistorage.base_codec import (
    from_base_string,
    integer_to_base_digits,
    to_base_string,
    validate_base
)
from pistorage.constant_series import validate_constant
from pistorage.constants import (
    DEFAULT_BASES,
    DEFAULT_CONSTANTS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SEARCH_LIMIT
)
from pistorage.digit_generator import DigitGenerator
from pistorage.errors import (
    EmptyMessageError,
    DecodeLimitError,
    InvalidDigitError,
    RangeError,
    SequenceNotFoundError
)
from pistorage.message_codec import message_to_sequence, sequence_to_message

logger = logging.getLogger(__name__)

# Default for max_decode_digits: follow search_limit
SAME_AS_SEARCH_LIMIT = object()


class StorageOrchestrator:
    """
    Public encode/decode contract over constant digit expansions.

    Responsibilities:
    - Search every configured (constant, base) stream for a message's code points
    - Pick the most compact match with a deterministic tie-break
    - Decode coordinates by re-reading the digits they point at
    - Own the digit cache shared by all searches and reads
    """

    def __init__(
        self,
        constants: Optional[List[str]] = None,
        bases: Optional[List[int]] = None,
        search_limit: Optional[int] = DEFAULT_SEARCH_LIMIT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        cache: Optional[DigitCache] = None,
        max_decode_digits: Any = SAME_AS_SEARCH_LIMIT
    ):
        """
        Initialize the orchestrator.

        Args:
            constants: Candidate constants in tie-break order (default: pi, e, phi)
            bases: Candidate bases (default: 16, 32, 64, 256)
            search_limit: Digits examined per candidate search (None = unbounded)
            max_workers: Threads used to run candidate searches (1 = sequential)
            cache: DigitCache to share (default: a new cache owned by this orchestrator)
            max_decode_digits: Largest start + length decode will read
                (default: search_limit; None = unbounded)
        """
        self.constants = [
            validate_constant(name, "configure")
            for name in (DEFAULT_CONSTANTS if constants is None else constants)
        ]
        self.bases = [
            validate_base(base, "configure")
            for base in (DEFAULT_BASES if bases is None else bases)
        ]
        if not self.constants or not self.bases:
            raise ValueError("At least one constant and one base are required")
        if search_limit is not None and search_limit < 0:
            raise RangeError("search_limit", search_limit, "configure")
        if max_workers < 1:
            raise RangeError("max_workers", max_workers, "configure", minimum=1)
        if max_decode_digits is SAME_AS_SEARCH_LIMIT:
            max_decode_digits = search_limit
        if max_decode_digits is not None and max_decode_digits < 0:
            raise RangeError("max_decode_digits", max_decode_digits, "configure")

        self.search_limit = search_limit
        self.max_workers = max_workers
        self.max_decode_digits = max_decode_digits

        self.cache = cache if cache is not None else DigitCache()
        self.generator = DigitGenerator(self.cache)

        logger.debug(
            f"StorageOrchestrator initialized: constants={self.constants}, "
            f"bases={self.bases}, search_limit={search_limit}, workers={max_workers}"
        )

    def _candidates(self):
        return [
            (constant_index, constant, base)
            for constant_index, constant in enumerate(self.constants)
            for base in sorted(set(self.bases))
        ]

    def _search(self, sequence, constant, base):
        result = self.generator.locate(sequence, constant, base, self.search_limit)
        logger.debug(
            f"Search {constant}/base {base}: "
            f"{'found at ' + str(result['start']) if result['found'] else 'not found'}"
        )
        return result

    @staticmethod
    def encoding_size(start: int, length: int, base: int) -> int:
        """
        Textual size of an encoding: digits of start plus digits of length in base.

        Args:
            start: Stream offset
            length: Sequence length
            base: Encoding base

        Returns:
            int: Combined digit count
        """
        return len(integer_to_base_digits(start, base)) + len(integer_to_base_digits(length, base))

    def encode(self, message: str) -> Dict[str, Any]:
        """
        Encode a message as coordinates into a constant's digit expansion.

        Args:
            message: Text to encode (non-empty)

        Returns:
            dict: {'constant', 'base', 'start', 'length'}

        Raises:
            EmptyMessageError: If message is empty
            SequenceNotFoundError: If no candidate stream contains the message
                within search_limit digits
        """
        if not message:
            raise EmptyMessageError("encode")

        sequence = message_to_sequence(message)
        candidates = self._candidates()

        if self.max_workers == 1:
            results = [self._search(sequence, constant, base) for _, constant, base in candidates]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self._search, sequence, constant, base)
                    for _, constant, base in candidates
                ]
                results = [future.result() for future in futures]

        best = None
        best_key = None
        for (constant_index, constant, base), result in zip(candidates, results):
            if not result['found']:
                continue

            # Smallest textual size, then earliest-declared constant, then smallest base
            key = (self.encoding_size(result['start'], len(sequence), base), constant_index, base)
            if best_key is None or key < best_key:
                best_key = key
                best = {
                    'constant': constant,
                    'base': base,
                    'start': result['start'],
                    'length': len(sequence)
                }

        if best is None:
            raise SequenceNotFoundError(len(sequence), len(candidates), self.search_limit)

        logger.info(
            f"Encoded {len(sequence)} code point(s) as {best['constant']}/base {best['base']} "
            f"start={best['start']} length={best['length']}"
        )
        return best

    def decode(self, constant: str, base: int, start: int, length: int) -> str:
        """
        Decode coordinates back to the message they point at.

        Args:
            constant: Constant name
            base: Numeral base
            start: 0-indexed stream offset
            length: Number of digits (code points)

        Returns:
            str: Decoded text

        Raises:
            UnknownConstantError: If constant is not registered
            InvalidBaseError: If base is out of range
            RangeError: If start or length is negative
            DecodeLimitError: If start + length exceeds max_decode_digits
        """
        validate_constant(constant, "decode")
        validate_base(base, "decode")
        if start < 0:
            raise RangeError("start", start, "decode")
        if length < 0:
            raise RangeError("length", length, "decode")
        if self.max_decode_digits is not None and start + length > self.max_decode_digits:
            raise DecodeLimitError(start, length, self.max_decode_digits)

        digits = self.generator.read(constant, base, start, length)
        return sequence_to_message(digits)

    def render_encoding(self, encoding: Dict[str, Any]) -> Dict[str, Any]:
        """
        Render an encoding's start and length as text in its own base.

        Args:
            encoding: Result of encode()

        Returns:
            dict: Copy of encoding with 'start' and 'length' as base-rendered strings
        """
        base = encoding['base']
        return {
            'constant': encoding['constant'],
            'base': base,
            'start': to_base_string(encoding['start'], base),
            'length': to_base_string(encoding['length'], base)
        }

    def parse_rendered(self, constant: str, base: int, start: str, length: str) -> Dict[str, Any]:
        """
        Parse base-rendered start/length text (as shown by render_encoding).

        Returns:
            dict: {'constant', 'base', 'start', 'length'} with integer fields
        """
        validate_base(base, "parse_rendered")
        return {
            'constant': constant,
            'base': base,
            'start': from_base_string(start, base),
            'length': from_base_string(length, base)
        }

    def find_digit_string(
        self,
        digit_text: str,
        constant: str = 'e',
        base: int = 10
    ) -> Dict[str, Any]:
        """
        Locate a typed digit string (e.g. "1828") in a constant's expansion.

        Args:
            digit_text: Digits in the base's alphanumeric rendering
            constant: Constant to search (default: e)
            base: Base of the digits (default: 10)

        Returns:
            dict: {'found': True, 'start': s, 'position': s + 1} or {'found': False}

        Raises:
            InvalidDigitError: If digit_text is empty or has characters invalid in base
        """
        validate_constant(constant, "find_digit_string")
        validate_base(base, "find_digit_string")
        if not digit_text:
            raise InvalidDigitError(digit_text, base, "find_digit_string")

        target = [from_base_string(char, base) for char in digit_text]
        result = self.generator.locate(target, constant, base, self.search_limit)
        if result['found']:
            result['position'] = result['start'] + 1
        return result

    def digits(self, constant: str, base: int, count: int) -> List[int]:
        """First count fractional digits of a constant in base."""
        return self.generator.digits(constant, base, count)

    def get_cache_stats(self) -> Dict[str, Any]:
        """
        Get digit cache statistics.

        Returns:
            dict: Cache statistics
        """
        return self.cache.get_stats()
