"""
Sequence Locator
Finds the first occurrence of an integer sequence inside a digit stream

Streams are scanned in chunks up to a bounded number of examined digits.
A miss within the bound is reported as {'found': False}; no position is
ever synthesized for it.
"""

import logging

import numpy as np

from .constants import DEFAULT_SEARCH_LIMIT, DEFAULT_CHUNK_SIZE
from .errors import InvalidDigitError, RangeError

logger = logging.getLogger(__name__)

# Upper bound on a single read when the search is unbounded
MAX_UNBOUNDED_CHUNK = 65536


def _integral(target, base):
    values = []
    for value in target:
        try:
            integer = int(value)
        except (TypeError, ValueError):
            raise InvalidDigitError(value, base, "locate")
        if integer != value:
            raise InvalidDigitError(value, base, "locate")
        values.append(integer)
    return values


def locate(target, stream, search_limit=DEFAULT_SEARCH_LIMIT, chunk_size=DEFAULT_CHUNK_SIZE):
    """
    Scan a digit stream for the first offset where target occurs.

    Args:
        target: Sequence of integers to find
        stream: Object with read(start, count) returning digits [start, start + count);
            an optional `base` attribute lets impossible targets return early
        search_limit: Maximum digits to read from the stream (None = unbounded, opt-in)
        chunk_size: Digits requested per read

    Returns:
        dict: {'found': True, 'start': s} with s 0-indexed, or {'found': False}

    Raises:
        RangeError: If search_limit is negative or chunk_size < 1
        InvalidDigitError: If a target value is not an integer
    """
    if search_limit is not None and search_limit < 0:
        raise RangeError("search_limit", search_limit, "locate")
    if chunk_size < 1:
        raise RangeError("chunk_size", chunk_size, "locate", minimum=1)

    base = getattr(stream, 'base', None)
    needle = np.asarray(_integral(target, base), dtype=np.int64)
    length = len(needle)
    if length == 0:
        return {'found': True, 'start': 0}

    if search_limit is not None and length > search_limit:
        logger.debug(f"Target of length {length} exceeds search limit {search_limit}")
        return {'found': False}

    # Digits are in [0, base); anything outside can never match
    if needle.min() < 0 or (base is not None and needle.max() >= base):
        logger.debug(f"Target has values outside [0, {base}) for {stream!r}")
        return {'found': False}

    window = np.zeros(0, dtype=np.int64)
    window_start = 0
    examined = 0
    read_size = chunk_size
    keep = length - 1

    while search_limit is None or examined < search_limit:
        count = read_size if search_limit is None else min(read_size, search_limit - examined)
        chunk = np.asarray(stream.read(examined, count), dtype=np.int64)
        examined += count
        window = np.concatenate([window, chunk])

        last_start = len(window) - length
        if last_start >= 0:
            candidates = np.flatnonzero(window[:last_start + 1] == needle[0])
            for offset in candidates:
                if np.array_equal(window[offset:offset + length], needle):
                    start = window_start + int(offset)
                    logger.debug(f"Found length-{length} target at {start} in {stream!r}")
                    return {'found': True, 'start': start}

        # Carry the tail so matches straddling the chunk boundary are seen
        if len(window) > keep:
            window_start += len(window) - keep
            window = window[len(window) - keep:]

        if search_limit is None:
            read_size = min(read_size * 2, MAX_UNBOUNDED_CHUNK)

    logger.debug(f"Length-{length} target not found in first {examined} digits of {stream!r}")
    return {'found': False}
