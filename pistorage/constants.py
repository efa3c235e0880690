"""
Pi Storage Constants
Configuration defaults used throughout the constant-digit encoding system
"""

# Supported numeral bases (Base Codec and Digit Generator)
MIN_BASE = 2
MAX_BASE = 65536

# Bases up to this value render as 0-9A-Z, above it as one code point per digit
ALPHANUMERIC_MAX_BASE = 36
ALPHANUMERIC_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Encoder candidate menu (declaration order is the tie-break order)
DEFAULT_CONSTANTS = ['pi', 'e', 'phi']
DEFAULT_BASES = [16, 32, 64, 256]

# Maximum digits the Sequence Locator examines per (constant, base) search
DEFAULT_SEARCH_LIMIT = 10000

# Digits pulled from a stream per locator read
DEFAULT_CHUNK_SIZE = 1024

# Worker threads used by encode() to run candidate searches
DEFAULT_MAX_WORKERS = 4

# Extra fixed-point bits beyond what the requested digits need
GUARD_BITS = 32

# Precision retries before the generator gives up (each retry doubles the guard)
MAX_PRECISION_RETRIES = 16

# Smallest prefix materialized on a cache miss
MIN_PREFIX_DIGITS = 256

# Prefix growth multiplier on extension
PREFIX_GROWTH_FACTOR = 2

# Largest Unicode code point (Message Codec)
MAX_CODE_POINT = 0x10FFFF

# UTF-16 surrogate block: code points here are not characters
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF
