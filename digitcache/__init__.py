"""
Digit Cache Package
Contains the in-memory, append-only digit prefix cache
"""

from .digit_cache import DigitCache

__all__ = [
    'DigitCache'
]
