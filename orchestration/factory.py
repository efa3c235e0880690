"""
Storage orchestrator factory.
Creates orchestrator instances from environment-style configuration.
"""

from typing import Dict, List, Optional

from pistorage.constant_series import known_constants
from pistorage.constants import (
    DEFAULT_BASES,
    DEFAULT_CONSTANTS,
    DEFAULT_MAX_WORKERS,
    DEFAULT_SEARCH_LIMIT,
    MAX_BASE,
    MIN_BASE
)
from .storage_orchestrator import StorageOrchestrator

UNBOUNDED = 'unbounded'


def _split_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


def _parse_limit(config: Dict[str, Optional[str]], key: str, default: Optional[int]) -> Optional[int]:
    raw = config.get(key)
    if not raw:
        return default
    if raw.strip().lower() == UNBOUNDED:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer or '{UNBOUNDED}', got {raw!r}")
    if limit < 0:
        raise ValueError(f"{key} must be >= 0, got {limit}")
    return limit


class OrchestratorFactory:
    """
    Factory for creating StorageOrchestrator instances.

    Handles parsing and validation of string configuration values.
    """

    @staticmethod
    def create_orchestrator(config: Dict[str, Optional[str]]) -> StorageOrchestrator:
        """
        Create an orchestrator from configuration.

        Args:
            config: Configuration dictionary (values as read from the environment):
                PISTORAGE_CONSTANTS: Comma-separated constant names
                PISTORAGE_BASES: Comma-separated bases
                PISTORAGE_SEARCH_LIMIT: Digits per search, or 'unbounded'
                PISTORAGE_MAX_WORKERS: Search threads
                PISTORAGE_MAX_DECODE_DIGITS: Largest start + length for decode,
                    or 'unbounded' (default: the search limit)

        Returns:
            Configured StorageOrchestrator instance

        Raises:
            ValueError: If a configuration value is malformed
        """
        constants = DEFAULT_CONSTANTS
        raw_constants = config.get('PISTORAGE_CONSTANTS')
        if raw_constants:
            constants = _split_list(raw_constants)
            supported = OrchestratorFactory.get_supported_constants()
            unknown = [name for name in constants if name not in supported]
            if unknown or not constants:
                raise ValueError(
                    f"Invalid PISTORAGE_CONSTANTS value: {raw_constants!r}. "
                    f"Supported constants: {', '.join(supported)}"
                )

        bases = DEFAULT_BASES
        raw_bases = config.get('PISTORAGE_BASES')
        if raw_bases:
            try:
                bases = [int(item) for item in _split_list(raw_bases)]
            except ValueError:
                raise ValueError(
                    f"PISTORAGE_BASES must be a comma-separated list of integers, got {raw_bases!r}"
                )
            invalid = [base for base in bases if base < MIN_BASE or base > MAX_BASE]
            if invalid or not bases:
                raise ValueError(
                    f"PISTORAGE_BASES values must be between {MIN_BASE} and {MAX_BASE}, got {raw_bases!r}"
                )

        search_limit = _parse_limit(config, 'PISTORAGE_SEARCH_LIMIT', DEFAULT_SEARCH_LIMIT)
        max_decode_digits = _parse_limit(config, 'PISTORAGE_MAX_DECODE_DIGITS', search_limit)

        max_workers = DEFAULT_MAX_WORKERS
        raw_workers = config.get('PISTORAGE_MAX_WORKERS')
        if raw_workers:
            try:
                max_workers = int(raw_workers)
            except ValueError:
                raise ValueError(f"PISTORAGE_MAX_WORKERS must be an integer, got {raw_workers!r}")
            if max_workers < 1:
                raise ValueError(f"PISTORAGE_MAX_WORKERS must be >= 1, got {max_workers}")

        return StorageOrchestrator(
            constants=constants,
            bases=bases,
            search_limit=search_limit,
            max_workers=max_workers,
            max_decode_digits=max_decode_digits
        )

    @staticmethod
    def get_supported_constants() -> list:
        """
        Get list of registered constant names.

        Returns:
            list: Supported constants
        """
        return known_constants()
