"""
Error taxonomy for the constant-digit encoding system.
Every error is recoverable and carries the operation and offending value.
"""

from .constants import MIN_BASE, MAX_BASE


class PiStorageError(Exception):
    """Base error for all encode/decode failures"""

    def __init__(self, message, operation=None, value=None):
        super().__init__(message)
        self.operation = operation
        self.value = value


class EmptyMessageError(PiStorageError, ValueError):
    """Message to encode has zero length"""

    def __init__(self, operation="encode"):
        super().__init__(f"{operation}: message cannot be empty", operation, "")


class UnknownConstantError(PiStorageError, LookupError):
    """Constant name is not in the registered set"""

    def __init__(self, constant, operation=None, known=None):
        message = f"Unknown constant: {constant!r}"
        if known:
            message += f" (known: {', '.join(known)})"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation, constant)
        self.constant = constant


class InvalidBaseError(PiStorageError, ValueError):
    """Base outside the supported range"""

    def __init__(self, base, operation=None, min_base=MIN_BASE, max_base=MAX_BASE):
        message = f"Base must be an integer between {min_base} and {max_base}, got {base!r}"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation, base)
        self.base = base


class InvalidDigitError(PiStorageError, ValueError):
    """Digit value or character not representable in the base"""

    def __init__(self, digit, base, operation=None):
        message = f"Invalid digit for base {base}: {digit!r}"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation, digit)
        self.digit = digit
        self.base = base


class InvalidCodePointError(PiStorageError, ValueError):
    """Integer cannot be represented as a character"""

    def __init__(self, code_point, operation=None):
        message = f"Invalid code point: {code_point!r}"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation, code_point)
        self.code_point = code_point


class SequenceNotFoundError(PiStorageError, LookupError):
    """No candidate (constant, base) contains the message within the search limit"""

    def __init__(self, message_length, candidates, search_limit, operation="encode"):
        limit = "unbounded" if search_limit is None else f"{search_limit} digits"
        super().__init__(
            f"{operation}: sequence of length {message_length} not found in "
            f"{candidates} candidate stream(s) (search limit: {limit})",
            operation,
            message_length
        )
        self.candidates = candidates
        self.search_limit = search_limit


class RangeError(PiStorageError, ValueError):
    """Start, length or digit position below its minimum"""

    def __init__(self, name, value, operation=None, minimum=0):
        message = f"{name} must be >= {minimum}, got {value!r}"
        if operation:
            message = f"{operation}: {message}"
        super().__init__(message, operation, value)
        self.name = name


class DecodeLimitError(RangeError):
    """Decode would read past the configured digit bound"""

    def __init__(self, start, length, limit, operation="decode"):
        PiStorageError.__init__(
            self,
            f"{operation}: start + length must be <= {limit} "
            f"(max_decode_digits), got {start + length}",
            operation,
            start + length
        )
        self.name = "start + length"
        self.limit = limit
