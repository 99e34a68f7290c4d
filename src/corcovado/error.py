"""
Error handling for corcovado.

Error codes follow a C-API style numbering so callers can switch on
``exc.code`` as well as on the exception class.

Two failure kinds exist:

- invalid argument: bad dimensions, ragged literals, operand mismatch,
  copying from a moved-from matrix
- out of range: row/column index not strictly below the dimension
"""

from __future__ import annotations

import operator
from typing import Any, Optional, Tuple


# =============================================================================
# Error Codes
# =============================================================================

# Success
CORCO_OK = 0

# General errors (1-9)
CORCO_ERROR_UNKNOWN = 1

# Argument errors (10-19)
CORCO_ERROR_INVALID_ARGUMENT = 10
CORCO_ERROR_DIMENSION_MISMATCH = 11
CORCO_ERROR_INDEX_OUT_OF_BOUNDS = 14
CORCO_ERROR_INVALID_ITERATOR = 15

# Type errors (20-29)
CORCO_ERROR_TYPE_MISMATCH = 21


_ERROR_MESSAGES = {
    CORCO_OK: "Success",
    CORCO_ERROR_UNKNOWN: "Unknown error",
    CORCO_ERROR_INVALID_ARGUMENT: "Invalid argument",
    CORCO_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    CORCO_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    CORCO_ERROR_INVALID_ITERATOR: "Invalid iterator",
    CORCO_ERROR_TYPE_MISMATCH: "Type mismatch",
}


# =============================================================================
# Exception Classes
# =============================================================================

class CorcoError(Exception):
    """
    Base exception for all corcovado errors.

    Attributes:
        code: Numeric error code (CORCO_ERROR_*)
        message: Human readable message
    """

    default_code = CORCO_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is None:
            code = self.default_code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.code = code
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "CorcoError":
        """Create the matching exception subclass for an error code."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        exc_cls = _CODE_TO_CLASS.get(code, cls)
        return exc_cls(msg, code)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code}, message={self.message!r})"


class InvalidArgumentError(CorcoError, ValueError):
    """Raised for invalid dimensions, ragged input or invalid copy sources."""

    default_code = CORCO_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(InvalidArgumentError):
    """Raised when two operands do not share the same shape."""

    default_code = CORCO_ERROR_DIMENSION_MISMATCH


class TypeMismatchError(InvalidArgumentError):
    """Raised when two matrices with different dtypes are combined."""

    default_code = CORCO_ERROR_TYPE_MISMATCH


class OutOfRangeError(CorcoError, IndexError):
    """Raised when a row/column index is not below its dimension."""

    default_code = CORCO_ERROR_INDEX_OUT_OF_BOUNDS


class InvalidIteratorError(CorcoError, RuntimeError):
    """
    Raised when a stale iterator is used after its matrix reallocated.

    Only raised when ``config.debug.check_iterators`` is enabled.
    """

    default_code = CORCO_ERROR_INVALID_ITERATOR


_CODE_TO_CLASS = {
    CORCO_ERROR_INVALID_ARGUMENT: InvalidArgumentError,
    CORCO_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    CORCO_ERROR_TYPE_MISMATCH: TypeMismatchError,
    CORCO_ERROR_INDEX_OUT_OF_BOUNDS: OutOfRangeError,
    CORCO_ERROR_INVALID_ITERATOR: InvalidIteratorError,
}


# =============================================================================
# Checking Helpers
# =============================================================================

def _as_int(value: Any) -> Optional[int]:
    """Return ``value`` as a plain int, or None if it is not integral."""
    if isinstance(value, bool):
        return None
    try:
        return operator.index(value)
    except TypeError:
        return None


def check_dims(rows: Any, cols: Any) -> Tuple[int, int]:
    """
    Validate matrix dimensions.

    Returns:
        (rows, cols) as plain ints

    Raises:
        InvalidArgumentError: If either dimension is zero, negative or
            not an integer.
    """
    r, c = _as_int(rows), _as_int(cols)
    if r is None or c is None:
        raise InvalidArgumentError(
            f"Matrix dimensions must be integers, got "
            f"({type(rows).__name__}, {type(cols).__name__})"
        )
    if r <= 0 or c <= 0:
        raise InvalidArgumentError("Number of rows/columns must be higher than 0")
    return r, c


def check_index(index: Any, bound: int, what: str) -> int:
    """
    Validate that ``0 <= index < bound``.

    Negative indices are rejected, not wrapped.

    Args:
        index: Index supplied by the caller
        bound: Exclusive upper bound (a matrix dimension)
        what: "Row" or "Column", used in the message

    Returns:
        The index as a plain int

    Raises:
        TypeError: If index is not an integer
        OutOfRangeError: If index is outside [0, bound)
    """
    i = _as_int(index)
    if i is None:
        raise TypeError(f"{what} index must be an integer, got {type(index).__name__}")
    if i < 0 or i >= bound:
        raise OutOfRangeError(f"{what} index out of range")
    return i


__all__ = [
    "CORCO_OK",
    "CORCO_ERROR_UNKNOWN",
    "CORCO_ERROR_INVALID_ARGUMENT",
    "CORCO_ERROR_DIMENSION_MISMATCH",
    "CORCO_ERROR_INDEX_OUT_OF_BOUNDS",
    "CORCO_ERROR_INVALID_ITERATOR",
    "CORCO_ERROR_TYPE_MISMATCH",
    "CorcoError",
    "InvalidArgumentError",
    "DimensionMismatchError",
    "TypeMismatchError",
    "OutOfRangeError",
    "InvalidIteratorError",
    "check_dims",
    "check_index",
]
