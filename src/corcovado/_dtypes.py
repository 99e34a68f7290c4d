"""
Data Type Definitions

Provides type-safe dtype constants and validation for matrix elements.
"""

from typing import Union
from enum import Enum

import numpy as np

__all__ = [
    'DType',
    'int32', 'int64', 'uint8', 'uint32', 'uint64',
    'float32', 'float64', 'object_',
    'normalize_dtype', 'validate_dtype', 'to_numpy_dtype',
]


class DType(Enum):
    """
    Element Type Enumeration.

    Numeric members are stored in a contiguous ctypes buffer. ``object``
    stores arbitrary Python objects in a list.

    Example:
        >>> from corcovado import Matrix, DType
        >>> m = Matrix(2, 3, dtype=DType.int32)
        >>>
        >>> # Or use module-level constants
        >>> import corcovado as cc
        >>> m = Matrix(2, 3, dtype=cc.float32)
    """

    int32 = 'int32'
    int64 = 'int64'
    uint8 = 'uint8'
    uint32 = 'uint32'
    uint64 = 'uint64'
    float32 = 'float32'
    float64 = 'float64'
    object = 'object'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self.name}"


# =============================================================================
# Module-Level Constants (For Clean Syntax)
# =============================================================================

int32 = DType.int32
int64 = DType.int64
uint8 = DType.uint8
uint32 = DType.uint32
uint64 = DType.uint64
float32 = DType.float32
float64 = DType.float64
object_ = DType.object


_VALID = frozenset(e.value for e in DType)


# =============================================================================
# Type Utilities
# =============================================================================

def normalize_dtype(dtype: Union[str, DType, type, np.dtype]) -> str:
    """
    Normalize dtype to string.

    Accepts DType members, dtype strings and NumPy dtypes or scalar types.

    Example:
        >>> normalize_dtype(DType.float32)
        'float32'
        >>> normalize_dtype(np.int32)
        'int32'
    """
    if isinstance(dtype, DType):
        return dtype.value
    if isinstance(dtype, str):
        validate_dtype(dtype)
        return dtype
    if isinstance(dtype, np.dtype) or (isinstance(dtype, type) and issubclass(dtype, np.generic)):
        name = np.dtype(dtype).name
        validate_dtype(name)
        return name
    raise TypeError(f"dtype must be str, DType or numpy dtype, got {type(dtype)}")


def validate_dtype(dtype: str) -> None:
    """
    Validate dtype string.

    Raises:
        ValueError: If dtype is not supported
    """
    if dtype not in _VALID:
        raise ValueError(f"Invalid dtype: {dtype}. Valid: {sorted(_VALID)}")


def to_numpy_dtype(dtype: Union[str, DType]) -> np.dtype:
    """Get numpy dtype equivalent."""
    return np.dtype(normalize_dtype(dtype))
