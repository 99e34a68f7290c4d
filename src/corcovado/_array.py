"""
Contiguous Element Buffer

Owned, fixed-length storage behind every Matrix. Numeric dtypes live in a
single ctypes array (contiguous, zero-initialized like ``new T[n]()``);
the object dtype keeps a Python list.

Indices are never wrapped: a negative or too-large index raises.
"""

import copy as _copy
import ctypes
from typing import Any, Callable, List, Optional, Union

import numpy as np

from ._dtypes import DType, normalize_dtype, to_numpy_dtype
from .error import InvalidArgumentError, OutOfRangeError

__all__ = ['Array']


# =============================================================================
# Type Mapping
# =============================================================================

_CTYPE_MAP = {
    'int32': ctypes.c_int32,
    'int64': ctypes.c_int64,
    'uint8': ctypes.c_uint8,
    'uint32': ctypes.c_uint32,
    'uint64': ctypes.c_uint64,
    'float32': ctypes.c_float,
    'float64': ctypes.c_double,
}


# =============================================================================
# Array Class
# =============================================================================

class Array:
    """
    Fixed-length contiguous buffer.

    Attributes:
        dtype (str): Element type ('float32', 'int32', 'object', ...)
        size (int): Number of elements
        nbytes (int): Total bytes (0 for object storage)

    Example:
        >>> buf = Array(6, dtype='int32')
        >>> buf[0] = 7
        >>> buf.tolist()
        [7, 0, 0, 0, 0, 0]
    """

    def __init__(
        self,
        size: int,
        dtype: Union[str, DType] = 'float64',
        default_factory: Optional[Callable[[], Any]] = None,
    ):
        """
        Allocate a default-initialized buffer.

        Args:
            size: Number of elements
            dtype: Data type (string or DType enum)
            default_factory: Object dtype only; called once per element
        """
        if size < 0:
            raise ValueError(f"Array size must be non-negative, got {size}")

        self._size = size
        self._dtype = normalize_dtype(dtype)
        self._ctype = _CTYPE_MAP.get(self._dtype)

        if self._ctype is None:
            if default_factory is None:
                self._data = [None] * size
            else:
                self._data = [default_factory() for _ in range(size)]
        else:
            if default_factory is not None:
                raise ValueError("default_factory is only supported for the object dtype")
            self._data = (self._ctype * size)()

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._size

    @property
    def dtype(self) -> str:
        """Data type string."""
        return self._dtype

    @property
    def itemsize(self) -> int:
        """Bytes per element (0 for object storage)."""
        if self._ctype is None:
            return 0
        return ctypes.sizeof(self._ctype)

    @property
    def nbytes(self) -> int:
        """Total bytes."""
        return self._size * self.itemsize

    @property
    def is_object(self) -> bool:
        return self._ctype is None

    # -------------------------------------------------------------------------
    # Initialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def from_list(cls, data: List, dtype: Union[str, DType] = 'float64') -> 'Array':
        """Create array from a flat Python list."""
        arr = cls(len(data), dtype)
        for i, val in enumerate(data):
            arr._store(i, val)
        return arr

    @classmethod
    def from_numpy(cls, data: np.ndarray, dtype: Union[str, DType, None] = None) -> 'Array':
        """
        Create array by copying a numpy array in C order.

        Args:
            data: Any-dimensional numpy array, flattened row-major
            dtype: Target dtype (default: the array's own dtype)

        Raises:
            InvalidArgumentError: If the values would change kind, e.g.
                floats into an integer buffer
        """
        if dtype is None:
            dtype = data.dtype
        arr = cls(data.size, dtype)
        flat = np.ravel(data, order='C')
        target = to_numpy_dtype(arr._dtype)
        if arr._ctype is not None and not np.can_cast(flat.dtype, target, casting='same_kind'):
            raise InvalidArgumentError(
                f"Cannot store {flat.dtype} values in a {arr._dtype} buffer"
            )
        if arr._ctype is None:
            arr._data[:] = flat.tolist()
        elif arr._size:
            np.ctypeslib.as_array(arr._data)[:] = flat
        return arr

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check(self, idx: int) -> None:
        if idx < 0 or idx >= self._size:
            raise OutOfRangeError(f"Index {idx} out of bounds [0, {self._size})")

    def __getitem__(self, idx: int):
        self._check(idx)
        return self._data[idx]

    def __setitem__(self, idx: int, value):
        self._check(idx)
        self._store(idx, value)

    def _store(self, idx: int, value) -> None:
        try:
            self._data[idx] = value
        except TypeError as e:
            raise InvalidArgumentError(
                f"Cannot store {type(value).__name__} value {value!r} as {self._dtype}"
            ) from e

    def __len__(self) -> int:
        return self._size

    def __iter__(self):
        return iter(self._data)

    # -------------------------------------------------------------------------
    # Bulk Operations
    # -------------------------------------------------------------------------

    def fill(self, value) -> None:
        """Fill array with a constant value."""
        if self._size:
            self._store(0, value)
            self._data[:] = [value] * self._size

    def copy(self, memo: Optional[dict] = None) -> 'Array':
        """Create an independent copy. Object elements are deep-copied."""
        new = Array(self._size, self._dtype)
        new.copy_from(self, memo)
        return new

    def copy_from(self, other: 'Array', memo: Optional[dict] = None) -> None:
        """
        Overwrite contents with ``other`` without reallocating.

        Object elements are deep-copied so the two buffers share nothing;
        ``memo`` is forwarded to ``copy.deepcopy``.

        Raises:
            ValueError: If sizes or dtypes differ
        """
        if other._size != self._size or other._dtype != self._dtype:
            raise ValueError(
                f"Cannot copy {other._dtype}[{other._size}] into "
                f"{self._dtype}[{self._size}]"
            )
        if self._ctype is None:
            self._data[:] = _copy.deepcopy(other._data, memo)
        elif self._size:
            ctypes.memmove(
                ctypes.addressof(self._data),
                ctypes.addressof(other._data),
                self.nbytes,
            )

    def tolist(self) -> List:
        """Convert to Python list."""
        return list(self._data)

    def to_numpy(self) -> np.ndarray:
        """Copy into a new 1-D numpy array."""
        np_dtype = to_numpy_dtype(self._dtype)
        if self._ctype is None:
            out = np.empty(self._size, dtype=np_dtype)
            for i, val in enumerate(self._data):
                out[i] = val
            return out
        if self._size == 0:
            return np.empty(0, dtype=np_dtype)
        return np.ctypeslib.as_array(self._data).copy()

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        if self._size <= 6:
            data_str = str(self.tolist())
        else:
            values = self.tolist()
            data_str = str(values[:3] + ['...'] + values[-3:])
        return f"Array({data_str}, dtype={self._dtype})"
