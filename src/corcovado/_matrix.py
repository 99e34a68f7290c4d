"""
Dense Matrix Container

Row-major, fixed-shape 2-D container. Element (r, c) lives at flat offset
``r * cols + c`` of a single owned buffer.

Construction:
    Matrix(rows, cols)               # default-initialized elements
    Matrix(rows, cols, fill)         # every element == fill
    Matrix([[1, 2], [3, 4]])         # nested literal
    Matrix(other)                    # deep copy
    other.take()                     # move: other becomes 0x0

Invariants (any live, non-moved-from matrix):
    rows > 0, cols > 0, size == rows * cols, len(buffer) == size

A moved-from matrix reports rows == cols == size == 0, iterates as empty,
and raises OutOfRangeError on element access. Copying from it raises
InvalidArgumentError.

Example:
    >>> a = Matrix([[1, 2, 3], [4, 5, 6]], dtype='int32')
    >>> b = Matrix(2, 3, 1, dtype='int32')
    >>> (a + b).tolist()
    [[2, 3, 4], [5, 6, 7]]
    >>> list(a.col(1))
    [2, 5]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._array import Array
from ._config import config
from ._dtypes import DType, normalize_dtype, to_numpy_dtype
from ._iterators import (
    ColumnIterator,
    IteratorRange,
    LinearIterator,
    ReverseIterator,
    RowIterator,
)
from ._ops import add, subtract
from .error import (
    InvalidArgumentError,
    TypeMismatchError,
    check_dims,
    check_index,
)

logger = logging.getLogger("corcovado.matrix")

__all__ = ['Matrix', 'IMat', 'UIMat', 'FMat', 'DMat', 'imat', 'uimat', 'fmat', 'dmat']

DTypeLike = Union[str, DType, type, np.dtype, None]

_MISSING = object()


class Matrix:
    """
    Dense row-major matrix.

    Attributes:
        rows: Number of rows (0 once moved-from)
        cols: Number of columns (0 once moved-from)
        size: rows * cols
        dtype: Element type string
    """

    __slots__ = ('_rows', '_cols', '_size', '_dtype', '_buffer', '_generation', '_default_factory')

    # Set by named specializations; None means any dtype.
    _fixed_dtype: ClassVar[Optional[str]] = None

    def __init__(
        self,
        *args: Any,
        dtype: DTypeLike = None,
        default_factory: Optional[Callable[[], Any]] = None,
    ):
        """
        Create a matrix.

        Args:
            *args: ``(rows, cols)``, ``(rows, cols, fill)``, a nested sequence,
                a 2-D numpy array or another Matrix
            dtype: Element type (default: source dtype, else config default)
            default_factory: Object dtype only; produces default elements

        Raises:
            InvalidArgumentError: On zero dimensions, ragged or empty
                literals, a moved-from source, a conflicting dtype or a
                ``default_factory`` given with a single source argument
        """
        self._generation = 0
        nargs = len(args)
        if nargs == 1:
            if default_factory is not None:
                raise InvalidArgumentError(
                    "default_factory only applies to the (rows, cols) constructors"
                )
            source = args[0]
            if isinstance(source, Matrix):
                self._init_copy(source, dtype)
            elif isinstance(source, np.ndarray):
                self._init_numpy(source, dtype)
            else:
                self._init_nested(source, dtype)
        elif nargs in (2, 3):
            fill = args[2] if nargs == 3 else _MISSING
            self._init_dims(args[0], args[1], fill, dtype, default_factory)
        else:
            raise TypeError(
                f"{type(self).__name__}() takes 1 to 3 positional arguments but {nargs} were given"
            )

    # =========================================================================
    # Construction Helpers
    # =========================================================================

    @classmethod
    def _resolve_dtype(cls, dtype: DTypeLike, fallback: Optional[str] = None) -> str:
        fixed = cls._fixed_dtype
        if dtype is None:
            return fixed or fallback or config.default_dtype
        resolved = normalize_dtype(dtype)
        if fixed is not None and resolved != fixed:
            raise InvalidArgumentError(
                f"{cls.__name__} holds {fixed} elements, got dtype={resolved}"
            )
        return resolved

    def _adopt(self, rows: int, cols: int, buffer: Optional[Array], dtype: str,
               default_factory: Optional[Callable[[], Any]] = None) -> None:
        self._rows = rows
        self._cols = cols
        self._size = rows * cols
        self._dtype = dtype
        self._buffer = buffer
        self._default_factory = default_factory

    def _init_dims(self, rows, cols, fill, dtype, default_factory) -> None:
        rows, cols = check_dims(rows, cols)
        dtype = self._resolve_dtype(dtype)
        if default_factory is not None and dtype != 'object':
            raise InvalidArgumentError("default_factory requires dtype='object'")

        buffer = Array(rows * cols, dtype, default_factory=default_factory)
        if fill is not _MISSING:
            buffer.fill(fill)
        logger.debug("Allocated %dx%d %s matrix", rows, cols, dtype)
        self._adopt(rows, cols, buffer, dtype, default_factory)

    def _init_nested(self, data: Sequence[Sequence[Any]], dtype: DTypeLike) -> None:
        try:
            outer = [list(row) for row in data]
        except TypeError:
            raise InvalidArgumentError(
                "Matrix literal must be a sequence of row sequences"
            ) from None
        if not outer:
            raise InvalidArgumentError("Matrix literal must contain at least one row")

        cols = len(outer[0])
        if cols == 0:
            raise InvalidArgumentError("Matrix literal rows must not be empty")
        for index, row in enumerate(outer):
            if len(row) != cols:
                raise InvalidArgumentError(
                    f"Matrix literal row {index} has {len(row)} elements, expected {cols}"
                )

        dtype = self._resolve_dtype(dtype)
        buffer = Array.from_list([value for row in outer for value in row], dtype)
        logger.debug("Allocated %dx%d %s matrix from literal", len(outer), cols, dtype)
        self._adopt(len(outer), cols, buffer, dtype)

    def _init_numpy(self, data: np.ndarray, dtype: DTypeLike) -> None:
        if data.ndim != 2:
            raise InvalidArgumentError(f"Expected 2D array, got {data.ndim}D")
        rows, cols = check_dims(*data.shape)
        fallback = data.dtype.name if data.dtype.name in {e.value for e in DType} else None
        dtype = self._resolve_dtype(dtype, fallback)
        buffer = Array.from_numpy(data, dtype)
        logger.debug("Allocated %dx%d %s matrix from numpy", rows, cols, dtype)
        self._adopt(rows, cols, buffer, dtype)

    def _init_copy(self, source: "Matrix", dtype: DTypeLike, memo=None) -> None:
        if not source.is_valid:
            raise InvalidArgumentError("Cannot copy from an invalid (moved-from) matrix")
        dtype = self._resolve_dtype(dtype, source._dtype)
        if dtype != source._dtype:
            raise TypeMismatchError(
                f"Cannot copy a {source._dtype} matrix into dtype {dtype}"
            )
        logger.debug("Copied %dx%d %s matrix", source._rows, source._cols, dtype)
        self._adopt(source._rows, source._cols, source._buffer.copy(memo), dtype,
                    source._default_factory)

    def _new_like(self) -> "Matrix":
        """Default-initialized matrix with this matrix's class, shape and dtype."""
        if not self.is_valid:
            raise InvalidArgumentError("Cannot allocate from an invalid (moved-from) matrix")
        return type(self)(self._rows, self._cols, dtype=self._dtype,
                          default_factory=self._default_factory)

    @classmethod
    def from_numpy(cls, data: Any, dtype: DTypeLike = None) -> "Matrix":
        """
        Create a matrix by copying a 2-D array-like.

        Args:
            data: numpy array (or anything ``np.asarray`` accepts), 2-D
            dtype: Element type (default: the array dtype when supported)
        """
        return cls(np.asarray(data), dtype=dtype)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._size

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def dtype(self) -> str:
        return self._dtype

    @property
    def is_valid(self) -> bool:
        """False once the matrix has been moved from."""
        return self._buffer is not None and self._rows > 0 and self._cols > 0

    @property
    def default_factory(self) -> Optional[Callable[[], Any]]:
        return self._default_factory

    # =========================================================================
    # Element Access
    # =========================================================================

    def _offset(self, row: Any, col: Any) -> int:
        r = check_index(row, self._rows, "Row")
        c = check_index(col, self._cols, "Column")
        return r * self._cols + c

    def at(self, row: int, col: int) -> Any:
        """
        Get element at (row, col).

        Raises:
            OutOfRangeError: If row >= rows or col >= cols (row checked first)
        """
        return self._buffer[self._offset(row, col)]

    def set(self, row: int, col: int, value: Any) -> None:
        """
        Set element at (row, col) in place.

        Raises:
            OutOfRangeError: If row >= rows or col >= cols (row checked first)
        """
        self._buffer[self._offset(row, col)] = value

    def __getitem__(self, key) -> Any:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Index must be (row, col) tuple")
        return self.at(key[0], key[1])

    def __setitem__(self, key, value: Any) -> None:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError("Index must be (row, col) tuple")
        self.set(key[0], key[1], value)

    # =========================================================================
    # Iterators
    # =========================================================================

    def begin(self) -> LinearIterator:
        return LinearIterator(self, 0)

    def end(self) -> LinearIterator:
        return LinearIterator(self, self._size)

    def cbegin(self) -> LinearIterator:
        return LinearIterator(self, 0, const=True)

    def cend(self) -> LinearIterator:
        return LinearIterator(self, self._size, const=True)

    def rbegin(self) -> ReverseIterator:
        return ReverseIterator(LinearIterator(self, self._size - 1))

    def rend(self) -> ReverseIterator:
        return ReverseIterator(LinearIterator(self, -1))

    def crbegin(self) -> ReverseIterator:
        return ReverseIterator(LinearIterator(self, self._size - 1, const=True))

    def crend(self) -> ReverseIterator:
        return ReverseIterator(LinearIterator(self, -1, const=True))

    def begin_row(self, row: int) -> RowIterator:
        """
        Iterator at the first element of ``row``.

        Raises:
            OutOfRangeError: If row >= rows
        """
        r = check_index(row, self._rows, "Row")
        return RowIterator(self, r * self._cols)

    def end_row(self, row: int) -> RowIterator:
        """Iterator one past the last element of ``row``."""
        r = check_index(row, self._rows, "Row")
        return RowIterator(self, (r + 1) * self._cols)

    def cbegin_row(self, row: int) -> RowIterator:
        r = check_index(row, self._rows, "Row")
        return RowIterator(self, r * self._cols, const=True)

    def cend_row(self, row: int) -> RowIterator:
        r = check_index(row, self._rows, "Row")
        return RowIterator(self, (r + 1) * self._cols, const=True)

    def begin_col(self, col: int) -> ColumnIterator:
        """
        Strided iterator at the top of ``col``.

        Raises:
            OutOfRangeError: If col >= cols
        """
        c = check_index(col, self._cols, "Column")
        return ColumnIterator(self, c)

    def end_col(self, col: int) -> ColumnIterator:
        """Strided iterator one stride past the bottom of ``col``."""
        c = check_index(col, self._cols, "Column")
        return ColumnIterator(self, c + self._size)

    def cbegin_col(self, col: int) -> ColumnIterator:
        c = check_index(col, self._cols, "Column")
        return ColumnIterator(self, c, const=True)

    def cend_col(self, col: int) -> ColumnIterator:
        c = check_index(col, self._cols, "Column")
        return ColumnIterator(self, c + self._size, const=True)

    def row(self, row: int) -> IteratorRange:
        """Iterable over one row."""
        return IteratorRange(self.begin_row(row), self.end_row(row))

    def col(self, col: int) -> IteratorRange:
        """Iterable over one column."""
        return IteratorRange(self.begin_col(col), self.end_col(col))

    def __iter__(self) -> Iterator[Any]:
        return iter(IteratorRange(self.cbegin(), self.cend()))

    def __reversed__(self) -> Iterator[Any]:
        return iter(IteratorRange(self.crbegin(), self.crend()))

    def __len__(self) -> int:
        return self._size

    # =========================================================================
    # Value Semantics
    # =========================================================================

    def copy(self) -> "Matrix":
        """
        Deep copy.

        Raises:
            InvalidArgumentError: If this matrix was moved from
        """
        return type(self)(self)

    __copy__ = copy

    def __deepcopy__(self, memo) -> "Matrix":
        result = type(self).__new__(type(self))
        result._generation = 0
        memo[id(self)] = result
        result._init_copy(self, None, memo)
        return result

    def assign(self, other: "Matrix") -> "Matrix":
        """
        Copy-assign ``other`` into this matrix.

        The existing buffer is reused when the total size is unchanged,
        otherwise a new one is allocated (invalidating iterators).

        Returns:
            self

        Raises:
            InvalidArgumentError: If ``other`` was moved from
            TypeMismatchError: If dtypes differ
        """
        if other is self:
            return self
        if not other.is_valid:
            raise InvalidArgumentError("Cannot copy from an invalid (moved-from) matrix")
        if other._dtype != self._dtype:
            raise TypeMismatchError(
                f"Cannot assign a {other._dtype} matrix to a {self._dtype} matrix"
            )

        if self._buffer is not None and self._size == other._size:
            self._buffer.copy_from(other._buffer)
            logger.debug("Reused buffer of %d elements on assign", self._size)
        else:
            self._buffer = other._buffer.copy()
            self._generation += 1
            logger.debug("Reallocated buffer %d -> %d elements on assign",
                         self._size, other._size)

        self._rows = other._rows
        self._cols = other._cols
        self._size = other._size
        self._default_factory = other._default_factory
        return self

    def _release(self) -> None:
        self._buffer = None
        self._rows = 0
        self._cols = 0
        self._size = 0
        self._generation += 1

    def take(self) -> "Matrix":
        """
        Move this matrix's buffer into a new matrix.

        O(1). Afterwards this matrix is in the moved-from state
        (rows == cols == size == 0, no buffer).
        """
        moved = object.__new__(type(self))
        moved._generation = 0
        moved._adopt(self._rows, self._cols, self._buffer, self._dtype, self._default_factory)
        logger.debug("Moved %dx%d %s matrix", self._rows, self._cols, self._dtype)
        self._release()
        return moved

    def move_from(self, other: "Matrix") -> "Matrix":
        """
        Move-assign: take ``other``'s buffer and leave it moved-from.

        Moving a matrix into itself is not supported; doing so leaves it
        in the moved-from state.

        Returns:
            self

        Raises:
            TypeMismatchError: If dtypes differ
        """
        if other._dtype != self._dtype:
            raise TypeMismatchError(
                f"Cannot move a {other._dtype} matrix into a {self._dtype} matrix"
            )
        self._buffer = other._buffer
        self._rows = other._rows
        self._cols = other._cols
        self._size = other._size
        self._default_factory = other._default_factory
        self._generation += 1
        logger.debug("Move-assigned %dx%d %s matrix", other._rows, other._cols, other._dtype)
        other._release()
        return self

    # =========================================================================
    # Arithmetic
    # =========================================================================

    def __add__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: Any) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return subtract(self, other)

    # =========================================================================
    # Conversion
    # =========================================================================

    def tolist(self) -> List[List[Any]]:
        """Nested list of rows (empty once moved from)."""
        if self._buffer is None:
            return []
        flat = self._buffer.tolist()
        cols = self._cols
        return [flat[r * cols:(r + 1) * cols] for r in range(self._rows)]

    def to_numpy(self) -> np.ndarray:
        """Copy into a new ``(rows, cols)`` numpy array."""
        if self._buffer is None:
            return np.empty((0, 0), dtype=to_numpy_dtype(self._dtype))
        return self._buffer.to_numpy().reshape(self._rows, self._cols)

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self.tolist() == other.tolist()

    __hash__ = None

    def __repr__(self) -> str:
        name = type(self).__name__
        if self._buffer is None:
            return f"<{name} [moved-from]>"

        display = config.display
        rows = self.tolist()
        if self._size > display.threshold:
            edge = display.edgeitems
            rows = [_elide(row, edge) for row in _elide(rows, edge)]
        body = ",\n ".join(str(row) for row in rows)
        return f"{name}({self._rows}x{self._cols}, dtype={self._dtype},\n[{body}])"


def _elide(items: list, edge: int) -> list:
    if not isinstance(items, list) or len(items) <= 2 * edge:
        return items
    return items[:edge] + ['...'] + items[-edge:]


# =============================================================================
# Named Specializations
# =============================================================================

class IMat(Matrix):
    """Matrix of signed 32-bit integers."""
    __slots__ = ()
    _fixed_dtype = 'int32'


class UIMat(Matrix):
    """Matrix of unsigned 32-bit integers."""
    __slots__ = ()
    _fixed_dtype = 'uint32'


class FMat(Matrix):
    """Matrix of single-precision floats."""
    __slots__ = ()
    _fixed_dtype = 'float32'


class DMat(Matrix):
    """Matrix of double-precision floats."""
    __slots__ = ()
    _fixed_dtype = 'float64'


imat = IMat
uimat = UIMat
fmat = FMat
dmat = DMat
