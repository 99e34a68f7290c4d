"""
Matrix Iterators

Bidirectional cursors over a matrix buffer, plus the Python-iterable
``IteratorRange`` built from a begin/end pair.

Type Hierarchy:

    LinearIterator              # flat buffer, step 1
    ├── RowIterator             # same mechanics, scoped to one row
    └── ColumnIterator          # step == cols
    ReverseIterator             # adaptor over any of the above

Cursors compare equal when they sit on the same position of the same
buffer. Reading or writing ``value`` outside the buffer raises
OutOfRangeError; positions are never wrapped.

Iterators are not invalidated when their matrix reallocates (size-changing
assign, move). With ``config.debug.check_iterators`` enabled, such a stale
iterator raises InvalidIteratorError instead.

Example:
    >>> m = Matrix([[1, 2], [3, 4]])
    >>> it, end = m.begin_col(1), m.end_col(1)
    >>> while it != end:
    ...     print(it.value)
    ...     it.increment()
    2
    4
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Union

from ._config import config
from .error import InvalidIteratorError, OutOfRangeError

if TYPE_CHECKING:
    from ._matrix import Matrix

__all__ = [
    'LinearIterator',
    'RowIterator',
    'ColumnIterator',
    'ReverseIterator',
    'IteratorRange',
]


# =============================================================================
# Forward Iterators
# =============================================================================

class LinearIterator:
    """
    Cursor over the flat row-major buffer.

    Attributes:
        position: Current flat offset (may be one past either end)
        step: Offset change per increment
        is_const: Whether writes through ``value`` are rejected
    """

    __slots__ = ('_owner', '_buffer', '_pos', '_step', '_const', '_generation')

    def __init__(self, owner: "Matrix", position: int, step: int = 1, const: bool = False):
        self._owner = owner
        self._buffer = owner._buffer
        self._pos = position
        self._step = step
        self._const = const
        self._generation = owner._generation

    @property
    def position(self) -> int:
        return self._pos

    @property
    def step(self) -> int:
        return self._step

    @property
    def is_const(self) -> bool:
        return self._const

    def _check_alive(self) -> None:
        if config.debug.check_iterators and self._owner._generation != self._generation:
            raise InvalidIteratorError(
                "Iterator used after its matrix reallocated its buffer"
            )

    # -------------------------------------------------------------------------
    # Dereference
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """Element at the current position."""
        self._check_alive()
        if self._buffer is None:
            raise OutOfRangeError("Iterator over an empty matrix is not dereferenceable")
        return self._buffer[self._pos]

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._const:
            raise TypeError("Cannot assign through a const iterator")
        self._check_alive()
        if self._buffer is None:
            raise OutOfRangeError("Iterator over an empty matrix is not dereferenceable")
        self._buffer[self._pos] = new_value

    # -------------------------------------------------------------------------
    # Movement
    # -------------------------------------------------------------------------

    def increment(self) -> "LinearIterator":
        """Advance one step (pre-increment); returns self."""
        self._check_alive()
        self._pos += self._step
        return self

    def post_increment(self) -> "LinearIterator":
        """Advance one step; returns a copy at the previous position."""
        previous = self.copy()
        self.increment()
        return previous

    def decrement(self) -> "LinearIterator":
        """Move back one step (pre-decrement); returns self."""
        self._check_alive()
        self._pos -= self._step
        return self

    def post_decrement(self) -> "LinearIterator":
        """Move back one step; returns a copy at the previous position."""
        previous = self.copy()
        self.decrement()
        return previous

    def distance_to(self, other: "LinearIterator") -> int:
        """Number of increments needed to reach ``other``."""
        return (other._pos - self._pos) // self._step

    # -------------------------------------------------------------------------
    # Copy / Compare
    # -------------------------------------------------------------------------

    def copy(self) -> "LinearIterator":
        new = object.__new__(type(self))
        new._owner = self._owner
        new._buffer = self._buffer
        new._pos = self._pos
        new._step = self._step
        new._const = self._const
        new._generation = self._generation
        return new

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearIterator):
            return NotImplemented
        return self._buffer is other._buffer and self._pos == other._pos

    __hash__ = None

    def __repr__(self) -> str:
        kind = "const " if self._const else ""
        return f"<{type(self).__name__} {kind}position={self._pos} step={self._step}>"


class RowIterator(LinearIterator):
    """
    Cursor over one row.

    Mechanics are those of LinearIterator; the row scope comes from the
    begin/end pair ``[row*cols, (row+1)*cols)``.
    """

    __slots__ = ()


class ColumnIterator(LinearIterator):
    """Strided cursor over one column; each step moves ``cols`` elements."""

    __slots__ = ()

    def __init__(self, owner: "Matrix", position: int, const: bool = False):
        super().__init__(owner, position, step=owner.cols, const=const)


# =============================================================================
# Reverse Adaptor
# =============================================================================

class ReverseIterator:
    """
    Adaptor that walks any forward iterator backwards.

    ``increment`` moves the wrapped iterator back and ``decrement`` moves it
    forward. The adaptor dereferences the element the wrapped iterator
    sits on, so ``rbegin`` wraps the last element and ``rend`` the position
    before the first.
    """

    __slots__ = ('_base',)

    def __init__(self, base: LinearIterator):
        self._base = base

    @property
    def base(self) -> LinearIterator:
        """The wrapped forward iterator."""
        return self._base

    @property
    def position(self) -> int:
        return self._base.position

    @property
    def is_const(self) -> bool:
        return self._base.is_const

    @property
    def value(self) -> Any:
        return self._base.value

    @value.setter
    def value(self, new_value: Any) -> None:
        self._base.value = new_value

    def increment(self) -> "ReverseIterator":
        self._base.decrement()
        return self

    def post_increment(self) -> "ReverseIterator":
        previous = self.copy()
        self.increment()
        return previous

    def decrement(self) -> "ReverseIterator":
        self._base.increment()
        return self

    def post_decrement(self) -> "ReverseIterator":
        previous = self.copy()
        self.decrement()
        return previous

    def distance_to(self, other: "ReverseIterator") -> int:
        return other._base.distance_to(self._base)

    def copy(self) -> "ReverseIterator":
        return type(self)(self._base.copy())

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ReverseIterator):
            return NotImplemented
        return self._base == other._base

    __hash__ = None

    def __repr__(self) -> str:
        return f"<ReverseIterator over {self._base!r}>"


AnyIterator = Union[LinearIterator, ReverseIterator]


# =============================================================================
# Range
# =============================================================================

class IteratorRange:
    """
    Python iterable over ``[begin, end)``.

    Each ``iter()`` call walks a fresh copy of ``begin``; the generator it
    returns is single-pass.

    Example:
        >>> list(m.row(0))
        [1, 2]
        >>> list(IteratorRange(m.rbegin(), m.rend()))
        [4, 3, 2, 1]
    """

    __slots__ = ('_begin', '_end')

    def __init__(self, begin: AnyIterator, end: AnyIterator):
        self._begin = begin
        self._end = end

    @property
    def begin(self) -> AnyIterator:
        return self._begin.copy()

    @property
    def end(self) -> AnyIterator:
        return self._end.copy()

    def __iter__(self) -> Iterator[Any]:
        it = self._begin.copy()
        end = self._end
        while it != end:
            yield it.value
            it.increment()

    def cursors(self) -> Iterator[AnyIterator]:
        """Yield a cursor for each position, for writing through ``value``."""
        it = self._begin.copy()
        end = self._end
        while it != end:
            yield it.copy()
            it.increment()

    def __len__(self) -> int:
        return max(self._begin.distance_to(self._end), 0)

    def tolist(self) -> List[Any]:
        return list(self)

    def __repr__(self) -> str:
        return f"IteratorRange({self.tolist()!r})"
