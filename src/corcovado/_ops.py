"""
Elementwise Operations

Paired traversal of two ranges and the matrix addition/subtraction built
on it. Element order is preserved; output at each index depends only on
the inputs at that index.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any, Callable, Iterable, Iterator

from .error import DimensionMismatchError, TypeMismatchError

if TYPE_CHECKING:
    from ._iterators import LinearIterator
    from ._matrix import Matrix

__all__ = ['combine', 'transform_into', 'add', 'subtract', 'elementwise']


def combine(first: Iterable, second: Iterable, op: Callable[[Any, Any], Any]) -> Iterator:
    """
    Walk two ranges in lockstep, yielding ``op(a, b)`` for each pair.

    Stops as soon as either range is exhausted.
    """
    for a, b in zip(first, second):
        yield op(a, b)


def transform_into(
    out: "LinearIterator",
    first: Iterable,
    second: Iterable,
    op: Callable[[Any, Any], Any],
) -> "LinearIterator":
    """
    Write ``op(a, b)`` for each pair through ``out``.

    Args:
        out: Mutable iterator positioned at the first output element
        first, second: Input ranges
        op: Binary operation

    Returns:
        Iterator one past the last written element
    """
    it = out.copy()
    for value in combine(first, second, op):
        it.value = value
        it.increment()
    return it


def _check_operands(a: "Matrix", b: "Matrix", name: str) -> None:
    if a.rows != b.rows or a.cols != b.cols:
        raise DimensionMismatchError(
            f"Cannot {name} matrices of shape {a.shape} and {b.shape}"
        )
    if a.dtype != b.dtype:
        raise TypeMismatchError(
            f"Cannot {name} matrices of dtype {a.dtype} and {b.dtype}"
        )


def elementwise(a: "Matrix", b: "Matrix", op: Callable[[Any, Any], Any], name: str = "combine") -> "Matrix":
    """
    Build a new matrix from ``op`` applied to each pair of elements.

    The result has the class, dtype and shape of ``a``.

    Raises:
        DimensionMismatchError: If shapes differ
        TypeMismatchError: If dtypes differ
    """
    _check_operands(a, b, name)
    result = a._new_like()
    transform_into(result.begin(), a, b, op)
    return result


def add(a: "Matrix", b: "Matrix") -> "Matrix":
    """Elementwise ``a + b``."""
    return elementwise(a, b, operator.add, "add")


def subtract(a: "Matrix", b: "Matrix") -> "Matrix":
    """Elementwise ``a - b``."""
    return elementwise(a, b, operator.sub, "subtract")
