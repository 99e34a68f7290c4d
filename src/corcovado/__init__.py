"""
corcovado - Dense Matrix Container

A fixed-shape, row-major 2-D container with:
- Validated construction (dimensions, fill value, nested literals)
- Bounds-checked element access
- Linear, row, column (strided) and reverse iteration
- Value semantics: deep copy and destructive move
- Elementwise addition and subtraction

Architecture:
    ┌──────────────────────────────────────────────┐
    │   Matrix  (IMat / UIMat / FMat / DMat)       │
    ├──────────────────────────────────────────────┤
    │  Array buffer     │  Iterators  │  ops       │
    └──────────────────────────────────────────────┘

Example:
    >>> import corcovado as cc
    >>> a = cc.imat([[1, 2, 3], [4, 5, 6]])
    >>> b = cc.imat(2, 3, 1)
    >>> (a + b).tolist()
    [[2, 3, 4], [5, 6, 7]]
    >>> list(a.row(1))
    [4, 5, 6]
    >>> moved = a.take()
    >>> a.shape
    (0, 0)
"""

__version__ = '0.1.0'

from ._array import Array

from ._dtypes import (
    DType,
    int32,
    int64,
    uint8,
    uint32,
    uint64,
    float32,
    float64,
    object_,
    normalize_dtype,
    validate_dtype,
)

from ._config import (
    CorcoConfig,
    DisplayConfig,
    DebugConfig,
    DefaultsConfig,
    config,
    get_config,
    set_check_iterators,
    set_default_dtype,
)

from .error import (
    CorcoError,
    InvalidArgumentError,
    DimensionMismatchError,
    TypeMismatchError,
    OutOfRangeError,
    InvalidIteratorError,
)

from ._iterators import (
    LinearIterator,
    RowIterator,
    ColumnIterator,
    ReverseIterator,
    IteratorRange,
)

from ._ops import (
    combine,
    transform_into,
    add,
    subtract,
)

from ._matrix import (
    Matrix,
    IMat,
    UIMat,
    FMat,
    DMat,
    imat,
    uimat,
    fmat,
    dmat,
)

__all__ = [
    # Version
    '__version__',

    # Core classes
    'Matrix',
    'Array',

    # Named specializations
    'IMat',
    'UIMat',
    'FMat',
    'DMat',
    'imat',
    'uimat',
    'fmat',
    'dmat',

    # Iterators
    'LinearIterator',
    'RowIterator',
    'ColumnIterator',
    'ReverseIterator',
    'IteratorRange',

    # Elementwise operations
    'combine',
    'transform_into',
    'add',
    'subtract',

    # Type constants
    'DType',
    'int32',
    'int64',
    'uint8',
    'uint32',
    'uint64',
    'float32',
    'float64',
    'object_',
    'normalize_dtype',
    'validate_dtype',

    # Configuration
    'CorcoConfig',
    'DisplayConfig',
    'DebugConfig',
    'DefaultsConfig',
    'config',
    'get_config',
    'set_check_iterators',
    'set_default_dtype',

    # Errors
    'CorcoError',
    'InvalidArgumentError',
    'DimensionMismatchError',
    'TypeMismatchError',
    'OutOfRangeError',
    'InvalidIteratorError',
]
