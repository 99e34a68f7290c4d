"""
Pytest configuration and shared fixtures for corcovado tests.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

import corcovado as cc
from corcovado import Matrix


# Named specialization, dtype and a fill value exactly representable in it.
SPECIALIZATIONS = [
    (cc.imat, 'int32', 10),
    (cc.uimat, 'uint32', 7),
    (cc.fmat, 'float32', 4.5),
    (cc.dmat, 'float64', 12.5),
]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(params=SPECIALIZATIONS, ids=lambda p: p[1])
def specialization(request):
    """(matrix class, dtype string, fill value) for each named specialization."""
    return request.param


@pytest.fixture
def square_2x2():
    """
    Matrix:
    [[1, 2],
     [3, 4]]
    """
    return Matrix([[1, 2], [3, 4]], dtype='int32')


@pytest.fixture
def rect_2x3():
    """
    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return Matrix([[1, 2, 3], [4, 5, 6]], dtype='int32')


@pytest.fixture
def dense_array_3x4():
    """Dense numpy matrix for interop tests."""
    return np.arange(12, dtype=np.float64).reshape(3, 4)


@pytest.fixture(autouse=True)
def reset_config():
    """Restore the global configuration after each test."""
    yield
    cc.config.reset()


# =============================================================================
# Helper Functions
# =============================================================================

def _walk(begin, end):
    """Collect values by stepping ``begin`` until it equals ``end``."""
    it = begin.copy()
    values = []
    while it != end:
        values.append(it.value)
        it.increment()
    return values


@pytest.fixture
def walk():
    """The begin/end stepping helper."""
    return _walk
