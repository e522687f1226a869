"""Test module for bezfit.common

The tests are run using pytest.
"""

import numpy as np
import pytest

from bezfit.common import AnchorHelper, InvalidInputError


def test_to_array_from_tuples():
    """Positive test case for to_array with a list of tuples"""
    arr = AnchorHelper.to_array([(0, 0), (1, 2)])
    assert arr.dtype == np.float64
    assert arr.shape == (2, 2)


def test_to_array_returns_read_only_copy():
    """to_array copies the input and returns a read-only array"""
    anchors = np.array([[0.0, 0.0], [1.0, 2.0]])
    arr = AnchorHelper.to_array(anchors)
    assert not np.shares_memory(arr, anchors)
    with pytest.raises(ValueError, match="read-only"):
        arr[0, 0] = 5.0


def test_to_array_empty():
    """An empty sequence becomes an array of shape (0, 2)"""
    assert AnchorHelper.to_array([]).shape == (0, 2)


@pytest.mark.parametrize(
    "anchors",
    [
        [1.0, 2.0],
        [(1.0, 2.0, 3.0)],
        [("a", "b")],
        [(0.0, float("inf"))],
    ],
)
def test_to_array_negative(anchors):
    """Negative test cases for to_array"""
    with pytest.raises(InvalidInputError):
        AnchorHelper.to_array(anchors)


def test_to_array_min_count():
    """to_array enforces the minimum number of anchors"""
    with pytest.raises(InvalidInputError, match="at least 2 anchors"):
        AnchorHelper.to_array([(0.0, 0.0)], min_count=2)


def test_to_point():
    """to_point returns a tuple of plain floats"""
    point = AnchorHelper.to_point(np.array([1, 2], dtype=np.int64))
    assert point == (1.0, 2.0)
    assert all(isinstance(value, float) for value in point)
