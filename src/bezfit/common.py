"""Central module containing types, exceptions and anchor handling for curve fitting."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

###############################################################################
# Types
###############################################################################


Point2D = Tuple[float, float]  # immutable (x, y) pair

AnchorInput = Union[Sequence[Sequence[float]], NDArray[np.float64]]


class SolveMethod(Enum):
    """Enum to select the linear solver used for the control points."""

    # banded LU decomposition, O(n)
    BANDED = "banded"
    # dense LU decomposition with partial pivoting, O(n^3)
    DENSE = "dense"


###############################################################################
# Exceptions
###############################################################################


class CurveFitError(Exception):
    """Base exception for curve-fitting errors."""


class InvalidInputError(CurveFitError, ValueError):
    """Raised when anchors or control points do not form a valid fitting input."""


class SingularSystemError(CurveFitError, ArithmeticError):
    """Raised when the control-point system cannot be factorized."""


###############################################################################
# AnchorHelper
###############################################################################


class AnchorHelper:
    """Collection of static methods to normalize anchor input."""

    @staticmethod
    def to_array(anchors: AnchorInput, min_count: int = 0) -> NDArray[np.float64]:
        """
        Copy the given anchors into a read-only float64 array of shape (n, 2).

        The returned array never shares memory with the caller's point store.

        Args:
            anchors (AnchorInput): sequence of (x, y) pairs or an array of shape (n, 2)
            min_count (int, optional): minimum number of anchors required. Defaults to 0.

        Raises:
            InvalidInputError: if the shape is not (n, 2), values are not finite
                or fewer than _min_count_ anchors are given

        Returns:
            NDArray[np.float64]: read-only copy of the anchors
        """
        try:
            arr = np.array(anchors, dtype=np.float64)
        except (TypeError, ValueError) as err:
            raise InvalidInputError(f"anchors cannot be converted to float coordinates: {err}") from err

        if arr.size == 0:
            arr = arr.reshape(0, 2)
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise InvalidInputError(f"anchors must have shape (n, 2), got {arr.shape}")
        if len(arr) < min_count:
            raise InvalidInputError(f"at least {min_count} anchors required, got {len(arr)}")
        if not np.all(np.isfinite(arr)):
            raise InvalidInputError("anchors must contain finite coordinates only")

        arr.flags.writeable = False
        return arr

    @staticmethod
    def to_point(values: Sequence[float]) -> Point2D:
        """Convert an (x, y) pair into a Point2D of plain floats."""
        return (float(values[0]), float(values[1]))
