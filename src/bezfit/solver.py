"""Control-point solver computing interior Bezier control points through a sequence of anchors."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from bezfit.common import (
    AnchorHelper,
    AnchorInput,
    InvalidInputError,
    SingularSystemError,
    SolveMethod,
)
from bezfit.consts import (
    FIRST_RHS_WEIGHTS,
    FIRST_ROW_COEFFS,
    INTERIOR_RHS_WEIGHTS,
    INTERIOR_ROW_COEFFS,
    LAST_RHS_WEIGHTS,
    LAST_ROW_COEFFS,
)

logger = logging.getLogger(__name__)


###############################################################################
# ControlPointPair
###############################################################################


@dataclass(frozen=True, eq=False)
class ControlPointPair:
    """
    The interior control points of a piecewise cubic Bezier curve.

    first[i] and second[i] are the control points P1 and P2 of segment i.
    Both arrays are read-only copies of shape (n_segments, 2).

    Attributes:
        first (NDArray[np.float64]): first control point of each segment
        second (NDArray[np.float64]): second control point of each segment
    """

    first: NDArray[np.float64]
    second: NDArray[np.float64]

    def __post_init__(self):
        first = np.array(self.first, dtype=np.float64).reshape(-1, 2)
        second = np.array(self.second, dtype=np.float64).reshape(-1, 2)
        first.flags.writeable = False
        second.flags.writeable = False
        object.__setattr__(self, "first", first)
        object.__setattr__(self, "second", second)

    def __len__(self) -> int:
        return len(self.first)

    @property
    def is_consistent(self) -> bool:
        """bool: True if first and second hold the same number of points."""
        return len(self.first) == len(self.second)

    def approx_equal(self, other: ControlPointPair, rtol: float = 1e-9, atol: float = 1e-9) -> bool:
        """Check if two control-point pairs are equal within the given tolerances."""
        if not isinstance(other, ControlPointPair):
            return False
        if self.first.shape != other.first.shape or self.second.shape != other.second.shape:
            return False
        return bool(
            np.allclose(self.first, other.first, rtol=rtol, atol=atol)
            and np.allclose(self.second, other.second, rtol=rtol, atol=atol)
        )

    @classmethod
    def empty(cls) -> ControlPointPair:
        """Create a pair without any control points."""
        return cls(np.empty((0, 2)), np.empty((0, 2)))


###############################################################################
# ControlPointSolver
###############################################################################


class ControlPointSolver:
    """Class to compute the control points of a cubic Bezier spline through given anchors.

    The first control points result from one linear system shared by the x- and
    y-coordinates; the second control points follow in closed form.
    """

    @staticmethod
    def coefficient_matrix(n: int) -> NDArray[np.float64]:
        """
        Build the dense n x n coefficient matrix of the control-point system.

        Row 0 is [2, 1, 0, ...], interior rows are [..., 1, 4, 1, ...]
        and the last row is [..., 0, 2, 7].

        Args:
            n (int): number of segments, at least 2

        Returns:
            NDArray[np.float64]: the coefficient matrix
        """
        if n < 2:
            raise InvalidInputError(f"coefficient matrix requires at least 2 segments, got {n}")

        sub, diag, sup = INTERIOR_ROW_COEFFS
        matrix = np.zeros((n, n), dtype=np.float64)
        rows = np.arange(n)
        matrix[rows, rows] = diag
        matrix[rows[1:], rows[:-1]] = sub
        matrix[rows[:-1], rows[1:]] = sup

        matrix[0, 0], matrix[0, 1] = FIRST_ROW_COEFFS
        matrix[n - 1, n - 2], matrix[n - 1, n - 1] = LAST_ROW_COEFFS
        return matrix

    @staticmethod
    def banded_coefficients(n: int) -> NDArray[np.float64]:
        """
        Build the coefficient matrix in the (3, n) banded storage of scipy.linalg.solve_banded.

        Row 0 holds the super-diagonal (shifted right by one),
        row 1 the diagonal and row 2 the sub-diagonal (shifted left by one).
        """
        if n < 2:
            raise InvalidInputError(f"coefficient matrix requires at least 2 segments, got {n}")

        sub, diag, sup = INTERIOR_ROW_COEFFS
        banded = np.zeros((3, n), dtype=np.float64)
        banded[0, 1:] = sup
        banded[1, :] = diag
        banded[2, :-1] = sub

        banded[1, 0], banded[0, 1] = FIRST_ROW_COEFFS
        banded[2, n - 2], banded[1, n - 1] = LAST_ROW_COEFFS
        return banded

    @staticmethod
    def right_hand_side(anchors: NDArray[np.float64]) -> NDArray[np.float64]:
        """
        Build the two-column right-hand side of the control-point system.

        Args:
            anchors (NDArray[np.float64]): anchors of shape (n + 1, 2), n >= 2

        Returns:
            NDArray[np.float64]: right-hand side of shape (n, 2)
        """
        n = len(anchors) - 1
        if n < 2:
            raise InvalidInputError(f"right-hand side requires at least 3 anchors, got {len(anchors)}")

        w_curr, w_next = INTERIOR_RHS_WEIGHTS
        rhs = w_curr * anchors[:-1] + w_next * anchors[1:]

        w_curr, w_next = FIRST_RHS_WEIGHTS
        rhs[0] = w_curr * anchors[0] + w_next * anchors[1]
        w_curr, w_next = LAST_RHS_WEIGHTS
        rhs[n - 1] = w_curr * anchors[n - 1] + w_next * anchors[n]
        return rhs

    @classmethod
    def solve_first(cls, anchors: NDArray[np.float64], method: SolveMethod = SolveMethod.BANDED) -> NDArray[np.float64]:
        """
        Solve the linear system for the first control points of each segment.

        Args:
            anchors (NDArray[np.float64]): anchors of shape (n + 1, 2), n >= 2
            method (SolveMethod, optional): linear solver. Defaults to SolveMethod.BANDED.

        Raises:
            SingularSystemError: if the factorization fails or yields non-finite values

        Returns:
            NDArray[np.float64]: first control points of shape (n, 2)
        """
        n = len(anchors) - 1
        rhs = cls.right_hand_side(anchors)

        try:
            if method is SolveMethod.DENSE:
                first = np.linalg.solve(cls.coefficient_matrix(n), rhs)
            else:
                first = scipy.linalg.solve_banded((1, 1), cls.banded_coefficients(n), rhs, check_finite=False)
        except np.linalg.LinAlgError as err:
            raise SingularSystemError(f"control-point system of size {n} cannot be factorized: {err}") from err

        if not np.all(np.isfinite(first)):
            raise SingularSystemError(f"control-point system of size {n} yields non-finite control points")
        return first

    @classmethod
    def solve(cls, anchors: AnchorInput, method: SolveMethod = SolveMethod.BANDED) -> ControlPointPair:
        """
        Compute both interior control points of every segment through the given anchors.

        For a single segment the control points lie at one and two thirds of the chord.
        Otherwise the first control points are solved from the linear system and
        the second control points follow as
            second[i] = 2 * anchor[i+1] - first[i+1]     for i < n-1
            second[n-1] = (first[n-1] + anchor[n]) / 2

        Args:
            anchors (AnchorInput): at least 2 anchors of shape (n + 1, 2)
            method (SolveMethod, optional): linear solver. Defaults to SolveMethod.BANDED.

        Raises:
            InvalidInputError: if fewer than 2 valid anchors are given
            SingularSystemError: if the linear system cannot be solved

        Returns:
            ControlPointPair: control points of the n segments
        """
        points = AnchorHelper.to_array(anchors, min_count=2)
        n = len(points) - 1
        logger.debug("solving control points for %d segment(s) using %s method", n, method.value)

        if n == 1:
            first = ((2.0 * points[0] + points[1]) / 3.0).reshape(1, 2)
            second = ((points[0] + 2.0 * points[1]) / 3.0).reshape(1, 2)
            return ControlPointPair(first, second)

        first = cls.solve_first(points, method)
        second = np.empty_like(first)
        second[:-1] = 2.0 * points[1:-1] - first[1:]
        second[-1] = (first[-1] + points[-1]) / 2.0
        return ControlPointPair(first, second)


def solve(anchors: AnchorInput, method: SolveMethod = SolveMethod.BANDED) -> ControlPointPair:
    """Compute the control points of the cubic Bezier spline through _anchors_."""
    return ControlPointSolver.solve(anchors, method)
