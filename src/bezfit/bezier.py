"""Cubic Bezier segment value type with evaluation and polygonization."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from bezfit.common import AnchorHelper, InvalidInputError, Point2D


@dataclass(frozen=True)
class CubicSegment:
    """
    One cubic Bezier curve defined by its four control points.

    B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3

    The segment is an immutable value: it holds plain float tuples and
    keeps no reference to the anchors or control points it was built from.
    Calling the segment evaluates B(t); parameters outside [0, 1] extrapolate.

    Attributes:
        p0 (Point2D): start point
        p1 (Point2D): first control point
        p2 (Point2D): second control point
        p3 (Point2D): end point
    """

    p0: Point2D
    p1: Point2D
    p2: Point2D
    p3: Point2D

    @classmethod
    def from_points(cls, points: Union[Sequence[Sequence[float]], NDArray[np.float64]]) -> CubicSegment:
        """Create a segment from four (x, y) points."""
        if len(points) != 4:
            raise InvalidInputError(f"a cubic segment needs 4 points, got {len(points)}")
        pt0, pt1, pt2, pt3 = (AnchorHelper.to_point(point) for point in points)
        return cls(pt0, pt1, pt2, pt3)

    @property
    def control_points(self) -> NDArray[np.float64]:
        """The four control points as a numpy array of shape (4, 2)."""
        return np.array((self.p0, self.p1, self.p2, self.p3), dtype=np.float64)

    def __call__(self, t: float) -> Point2D:
        return self.evaluate(t)

    def evaluate(self, t: float) -> Point2D:
        """
        Evaluate the segment at parameter _t_.

        At t=0 and t=1 the end points are returned unchanged so that
        consecutive segments meet exactly at their shared anchor.
        """
        if t == 0.0:
            return self.p0
        if t == 1.0:
            return self.p3

        omt = 1.0 - t
        b0 = omt * omt * omt
        b1 = 3.0 * omt * omt * t
        b2 = 3.0 * omt * t * t
        b3 = t * t * t
        x = b0 * self.p0[0] + b1 * self.p1[0] + b2 * self.p2[0] + b3 * self.p3[0]
        y = b0 * self.p0[1] + b1 * self.p1[1] + b2 * self.p2[1] + b3 * self.p3[1]
        return (x, y)

    def evaluate_many(self, t_values: Union[Sequence[float], NDArray[np.float64]]) -> NDArray[np.float64]:
        """
        Evaluate the segment at several parameters using vectorized Bernstein weights.

        Args:
            t_values: parameters to evaluate

        Returns:
            NDArray[np.float64]: curve points of shape (len(t_values), 2)
        """
        t = np.asarray(t_values, dtype=np.float64).reshape(-1, 1)
        omt = 1.0 - t

        # Bernstein polynomial weights
        b0 = omt**3
        b1 = 3.0 * omt**2 * t
        b2 = 3.0 * omt * t**2
        b3 = t**3

        pts = self.control_points
        result = b0 * pts[0] + b1 * pts[1] + b2 * pts[2] + b3 * pts[3]

        # exact end points
        result[t[:, 0] == 0.0] = pts[0]
        result[t[:, 0] == 1.0] = pts[3]
        return result

    def derivative(self, t: float) -> Point2D:
        """Evaluate the first derivative B'(t) of the segment."""
        omt = 1.0 - t
        d0 = 3.0 * omt * omt
        d1 = 6.0 * omt * t
        d2 = 3.0 * t * t
        x = d0 * (self.p1[0] - self.p0[0]) + d1 * (self.p2[0] - self.p1[0]) + d2 * (self.p3[0] - self.p2[0])
        y = d0 * (self.p1[1] - self.p0[1]) + d1 * (self.p2[1] - self.p1[1]) + d2 * (self.p3[1] - self.p2[1])
        return (x, y)

    def polygonize(self, steps: int, skip_first: bool = False) -> NDArray[np.float64]:
        """
        Sample the segment at t = i / steps.

        Args:
            steps (int): number of line pieces, at least 1
            skip_first (bool, optional): omit the point at t=0. Defaults to False.

        Returns:
            NDArray[np.float64]: points of shape (steps + 1, 2), or (steps, 2) if _skip_first_
        """
        if steps < 1:
            raise InvalidInputError(f"steps must be at least 1, got {steps}")

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        if skip_first:
            t = t[1:]
        return self.evaluate_many(t)

    def polygonize_inplace(
        self,
        steps: int,
        output_buffer: NDArray[np.float64],
        start_index: int = 0,
        skip_first: bool = False,
    ) -> int:
        """
        Polygonize the segment directly into a pre-allocated buffer of shape (m, 2).
        Uses forward differencing for O(1) per point computation.

        Returns:
            int: number of points written
        """
        # pylint: disable=too-many-locals
        if steps < 1:
            raise InvalidInputError(f"steps must be at least 1, got {steps}")

        h = 1.0 / steps

        # Derive exact differences from the first 4 curve points
        b0_x, b0_y = self.p0
        b1_x, b1_y = self.evaluate(h)
        b2_x, b2_y = self.evaluate(2.0 * h)
        b3_x, b3_y = self.evaluate(3.0 * h)

        # First differences: delta_B = B(h) - B(0)
        dx_first = b1_x - b0_x
        dy_first = b1_y - b0_y

        # Second differences: delta2_B = B(2h) - 2*B(h) + B(0)
        dx_second = b2_x - 2.0 * b1_x + b0_x
        dy_second = b2_y - 2.0 * b1_y + b0_y

        # Third differences (constant for cubic)
        dx_third = b3_x - 3.0 * b2_x + 3.0 * b1_x - b0_x
        dy_third = b3_y - 3.0 * b2_y + 3.0 * b1_y - b0_y

        output_idx = start_index
        if not skip_first:
            output_buffer[output_idx, 0] = b0_x
            output_buffer[output_idx, 1] = b0_y
            output_idx += 1

        x, y = b0_x, b0_y
        for _ in range(1, steps):
            x += dx_first
            y += dy_first
            dx_first += dx_second
            dy_first += dy_second
            dx_second += dx_third
            dy_second += dy_third

            output_buffer[output_idx, 0] = x
            output_buffer[output_idx, 1] = y
            output_idx += 1

        # last point is the exact end point, no accumulated rounding
        output_buffer[output_idx, 0] = self.p3[0]
        output_buffer[output_idx, 1] = self.p3[1]
        output_idx += 1

        return output_idx - start_index
