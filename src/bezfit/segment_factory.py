"""Factory packaging anchors and control points into per-segment Bezier evaluators."""

from __future__ import annotations

from typing import List

from bezfit.bezier import CubicSegment
from bezfit.common import AnchorHelper, AnchorInput, InvalidInputError, SolveMethod
from bezfit.solver import ControlPointPair, ControlPointSolver


class SegmentFactory:
    """Collection of static methods to build cubic segments from fitted control points."""

    @staticmethod
    def build_segments(anchors: AnchorInput, control_points: ControlPointPair) -> List[CubicSegment]:
        """
        Build one cubic segment per consecutive anchor pair, in anchor order.

        Segment i is (anchor[i], first[i], second[i], anchor[i+1]), so consecutive
        segments share their anchor end points exactly.

        Args:
            anchors (AnchorInput): anchors of shape (n + 1, 2)
            control_points (ControlPointPair): control points of the n segments

        Raises:
            InvalidInputError: if the number of control points is not len(anchors) - 1

        Returns:
            List[CubicSegment]: the n segments
        """
        points = AnchorHelper.to_array(anchors)
        if not control_points.is_consistent:
            raise InvalidInputError(
                f"first and second control points differ in length: "
                f"{len(control_points.first)} != {len(control_points.second)}"
            )

        n_segments = len(control_points)
        if n_segments == 0 and len(points) < 2:
            return []
        if n_segments != len(points) - 1:
            raise InvalidInputError(
                f"{len(points)} anchors require {max(len(points) - 1, 0)} control point pairs, got {n_segments}"
            )

        return [
            CubicSegment.from_points(
                (points[i], control_points.first[i], control_points.second[i], points[i + 1])
            )
            for i in range(n_segments)
        ]


def build_segments(anchors: AnchorInput, control_points: ControlPointPair) -> List[CubicSegment]:
    """Build the cubic segments through _anchors_ from the given control points."""
    return SegmentFactory.build_segments(anchors, control_points)


def fit_segments(anchors: AnchorInput, method: SolveMethod = SolveMethod.BANDED) -> List[CubicSegment]:
    """Fit a smooth piecewise cubic Bezier curve through _anchors_ and return its segments."""
    points = AnchorHelper.to_array(anchors, min_count=2)
    return SegmentFactory.build_segments(points, ControlPointSolver.solve(points, method))
