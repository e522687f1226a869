"""Fitted piecewise cubic Bezier curve through a sequence of anchors."""

from __future__ import annotations

import logging
import math
from typing import Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from bezfit.bezier import CubicSegment
from bezfit.common import AnchorHelper, AnchorInput, InvalidInputError, Point2D
from bezfit.consts import DEFAULT_FIT_SETTINGS, FitSettings
from bezfit.segment_factory import SegmentFactory
from bezfit.solver import ControlPointPair, ControlPointSolver

logger = logging.getLogger(__name__)


###############################################################################
# FittedCurve
###############################################################################
class FittedCurve:
    """
    A smooth curve of cubic Bezier segments passing through every anchor.

    The curve owns read-only copies of the anchors and control points
    and behaves like a read-only sequence of its segments.
    """

    _anchors: NDArray[np.float64]
    _control_points: ControlPointPair
    _segments: Tuple[CubicSegment, ...]
    _settings: FitSettings

    def __init__(
        self,
        anchors: AnchorInput,
        control_points: ControlPointPair,
        settings: FitSettings = DEFAULT_FIT_SETTINGS,
    ):
        """Initialize the curve from anchors and their already solved control points.

        Args:
            anchors: at least 2 anchors of shape (n + 1, 2)
            control_points: control points of the n segments
            settings: sampling and output settings. Defaults to DEFAULT_FIT_SETTINGS.
        """
        self._anchors = AnchorHelper.to_array(anchors, min_count=2)
        self._control_points = control_points
        self._segments = tuple(SegmentFactory.build_segments(self._anchors, control_points))
        self._settings = settings

    @classmethod
    def fit(cls, anchors: AnchorInput, settings: FitSettings = DEFAULT_FIT_SETTINGS) -> FittedCurve:
        """
        Fit a curve through the given anchors.

        Args:
            anchors (AnchorInput): at least 2 anchors of shape (n + 1, 2)
            settings (FitSettings, optional): solver and sampling settings. Defaults to DEFAULT_FIT_SETTINGS.

        Raises:
            InvalidInputError: if fewer than 2 valid anchors are given
            SingularSystemError: if the control-point system cannot be solved

        Returns:
            FittedCurve: the fitted curve
        """
        points = AnchorHelper.to_array(anchors, min_count=2)
        control_points = ControlPointSolver.solve(points, settings.method)
        return cls(points, control_points, settings)

    @property
    def anchors(self) -> NDArray[np.float64]:
        """The anchors as a read-only numpy array of shape (n + 1, 2)."""
        return self._anchors

    @property
    def control_points(self) -> ControlPointPair:
        """The interior control points of all segments."""
        return self._control_points

    @property
    def segments(self) -> Tuple[CubicSegment, ...]:
        """The segments in anchor order."""
        return self._segments

    @property
    def settings(self) -> FitSettings:
        """The settings used for sampling and output."""
        return self._settings

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[CubicSegment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> CubicSegment:
        return self._segments[index]

    def evaluate(self, u: float) -> Point2D:
        """
        Evaluate the curve at the global parameter _u_ in [0, n].

        The integer part of _u_ selects the segment, the fractional part is the
        local parameter. u == n evaluates the last segment at t=1.
        """
        n_segments = len(self._segments)
        if not 0.0 <= u <= n_segments:
            raise InvalidInputError(f"curve parameter must be in [0, {n_segments}], got {u}")
        index = min(int(math.floor(u)), n_segments - 1)
        return self._segments[index].evaluate(u - index)

    def polygonize(self, steps_per_segment: Optional[int] = None) -> NDArray[np.float64]:
        """
        Sample the whole curve into a polyline.

        Shared joint points appear only once.

        Args:
            steps_per_segment (Optional[int], optional): line pieces per segment.
                Defaults to settings.samples_per_segment.

        Returns:
            NDArray[np.float64]: polyline of shape (n * steps_per_segment + 1, 2)
        """
        steps = self._settings.samples_per_segment if steps_per_segment is None else steps_per_segment
        if steps < 1:
            raise InvalidInputError(f"steps_per_segment must be at least 1, got {steps}")

        polyline = np.empty((len(self._segments) * steps + 1, 2), dtype=np.float64)
        array_index = 0
        for seg_idx, segment in enumerate(self._segments):
            array_index += segment.polygonize_inplace(steps, polyline, array_index, skip_first=seg_idx > 0)

        logger.debug("polygonized %d segment(s) into %d points", len(self._segments), array_index)
        return polyline

    def svg_path_string(self, precision: Optional[int] = None) -> str:
        """
        The curve as an absolute SVG path string "M x0 y0 C x1 y1 x2 y2 x3 y3 ...".

        Args:
            precision (Optional[int], optional): maximum number of decimals.
                Defaults to settings.svg_precision.

        Returns:
            str: the SVG path string
        """
        digits = self._settings.svg_precision if precision is None else precision

        def fmt(point: Point2D) -> str:
            return f"{_format_number(point[0], digits)} {_format_number(point[1], digits)}"

        commands: List[str] = [f"M{fmt(self._segments[0].p0)}"]
        for segment in self._segments:
            commands.append(f"C{fmt(segment.p1)} {fmt(segment.p2)} {fmt(segment.p3)}")
        return " ".join(commands)

    def __str__(self):
        return f"FittedCurve(anchors={len(self._anchors)}, segments={len(self._segments)})"


def _format_number(value: float, precision: int) -> str:
    text = f"{round(value, precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text
