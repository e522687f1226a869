"""Test module for FittedCurve in bezfit.curve

The tests are run using pytest.
"""

import numpy as np
import pytest
import svgpathtools

from bezfit.common import InvalidInputError, SolveMethod
from bezfit.consts import DEFAULT_FIT_SETTINGS, FitSettings
from bezfit.curve import FittedCurve

SQUARE_ANCHORS = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]

WAVE_ANCHORS = [(60.0, 80.0), (180.0, 260.0), (320.0, 120.0), (460.0, 300.0), (600.0, 90.0), (720.0, 240.0)]


class TestFittedCurve:
    """Test fitting and sampling a whole curve."""

    def test_fit_segments(self):
        """Fitting creates one segment per anchor pair."""
        curve = FittedCurve.fit(SQUARE_ANCHORS)
        assert len(curve) == 3
        assert len(list(curve)) == 3
        assert curve[0].p0 == (0.0, 0.0)
        assert curve[-1].p3 == (0.0, 10.0)
        assert len(curve.control_points) == 3

    def test_anchors_are_read_only_copy(self):
        """The curve keeps a private read-only copy of the anchors."""
        anchors = np.array(SQUARE_ANCHORS)
        curve = FittedCurve.fit(anchors)
        anchors[0] = (5.0, 5.0)
        assert tuple(curve.anchors[0]) == (0.0, 0.0)
        assert not curve.anchors.flags.writeable

    def test_evaluate_global_parameter(self):
        """Integer parameters hit the anchors."""
        curve = FittedCurve.fit(WAVE_ANCHORS)
        for i, anchor in enumerate(WAVE_ANCHORS):
            assert curve.evaluate(float(i)) == pytest.approx(anchor)
        assert curve.evaluate(1.5) == curve[1](0.5)

    def test_evaluate_out_of_range_fails(self):
        """The global parameter must lie within [0, n]."""
        curve = FittedCurve.fit(SQUARE_ANCHORS)
        with pytest.raises(InvalidInputError):
            curve.evaluate(3.5)
        with pytest.raises(InvalidInputError):
            curve.evaluate(-0.1)

    def test_polygonize_default_samples(self):
        """Default sampling uses 50 steps per segment with shared joints once."""
        curve = FittedCurve.fit(WAVE_ANCHORS)
        polyline = curve.polygonize()
        assert DEFAULT_FIT_SETTINGS.samples_per_segment == 50
        assert polyline.shape == (5 * 50 + 1, 2)
        for i, anchor in enumerate(WAVE_ANCHORS):
            np.testing.assert_allclose(polyline[i * 50], anchor, atol=1e-9)

    def test_polygonize_matches_segments(self):
        """The polyline consists of the segment samples."""
        curve = FittedCurve.fit(SQUARE_ANCHORS)
        polyline = curve.polygonize(8)
        for i, segment in enumerate(curve):
            np.testing.assert_allclose(polyline[i * 8 : (i + 1) * 8 + 1], segment.polygonize(8), atol=1e-9)

    def test_polygonize_rejects_zero_steps(self):
        """At least one step per segment is needed."""
        with pytest.raises(InvalidInputError):
            FittedCurve.fit(SQUARE_ANCHORS).polygonize(0)

    def test_fit_with_dense_settings(self):
        """Dense and banded settings produce the same curve."""
        banded = FittedCurve.fit(WAVE_ANCHORS)
        dense = FittedCurve.fit(WAVE_ANCHORS, FitSettings(method=SolveMethod.DENSE))
        assert banded.control_points.approx_equal(dense.control_points)

    def test_fit_requires_two_anchors(self):
        """A single anchor cannot be fitted."""
        with pytest.raises(InvalidInputError):
            FittedCurve.fit([(3.0, 4.0)])

    def test_str(self):
        """String representation names anchors and segments."""
        assert str(FittedCurve.fit(SQUARE_ANCHORS)) == "FittedCurve(anchors=4, segments=3)"


class TestSvgPathString:
    """Test the SVG path export of a fitted curve."""

    def test_two_anchor_path_string(self):
        """A single segment yields one cubic command."""
        curve = FittedCurve.fit([(0.0, 0.0), (10.0, 0.0)])
        assert curve.svg_path_string() == "M0 0 C3.333333 0 6.666667 0 10 0"

    def test_precision(self):
        """precision limits the number of decimals."""
        curve = FittedCurve.fit([(0.0, 0.0), (10.0, 0.0)])
        assert curve.svg_path_string(precision=2) == "M0 0 C3.33 0 6.67 0 10 0"

    def test_path_string_parses_to_same_curve(self):
        """An independent SVG parser reproduces the fitted segments."""
        curve = FittedCurve.fit(WAVE_ANCHORS, FitSettings(svg_precision=9))
        path = svgpathtools.parse_path(curve.svg_path_string())
        assert len(path) == len(curve)
        for svg_segment, segment in zip(path, curve):
            assert isinstance(svg_segment, svgpathtools.CubicBezier)
            for t in (0.0, 0.3, 0.5, 1.0):
                point = svg_segment.point(t)
                np.testing.assert_allclose((point.real, point.imag), segment(t), atol=1e-6)


class TestFitSettings:
    """Test FitSettings serialization."""

    def test_round_trip_dict(self):
        """Settings survive conversion to and from a dictionary."""
        settings = FitSettings(method=SolveMethod.DENSE, samples_per_segment=20, svg_precision=3)
        assert settings.to_dict() == {"method": "dense", "samples_per_segment": 20, "svg_precision": 3}
        assert FitSettings.from_dict(settings.to_dict()) == settings

    def test_defaults_from_empty_dict(self):
        """Missing keys fall back to the defaults."""
        assert FitSettings.from_dict({}) == DEFAULT_FIT_SETTINGS
