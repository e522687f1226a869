"""Central module containing constants and settings for curve fitting"""

from __future__ import annotations

from dataclasses import dataclass

from bezfit.common import SolveMethod

###############################################################################
# Linear system coefficients
###############################################################################

# Row 0: (diagonal, super-diagonal)
FIRST_ROW_COEFFS = (2.0, 1.0)
# Rows 1..n-2: (sub-diagonal, diagonal, super-diagonal)
INTERIOR_ROW_COEFFS = (1.0, 4.0, 1.0)
# Row n-1: (sub-diagonal, diagonal)
LAST_ROW_COEFFS = (2.0, 7.0)

# Right-hand side weights (a[i], a[i+1]) per row type
FIRST_RHS_WEIGHTS = (1.0, 2.0)
INTERIOR_RHS_WEIGHTS = (4.0, 2.0)
LAST_RHS_WEIGHTS = (8.0, 1.0)

###############################################################################
# Sampling and output
###############################################################################

SAMPLES_PER_SEGMENT = 50
SVG_PRECISION = 6

CURVE_STROKE = "blue"
CURVE_STROKE_WIDTH = 6.0
ANCHOR_FILL = "red"
ANCHOR_RADIUS = 7.5
CONTROL_STROKE = "gray"


###############################################################################
# FitSettings
###############################################################################


@dataclass(frozen=True)
class FitSettings:
    """Settings controlling how a curve is fitted and sampled.

    Attributes:
        method: Linear solver used for the first control points.
        samples_per_segment: Number of polygonization steps per segment.
        svg_precision: Maximum number of decimals in SVG path strings.
    """

    method: SolveMethod = SolveMethod.BANDED
    samples_per_segment: int = SAMPLES_PER_SEGMENT
    svg_precision: int = SVG_PRECISION

    def to_dict(self) -> dict:
        """Convert settings to a dictionary for serialization."""
        return {
            "method": self.method.value,
            "samples_per_segment": self.samples_per_segment,
            "svg_precision": self.svg_precision,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FitSettings":
        """Create FitSettings from a dictionary."""
        return cls(
            method=SolveMethod(data.get("method", SolveMethod.BANDED.value)),
            samples_per_segment=data.get("samples_per_segment", SAMPLES_PER_SEGMENT),
            svg_precision=data.get("svg_precision", SVG_PRECISION),
        )


DEFAULT_FIT_SETTINGS = FitSettings()

DENSE_FIT_SETTINGS = FitSettings(method=SolveMethod.DENSE)
