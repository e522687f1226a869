"""Fit a curve through a set of anchors and render it into an SVG page."""

import logging
import os

from bezfit.consts import FitSettings
from bezfit.curve import FittedCurve
from bezfit.page import CurveSvgPage

logger = logging.getLogger(__name__)

# clicked positions of a wavy path
ANCHORS = [
    (60.0, 80.0),
    (180.0, 260.0),
    (320.0, 120.0),
    (460.0, 300.0),
    (600.0, 90.0),
    (720.0, 240.0),
]

OUTPUT_FILE = "data/output/example/svg/fit/fit_to_svg.svg"


def main(output_filename: str = OUTPUT_FILE) -> str:
    """Main"""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    curve = FittedCurve.fit(ANCHORS, FitSettings(samples_per_segment=50))
    logger.info("fitted %s", curve)

    page = CurveSvgPage.for_curve(curve)
    page.add_curve(curve)
    page.add_polyline(curve.polygonize(), stroke="green", stroke_width=1.0, add_to_debug_layer=True)
    page.add_control_polygon(curve)
    page.add_anchor_markers(curve.anchors)

    directory = os.path.dirname(output_filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    page.save_as(output_filename, include_debug_layer=True, pretty=True, indent=2)
    return output_filename


if __name__ == "__main__":
    main()
