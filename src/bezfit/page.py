"""SVG page rendering fitted curves, their anchors and control polygons."""

from __future__ import annotations

import copy
import gzip
import io
import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import svgwrite
import svgwrite.base
import svgwrite.container
import svgwrite.elementfactory
from numpy.typing import NDArray
from svgwrite.extensions import Inkscape

from bezfit.common import AnchorHelper, AnchorInput
from bezfit.consts import (
    ANCHOR_FILL,
    ANCHOR_RADIUS,
    CONTROL_STROKE,
    CURVE_STROKE,
    CURVE_STROKE_WIDTH,
)
from bezfit.curve import FittedCurve

logger = logging.getLogger(__name__)


@dataclass
class CurveSvgPage:
    """A page (canvas) described by SVG to draw fitted curves on.

    The viewbox has its own coordinate-system left-to-right and bottom-to-top.
    Contains groups/layers:
        - root       -- (group) just contains the y-flip and translation to bottom left
            - main   -- editable->locked=False  --  hidden->display="block"
            - debug  -- editable->locked=False  --  hidden->display="none"
    """

    _inkscape: Inkscape  # extension to support layers

    drawing: svgwrite.Drawing
    root_group: svgwrite.container.Group
    main_layer: svgwrite.container.Group
    debug_layer: svgwrite.container.Group

    def __init__(self, width: float, height: float, viewbox_scale: float = 1.0):
        """
        Initialize the SVG page with the given canvas size in user units.

        Args:
            width (float): The width of the canvas.
            height (float): The height of the canvas.
            viewbox_scale (float, optional): The scale factor for the viewbox. Defaults to 1.0.
        """
        vb_width: float = viewbox_scale * width
        vb_height: float = viewbox_scale * height

        # profile="full" to support numbers with more than 4 decimal digits
        self.drawing = svgwrite.Drawing(
            size=(width, height),
            viewBox=f"0 0 {vb_width} {vb_height}",
            profile="full",
        )

        # flip y-axis and set origin to bottom-left
        self.root_group = self.drawing.g(id="root", transform=f"scale(1,-1) translate(0,{-vb_height})")

        self._inkscape = Inkscape(self.drawing)
        self.main_layer = self._inkscape.layer(label="main", locked=False)
        self.debug_layer = self._inkscape.layer(label="debug", locked=False, display="none")

    def add(
        self,
        element: Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder],
        add_to_debug_layer: bool = False,
    ) -> Union[svgwrite.base.BaseElement, svgwrite.elementfactory.ElementBuilder]:
        """Add a SVG element as subelement either to main or debug layer.

        Args:
            element (svgwrite.base.BaseElement): append this SVG element
            add_to_debug_layer (bool, optional): True if element should be added to debug layer. Defaults to False.

        Returns:
            svgwrite.base.BaseElement: the added element
        """
        if add_to_debug_layer:
            return self.debug_layer.add(element)
        return self.main_layer.add(element)

    def add_curve(
        self,
        curve: FittedCurve,
        stroke: str = CURVE_STROKE,
        stroke_width: float = CURVE_STROKE_WIDTH,
    ) -> svgwrite.base.BaseElement:
        """Add the curve as cubic Bezier path to the main layer."""
        return self.add(
            self.drawing.path(
                d=curve.svg_path_string(),
                stroke=stroke,
                stroke_width=stroke_width,
                fill="none",
            )
        )

    def add_polyline(
        self,
        points: NDArray[np.float64],
        stroke: str = CURVE_STROKE,
        stroke_width: float = CURVE_STROKE_WIDTH,
        add_to_debug_layer: bool = False,
    ) -> svgwrite.base.BaseElement:
        """Add sampled curve points as polyline."""
        return self.add(
            self.drawing.polyline(
                points=[(float(x), float(y)) for x, y in points],
                stroke=stroke,
                stroke_width=stroke_width,
                fill="none",
                stroke_linejoin="round",
            ),
            add_to_debug_layer,
        )

    def add_anchor_markers(
        self,
        anchors: AnchorInput,
        radius: float = ANCHOR_RADIUS,
        fill: str = ANCHOR_FILL,
    ) -> svgwrite.container.Group:
        """Add a filled circle for each anchor to the main layer."""
        group = self.drawing.g(fill=fill, stroke="none")
        for x, y in AnchorHelper.to_array(anchors):
            group.add(self.drawing.circle(center=(float(x), float(y)), r=radius))
        return self.add(group)

    def add_control_polygon(
        self,
        curve: FittedCurve,
        stroke: str = CONTROL_STROKE,
        stroke_width: float = 1.0,
    ) -> svgwrite.container.Group:
        """Add the control polygon of each segment to the debug layer."""
        group = self.drawing.g(stroke=stroke, stroke_width=stroke_width, fill="none")
        for segment in curve:
            group.add(self.drawing.polyline(points=[segment.p0, segment.p1, segment.p2, segment.p3]))
        return self.add(group, add_to_debug_layer=True)

    def to_string(self, include_debug_layer: bool = False, pretty: bool = False, indent: int = 2) -> str:
        """Serialize the page to an SVG document string."""
        drawing = self.assemble_tree(
            copy.deepcopy(self.drawing),
            copy.deepcopy(self.root_group),
            copy.deepcopy(self.main_layer),
            copy.deepcopy(self.debug_layer),
            include_debug_layer,
        )
        svg_buffer = io.StringIO()
        drawing.write(svg_buffer, pretty=pretty, indent=indent)
        return svg_buffer.getvalue()

    def save_as(
        self,
        filename: str,
        include_debug_layer: bool = False,
        pretty: bool = False,
        indent: int = 2,
        compressed: bool = False,
    ):
        """Save as SVG file

        Args:
            filename (str): path and filename
            include_debug_layer (bool, optional): True if file should contain debug_layer. Defaults to False.
            pretty (bool, optional): True for easy readable output. Defaults to False.
            indent (int, optional): Indention if pretty is enabled. Defaults to 2 spaces.
            compressed (bool, optional): Save as compressed svgz-file. Defaults to False.
        """
        output_data = self.to_string(include_debug_layer, pretty, indent).encode("utf-8")
        if compressed:
            output_data = gzip.compress(output_data)

        with open(filename, "wb") as svg_file:
            svg_file.write(output_data)
        logger.info("saved SVG page to %s (%d bytes)", filename, len(output_data))

    @classmethod
    def assemble_tree(
        cls,
        drawing: svgwrite.Drawing,
        root_group: svgwrite.container.Group,
        main_layer: svgwrite.container.Group,
        debug_layer: Optional[svgwrite.container.Group] = None,
        include_debug_layer: bool = False,
    ) -> svgwrite.Drawing:
        """Assemble a tree out of the given SVG elements."""
        drawing.add(root_group)
        if include_debug_layer and debug_layer:
            root_group.add(debug_layer)
        root_group.add(main_layer)
        return drawing

    @classmethod
    def for_curve(cls, curve: FittedCurve, margin: float = 20.0) -> CurveSvgPage:
        """
        Create a page large enough to show the curve's anchors and control points.

        The drawing is translated so that its bounding box starts at _margin_.
        """
        all_points = np.vstack((curve.anchors, curve.control_points.first, curve.control_points.second))
        xmin, ymin = all_points.min(axis=0)
        xmax, ymax = all_points.max(axis=0)

        page = cls(float(xmax - xmin) + 2.0 * margin, float(ymax - ymin) + 2.0 * margin)
        page.main_layer.translate(margin - float(xmin), margin - float(ymin))
        page.debug_layer.translate(margin - float(xmin), margin - float(ymin))
        return page
