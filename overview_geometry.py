"""
overview_geometry.py
--------------------
Shapes for the overview: curved edges and circular nodes, as matplotlib paths.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

from matplotlib.path import Path

from overview_model import Point


# Node diameter = (ratio + MIN_NODE_SIZE) * NODE_FACTOR
MIN_NODE_SIZE = 0.025
NODE_FACTOR = 18

# Edge bulge: control point angle offset and distance (fraction of edge length)
EDGE_ANGLE_OFFSET = math.pi / 6
EDGE_CONTROL_FRACTION = 0.6


@dataclass(frozen=True)
class EdgeCurve:
    """Quadratic curve start -> end, pulled toward control."""
    start: Point
    control: Point
    end: Point

    @property
    def path(self) -> Path:
        return Path(
            [(self.start.x, self.start.y), (self.control.x, self.control.y), (self.end.x, self.end.y)],
            [Path.MOVETO, Path.CURVE3, Path.CURVE3],
        )


@dataclass(frozen=True)
class NodeCircle:
    """Axis-aligned circle given by its bounding box."""
    x: float
    y: float
    diameter: float

    @property
    def center(self) -> Tuple[float, float]:
        r = self.diameter / 2.0
        return (self.x + r, self.y + r)

    @property
    def path(self) -> Path:
        return Path.circle(self.center, self.diameter / 2.0)


def edge_geometry(start: Point, end: Point) -> EdgeCurve:
    """
    Curve from start to end. The control point sits at 0.6 of the edge length
    from start, rotated 30 degrees clockwise from the direction to end, so the
    curve bulges near the target and the direction reads without an arrowhead.
    """
    dx = end.x - start.x
    dy = end.y - start.y
    angle = math.atan2(dy, dx) - EDGE_ANGLE_OFFSET
    r = math.hypot(dx, dy) * EDGE_CONTROL_FRACTION
    control = Point(start.x + r * math.cos(angle), start.y + r * math.sin(angle))
    return EdgeCurve(start=start, control=control, end=end)


def node_diameter(ratio: float) -> float:
    return (ratio + MIN_NODE_SIZE) * NODE_FACTOR


def node_geometry(point: Point, ratio: float) -> NodeCircle:
    d = node_diameter(ratio)
    return NodeCircle(x=point.x - d * 0.5, y=point.y - d * 0.5, diameter=d)
