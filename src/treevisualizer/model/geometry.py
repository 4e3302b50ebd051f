"""
Screen-Space Geometry Helpers.

Integer screen coordinates follow the conversion rules of a 64-bit `long`
cast so that layout never fails on enormous zoom factors.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from treevisualizer.model.tree import NodeId

LONG_MAX = 2 ** 63 - 1
LONG_MIN = -2 ** 63

ScreenPoint = Tuple[float, float]


def to_long(value: float) -> int:
    """
    Truncate a float toward zero, saturating at the 64-bit range.

    NaN maps to 0 and +/- infinity to the range limits.
    """
    if math.isnan(value):
        return 0
    if value >= LONG_MAX:
        return LONG_MAX
    if value <= LONG_MIN:
        return LONG_MIN
    return int(value)


@dataclass(frozen=True)
class Circle:
    """A circle placed on screen during a layout pass."""
    center_x: int
    center_y: int
    radius: int
    node: Optional[NodeId] = None
    depth: int = 0

    def contains(self, x: float, y: float) -> bool:
        """True if (x, y) lies strictly inside the circle."""
        return math.hypot(x - self.center_x, y - self.center_y) < self.radius


def segment_intersection(
    p1: ScreenPoint,
    p2: ScreenPoint,
    q1: ScreenPoint,
    q2: ScreenPoint,
) -> Optional[Tuple[float, float]]:
    """
    Intersection parameters of segments p1-p2 and q1-q2.

    Both segments are parametrized, P(t) = p1 + t * (p2 - p1) and
    Q(u) = q1 + u * (q2 - q1), and solved with the cross-product determinant.

    Args:
        p1, p2: End points of the first segment.
        q1, q2: End points of the second segment.

    Returns:
        (t, u) if both parameters lie in [0, 1], otherwise None.
        Parallel (and collinear) segments have a zero determinant and
        are reported as not intersecting.
    """
    rx, ry = p2[0] - p1[0], p2[1] - p1[1]
    sx, sy = q2[0] - q1[0], q2[1] - q1[1]
    denominator = rx * sy - ry * sx
    if denominator == 0:
        return None

    dx, dy = q1[0] - p1[0], q1[1] - p1[1]
    t = (dx * sy - dy * sx) / denominator
    if t < 0 or t > 1:
        return None

    u = (dx * ry - dy * rx) / denominator
    if u < 0 or u > 1:
        return None

    return t, u


def segments_intersect(p1: ScreenPoint, p2: ScreenPoint, q1: ScreenPoint, q2: ScreenPoint) -> bool:
    return segment_intersection(p1, p2, q1, q2) is not None


def point_in_viewport(x: float, y: float, width: float, height: float) -> bool:
    return 0 <= x <= width and 0 <= y <= height


def circle_outside_viewport(x: int, y: int, radius: int, width: float, height: float) -> bool:
    """True if the circle's bounding box lies entirely outside [0, width] x [0, height]."""
    return x + radius < 0 or x - radius > width or y + radius < 0 or y - radius > height


def segment_visible(p1: ScreenPoint, p2: ScreenPoint, width: float, height: float) -> bool:
    """
    A segment is visible if one of its end points is inside the viewport or it
    crosses one of the four viewport borders.
    """
    if point_in_viewport(p1[0], p1[1], width, height) or point_in_viewport(p2[0], p2[1], width, height):
        return True

    borders = (
        ((0, 0), (width, 0)),
        ((width, 0), (width, height)),
        ((0, 0), (0, height)),
        ((0, height), (width, height)),
    )
    return any(segments_intersect(p1, p2, a, b) for a, b in borders)
