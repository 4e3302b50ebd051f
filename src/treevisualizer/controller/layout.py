"""
Radial Layout Engine
====================
Converts a Tree plus a camera transform into screen-space draw commands.

Why is this file needed?
------------------------
1. Geometry: Every frame, each reachable node gets a circle whose size shrinks
   with the number of its siblings, and children are spread evenly around it.
2. Culling: Circles and edges that cannot appear on screen are dropped, while
   the traversal still walks into them to reach visible descendants.
3. Hit-testing: The circles that were actually drawn are published to the
   HitTestIndex so clicks can be resolved against the current frame.

Note: This module is pure Python and should NOT import PySide6. Text widths
are obtained through an injected `TextMeasurer`.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union

from treevisualizer.config import DEFAULT_CONFIG, ViewerConfig
from treevisualizer.controller.commands import (
    BLACK, RGB, CircleCommand, DrawCommand, LabelCommand, LineCommand, hsb_to_rgb,
)
from treevisualizer.controller.hit_test import HitTestIndex
from treevisualizer.model.geometry import (
    Circle, circle_outside_viewport, segment_visible, to_long,
)
from treevisualizer.model.tree import NodeId, Tree

logger = logging.getLogger(__name__)

# (text, font_size) -> rendered width in pixels
TextMeasurer = Callable[[str, float], float]


def estimate_text_width(text: str, font_size: float) -> float:
    """Headless fallback: an average glyph is about 0.6 em wide."""
    return len(text) * font_size * 0.6


@dataclass
class LayoutResult:
    draw_commands: List[DrawCommand] = field(default_factory=list)
    visible_circles: List[Circle] = field(default_factory=list)

    @property
    def circles(self) -> List[CircleCommand]:
        return [c for c in self.draw_commands if isinstance(c, CircleCommand)]

    @property
    def lines(self) -> List[LineCommand]:
        return [c for c in self.draw_commands if isinstance(c, LineCommand)]

    @property
    def labels(self) -> List[LabelCommand]:
        return [c for c in self.draw_commands if isinstance(c, LabelCommand)]


@dataclass
class _LayoutPass:
    """Per-call traversal state."""
    tree: Tree[Any]
    width: int
    height: int
    zoom: float
    result: LayoutResult = field(default_factory=LayoutResult)
    depth_limit_hit: bool = False


@dataclass(frozen=True)
class _PendingNode:
    node: NodeId
    x: int
    y: int
    depth: int
    size_percent: float
    incoming_angle: float
    is_root: bool


class RadialLayoutEngine:
    def __init__(
        self,
        config: ViewerConfig = DEFAULT_CONFIG,
        measure_text: Optional[TextMeasurer] = None,
    ) -> None:
        self.config = config
        self.measure_text: TextMeasurer = measure_text or estimate_text_width
        self.hit_index = HitTestIndex()

        period = config.palette_period
        self._fill_colors: List[RGB] = [hsb_to_rgb(d / period, 0.5, 1.0) for d in range(period)]
        self._outline_colors: List[RGB] = [hsb_to_rgb(d / period, 1.0, 0.8) for d in range(period)]

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def layout(
        self,
        tree: Tree[Any],
        width: int,
        height: int,
        camera_x: float,
        camera_y: float,
        zoom: float,
    ) -> LayoutResult:
        """
        Lay out the whole tree for one frame.

        The root is centered at the viewport center shifted by the camera
        offset. The hit-test index is replaced with this frame's circles.
        """
        state = _LayoutPass(tree=tree, width=width, height=height, zoom=zoom)

        if width <= 0 or height <= 0:
            logger.debug(f"Empty viewport {width}x{height}, nothing to lay out.")
        else:
            root_x = to_long(camera_x) + width // 2
            root_y = to_long(camera_y) + height // 2
            self._layout_tree(state, root_x, root_y)

        if state.depth_limit_hit:
            logger.debug(f"Depth limit {self.config.max_depth} reached, deeper nodes skipped.")

        self.hit_index.rebuild(state.result.visible_circles)
        return state.result

    def hit_test(self, x: float, y: float) -> Optional[Circle]:
        """Query the circles of the most recent `layout` call."""
        return self.hit_index.hit_test(x, y)

    def child_angle(self, child_count: int, is_root: bool) -> float:
        """Angle between neighbouring children, capped at pi."""
        slots = child_count + (0 if is_root else 1)
        return min(2.0 * math.pi / slots, math.pi)

    def child_size_percent(self, child_angle: float, size_percent: float) -> float:
        distance = self.config.node_distance
        side_length = 2.0 * distance * math.sin(child_angle / 2.0)
        new_distance = self.config.packing_factor * side_length
        return (new_distance / distance) * size_percent

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _layout_tree(self, state: _LayoutPass, root_x: int, root_y: int) -> None:
        """
        Pre-order walk with an explicit stack, so depth is bounded only by
        `max_depth` and never by the interpreter's recursion limit.

        Stack entries are either a pending node or an edge that must be
        emitted right before its child's subtree.
        """
        stack: List[Union[_PendingNode, LineCommand]] = [
            _PendingNode(state.tree.root, root_x, root_y, 0, 1.0, 0.0, True)
        ]
        while stack:
            entry = stack.pop()
            if isinstance(entry, LineCommand):
                state.result.draw_commands.append(entry)
                continue
            follow_ups = self._layout_node(state, entry)
            stack.extend(reversed(follow_ups))

    def _layout_node(
        self, state: _LayoutPass, pending: _PendingNode
    ) -> List[Union[_PendingNode, LineCommand]]:
        """Emit one node and return its edges and children in draw order."""
        cfg = self.config
        result = state.result
        node, x, y = pending.node, pending.x, pending.y
        depth, size_percent = pending.depth, pending.size_percent
        follow_ups: List[Union[_PendingNode, LineCommand]] = []

        radius = to_long(cfg.base_radius * size_percent * state.zoom)
        visible = not circle_outside_viewport(x, y, radius, state.width, state.height)

        band = depth % cfg.palette_period
        outline = self._outline_colors[band]
        stroke_width = radius / 20.0

        if visible:
            result.draw_commands.append(
                CircleCommand(x, y, radius, self._fill_colors[band], outline, stroke_width)
            )
            result.visible_circles.append(Circle(x, y, radius, node=node, depth=depth))

        # abandon the branch, not just hide it
        if radius < cfg.min_draw_radius:
            return follow_ups

        if visible and radius >= cfg.min_label_radius:
            label = self._label_command(state.tree.value(node), x, y, radius)
            if label is not None:
                result.draw_commands.append(label)

        children = state.tree.children(node)
        if not children:
            return follow_ups
        if depth >= cfg.max_depth:
            state.depth_limit_hit = True
            return follow_ups

        angle_step = self.child_angle(len(children), pending.is_root)
        child_size = self.child_size_percent(angle_step, size_percent)
        child_radius = to_long(cfg.base_radius * child_size * state.zoom)
        reach = cfg.node_distance * size_percent * state.zoom
        edge_length = to_long(reach - (radius + child_radius))

        for i, child in enumerate(children):
            angle = angle_step * (i + 1) + pending.incoming_angle
            cos_a = math.cos(angle)
            sin_a = math.sin(angle)

            start = (to_long(radius * cos_a) + x, to_long(radius * sin_a) + y)
            end = (
                to_long((radius + edge_length) * cos_a) + x,
                to_long((radius + edge_length) * sin_a) + y,
            )
            if segment_visible(start, end, state.width, state.height):
                follow_ups.append(
                    LineCommand(start[0], start[1], end[0], end[1], outline, stroke_width)
                )

            child_x = to_long(cfg.node_distance * size_percent * cos_a * state.zoom) + x
            child_y = to_long(cfg.node_distance * size_percent * sin_a * state.zoom) + y
            follow_ups.append(
                _PendingNode(child, child_x, child_y, depth + 1, child_size, angle + math.pi, False)
            )

        return follow_ups

    def _label_command(self, value: Any, x: int, y: int, radius: int) -> Optional[LabelCommand]:
        """Largest font whose text width fits the radius, from one reference measurement."""
        text = "" if value is None else str(value)
        if not text:
            return None

        reference_size = self.config.label_reference_size
        reference_width = self.measure_text(text, reference_size)
        if reference_width <= 0:
            return None

        font_size = radius / reference_width * reference_size
        return LabelCommand(text, x, y, font_size, BLACK)
