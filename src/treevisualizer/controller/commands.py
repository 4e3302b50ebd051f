"""
Draw commands emitted by the layout engine and executed by a renderer.

Colors are (r, g, b) tuples with 0-255 channels.
"""
from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Tuple, Union

RGB = Tuple[int, int, int]

BLACK: RGB = (0, 0, 0)


def hsb_to_rgb(hue: float, saturation: float, brightness: float) -> RGB:
    r, g, b = colorsys.hsv_to_rgb(hue, saturation, brightness)
    return int(r * 255 + 0.5), int(g * 255 + 0.5), int(b * 255 + 0.5)


@dataclass(frozen=True)
class CircleCommand:
    center_x: int
    center_y: int
    radius: int
    fill: RGB
    outline: RGB
    stroke_width: float


@dataclass(frozen=True)
class LineCommand:
    x1: int
    y1: int
    x2: int
    y2: int
    color: RGB
    stroke_width: float


@dataclass(frozen=True)
class LabelCommand:
    """Text centered on (center_x, center_y)."""
    text: str
    center_x: int
    center_y: int
    font_size: float
    color: RGB = BLACK


DrawCommand = Union[CircleCommand, LineCommand, LabelCommand]
