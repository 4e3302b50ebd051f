"""
QPainter backend for the layout engine's draw commands.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainter, QPen

from treevisualizer.controller.commands import (
    RGB, CircleCommand, DrawCommand, LabelCommand, LineCommand,
)

logger = logging.getLogger(__name__)

LABEL_FONT_FAMILY = "Arial"
# Qt misbehaves with absurd font sizes at extreme zoom
MAX_LABEL_PIXEL_SIZE = 4096


def _qcolor(rgb: RGB) -> QColor:
    return QColor(*rgb)


def label_pixel_size(font_size: float) -> int:
    """Whole pixel size for a label; rounds down so the text never outgrows its circle."""
    return max(1, math.floor(font_size))


def _label_font(pixel_size: float) -> QFont:
    font = QFont(LABEL_FONT_FAMILY)
    font.setPixelSize(label_pixel_size(pixel_size))
    return font


class QtTextMeasurer:
    """TextMeasurer backed by QFontMetricsF; needs a running QGuiApplication."""

    def __call__(self, text: str, font_size: float) -> float:
        return QFontMetricsF(_label_font(font_size)).horizontalAdvance(text)


class QPainterRenderer:
    def paint(self, painter: QPainter, commands: Iterable[DrawCommand]) -> None:
        painter.save()
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setRenderHint(QPainter.TextAntialiasing, True)
        try:
            for command in commands:
                if isinstance(command, CircleCommand):
                    self._draw_circle(painter, command)
                elif isinstance(command, LineCommand):
                    self._draw_line(painter, command)
                elif isinstance(command, LabelCommand):
                    self._draw_label(painter, command)
                else:
                    raise TypeError(f"Unknown draw command: {command!r}")
        finally:
            painter.restore()

    @staticmethod
    def _draw_circle(painter: QPainter, cmd: CircleCommand) -> None:
        r = float(cmd.radius)
        rect = QRectF(cmd.center_x - r, cmd.center_y - r, 2.0 * r, 2.0 * r)

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(_qcolor(cmd.fill)))
        painter.drawEllipse(rect)

        pen = QPen(_qcolor(cmd.outline))
        pen.setWidthF(cmd.stroke_width)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(rect)

    @staticmethod
    def _draw_line(painter: QPainter, cmd: LineCommand) -> None:
        pen = QPen(_qcolor(cmd.color))
        pen.setWidthF(cmd.stroke_width)
        painter.setPen(pen)
        painter.drawLine(QPointF(cmd.x1, cmd.y1), QPointF(cmd.x2, cmd.y2))

    @staticmethod
    def _draw_label(painter: QPainter, cmd: LabelCommand) -> None:
        if cmd.font_size > MAX_LABEL_PIXEL_SIZE:
            return
        font = _label_font(cmd.font_size)
        metrics = QFontMetricsF(font)
        width = metrics.horizontalAdvance(cmd.text)

        painter.setFont(font)
        painter.setPen(_qcolor(cmd.color))
        painter.drawText(
            QPointF(cmd.center_x - width / 2.0, cmd.center_y + metrics.ascent() / 2.0),
            cmd.text,
        )
