"""
Tree Canvas Widget
==================
The drawing surface of the application.

Why is this file needed?
------------------------
1. Frame loop: Each paint re-runs the radial layout for the current camera and
   executes the resulting draw commands with QPainter.
2. Input: It maps drag, wheel and double-click events onto camera operations.
3. Animation: A 30 Hz QTimer advances the CameraAnimator while a
   zoom-to-node animation is running.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from PySide6.QtCore import QPoint, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QFontMetrics, QPainter
from PySide6.QtWidgets import QWidget

from treevisualizer.config import DEFAULT_CONFIG, ViewerConfig
from treevisualizer.controller.camera import CameraAnimator
from treevisualizer.controller.layout import RadialLayoutEngine
from treevisualizer.model.tree import Tree
from treevisualizer.view.renderer import QPainterRenderer, QtTextMeasurer

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = QColor(80, 80, 90)
HELP_LINES = (
    "Pan: Drag Left Mouse",
    "Zoom: Scroll Mouse Wheel",
    "Zoom to Node: Double Click Node",
)


class TreeCanvas(QWidget):
    # Emitted whenever the camera zoom may have changed
    zoom_changed = Signal(float)

    def __init__(self, tree: Tree[Any], config: ViewerConfig = DEFAULT_CONFIG,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.config = config
        self._tree: Tree[Any] = tree

        self.engine = RadialLayoutEngine(config, measure_text=QtTextMeasurer())
        self.animator = CameraAnimator(config)
        self.renderer = QPainterRenderer()

        self._last_mouse_pos: Optional[QPoint] = None

        self.setMinimumSize(config.viewport_width, config.viewport_height)
        self.setFocusPolicy(Qt.StrongFocus)

        self._anim_timer = QTimer(self)
        self._anim_timer.setInterval(config.tick_interval_ms)
        self._anim_timer.timeout.connect(self._on_animation_tick)

    def sizeHint(self) -> QSize:
        return QSize(self.config.viewport_width, self.config.viewport_height)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def tree(self) -> Tree[Any]:
        return self._tree

    def set_tree(self, tree: Tree[Any]) -> None:
        self._tree = tree
        logger.info(f"Displaying tree with {len(tree)} nodes.")
        self.reset_view()

    def reset_view(self) -> None:
        self._anim_timer.stop()
        self.animator.reset()
        self._camera_moved()

    def zoom_view(self, amount: float) -> None:
        """Immediate relative zoom; cancels a running animation."""
        self._anim_timer.stop()
        self.animator.zoom_by(amount)
        self._camera_moved()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), BACKGROUND_COLOR)

            cam = self.animator.current
            result = self.engine.layout(
                self._tree, self.width(), self.height(), cam.x, cam.y, cam.zoom
            )
            self.renderer.paint(painter, result.draw_commands)
            self._draw_help(painter)
        finally:
            painter.end()

    def mousePressEvent(self, event) -> None:
        self._last_mouse_pos = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if not (event.buttons() & Qt.LeftButton) or self._last_mouse_pos is None:
            super().mouseMoveEvent(event)
            return
        pos = event.position().toPoint()
        delta = pos - self._last_mouse_pos
        self._last_mouse_pos = pos

        self._anim_timer.stop()
        self.animator.pan_by(delta.x(), delta.y())
        self._camera_moved()

    def mouseReleaseEvent(self, event) -> None:
        self._last_mouse_pos = None
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event) -> None:
        notches = event.angleDelta().y() / 120.0
        if notches:
            self.zoom_view(notches * 0.5)
        event.accept()

    def mouseDoubleClickEvent(self, event) -> None:
        pos = event.position()
        circle = self.engine.hit_test(pos.x(), pos.y())
        if circle is None:
            super().mouseDoubleClickEvent(event)
            return

        logger.debug(f"Zooming to node '{self._tree.value(circle.node)}' at depth {circle.depth}.")
        self.animator.focus_on(circle, self.width(), self.height())
        if self.animator.is_animating:
            self._anim_timer.start()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_animation_tick(self) -> None:
        running = self.animator.tick(self._anim_timer.interval() / 1000.0)
        if not running:
            self._anim_timer.stop()
        self._camera_moved()

    def _camera_moved(self) -> None:
        self.zoom_changed.emit(self.animator.zoom)
        self.update()

    def _draw_help(self, painter: QPainter) -> None:
        font = QFont(painter.font())
        font.setPointSizeF(12.0)
        painter.setFont(font)
        painter.setPen(Qt.white)

        metrics = QFontMetrics(font)
        line_height = metrics.height() + metrics.leading()
        x = 21
        y = self.height() - 49
        for i, line in enumerate(HELP_LINES):
            painter.drawText(x, y + i * line_height, line)
