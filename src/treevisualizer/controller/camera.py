"""
Camera Animation
================
Holds the begin/current/target camera and interpolates between them.

Why is this file needed?
------------------------
1. Smoothness: "Zoom to node" is animated over a fixed duration instead of
   jumping, using one of two easing curves.
2. Interaction: Dragging and wheel zooming are instantaneous and cancel any
   running animation (the latest request always wins).

Classes:
    CameraState: Immutable camera snapshot (offset + zoom).
    Easing: The two interpolation curves.
    CameraAnimator: The Idle / Animating state machine.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from treevisualizer.config import DEFAULT_CONFIG, ViewerConfig
from treevisualizer.model.geometry import Circle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraState:
    """Camera offset in screen pixels and zoom factor (> 0)."""
    x: float = 0.0
    y: float = 0.0
    zoom: float = 1.0


HOME = CameraState()


class Easing(Enum):
    COSINE = "cosine"
    BACK = "back"

    def interpolate(self, begin: float, end: float, t: float, overshoot: float = 1.70158) -> float:
        """Value between begin (t=0) and end (t=1)."""
        if self is Easing.COSINE:
            return (end - begin) * (-0.5 * math.cos(math.pi * t) + 0.5) + begin
        # ease-out-back: overshoots the end before settling on it
        t2 = t - 1.0
        return (t2 * t2 * ((overshoot + 1.0) * t2 + overshoot) + 1.0) * (end - begin) + begin

    @classmethod
    def for_zoom(cls, begin_zoom: float, target_zoom: float) -> Easing:
        """Springy curve when zooming in, smooth curve otherwise."""
        return cls.BACK if begin_zoom < target_zoom else cls.COSINE


class CameraAnimator:
    def __init__(self, config: ViewerConfig = DEFAULT_CONFIG, initial: CameraState = HOME) -> None:
        self.config = config
        zoom = initial.zoom if initial.zoom > 0 else HOME.zoom
        start = CameraState(initial.x, initial.y, zoom)

        self._begin: CameraState = start
        self._current: CameraState = start
        self._target: CameraState = start
        self._elapsed: float = 0.0
        self._duration: float = config.pan_duration
        self._easing: Easing = Easing.COSINE
        self._animating: bool = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def begin(self) -> CameraState:
        return self._begin

    @property
    def current(self) -> CameraState:
        return self._current

    @property
    def target(self) -> CameraState:
        return self._target

    @property
    def zoom(self) -> float:
        return self._current.zoom

    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def easing(self) -> Easing:
        return self._easing

    @property
    def is_animating(self) -> bool:
        return self._animating

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def jump_to(self, x: float, y: float, zoom: float) -> None:
        """Set the camera instantly and stop any running animation."""
        state = CameraState(x, y, self._checked_zoom(zoom, self._current.zoom))
        self._begin = state
        self._current = state
        self._target = state
        self._elapsed = 0.0
        self._animating = False

    def animate_to(self, x: float, y: float, zoom: float, duration: Optional[float] = None) -> None:
        """
        Start interpolating from the current camera to the target.

        The easing curve is chosen here, once, from the zoom direction.
        """
        if duration is None:
            duration = self.config.pan_duration
        target_zoom = self._checked_zoom(zoom, self._current.zoom)

        if duration <= 0:
            self.jump_to(x, y, target_zoom)
            return

        self._begin = self._current
        self._target = CameraState(x, y, target_zoom)
        self._duration = duration
        self._elapsed = 0.0
        self._easing = Easing.for_zoom(self._begin.zoom, target_zoom)
        self._animating = True
        logger.debug(
            f"Animating camera to ({x:.1f}, {y:.1f}) x{target_zoom:.3f} "
            f"over {duration:.2f}s using {self._easing.value} easing."
        )

    def tick(self, delta_time: float) -> bool:
        """
        Advance the animation by `delta_time` seconds.

        Returns:
            True while the animation is still running.
        """
        if not self._animating:
            return False

        self._elapsed = min(self._elapsed + max(delta_time, 0.0), self._duration)
        if self._elapsed >= self._duration:
            self._current = self._target
            self._animating = False
            return False

        t = self._elapsed / self._duration
        ease = self._easing.interpolate
        overshoot = self.config.back_ease_overshoot
        begin, target = self._begin, self._target
        zoom = ease(begin.zoom, target.zoom, t, overshoot)
        self._current = CameraState(
            ease(begin.x, target.x, t, overshoot),
            ease(begin.y, target.y, t, overshoot),
            self._checked_zoom(zoom, self._current.zoom),
        )
        return True

    # ------------------------------------------------------------------
    # Interaction helpers
    # ------------------------------------------------------------------

    def pan_by(self, dx: float, dy: float) -> None:
        """Drag panning."""
        cur = self._current
        self.jump_to(cur.x + dx, cur.y + dy, cur.zoom)

    def zoom_by(self, amount: float) -> None:
        """
        Zoom relative to the current zoom; `amount` is a fraction of the zoom
        rate (wheel notches, slider deflection). The offset is scaled so the
        viewport center stays on the same point of the tree.
        """
        cur = self._current
        new_zoom = self._checked_zoom(cur.zoom + amount * self.config.zoom_rate * cur.zoom, cur.zoom)
        scale = new_zoom / cur.zoom
        self.jump_to(cur.x * scale, cur.y * scale, new_zoom)

    def focus_on(self, circle: Circle, width: int, height: int) -> None:
        """
        Zoom-to-node: animate so `circle` ends up centered with the size of
        the root at zoom 1.0.
        """
        if circle.radius <= 0:
            logger.debug(f"Ignoring focus on degenerate circle {circle}.")
            return

        cur = self._current
        target_zoom = cur.zoom * (self.config.base_radius / circle.radius)
        scale = target_zoom / cur.zoom
        target_x = (cur.x - (circle.center_x - width / 2)) * scale
        target_y = (cur.y - (circle.center_y - height / 2)) * scale
        self.animate_to(target_x, target_y, target_zoom)

    def reset(self) -> None:
        self.jump_to(HOME.x, HOME.y, HOME.zoom)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _checked_zoom(zoom: float, fallback: float) -> float:
        if zoom > 0:
            return zoom
        logger.debug(f"Rejected zoom {zoom!r}, keeping {fallback!r}.")
        return fallback
