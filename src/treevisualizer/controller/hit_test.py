"""
Point -> circle lookup over the circles drawn in the last layout pass.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np

from treevisualizer.model.geometry import Circle

if TYPE_CHECKING:
    import numpy.typing as npt


class HitTestIndex:
    """
    Holds one frame's visible circles in draw order.

    When circles overlap, the earliest drawn one (the one beneath) wins.
    """

    def __init__(self) -> None:
        self._circles: List[Circle] = []
        self._centers: npt.NDArray[np.float64] = np.empty((0, 2), dtype=np.float64)
        self._radii: npt.NDArray[np.float64] = np.empty(0, dtype=np.float64)

    def __len__(self) -> int:
        return len(self._circles)

    def rebuild(self, circles: Sequence[Circle]) -> None:
        """Discard the previous frame and index `circles`."""
        self._circles = list(circles)
        if self._circles:
            self._centers = np.array(
                [(c.center_x, c.center_y) for c in self._circles], dtype=np.float64
            )
            self._radii = np.array([c.radius for c in self._circles], dtype=np.float64)
        else:
            self._centers = np.empty((0, 2), dtype=np.float64)
            self._radii = np.empty(0, dtype=np.float64)

    def hit_test(self, x: float, y: float) -> Optional[Circle]:
        """First circle whose center is strictly closer to (x, y) than its radius."""
        if not self._circles:
            return None

        distances = np.hypot(self._centers[:, 0] - x, self._centers[:, 1] - y)
        hits = np.flatnonzero(distances < self._radii)
        if hits.size == 0:
            return None
        return self._circles[int(hits[0])]
