"""
Renderer Tests
==============

INVARIANTS TESTED:
1. Label sizes round down to whole pixels, never below one
2. Measuring and painting share the same font size rule
"""
import pytest

pytest.importorskip("PySide6.QtGui")

from treevisualizer.view.renderer import QtTextMeasurer, label_pixel_size  # noqa: E402


class TestLabelPixelSize:

    @pytest.mark.parametrize(
        "font_size, expected",
        [(20.0, 20), (20.4, 20), (20.9, 20), (1.7, 1), (0.3, 1), (0.0, 1)],
    )
    def test_rounds_down(self, font_size, expected):
        assert label_pixel_size(font_size) == expected

    def test_never_exceeds_requested_size(self):
        for tenth in range(10, 500):
            size = tenth / 10.0
            assert label_pixel_size(size) <= size


class TestQtTextMeasurer:

    def test_fractional_size_measures_like_its_floor(self, qapp):
        measure = QtTextMeasurer()
        assert measure("Mammals", 20.9) == measure("Mammals", 20.0)
