import math

from treevisualizer.model.geometry import (
    LONG_MAX,
    LONG_MIN,
    Circle,
    circle_outside_viewport,
    segment_intersection,
    segment_visible,
    segments_intersect,
    to_long,
)


class TestSegmentIntersection:

    def test_crossing_diagonals(self):
        assert segment_intersection((0, 0), (10, 10), (0, 10), (10, 0)) == (0.5, 0.5)

    def test_parallel_segments(self):
        assert segment_intersection((0, 0), (10, 0), (0, 1), (10, 1)) is None

    def test_collinear_overlap_counts_as_parallel(self):
        assert not segments_intersect((0, 0), (10, 0), (5, 0), (15, 0))

    def test_lines_cross_outside_segments(self):
        assert segment_intersection((0, 0), (1, 0), (5, -1), (5, 1)) is None

    def test_touching_end_point(self):
        assert segments_intersect((0, 0), (10, 0), (10, -5), (10, 5))


class TestToLong:

    def test_truncates_toward_zero(self):
        assert to_long(2.7) == 2
        assert to_long(-2.7) == -2

    def test_saturates(self):
        assert to_long(math.inf) == LONG_MAX
        assert to_long(-math.inf) == LONG_MIN
        assert to_long(1e300) == LONG_MAX

    def test_nan_is_zero(self):
        assert to_long(math.nan) == 0


class TestViewportTests:

    def test_circle_contains_is_strict(self):
        circle = Circle(0, 0, 10)
        assert circle.contains(9.99, 0)
        assert not circle.contains(10, 0)

    def test_circle_bounding_box(self):
        assert not circle_outside_viewport(400, 300, 50, 800, 600)
        assert not circle_outside_viewport(-40, 300, 50, 800, 600)
        assert circle_outside_viewport(-51, 300, 50, 800, 600)
        assert circle_outside_viewport(400, 651, 50, 800, 600)

    def test_segment_with_end_point_inside(self):
        assert segment_visible((-100, -100), (10, 10), 800, 600)

    def test_segment_crossing_viewport(self):
        assert segment_visible((-10, 300), (810, 300), 800, 600)

    def test_segment_entirely_outside(self):
        assert not segment_visible((-10, -10), (-5, -20), 800, 600)
        assert not segment_visible((900, -10), (1200, 700), 800, 600)
