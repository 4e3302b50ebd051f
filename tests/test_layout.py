"""
Radial Layout Tests
===================

INVARIANTS TESTED:
1. A lone root yields one circle and no edges
2. Children sit at node_distance from the root along their slot angle
3. Layout is deterministic and does not touch the tree
4. Off-screen nodes are culled but their descendants are still reached
5. Fractal trees terminate (radius threshold or depth limit), at any depth limit
"""
import logging
import math

import pytest

from treevisualizer.config import ViewerConfig
from treevisualizer.controller.commands import CircleCommand, LabelCommand, LineCommand
from treevisualizer.controller.layout import RadialLayoutEngine, estimate_text_width
from treevisualizer.model.samples import example_tree
from treevisualizer.model.tree import Tree


def simple_tree() -> Tree:
    """Root with three children, each carrying two leaves."""
    tree = Tree("Example")
    for name in ("A", "B", "C"):
        child = tree.add_child(tree.root, name)
        tree.add_child(child, f"{name}1")
        tree.add_child(child, f"{name}2")
    return tree


def chain(length: int) -> Tree:
    tree = Tree("n0")
    node = tree.root
    for i in range(1, length):
        node = tree.add_child(node, f"n{i}")
    return tree


@pytest.fixture
def engine() -> RadialLayoutEngine:
    return RadialLayoutEngine(ViewerConfig())


class TestSingleNode:

    def test_one_circle_no_lines(self, engine):
        result = engine.layout(Tree("solo"), 800, 600, 0.0, 0.0, 1.0)

        assert len(result.circles) == 1
        assert len(result.lines) == 0
        assert len(result.visible_circles) == 1

        circle = result.visible_circles[0]
        assert (circle.center_x, circle.center_y, circle.radius) == (400, 300, 50)

    def test_label_fits_radius(self, engine):
        result = engine.layout(Tree("solo"), 800, 600, 0.0, 0.0, 1.0)

        (label,) = result.labels
        assert label.text == "solo"
        assert (label.center_x, label.center_y) == (400, 300)
        assert estimate_text_width("solo", label.font_size) == pytest.approx(50.0)

    def test_stroke_width(self, engine):
        result = engine.layout(Tree("solo"), 800, 600, 0.0, 0.0, 1.0)
        assert result.circles[0].stroke_width == pytest.approx(2.5)

    def test_camera_offsets_root(self, engine):
        result = engine.layout(Tree("solo"), 800, 600, 25.9, -10.2, 1.0)
        circle = result.visible_circles[0]
        assert (circle.center_x, circle.center_y) == (425, 290)


class TestChildPlacement:

    def test_children_on_ring_around_root(self, engine):
        tree = simple_tree()
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        root_circle = result.visible_circles[0]
        assert (root_circle.center_x, root_circle.center_y) == (400, 300)

        children = [c for c in result.visible_circles if c.depth == 1]
        assert [c.node for c in children] == list(tree.children(tree.root))

        step = 2 * math.pi / 3
        for i, circle in enumerate(children):
            angle = step * (i + 1)
            assert circle.center_x == int(200 * math.cos(angle)) + 400
            assert circle.center_y == int(200 * math.sin(angle)) + 300
            distance = math.hypot(circle.center_x - 400, circle.center_y - 300)
            assert distance == pytest.approx(200, abs=1.5)

    def test_child_size_shrinks_with_siblings(self, engine):
        result = engine.layout(simple_tree(), 800, 600, 0.0, 0.0, 1.0)
        children = [c for c in result.visible_circles if c.depth == 1]
        expected = int(50 * 0.32 * 2 * math.sin(math.pi / 3))
        assert all(c.radius == expected for c in children)

    def test_lone_root_child_is_clamped_to_half_circle(self, engine):
        tree = Tree("root")
        tree.add_child(tree.root, "only")
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        child = result.visible_circles[1]
        assert (child.center_x, child.center_y, child.radius) == (200, 300, 32)

    def test_edge_runs_between_boundaries(self, engine):
        tree = Tree("root")
        tree.add_child(tree.root, "only")
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        (line,) = result.lines
        assert (line.x1, line.y1) == (350, 300)
        assert (line.x2, line.y2) == (232, 300)

    @pytest.mark.parametrize("count", range(1, 10))
    @pytest.mark.parametrize("is_root", [True, False])
    def test_child_angles_never_exceed_full_turn(self, engine, count, is_root):
        slots = count + (0 if is_root else 1)
        angle = engine.child_angle(count, is_root)
        assert angle <= math.pi
        assert angle * slots <= 2 * math.pi + 1e-12

    def test_draw_order_is_preorder(self, engine):
        tree = Tree("root")
        a = tree.add_child(tree.root, "A")
        tree.add_child(a, "A1")
        tree.add_child(tree.root, "B")
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        names = [tree.value(c.node) for c in result.visible_circles]
        assert names == ["root", "A", "A1", "B"]

    def test_edge_precedes_its_subtree(self, engine):
        tree = Tree("root")
        a = tree.add_child(tree.root, "A")
        tree.add_child(a, "A1")
        tree.add_child(tree.root, "B")
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        kinds = [type(c) for c in result.draw_commands if not isinstance(c, LabelCommand)]
        assert kinds == [
            CircleCommand,  # root
            LineCommand, CircleCommand,  # A
            LineCommand, CircleCommand,  # A1
            LineCommand, CircleCommand,  # B
        ]


class TestColors:

    def test_depth_bands_repeat_every_seven_levels(self, engine):
        result = engine.layout(chain(8), 800, 600, 300.0, 0.0, 1.0)

        circles = result.circles
        assert len(circles) == 8
        assert circles[0].fill == (255, 128, 128)
        assert circles[0].outline == (204, 0, 0)
        assert circles[7].fill == circles[0].fill
        assert circles[7].outline == circles[0].outline
        assert len({c.fill for c in circles[:7]}) == 7


class TestThresholds:

    def test_tiny_root_stops_descent(self, engine):
        result = engine.layout(simple_tree(), 800, 600, 0.0, 0.0, 0.03)

        assert len(result.visible_circles) == 1
        assert result.lines == []
        assert result.labels == []

    def test_small_circles_have_no_labels(self, engine):
        result = engine.layout(simple_tree(), 800, 600, 0.0, 0.0, 0.15)

        assert result.labels == []
        assert len(result.visible_circles) > 1


class TestCulling:

    def test_culled_root_still_reaches_child(self, engine):
        tree = Tree("root")
        child = tree.add_child(tree.root, "only")
        result = engine.layout(tree, 800, 600, 460.0, 0.0, 1.0)

        assert [c.node for c in result.visible_circles] == [child]
        (line,) = result.lines
        assert (line.x1, line.x2) == (810, 692)

    def test_zero_viewport_draws_nothing(self, engine):
        result = engine.layout(simple_tree(), 0, 0, 0.0, 0.0, 1.0)

        assert result.draw_commands == []
        assert result.visible_circles == []
        assert engine.hit_test(0, 0) is None

    def test_everything_off_screen(self, engine):
        result = engine.layout(simple_tree(), 800, 600, 1e6, 1e6, 1.0)
        assert result.draw_commands == []


class TestPurity:

    def test_identical_inputs_identical_output(self, engine):
        tree = example_tree()
        size = len(tree)

        first = engine.layout(tree, 800, 600, 12.0, -7.0, 1.3)
        second = engine.layout(tree, 800, 600, 12.0, -7.0, 1.3)

        assert first.draw_commands == second.draw_commands
        assert first.visible_circles == second.visible_circles
        assert len(tree) == size

    def test_hit_index_follows_last_layout(self, engine):
        engine.layout(Tree("solo"), 800, 600, 0.0, 0.0, 1.0)
        hit = engine.hit_test(400, 300)
        assert hit is not None and hit.depth == 0
        assert engine.hit_test(400, 300) == hit

        engine.layout(Tree("solo"), 800, 600, 300.0, 0.0, 1.0)
        assert engine.hit_test(400, 300) is None


class TestFractalTrees:

    @staticmethod
    def self_loop() -> Tree:
        tree = Tree("loop")
        tree.attach_child(tree.root, tree.root)
        return tree

    def test_radius_threshold_ends_self_loop(self, engine):
        result = engine.layout(self.self_loop(), 800, 600, 300.0, 0.0, 1.0)
        assert max(c.depth for c in result.visible_circles) == 8

    def test_depth_limit_ends_self_loop(self):
        engine = RadialLayoutEngine(ViewerConfig(max_depth=3))
        result = engine.layout(self.self_loop(), 800, 600, 300.0, 0.0, 1.0)
        assert max(c.depth for c in result.visible_circles) == 3

    def test_depth_limit_deeper_than_recursion_limit(self, caplog):
        # at this zoom the radius stays above min_draw_radius past depth 1500
        caplog.set_level(logging.DEBUG, logger="treevisualizer.controller.layout")
        engine = RadialLayoutEngine(ViewerConfig(max_depth=1500))

        result = engine.layout(self.self_loop(), 800, 600, 0.0, 0.0, 1e300)

        assert result.visible_circles
        assert "Depth limit 1500 reached" in caplog.text

    def test_large_depth_limit_is_accepted(self):
        engine = RadialLayoutEngine(ViewerConfig(max_depth=5000))
        result = engine.layout(self.self_loop(), 800, 600, 0.0, 0.0, 1e300)
        assert result.visible_circles

    def test_extreme_zoom_does_not_raise(self, engine):
        result = engine.layout(self.self_loop(), 800, 600, 0.0, 0.0, 1e300)
        assert result.visible_circles
        assert max(c.depth for c in result.visible_circles) <= engine.config.max_depth

    def test_example_tree_lays_out(self, engine):
        tree = example_tree()
        result = engine.layout(tree, 800, 600, 0.0, 0.0, 1.0)

        depth_one = [c.node for c in result.visible_circles if c.depth == 1]
        assert [tree.value(n) for n in depth_one] == ["A", "B", "C", "Fractal"]
