from __future__ import annotations

from decimal import Decimal
import itertools
import unittest

import numpy as np

from dashplot.palette import color_for_index, lighten_color
from dashplot.series import LayoutRect, TreemapNode
from dashplot.treemap import build_treemap_nodes, layout_treemap, squarify


def _nodes(*values: float) -> list[TreemapNode]:
    return [TreemapNode(label=f"n{i}", value=float(v)) for i, v in enumerate(values)]


def _overlap(a: LayoutRect, b: LayoutRect) -> float:
    w = min(a.x + a.width, b.x + b.width) - max(a.x, b.x)
    h = min(a.y + a.height, b.y + b.height) - max(a.y, b.y)
    return max(0.0, w) * max(0.0, h)


class SquarifyTests(unittest.TestCase):
    def assert_tiles(self, placed: list[TreemapNode], container: LayoutRect) -> None:
        rects = [n.rect for n in placed]
        for rect in rects:
            assert rect is not None
            self.assertGreaterEqual(rect.x, container.x - 1e-9)
            self.assertGreaterEqual(rect.y, container.y - 1e-9)
            self.assertLessEqual(rect.x + rect.width, container.x + container.width + 1e-9)
            self.assertLessEqual(rect.y + rect.height, container.y + container.height + 1e-9)
        for a, b in itertools.combinations(rects, 2):
            assert a is not None and b is not None
            self.assertLessEqual(_overlap(a, b), 1e-6 * container.area)
        total_area = sum(r.area for r in rects if r is not None)
        self.assertAlmostEqual(total_area / container.area, 1.0, delta=1e-6)

    def test_reference_layout_keeps_value_ratios(self) -> None:
        container = LayoutRect(x=0, y=0, width=600, height=400)
        placed = squarify(_nodes(6, 4, 3, 2, 1), container, 16)
        self.assertEqual(len(placed), 5)
        self.assertEqual([n.value for n in placed], [6.0, 4.0, 3.0, 2.0, 1.0])
        for node in placed:
            assert node.rect is not None
            self.assertAlmostEqual(node.rect.area / node.value, 600 * 400 / 16, places=6)
        self.assert_tiles(placed, container)

    def test_empty_and_single_node(self) -> None:
        container = LayoutRect(x=5, y=6, width=70, height=80)
        self.assertEqual(squarify([], container, 10), [])
        (only,) = squarify(_nodes(3), container, 3)
        self.assertEqual(only.rect, container)

    def test_random_inputs_tile_the_container(self) -> None:
        rng = np.random.default_rng(3)
        for n in (2, 3, 7, 20, 64):
            for width, height in ((600, 400), (120, 900), (333.3, 333.3)):
                values = (rng.pareto(1.5, size=n) + 0.01).tolist()
                container = LayoutRect(x=10, y=20, width=width, height=height)
                placed = squarify(_nodes(*values), container, sum(values))
                self.assertEqual(len(placed), n)
                self.assert_tiles(placed, container)

    def test_ties_keep_input_order(self) -> None:
        placed = squarify(_nodes(2, 5, 2, 2), LayoutRect(0, 0, 100, 100), 11)
        self.assertEqual([n.label for n in placed], ["n1", "n0", "n2", "n3"])

    def test_rows_improve_on_single_strips(self) -> None:
        placed = squarify(_nodes(*([1.0] * 16)), LayoutRect(0, 0, 400, 400), 16)
        worst = 0.0
        for node in placed:
            assert node.rect is not None
            ratio = max(node.rect.width / node.rect.height, node.rect.height / node.rect.width)
            worst = max(worst, ratio)
        self.assertLess(worst, 2.0)

    def test_non_positive_values_get_empty_cells(self) -> None:
        container = LayoutRect(x=1, y=2, width=50, height=30)
        placed = squarify(_nodes(5, 0, 3, float("nan")), container, 8)
        self.assertEqual([n.label for n in placed], ["n0", "n2", "n1", "n3"])
        for node in placed[2:]:
            self.assertEqual(node.rect, LayoutRect(x=1, y=2, width=0.0, height=0.0))
        self.assert_tiles(placed[:2], container)

    def test_larger_total_leaves_unused_space(self) -> None:
        container = LayoutRect(0, 0, 200, 100)
        placed = squarify(_nodes(1, 1), container, 4)
        for node in placed:
            assert node.rect is not None
            self.assertAlmostEqual(node.rect.area, container.area / 4)

    def test_numpy_and_decimal_values_are_laid_out(self) -> None:
        container = LayoutRect(0, 0, 100, 100)
        placed = squarify([TreemapNode("a", np.int64(3)), TreemapNode("b", np.int64(1))], container, 4)
        self.assertEqual([n.label for n in placed], ["a", "b"])
        assert placed[0].rect is not None
        self.assertAlmostEqual(placed[0].rect.area, 7500.0)
        self.assert_tiles(placed, container)

        mixed = [TreemapNode("c", Decimal("1.5")), TreemapNode("d", np.float32(4.5)), TreemapNode("e", 2)]
        placed = squarify(mixed, container, Decimal("8"))
        self.assertEqual([n.label for n in placed], ["d", "e", "c"])
        self.assertEqual(placed[2].value, Decimal("1.5"))
        self.assert_tiles(placed, container)

    def test_degenerate_container_does_not_raise(self) -> None:
        placed = squarify(_nodes(1, 2), LayoutRect(0, 0, 0, 100), 3)
        self.assertEqual(len(placed), 2)
        for node in placed:
            assert node.rect is not None
            self.assertEqual(node.rect.area, 0.0)


class NestedTreemapTests(unittest.TestCase):
    def test_children_tile_their_parent(self) -> None:
        nodes = [
            TreemapNode(label="A", value=6, children=tuple(_nodes(1, 2, 3))),
            TreemapNode(label="B", value=4, children=tuple(_nodes(4))),
        ]
        placed = layout_treemap(nodes, LayoutRect(0, 0, 300, 200), padding=2)
        parent = placed[0]
        assert parent.rect is not None
        inner = parent.rect.inset(2)
        self.assertEqual(len(parent.children), 3)
        self.assertAlmostEqual(sum(c.rect.area for c in parent.children if c.rect), inner.area)
        for child in parent.children:
            assert child.rect is not None
            self.assertGreaterEqual(child.rect.x, inner.x - 1e-9)
            self.assertLessEqual(child.rect.x + child.rect.width, inner.x + inner.width + 1e-9)

    def test_build_nodes_from_rows(self) -> None:
        rows = [
            {"cat": "A", "sub": "a1", "v": 2},
            {"cat": "A", "sub": "a2", "v": 3},
            {"cat": "B", "sub": "b1", "v": 5},
            {"cat": "B", "sub": "b2", "v": "oops"},
        ]
        nodes, total = build_treemap_nodes(rows, "cat", "v", subcategory_column="sub")
        self.assertEqual(total, 10.0)
        self.assertEqual([(n.label, n.value) for n in nodes], [("A", 5.0), ("B", 5.0)])
        self.assertEqual(nodes[0].color, color_for_index("default", 0))
        self.assertEqual(nodes[1].color, color_for_index("default", 1))
        self.assertEqual(nodes[0].children[1].color, lighten_color(nodes[0].color, 0.2))

        flat, flat_total = build_treemap_nodes(rows, "cat", "v", palette_id="ocean")
        self.assertEqual(len(flat), 3)
        self.assertEqual(flat_total, 10.0)
        self.assertEqual(flat[2].color, color_for_index("ocean", 2))


if __name__ == "__main__":
    unittest.main()
