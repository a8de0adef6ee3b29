from __future__ import annotations

import unittest

from dashplot.stacking import build_stacked_bands


class StackedBandTests(unittest.TestCase):
    def test_normalized_bands_are_percentages(self) -> None:
        rows = [
            {"cat": "A", "series": "x", "v": 3},
            {"cat": "A", "series": "y", "v": 7},
        ]
        layout = build_stacked_bands(rows, "cat", "series", "v", normalized=True)
        x, y = layout.bands["A"]
        self.assertEqual((x.series, x.y0, x.y1), ("x", 0.0, 30.0))
        self.assertEqual((y.series, y.y0, y.y1), ("y", 30.0, 100.0))
        self.assertEqual(layout.totals["A"], 100.0)
        self.assertEqual(layout.max_total(), 100.0)

    def test_missing_series_are_zero_filled(self) -> None:
        rows = [
            {"cat": "A", "series": "x", "v": 1},
            {"cat": "B", "series": "y", "v": 2},
        ]
        layout = build_stacked_bands(rows, "cat", "series", "v")
        self.assertEqual(layout.categories, ("A", "B"))
        self.assertEqual(layout.series, ("x", "y"))
        self.assertEqual([(b.series, b.y0, b.y1) for b in layout.bands["A"]], [("x", 0.0, 1.0), ("y", 1.0, 1.0)])
        self.assertEqual([(b.series, b.y0, b.y1) for b in layout.bands["B"]], [("x", 0.0, 0.0), ("y", 0.0, 2.0)])

    def test_duplicates_sum_and_order_is_first_seen(self) -> None:
        rows = [
            {"cat": "Q1", "series": "b", "v": 1},
            {"cat": "Q1", "series": "a", "v": 4},
            {"cat": "Q1", "series": "b", "v": 2},
        ]
        layout = build_stacked_bands(rows, "cat", "series", "v")
        self.assertEqual(layout.series, ("b", "a"))
        b, a = layout.bands["Q1"]
        self.assertEqual(b.value, 3.0)
        self.assertEqual((a.y0, a.y1), (3.0, 7.0))

    def test_zero_total_normalizes_to_zero(self) -> None:
        with self.assertLogs("dashplot.stacking", level="DEBUG") as captured:
            layout = build_stacked_bands([{"cat": "A", "series": "x", "v": 0}], "cat", "series", "v", normalized=True)
        self.assertIn("zero total", captured.output[0])
        (band,) = layout.bands["A"]
        self.assertEqual((band.value, band.y0, band.y1), (0.0, 0.0, 0.0))
        self.assertEqual(layout.totals["A"], 0.0)

    def test_non_numeric_values_do_not_add(self) -> None:
        rows = [
            {"cat": "A", "series": "x", "v": "n/a"},
            {"cat": None, "series": "x", "v": "2.5"},
        ]
        layout = build_stacked_bands(rows, "cat", "series", "v")
        self.assertEqual(layout.categories, ("A", ""))
        self.assertEqual(layout.bands["A"][0].y1, 0.0)
        self.assertEqual(layout.bands[""][0].y1, 2.5)

    def test_top_band_reaches_category_total(self) -> None:
        rows = [
            {"cat": c, "series": s, "v": v}
            for c, s, v in [
                ("Jan", "web", 0.1),
                ("Jan", "store", 0.2),
                ("Feb", "web", 12.5),
                ("Feb", "phone", 3.25),
                ("Mar", "store", 7),
            ]
        ]
        for normalized in (False, True):
            layout = build_stacked_bands(rows, "cat", "series", "v", normalized=normalized)
            for category in layout.categories:
                stack = layout.bands[category]
                self.assertEqual(len(stack), len(layout.series))
                for band in stack:
                    self.assertLessEqual(band.y0, band.y1)
                self.assertAlmostEqual(stack[-1].y1, layout.totals[category])
        self.assertEqual(build_stacked_bands(rows, "cat", "series", "v").max_total(), 15.75)


if __name__ == "__main__":
    unittest.main()
