from __future__ import annotations

import unittest

import numpy as np

from rasterplot.draw import Canvas
from rasterplot.errors import PlotDataError
from rasterplot.geometry import Point
from rasterplot.plot import Plot
from rasterplot.plotters import BarChart, Line, Scatter


class _RecordingPainter:
    def __init__(self) -> None:
        self.ops: list[tuple] = []

    def set_color(self, color) -> None:
        self.ops.append(("color", color))

    def set_line_width(self, width) -> None:
        self.ops.append(("width", width))

    def fill(self, path) -> None:
        self.ops.append(("fill", tuple(path)))

    def stroke(self, path) -> None:
        self.ops.append(("stroke", tuple(path)))

    def fill_text(self, style, point, text) -> None:
        self.ops.append(("text", point, text))

    def of(self, kind: str) -> list[tuple]:
        return [op for op in self.ops if op[0] == kind]


def _plot_into(renderer) -> _RecordingPainter:
    p = Plot()
    p.add(renderer)
    p.sanitize_ranges()
    painter = _RecordingPainter()
    renderer.plot(Canvas.full(painter, 100, 100), p, p.x, p.ys[0])
    return painter


class ScatterTests(unittest.TestCase):
    def test_one_marker_and_glyph_box_per_finite_point(self) -> None:
        s = Scatter([1.0, np.nan, 3.0, 2.0], radius=2)
        painter = _plot_into(s)
        self.assertEqual(len(painter.of("fill")), 3)

        p = Plot()
        p.add(s)
        boxes = s.glyph_boxes(p, p.x, p.ys[0])
        self.assertEqual(len(boxes), 3)
        self.assertEqual((boxes[0].size().x, boxes[0].size().y), (4.0, 4.0))
        self.assertEqual((boxes[0].x, boxes[0].y), (0.0, 0.0))

    def test_data_range_ignores_non_finite_points(self) -> None:
        s = Scatter([2.0, np.inf, 5.0], x=[10.0, 11.0, 12.0])
        self.assertEqual(s.data_range(), (10.0, 12.0, 2.0, 5.0))

    def test_rejects_bad_input(self) -> None:
        with self.assertRaises(ValueError):
            Scatter([1.0], radius=0)
        with self.assertRaises(PlotDataError):
            Scatter([])


class LineTests(unittest.TestCase):
    def test_non_finite_points_split_the_line(self) -> None:
        painter = _plot_into(Line([0.0, 0.5, np.nan, np.nan, 0.0, 0.5]))
        strokes = painter.of("stroke")
        self.assertEqual([len(s[1]) for s in strokes], [2, 2])

    def test_line_is_clipped_to_narrowed_range(self) -> None:
        line = Line([0.0, 10.0], x=[0.0, 10.0])
        p = Plot()
        p.add(line)
        p.ys[0].max = 5.0
        painter = _RecordingPainter()
        line.plot(Canvas.full(painter, 100, 100), p, p.x, p.ys[0])
        (_, path), = painter.of("stroke")
        self.assertEqual(path, (Point(0.0, 0.0), Point(50.0, 100.0)))

    def test_clip_splits_line_that_leaves_and_returns(self) -> None:
        c = Canvas.full(_RecordingPainter(), 100, 100)
        path = [Point(50.0, 50.0), Point(50.0, 150.0), Point(60.0, 150.0), Point(60.0, 50.0)]
        self.assertEqual(
            c.clip_lines(path),
            [[Point(50.0, 50.0), Point(50.0, 100.0)], [Point(60.0, 100.0), Point(60.0, 50.0)]],
        )
        crossing = [Point(-50.0, 50.0), Point(50.0, 50.0), Point(150.0, 50.0)]
        self.assertEqual(c.clip_lines(crossing), [[Point(0.0, 50.0), Point(50.0, 50.0), Point(100.0, 50.0)]])

    def test_thumbnail_is_horizontal(self) -> None:
        painter = _RecordingPainter()
        Line([1.0, 2.0], width=2).thumbnail(Canvas.full(painter, 20, 10))
        (_, path), = painter.of("stroke")
        self.assertEqual(path[0].y, path[1].y)
        self.assertEqual((path[0].x, path[1].x), (0.0, 20.0))
        self.assertIn(("width", 2.0), painter.ops)


class BarChartTests(unittest.TestCase):
    def test_data_range_includes_zero(self) -> None:
        self.assertEqual(BarChart([2.0, 3.0]).data_range(), (0.0, 1.0, 0.0, 3.0))
        self.assertEqual(BarChart([-1.0, -2.0]).data_range(), (0.0, 1.0, -2.0, 0.0))

    def test_glyph_boxes_have_zero_height(self) -> None:
        bars = BarChart([2.0, -1.5, 3.5], width=12)
        p = Plot()
        p.add(bars)
        boxes = bars.glyph_boxes(p, p.x, p.ys[0])
        self.assertEqual([b.x for b in boxes], [0.0, 0.5, 1.0])
        for b in boxes:
            self.assertEqual(b.size().x, 12.0)
            self.assertEqual(b.size().y, 0.0)

    def test_bars_rise_from_zero(self) -> None:
        painter = _plot_into(BarChart([2.0, -2.0], width=10))
        fills = [op[1] for op in painter.of("fill")]
        self.assertEqual(len(fills), 2)
        up, down = fills
        self.assertAlmostEqual(up[0].y, 50.0)
        self.assertAlmostEqual(up[2].y, 100.0)
        self.assertAlmostEqual(down[0].y, 0.0)
        self.assertAlmostEqual(down[2].y, 50.0)

    def test_bars_are_clipped_to_narrowed_range(self) -> None:
        bars = BarChart([10.0])
        p = Plot()
        p.add(bars)
        p.x.min, p.x.max = -1.0, 1.0
        p.ys[0].max = 5.0
        painter = _RecordingPainter()
        bars.plot(Canvas.full(painter, 100, 100), p, p.x, p.ys[0])
        (_, path), = painter.of("fill")
        self.assertEqual((path[0], path[2]), (Point(45.0, 0.0), Point(55.0, 100.0)))

    def test_rejects_nonpositive_width(self) -> None:
        with self.assertRaises(ValueError):
            BarChart([1.0], width=0)


if __name__ == "__main__":
    unittest.main()
