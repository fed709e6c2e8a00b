from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

from rasterplot import FontResolutionError, PlotDefaults, new_plot
from rasterplot.draw import Canvas
from rasterplot.geometry import Point, Rectangle
from rasterplot.glyphbox import GlyphBox
from rasterplot.plot import GLYPH_BOX_COLOR, Plot
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


class _Ranger:
    def __init__(self, xmin: float, xmax: float, ymin: float, ymax: float) -> None:
        self._range = (xmin, xmax, ymin, ymax)

    def plot(self, c, plt, x_axis, y_axis) -> None:
        pass

    def data_range(self) -> tuple[float, float, float, float]:
        return self._range


class _Recorder:
    def __init__(self, name: str, log: list) -> None:
        self.name = name
        self.log = log

    def plot(self, c, plt, x_axis, y_axis) -> None:
        self.log.append((self.name, c, y_axis))

    def thumbnail(self, c) -> None:
        self.log.append(("legend:" + self.name, c, None))


class _Boxer:
    def __init__(self, boxes: list[GlyphBox]) -> None:
        self.boxes = boxes

    def plot(self, c, plt, x_axis, y_axis) -> None:
        pass

    def glyph_boxes(self, plt, x_axis, y_axis) -> list[GlyphBox]:
        return list(self.boxes)


class PlotRangeTests(unittest.TestCase):
    def test_add_widens_axes_to_cover_every_range(self) -> None:
        p = Plot()
        p.add(_Ranger(1.0, 5.0, -2.0, 3.0), _Ranger(0.0, 4.0, -1.0, 10.0))
        self.assertEqual((p.x.min, p.x.max), (0.0, 5.0))
        self.assertEqual((p.ys[0].min, p.ys[0].max), (-2.0, 10.0))

    def test_add_order_does_not_matter(self) -> None:
        a = _Ranger(1.0, 5.0, -2.0, 3.0)
        b = _Ranger(0.0, 4.0, -1.0, 10.0)
        p1 = Plot()
        p1.add(a, b)
        p2 = Plot()
        p2.add(b, a)
        self.assertEqual((p1.x.min, p1.x.max, p1.ys[0].min, p1.ys[0].max), (p2.x.min, p2.x.max, p2.ys[0].min, p2.ys[0].max))

    def test_add_never_narrows(self) -> None:
        p = Plot()
        p.add(_Ranger(0.0, 10.0, 0.0, 10.0))
        p.add(_Ranger(2.0, 3.0, 4.0, 5.0))
        self.assertEqual((p.x.min, p.x.max, p.ys[0].min, p.ys[0].max), (0.0, 10.0, 0.0, 10.0))

    def test_add_with_axis_rejects_unknown_axis(self) -> None:
        p = Plot()
        with self.assertRaises(ValueError):
            p.add_with_axis(1, _Ranger(0.0, 1.0, 0.0, 1.0))
        self.assertEqual(p.plotters, [])

    def test_glyph_boxes_are_filtered(self) -> None:
        dropped = GlyphBox(x=1.5, rect=Rectangle(Point(-1.0, 0.0), Point(1.0, 0.0)))
        kept = GlyphBox(x=1.5, y=0.5, rect=Rectangle(Point(0.0, -1.0), Point(0.0, 1.0)))
        p = Plot()
        p.add(_Boxer([dropped, kept]), _Ranger(0.0, 1.0, 0.0, 1.0))
        self.assertEqual(p.glyph_boxes(), [kept])


class PlotLayoutTests(unittest.TestCase):
    def test_data_rect_is_inset_by_axes_and_title(self) -> None:
        p = Plot()
        p.title.text = "T"
        c = Canvas.full(_RecordingPainter(), 200, 200)
        data = p.data_canvas(c).rect
        self.assertGreater(data.min.x, 0.0)
        self.assertGreater(data.min.y, 0.0)
        self.assertLess(data.max.x, 200.0)
        self.assertLess(data.max.y, 200.0 - p.title.style.height("T"))

        p.hide_axes()
        hidden = p.data_canvas(c).rect
        self.assertAlmostEqual(hidden.min.x, 0.0)
        self.assertAlmostEqual(hidden.min.y, 0.0)
        self.assertAlmostEqual(hidden.max.x, 200.0)
        self.assertAlmostEqual(hidden.max.y, 200.0 - p.title.style.height("T") - p.title.padding)

    def test_layout_is_repeatable_and_nested(self) -> None:
        p = Plot()
        p.add(Scatter([1, 4, 2, 6]))
        c = Canvas.full(_RecordingPainter(), 240, 160)
        first = p.layout(c)
        second = p.layout(c)
        self.assertEqual(first.data.rect, second.data.rect)
        self.assertTrue(first.area.rect.contains(first.data.rect))
        self.assertTrue(first.area.rect.contains(first.legend.rect))
        self.assertIsNone(first.secondary_y_axis)
        self.assertEqual(first.data.rect, p.data_canvas(c).rect)

    def test_secondary_axis_reserves_right_margin(self) -> None:
        p = Plot()
        self.assertEqual(p.add_y_axis(), 1)
        self.assertEqual(len(p.ys), 2)
        c = Canvas.full(_RecordingPainter(), 300, 200)
        layout = p.layout(c)
        assert layout.secondary_y_axis is not None
        margin = p.defaults.secondary_axis_margin
        self.assertAlmostEqual(layout.secondary_y_axis.rect.min.x, 300.0 - margin)
        self.assertAlmostEqual(layout.secondary_y_axis.rect.max.x, 300.0)
        self.assertLessEqual(layout.data.rect.max.x, 300.0 - margin)

    def test_renderer_on_secondary_axis_receives_it(self) -> None:
        log: list = []
        p = Plot()
        idx = p.add_y_axis()
        p.add(_Ranger(0.0, 10.0, 0.0, 10.0))
        p.add_with_axis(idx, _Ranger(0.0, 10.0, 0.0, 100.0), _Recorder("r", log))
        p.draw(Canvas.full(_RecordingPainter(), 300, 200))
        self.assertIs(log[0][2], p.ys[1])

        data = p.data_canvas(Canvas.full(_RecordingPainter(), 300, 200))
        _, fy0 = p.transforms(data, p.x, p.ys[0])
        _, fy1 = p.transforms(data, p.x, p.ys[1])
        self.assertNotAlmostEqual(fy0(5.0), fy1(5.0))

    def test_nominal_x_places_names_at_integer_positions(self) -> None:
        p = Plot()
        p.nominal_x("a", "b", "c")
        ticks = p.x.ticks()
        self.assertEqual([(t.value, t.label) for t in ticks], [(0.0, "a"), (1.0, "b"), (2.0, "c")])
        self.assertEqual(p.x.tick.length, 0.0)
        self.assertEqual(p.x.tick.line.width, 0.0)
        self.assertEqual(p.x.line.width, 0.0)
        self.assertAlmostEqual(p.ys[-1].padding, p.x.tick.label.width("a") / 2.0)
        with self.assertRaises(ValueError):
            p.nominal_x()

    def test_nominal_y_pads_x_axis(self) -> None:
        p = Plot()
        p.x.padding = 0.0
        p.nominal_y(0, "low", "high")
        self.assertEqual([t.label for t in p.ys[0].ticks()], ["low", "high"])
        self.assertAlmostEqual(p.x.padding, p.ys[0].tick.label.height("low") / 2.0)
        with self.assertRaises(ValueError):
            p.nominal_y(0)


class PlotDrawTests(unittest.TestCase):
    def test_paint_order(self) -> None:
        log: list = []
        p = Plot()
        p.title.text = "Title"
        first = _Recorder("first", log)
        second = _Recorder("second", log)
        p.add(first, second)
        p.legend.add("first", first)
        painter = _RecordingPainter()
        p.draw(Canvas.full(painter, 200, 150))

        self.assertEqual(painter.ops[0], ("color", p.background_color))
        self.assertEqual(painter.ops[1][0], "fill")
        self.assertEqual(painter.ops[2][0], "text")
        self.assertEqual(painter.ops[2][2], "Title")
        self.assertEqual([entry[0] for entry in log], ["first", "second", "legend:first"])

    def test_background_skipped_when_none(self) -> None:
        p = Plot()
        p.background_color = None
        p.hide_axes()
        painter = _RecordingPainter()
        p.draw(Canvas.full(painter, 50, 50))
        self.assertEqual(painter.of("fill"), [])

    def test_draw_glyph_boxes_outlines_each_box(self) -> None:
        p = Plot()
        p.add(Scatter([1, 2, 3], radius=3))
        painter = _RecordingPainter()
        c = Canvas.full(painter, 120, 120)
        p.draw_glyph_boxes(p.data_canvas(c))
        self.assertEqual(painter.ops[0], ("color", GLYPH_BOX_COLOR))
        self.assertEqual(len(painter.of("stroke")), 3)

    def test_strict_fonts_fail_fast(self) -> None:
        with self.assertRaises(FontResolutionError):
            Plot(PlotDefaults(font_family="definitely-not-a-real-font-family", strict_fonts=True))
        with self.assertRaises(FontResolutionError):
            new_plot(font_family="definitely-not-a-real-font-family", strict_fonts=True)

    def test_to_rgba_deterministic(self) -> None:
        y = np.asarray([1, 4, 2, 6, 3, 7, 5], dtype=np.float64)
        p = new_plot()
        p.title.text = "demo"
        p.x.label.text = "idx"
        p.ys[0].label.text = "val"
        p.add(Scatter(y, color=(10, 200, 120)), Line(y, color=(240, 120, 10)))

        frame1 = p.to_rgba(128, 96)
        frame2 = p.to_rgba(128, 96)

        self.assertEqual(frame1.shape, (96, 128, 4))
        self.assertEqual(frame1.dtype, np.uint8)
        self.assertTrue(np.array_equal(frame1, frame2))
        self.assertTrue(np.any(np.all(frame1[:, :, :3] == np.asarray([10, 200, 120]), axis=2)))

    def test_log_axis_with_single_point_renders(self) -> None:
        p = Plot()
        p.ys[0].use_log_scale()
        p.add(Scatter([1.0]))
        frame = p.to_rgba(120, 90)
        self.assertEqual(frame.shape, (90, 120, 4))
        self.assertEqual((p.ys[0].min, p.ys[0].max), (0.1, 10.0))

    def test_log_axis_without_data_renders(self) -> None:
        p = Plot()
        p.ys[0].use_log_scale()
        frame = p.to_rgba(120, 90)
        self.assertEqual(frame.shape, (90, 120, 4))
        self.assertEqual(frame.dtype, np.uint8)

    def test_log_axis_bars_start_at_range_bottom(self) -> None:
        p = Plot()
        p.ys[0].use_log_scale()
        p.add(BarChart([10.0, 100.0]))
        self.assertEqual(p.to_rgba(120, 90).shape, (90, 120, 4))

    def test_legend_changes_frame(self) -> None:
        x = np.asarray([0, 1, 2, 3, 4], dtype=np.float64)
        y = np.asarray([1, 2, 1.5, 2.5, 2.0], dtype=np.float64)

        plain = Plot()
        plain.add(Line(y, x=x, color=(255, 170, 70)))
        with_legend = Plot()
        line = Line(y, x=x, color=(255, 170, 70))
        with_legend.add(line)
        with_legend.legend.add("A", line)

        self.assertFalse(np.array_equal(plain.to_rgba(260, 180), with_legend.to_rgba(260, 180)))

    def test_save_writes_png(self) -> None:
        p = Plot()
        p.add(Scatter([3, 1, 2]))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plot.png"
            p.save(path, 64, 48)
            with Image.open(path) as img:
                self.assertEqual(img.size, (64, 48))
                self.assertEqual(img.mode, "RGBA")


if __name__ == "__main__":
    unittest.main()
