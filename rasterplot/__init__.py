from rasterplot.api import new_plot
from rasterplot.axis import Axis, HorizontalAxis, VerticalAxis
from rasterplot.config import PlotDefaults, resolve_defaults
from rasterplot.draw import Canvas, LineStyle
from rasterplot.errors import FontResolutionError, PlotDataError, RasterPlotError
from rasterplot.geometry import Point, Rectangle
from rasterplot.glyphbox import GlyphBox
from rasterplot.legend import Legend
from rasterplot.painter import Painter, RasterPainter
from rasterplot.plot import Plot, PlotLayout
from rasterplot.plotters import BarChart, Line, Scatter
from rasterplot.text import TextStyle
from rasterplot.ticks import ConstantTicks, DefaultTicks, LogTicks, Tick

__all__ = [
    "Axis",
    "BarChart",
    "Canvas",
    "ConstantTicks",
    "DefaultTicks",
    "FontResolutionError",
    "GlyphBox",
    "HorizontalAxis",
    "Legend",
    "Line",
    "LineStyle",
    "LogTicks",
    "Painter",
    "Plot",
    "PlotDataError",
    "PlotDefaults",
    "PlotLayout",
    "RasterPainter",
    "RasterPlotError",
    "Rectangle",
    "Point",
    "Scatter",
    "TextStyle",
    "Tick",
    "VerticalAxis",
    "new_plot",
    "resolve_defaults",
]
