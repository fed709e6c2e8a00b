from __future__ import annotations


class RasterPlotError(Exception):
    """Base class for errors raised by rasterplot."""


class PlotDataError(RasterPlotError):
    pass


class FontResolutionError(RasterPlotError):
    pass
