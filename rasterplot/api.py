from __future__ import annotations

from dataclasses import asdict
from typing import Any

from rasterplot.config import PlotDefaults, resolve_defaults
from rasterplot.plot import Plot


def new_plot(defaults: PlotDefaults | None = None, **overrides: Any) -> Plot:
    """Build a plot with default axes; keyword overrides are validated like `resolve_defaults`."""
    if defaults is None:
        resolved = resolve_defaults(overrides)
    elif overrides:
        resolved = resolve_defaults({**asdict(defaults), **overrides})
    else:
        resolved = defaults
    return Plot(resolved)
