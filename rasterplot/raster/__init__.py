from .canvas import blend_coverage, draw_pixel, new_canvas
from .draw_lines import draw_polyline
from .draw_polygon import fill_polygon
from .draw_text import draw_text, load_font, text_size

__all__ = [
    "blend_coverage",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "fill_polygon",
    "load_font",
    "new_canvas",
    "text_size",
]
