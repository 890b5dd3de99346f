from .canvas import draw_hline, draw_vline, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import draw_disc
from .draw_text import draw_text, text_size
from .fill import fill_polygon_gradient

__all__ = [
    "draw_disc",
    "draw_hline",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_polygon_gradient",
    "new_canvas",
    "text_size",
]
