"""
Widget Module - conky text layout.

widget/
├── markup.py      # ${colorN} highlighting and "#" escaping
├── grid.py        # Multi-week calendar grid (left panel)
└── compositor.py  # Side-by-side join of grid and agenda

The agenda (right panel) is rendered next to the calendar data it formats,
in gcal_conky.environments.google.calendar.renderer.
"""

from gcal_conky.widget.compositor import SEPARATOR, zip_columns
from gcal_conky.widget.grid import GRID_ROW_WIDTH, HEADER, build_grid
from gcal_conky.widget.markup import CONKY, PLAIN, Markup, highlight

__all__ = [
    "build_grid",
    "zip_columns",
    "highlight",
    "Markup",
    "CONKY",
    "PLAIN",
    "GRID_ROW_WIDTH",
    "HEADER",
    "SEPARATOR",
]
