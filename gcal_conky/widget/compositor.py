"""
Compositor - join the grid and the agenda into side-by-side lines.

Row i of the left panel is paired with row i of the right panel. The
shorter panel is padded: a missing left row becomes blank space of the grid
width, a missing right row becomes an empty string. Right panel text is
escaped here, at the output boundary, not by the renderer that produced it.
"""

from typing import List, Sequence

from gcal_conky.widget.grid import GRID_ROW_WIDTH
from gcal_conky.widget.markup import CONKY, Markup


SEPARATOR = "    "


def zip_columns(
    left: Sequence[str],
    right: Sequence[str],
    markup: Markup = CONKY,
    blank_width: int = GRID_ROW_WIDTH,
    separator: str = SEPARATOR,
) -> List[str]:
    """
    Zip two line sequences into combined output lines.

    Every right-panel line goes through markup.escape. With PLAIN markup
    the output is meant for a terminal, not conky, so "#" is left as is.

    Args:
        left: Grid lines
        right: Agenda lines (escaped with markup.escape)
        markup: Escape strategy for the right panel
        blank_width: Width of the filler used when left runs out
        separator: Fixed gap between the panels

    Returns:
        max(len(left), len(right)) combined lines
    """
    blank = " " * blank_width
    lines = []
    for i in range(max(len(left), len(right))):
        left_part = left[i] if i < len(left) else blank
        right_part = markup.escape(right[i]) if i < len(right) else ""
        lines.append(left_part + separator + right_part)
    return lines
