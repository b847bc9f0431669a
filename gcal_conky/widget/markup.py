"""
conky text markup.

conky interprets ${...} variables in its text output, so highlighting is a
color switch around the text (${color1}...${color0}) and a literal "#" has to
be written as "\\#". The Markup object carries both operations so the same
layout code can also produce plain terminal text.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Markup:
    """
    Highlight/escape strategy for rendered lines.

    Attributes:
        enabled: Emit conky color variables; False returns text unchanged
        accent: Color slot used when highlight() is called without one
    """
    enabled: bool = True
    accent: int = 1

    def highlight(self, text: str, color_id: Optional[int] = None) -> str:
        """Wrap text in ${colorN}...${color0}."""
        if not self.enabled:
            return text
        if color_id is None:
            color_id = self.accent
        return f"${{color{color_id}}}{text}${{color0}}"

    def escape(self, text: str) -> str:
        """Escape characters conky treats as control characters."""
        if not self.enabled:
            return text
        return text.replace("#", "\\#")


CONKY = Markup()
PLAIN = Markup(enabled=False)


def highlight(color_id: int, text: str) -> str:
    """Module-level shortcut for CONKY markup with an explicit color."""
    return CONKY.highlight(text, color_id)
