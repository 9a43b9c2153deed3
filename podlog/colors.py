"""
Color utilities for rendered log lines.

Rendered lines use a style markup of the form ``[<color>::<attrs>]text[-::-]``.
This module builds those tags, translates them to ANSI escape codes for
terminal output, and strips them for plain text.
"""

import re
from typing import Optional

# Matches [fg:bg:attrs] style tags; bg is never emitted by the renderer.
MARKUP_TAG = re.compile(r"\[([a-zA-Z0-9#\-]*):([a-zA-Z0-9#\-]*):([a-zA-Z\-]*)\]")


class Colors:
    """Markup tags and ANSI color codes for terminal output."""

    # Foreground SGR parameters by color name
    CODES = {
        'black': '30',
        'red': '31',
        'green': '32',
        'yellow': '33',
        'blue': '34',
        'magenta': '35',
        'purple': '35',
        'cyan': '36',
        'aqua': '36',
        'white': '37',
        'gray': '90',
        'grey': '90',
        'orange': '38;5;208',
        'lime': '92',
        'fuchsia': '95',
        'dodgerblue': '38;5;33',
        'lightskyblue': '38;5;117',
        'greenyellow': '38;5;154',
        'coral': '38;5;209',
    }

    BOLD = '1'

    # Reset
    RESET = '\033[0m'

    # Markup closing tags
    CLOSE = '[-::-]'
    CLOSE_COLOR = '[-::]'

    @staticmethod
    def tag(color: str, attrs: str = "") -> str:
        """Build an opening markup tag such as ``[green::b]``."""
        return f"[{color}::{attrs}]"

    @staticmethod
    def ansi_code(color: str) -> Optional[str]:
        """
        Get the SGR foreground parameter for a color.

        Args:
            color: Color name or ``#rrggbb`` hex value

        Returns:
            Optional[str]: The SGR parameter, or None for unknown colors
        """
        if color.startswith('#') and len(color) == 7:
            try:
                r, g, b = (int(color[i:i + 2], 16) for i in (1, 3, 5))
            except ValueError:
                return None
            return f"38;2;{r};{g};{b}"
        return Colors.CODES.get(color.lower())

    @staticmethod
    def to_ansi(text: str) -> str:
        """
        Translate style markup into ANSI escape sequences.

        An empty field leaves the current setting unchanged, ``-`` resets it.
        The output always ends with a reset when any tag was translated.
        """
        fg: Optional[str] = None
        bold = False
        out = []
        last = 0
        for match in MARKUP_TAG.finditer(text):
            out.append(text[last:match.start()])
            last = match.end()

            color, _, attrs = match.groups()
            if color == '-':
                fg = None
            elif color:
                fg = Colors.ansi_code(color)
            if attrs == '-':
                bold = False
            elif attrs:
                bold = 'b' in attrs

            params = [p for p in (Colors.BOLD if bold else None, fg) if p]
            out.append(Colors.RESET)
            if params:
                out.append(f"\033[{';'.join(params)}m")

        if last == 0:
            return text
        out.append(text[last:])
        out.append(Colors.RESET)
        return ''.join(out)

    @staticmethod
    def strip(text: str) -> str:
        """Remove all style markup from text."""
        return MARKUP_TAG.sub('', text)
