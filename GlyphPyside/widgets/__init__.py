"""PySide widgets rendering the glyph overlay."""

from .glyph_formats import font_for_style, hidden_source_format
from .math_overlay import MathOverlayController, MathOverlayEditor

__all__ = [
    "MathOverlayController",
    "MathOverlayEditor",
    "font_for_style",
    "hidden_source_format",
]
