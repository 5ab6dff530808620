"""Unicode glyph overlay for plain-text math notation."""

from .decorations import DecorationEngine, DecorationRegistry, DecorationStyle, MatchInstance
from .errors import GlyphOverlayError, GlyphTableError, SettingsStoreError
from .glyph_table import GlyphTable, load_glyph_table
from .settings_models import GenerationPhase, RenderingMode

__all__ = [
    "DecorationEngine",
    "DecorationRegistry",
    "DecorationStyle",
    "GenerationPhase",
    "GlyphOverlayError",
    "GlyphTable",
    "GlyphTableError",
    "MatchInstance",
    "RenderingMode",
    "SettingsStoreError",
    "load_glyph_table",
]
