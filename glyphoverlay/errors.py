from __future__ import annotations


class GlyphOverlayError(RuntimeError):
    """Base class for errors raised by the glyph overlay engine."""


class GlyphTableError(GlyphOverlayError):
    """Raised when the glyph table cannot be read or has an invalid root."""


class SettingsStoreError(GlyphOverlayError):
    """Raised when a settings file cannot be loaded or saved."""
