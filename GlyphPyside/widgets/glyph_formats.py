"""Conversions from engine style descriptors to Qt text formats and fonts."""

from __future__ import annotations

from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QTextCharFormat

from glyphoverlay.decorations.styles import DecorationStyle

_hidden_source_fmt = QTextCharFormat()
_hidden_source_fmt.setForeground(QBrush(QColor(0, 0, 0, 0)))  # fully transparent


def hidden_source_format() -> QTextCharFormat:
    """Format for source text that sits under a painted glyph."""
    return QTextCharFormat(_hidden_source_fmt)


def font_for_style(base: QFont, style: DecorationStyle) -> QFont:
    font = QFont(base)
    if style.font_family:
        font.setFamilies([style.font_family, *base.families()])
    size = base.pointSizeF()
    if size > 0 and style.scale != 1.0:
        font.setPointSizeF(max(1.0, size * style.scale))
    if style.letter_spacing:
        font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, style.letter_spacing * em_width(base))
    font.setBold(style.bold)
    font.setItalic(style.italic)
    return font


def em_width(font: QFont) -> float:
    return QFontMetricsF(font).horizontalAdvance("M")
