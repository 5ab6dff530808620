"""Editor overlay that paints engine glyphs over hidden source text."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, QPointF, QTimer, Signal
from PySide6.QtGui import QColor, QFontMetricsF, QPainter, QTextCursor
from PySide6.QtWidgets import QPlainTextEdit, QTextEdit

from glyphoverlay.decorations.engine import DecorationEngine, PaintList
from GlyphPyside.widgets.glyph_formats import em_width, font_for_style, hidden_source_format

logger = logging.getLogger(__name__)


def _cursor_x(line, pos: int) -> float:
    v = line.cursorToX(pos)
    return float(v[0] if isinstance(v, tuple) else v)


class MathOverlayController(QObject):
    """Debounces document changes into engine passes for one editor.

    Each pass runs on a snapshot tagged with the document revision; the
    engine drops a pass older than the last one it applied.
    """

    decorationsUpdated = Signal(int)  # number of painted glyphs

    def __init__(self, editor: QPlainTextEdit, engine: DecorationEngine, *, debounce_ms: int = 150, parent=None):
        super().__init__(parent or editor)
        self._editor = editor
        self._engine = engine
        self._paint_list: PaintList = []
        self._selections: list[QTextEdit.ExtraSelection] = []

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.setInterval(max(0, int(debounce_ms)))
        self._debounce.timeout.connect(self.refresh)

        editor.document().contentsChanged.connect(self.schedule_refresh)

    @property
    def engine(self) -> DecorationEngine:
        return self._engine

    @property
    def paint_list(self) -> PaintList:
        return self._paint_list

    @property
    def selections(self) -> list[QTextEdit.ExtraSelection]:
        return list(self._selections)

    def schedule_refresh(self) -> None:
        self._debounce.start()

    def refresh(self) -> bool:
        doc = self._editor.document()
        painted = self._engine.redraw(doc.toPlainText(), revision=int(doc.revision()))
        if painted is None:
            return False
        self._paint_list = painted
        self._rebuild_selections()
        self._editor.viewport().update()
        count = sum(len(matches) for _, matches in painted)
        logger.debug("Overlay pass painted %d glyphs", count)
        self.decorationsUpdated.emit(count)
        return True

    def toggle_symbols(self) -> bool:
        shown = self._engine.toggle_symbols()
        self.refresh()
        return shown

    def _rebuild_selections(self) -> None:
        doc = self._editor.document()
        fmt = hidden_source_format()
        selections: list[QTextEdit.ExtraSelection] = []
        for _style, matches in self._paint_list:
            for match in matches:
                sel = QTextEdit.ExtraSelection()
                cursor = QTextCursor(doc)
                cursor.setPosition(match.start)
                cursor.setPosition(match.end, QTextCursor.MoveMode.KeepAnchor)
                sel.cursor = cursor
                sel.format = fmt
                selections.append(sel)
        self._selections = selections
        self._editor.setExtraSelections(selections)

    def paint(self, painter: QPainter) -> None:
        """Draw every visible glyph at the position of its hidden source."""
        editor = self._editor
        doc = editor.document()
        base_font = editor.font()
        viewport_rect = editor.viewport().rect()
        offset = editor.contentOffset()

        for style, matches in self._paint_list:
            if not matches:
                continue
            font = font_for_style(base_font, style)
            metrics = QFontMetricsF(font)
            em = em_width(base_font)
            painter.setFont(font)
            painter.setPen(QColor(style.color))
            for match in matches:
                block = doc.findBlock(match.start)
                if not block.isValid() or not block.isVisible():
                    continue
                block_geo = editor.blockBoundingGeometry(block).translated(offset)
                if block_geo.top() > viewport_rect.bottom() or block_geo.bottom() < viewport_rect.top():
                    continue
                layout = block.layout()
                if layout is None:
                    continue
                rel = match.start - block.position()
                line = layout.lineForTextPosition(rel)
                if not line.isValid():
                    continue
                x = block_geo.left() + line.x() + _cursor_x(line, rel) + style.dx * em
                baseline = block_geo.top() + line.y() + line.ascent()
                y = baseline - style.dy * em
                if style.scale != 1.0:
                    y -= (line.ascent() - metrics.ascent()) * 0.5
                painter.drawText(QPointF(x, y), match.glyph)


class MathOverlayEditor(QPlainTextEdit):
    """Plain-text editor showing math glyphs over the untouched source."""

    def __init__(self, engine: DecorationEngine, *, debounce_ms: int = 150, parent=None):
        super().__init__(parent)
        self.overlay = MathOverlayController(self, engine, debounce_ms=debounce_ms)

    def paintEvent(self, event):
        super().paintEvent(event)
        painter = QPainter(self.viewport())
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
            self.overlay.paint(painter)
        finally:
            painter.end()
