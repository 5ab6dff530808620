"""Tests for the Qt editor overlay"""
import pytest

pytest.importorskip("PySide6")

from PySide6.QtGui import QFont  # noqa: E402

from glyphoverlay.decorations.engine import DecorationEngine  # noqa: E402
from glyphoverlay.decorations.styles import StylePalette  # noqa: E402
from glyphoverlay.settings_models import RenderingMode  # noqa: E402
from GlyphPyside.widgets import MathOverlayEditor, font_for_style, hidden_source_format  # noqa: E402


@pytest.fixture
def editor(qapp, table):
    widget = MathOverlayEditor(DecorationEngine(table, mode=RenderingMode.MEDIUM), debounce_ms=0)
    widget.resize(400, 200)
    yield widget
    widget.deleteLater()


def test_hidden_source_format_is_transparent(qapp):
    assert hidden_source_format().foreground().color().alpha() == 0


def test_font_for_style_applies_scale_and_weight(qapp):
    base = QFont("Monospace", 10)
    style = StylePalette().style("operator", scale=2.0, bold=True, font_family="JuliaMono")
    font = font_for_style(base, style)
    assert font.pointSizeF() == pytest.approx(20.0)
    assert font.bold()
    assert font.families()[0] == "JuliaMono"


def test_refresh_hides_every_decorated_range(editor):
    editor.setPlainText("x in RR and a <= b")
    assert editor.overlay.refresh()
    glyphs = sorted(m.glyph for _, matches in editor.overlay.paint_list for m in matches)
    assert glyphs == sorted(["∈", "ℝ", "∧", "≤"])
    selections = editor.overlay.selections
    assert len(selections) == 4
    assert {(s.cursor.selectionStart(), s.cursor.selectionEnd()) for s in selections} == {
        (2, 4), (5, 7), (8, 11), (14, 16),
    }
    # the source text itself is never modified
    assert editor.toPlainText() == "x in RR and a <= b"


def test_refresh_reports_count(editor):
    counts = []
    editor.overlay.decorationsUpdated.connect(counts.append)
    editor.setPlainText("a <= b")
    editor.overlay.refresh()
    assert counts[-1] == 1


def test_stale_pass_leaves_overlay_untouched(editor):
    editor.setPlainText("a <= b")
    assert editor.overlay.refresh()
    before = editor.overlay.paint_list
    editor.overlay.engine.redraw("", revision=10**9)
    assert editor.overlay.refresh() is False
    assert editor.overlay.paint_list is before


def test_toggle_clears_and_restores(editor):
    editor.setPlainText("a <= b")
    editor.overlay.refresh()
    assert editor.overlay.toggle_symbols() is False
    assert editor.overlay.selections == []
    assert editor.overlay.toggle_symbols() is True
    assert len(editor.overlay.selections) == 1


def test_painting_does_not_fail(editor):
    editor.setPlainText("forall x in RR^*: x^2 >= 0")
    editor.overlay.refresh()
    assert not editor.grab().isNull()
