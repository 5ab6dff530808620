import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtGui import QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import QApplication, QMainWindow

from glyphoverlay.decorations.engine import DecorationEngine
from glyphoverlay.errors import SettingsStoreError
from glyphoverlay.settings_models import OverlayConfig, RenderingMode
from glyphoverlay.settings_store import OverlaySettingsStore
from GlyphPyside.widgets import MathOverlayEditor

APP_NAME = "Glyph Overlay"
logger = logging.getLogger("glyph_overlay")


def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(levelname)s - %(message)s"))
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Show math notation with Unicode glyphs, source text untouched")
    ap.add_argument("file", nargs="?", help="document to open")
    ap.add_argument("--settings", type=Path, default=Path.home() / ".glyph-overlay" / "overlay.json")
    ap.add_argument("--symbols", type=Path, help="glyph table JSON (defaults to the bundled one)")
    ap.add_argument("--mode", type=int, choices=[int(m) for m in RenderingMode], help="rendering mode override")
    ap.add_argument("--reset-settings", action="store_true", help="restore default settings before applying overrides")
    ap.add_argument("--verbose", action="store_true")
    return ap.parse_args(argv)


def _read_document(path: str | None) -> str:
    if not path:
        return ""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Could not open '%s': %s", path, exc)
        return ""


def load_settings(args: argparse.Namespace) -> OverlayConfig:
    """Load the settings file, apply command-line overrides and persist them."""
    store = OverlaySettingsStore(args.settings)
    store.load()
    if args.reset_settings:
        store.restore_defaults()
    if args.mode is not None:
        store.set("rendering_mode", args.mode)
    if args.symbols is not None:
        store.set("symbols_path", str(args.symbols))
    if store.dirty:
        try:
            store.save()
        except SettingsStoreError as exc:
            logger.warning("%s; continuing with unsaved settings", exc)
    return store.config()


def main(argv: list[str]) -> int:
    args = _parse_args(argv)
    setup_logging(args.verbose)

    config = load_settings(args)

    engine = DecorationEngine.from_config(config)

    app = QApplication([sys.argv[0]])
    app.setStyle("Fusion")
    app.setApplicationName(APP_NAME)

    window = QMainWindow()
    window.setWindowTitle(f"{APP_NAME} [{Path(args.file).name if args.file else 'untitled'}]")
    editor = MathOverlayEditor(engine, debounce_ms=config.debounce_ms)
    editor.setFont(QFont(config.font_family, 13))
    editor.setPlainText(_read_document(args.file))
    window.setCentralWidget(editor)

    toggle = QShortcut(QKeySequence("Ctrl+Shift+M"), window)
    toggle.activated.connect(editor.overlay.toggle_symbols)

    window.resize(960, 640)
    window.show()
    editor.overlay.refresh()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
