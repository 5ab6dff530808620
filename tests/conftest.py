import os
import sys
from pathlib import Path

import pytest

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure the repository root is importable without an install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from glyphoverlay.decorations.engine import DecorationEngine
from glyphoverlay.glyph_table import load_glyph_table
from glyphoverlay.settings_models import RenderingMode


@pytest.fixture(scope="session")
def table():
    return load_glyph_table()


@pytest.fixture
def make_engine(table):
    def factory(mode=RenderingMode.MEDIUM, **kwargs):
        return DecorationEngine(table, mode=mode, **kwargs)
    return factory


@pytest.fixture
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app
