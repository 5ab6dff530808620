"""Tests for launcher settings handling"""
import json

import pytest

pytest.importorskip("PySide6")

import main  # noqa: E402
from glyphoverlay.settings_models import RenderingMode  # noqa: E402


def test_overrides_are_saved_for_the_next_run(tmp_path):
    settings = tmp_path / "overlay.json"
    symbols = tmp_path / "symbols.json"
    config = main.load_settings(main._parse_args(["--settings", str(settings), "--mode", "3", "--symbols", str(symbols)]))

    assert config.rendering_mode is RenderingMode.FULL
    assert config.symbols_path == symbols
    saved = json.loads(settings.read_text(encoding="utf-8"))
    assert saved["rendering_mode"] == 3
    assert saved["symbols_path"] == str(symbols)

    again = main.load_settings(main._parse_args(["--settings", str(settings)]))
    assert again.rendering_mode is RenderingMode.FULL


def test_reset_restores_defaults_before_overrides(tmp_path):
    settings = tmp_path / "overlay.json"
    settings.write_text(json.dumps({"rendering_mode": 3, "math_only": True}), encoding="utf-8")

    config = main.load_settings(main._parse_args(["--settings", str(settings), "--reset-settings", "--mode", "1"]))
    assert config.rendering_mode is RenderingMode.BASIC
    assert config.math_only is False
    assert json.loads(settings.read_text(encoding="utf-8"))["math_only"] is False


def test_unwritable_settings_do_not_stop_startup(tmp_path, caplog):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    with caplog.at_level("WARNING"):
        config = main.load_settings(main._parse_args(["--settings", str(blocker / "overlay.json"), "--mode", "1"]))
    assert config.rendering_mode is RenderingMode.BASIC
    assert "unsaved settings" in caplog.text
