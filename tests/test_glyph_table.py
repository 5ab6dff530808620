"""Tests for glyph table loading"""
import json

import pytest

from glyphoverlay.errors import GlyphTableError
from glyphoverlay.glyph_table import (
    SECTION_NAMES,
    GlyphTable,
    canonical_section_name,
    default_symbols_path,
    literal_pattern,
    load_glyph_table,
)


def test_bundled_table_has_every_section(table):
    for name in SECTION_NAMES:
        assert table.section(name), name
    assert default_symbols_path().is_file()


def test_entries_keep_source_and_glyph(table):
    glyphs = {entry.source: entry.glyph for entry in table.section("keywords")}
    assert glyphs["forall"] == "∀"
    assert glyphs["in.not"] == "∉"


def test_section_names_are_canonicalised():
    assert canonical_section_name("big-letters") == "bigLetters"
    assert canonical_section_name("Greek_Letters") == "greekLetters"
    assert canonical_section_name("nope") is None

    table = GlyphTable.from_mapping({"big_letters": {"sum": "∑"}})
    assert [e.glyph for e in table.section("bigLetters")] == ["∑"]


def test_malformed_entries_and_sections_are_skipped():
    table = GlyphTable.from_mapping({
        "comparison": {"approx": "≈", "bad": 3, "": "x", "empty": ""},
        "arrows": ["not", "an", "object"],
        "unknown": {"a": "b"},
    })
    assert [e.source for e in table.section("comparison")] == ["approx"]
    assert table.section("arrows") == ()
    assert table.section("bigLetters") == ()
    assert table.section("unknown") == ()
    assert len(table) == 1


def test_literal_pattern_escapes_fragment():
    pattern = literal_pattern("a.b")
    assert pattern.fullmatch("a.b")
    assert not pattern.fullmatch("axb")
    assert literal_pattern("") is None
    assert literal_pattern(None) is None


def test_as_dict_round_trips_sources(table):
    data = table.as_dict()
    assert set(data) == set(SECTION_NAMES)
    assert data["setsVariants"]["RR"] == "ℝ"


def test_missing_file_raises(tmp_path):
    with pytest.raises(GlyphTableError):
        load_glyph_table(tmp_path / "missing.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "symbols.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(GlyphTableError):
        load_glyph_table(path)


def test_non_object_root_raises(tmp_path):
    path = tmp_path / "symbols.json"
    path.write_text(json.dumps(["a", "b"]), encoding="utf-8")
    with pytest.raises(GlyphTableError, match="JSON object"):
        load_glyph_table(path)


def test_partial_file_loads_with_empty_sections(tmp_path):
    path = tmp_path / "symbols.json"
    path.write_text(json.dumps({"sets": {"union": "∪"}}), encoding="utf-8")
    table = load_glyph_table(path)
    assert len(table) == 1
    assert table.section("greekLetters") == ()
