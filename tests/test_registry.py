"""Tests for the decoration registry"""
from glyphoverlay.decorations.registry import DecorationRegistry
from glyphoverlay.decorations.rules import MatchInstance
from glyphoverlay.decorations.styles import StylePalette

PALETTE = StylePalette()


def test_entries_are_created_lazily_and_keep_first_style():
    registry = DecorationRegistry()
    first = PALETTE.style("comparison")
    registry.add("comparison", "<=", first, [MatchInstance(0, 2, "≤")])
    registry.add("comparison", "<=", PALETTE.style("set"), [MatchInstance(4, 6, "≤")])

    entry = registry.get("comparison", "<=")
    assert entry.style is first
    assert [m.span for m in entry.matches] == [(0, 2), (4, 6)]
    assert ("comparison", "<=") in registry
    assert registry.get("comparison", ">=") is None


def test_reset_ranges_keeps_styles():
    registry = DecorationRegistry()
    style = PALETTE.style("keyword")
    registry.add("keywords", "in", style, [MatchInstance(0, 2, "∈")])
    registry.reset_ranges()

    assert len(registry) == 1
    assert registry.get("keywords", "in").style is style
    assert registry.get("keywords", "in").matches == []


def test_reset_all_drops_everything():
    registry = DecorationRegistry()
    registry.add("keywords", "in", PALETTE.style("keyword"), [])
    registry.reset_all()
    assert len(registry) == 0
    assert registry.keys() == []


def test_flatten_includes_empty_entries():
    registry = DecorationRegistry()
    registry.add("a", "x", PALETTE.style("set"), [])
    registry.add("b", "y", PALETTE.style("set"), [MatchInstance(1, 2, "y")])
    flat = registry.flatten()
    assert [len(matches) for _, matches in flat] == [0, 1]


def test_snapshot_is_detached_from_later_passes():
    registry = DecorationRegistry()
    registry.add("a", "x", PALETTE.style("set"), [MatchInstance(1, 2, "y")])
    before = registry.snapshot()
    registry.reset_ranges()
    assert before[("a", "x")] == (MatchInstance(1, 2, "y"),)
    assert registry.snapshot()[("a", "x")] == ()


def test_registering_the_same_ranges_again_adds_nothing():
    registry = DecorationRegistry()
    style = PALETTE.style("comparison")
    registry.add("comparison", "<=", style, [MatchInstance(2, 4, "≤")])
    registry.add("comparison", "<=", style, [MatchInstance(2, 4, "≤"), MatchInstance(9, 11, "≤")])

    assert [m.span for m in registry.get("comparison", "<=").matches] == [(2, 4), (9, 11)]
    assert len(registry) == 1
