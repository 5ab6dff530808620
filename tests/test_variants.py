"""Tests for set markers, styled alphabets and Greek variants"""
from collections import Counter

import pytest

from glyphoverlay.decorations.styles import StylePalette
from glyphoverlay.decorations.variants import (
    ALPHABETS,
    MARKER_PLACEMENTS,
    SetArrangement,
    arrangement_text,
    bold_greek,
    expand_alphabet,
    expand_set_markers,
)
from glyphoverlay.settings_models import RenderingMode

ALPHABET = {alphabet.name: alphabet for alphabet in ALPHABETS}


@pytest.mark.parametrize("arrangement", list(SetArrangement))
@pytest.mark.parametrize("sign, sign_glyph", [("_+", "₊"), ("_-", "₋")])
def test_every_marker_arrangement_decorates_each_marker_once(make_engine, arrangement, sign, sign_glyph):
    engine = make_engine(RenderingMode.MEDIUM)
    text = "x in " + arrangement_text("RR", arrangement, sign)
    glyphs = Counter(m.glyph for m in engine.decorations(text))

    has_star = arrangement is not SetArrangement.SIGNED
    has_sign = arrangement is not SetArrangement.NON_ZERO
    assert glyphs["ℝ"] == 1
    assert glyphs["∈"] == 1
    assert glyphs["*"] == int(has_star)
    assert glyphs[sign_glyph] == int(has_sign)
    assert sum(glyphs.values()) == 2 + has_star + has_sign

    if has_star:
        entry = engine.registry.get("set-variants", f"non-zero:{arrangement.value}")
        assert len(entry.matches) == 1
    if has_sign:
        name = "positive" if sign == "_+" else "negative"
        entry = engine.registry.get("set-variants", f"{name}:{arrangement.value}")
        assert len(entry.matches) == 1


def test_markers_need_a_doubled_letter():
    rules = expand_set_markers(StylePalette(), RenderingMode.MEDIUM)
    assert all(rule.scan("x^*") == [] for rule in rules)
    assert all(rule.scan("xRR_+") == [] for rule in rules)


def test_marker_rules_cover_every_placement():
    rules = expand_set_markers(StylePalette(), RenderingMode.MEDIUM)
    # the star has three placements, each sign marker three
    assert len(rules) == 9
    assert len(MARKER_PLACEMENTS) == 6
    assert expand_set_markers(StylePalette(), RenderingMode.BASIC) == []


def test_combined_arrangements_shift_the_markers():
    rules = {rule.sub_key: rule for rule in expand_set_markers(StylePalette(), RenderingMode.MEDIUM)}
    assert rules["non-zero:non-zero"].style.dx == 0.0
    assert rules["non-zero:non-zero-signed"].style.dx == 0.2
    assert rules["non-zero:signed-non-zero"].style.dx == -0.8
    assert rules["positive:non-zero-signed"].style.dx == -0.37
    assert rules["non-zero:non-zero"].style.scale == 0.6


@pytest.mark.parametrize("name, char, glyph", [
    ("bb", "R", "ℝ"),
    ("bb", "A", "𝔸"),
    ("bb", "1", "𝟙"),
    ("cal", "A", "𝒜"),
    ("cal", "B", "ℬ"),
    ("frak", "C", "ℭ"),
    ("frak", "a", "𝔞"),
    ("bold", "A", "𝐀"),
    ("italic", "h", "ℎ"),
    ("mono", "z", "𝚣"),
])
def test_alphabet_glyphs(name, char, glyph):
    assert ALPHABET[name].glyph(char) == glyph


def test_alphabets_without_digits_skip_them():
    assert ALPHABET["cal"].glyph("1") is None
    assert "1" not in ALPHABET["cal"].characters()


def test_alphabet_rules_respect_their_mode():
    palette = StylePalette()
    assert expand_alphabet(ALPHABET["bold"], palette, RenderingMode.MEDIUM) == []
    assert len(expand_alphabet(ALPHABET["bb"], palette, RenderingMode.MEDIUM)) == 62


def test_styled_letters_through_the_engine(make_engine):
    medium = make_engine(RenderingMode.MEDIUM)
    assert [m.glyph for m in medium.decorations("bb(R)")] == ["ℝ"]
    assert [m.glyph for m in medium.decorations("cal(A)")] == ["𝒜"]
    assert medium.decorations("bold(A)") == []

    full = make_engine(RenderingMode.FULL)
    assert [m.glyph for m in full.decorations("bold(A)")] == ["𝐀"]


def test_bold_greek_offsets():
    assert bold_greek("α") == "𝛂"
    assert bold_greek("Ω") == "𝛀"
    assert bold_greek("ϵ") is None


@pytest.mark.parametrize("text, glyph", [
    ("alpha", "α"),
    ("upright(alpha)", "α"),
    ("bold(alpha)", "𝛂"),
    ("bold(Delta)", "𝚫"),
])
def test_greek_variants_decorate_once(make_engine, text, glyph):
    matches = make_engine(RenderingMode.MEDIUM).decorations(text)
    assert [(m.span, m.glyph) for m in matches] == [((0, len(text)), glyph)]


def test_greek_without_bold_form_uses_bold_font(make_engine):
    engine = make_engine(RenderingMode.MEDIUM)
    assert [m.glyph for m in engine.decorations("bold(epsilon.alt)")] == ["ϵ"]
    assert engine.registry.get("greek-letters", "bold(epsilon.alt)").style.bold
