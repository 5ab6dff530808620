"""Variant expansion: set markers, styled alphabets and Greek variants.

Every family is described by a declarative table and expanded by a single
function, so adding a combination is a table edit rather than another
hand-written rule.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from glyphoverlay.decorations.guards import DOUBLE_LETTER, END_WORD, START_WORD, Guard
from glyphoverlay.decorations.rules import Rule, compile_rule
from glyphoverlay.decorations.styles import StylePalette
from glyphoverlay.glyph_table import GlyphTableEntry
from glyphoverlay.settings_models import RenderingMode

SIGNED = r"_[+-]"
NON_ZERO = r"\^\*"


# ---------------- set markers ----------------


class SetArrangement(Enum):
    NON_ZERO = "non-zero"
    SIGNED = "signed"
    NON_ZERO_THEN_SIGNED = "non-zero-signed"
    SIGNED_THEN_NON_ZERO = "signed-non-zero"


@dataclass(frozen=True, slots=True)
class SetMarker:
    name: str
    source: str
    glyph: str
    signed: bool


@dataclass(frozen=True, slots=True)
class MarkerPlacement:
    before: Guard | None
    after: Guard | None
    dx: float = 0.0


NON_ZERO_MARKER = SetMarker("non-zero", "^*", "*", signed=False)
SIGN_MARKERS = (
    SetMarker("positive", "_+", "₊", signed=True),
    SetMarker("negative", "_-", "₋", signed=True),
)
SET_MARKERS = (NON_ZERO_MARKER, *SIGN_MARKERS)

# (marker is signed, arrangement) -> where that marker sits and how it is shifted
# so the two small glyphs of a combined arrangement do not collide.
MARKER_PLACEMENTS: Mapping[tuple[bool, SetArrangement], MarkerPlacement] = MappingProxyType({
    (False, SetArrangement.NON_ZERO): MarkerPlacement(
        Guard.require(DOUBLE_LETTER), Guard.forbid("_"),
    ),
    (False, SetArrangement.NON_ZERO_THEN_SIGNED): MarkerPlacement(
        Guard.require(DOUBLE_LETTER), Guard.require(SIGNED), dx=0.2,
    ),
    (False, SetArrangement.SIGNED_THEN_NON_ZERO): MarkerPlacement(
        Guard.require(DOUBLE_LETTER + SIGNED), None, dx=-0.8,
    ),
    (True, SetArrangement.SIGNED): MarkerPlacement(
        Guard.require(DOUBLE_LETTER), Guard.forbid(NON_ZERO),
    ),
    (True, SetArrangement.NON_ZERO_THEN_SIGNED): MarkerPlacement(
        Guard.require(DOUBLE_LETTER + NON_ZERO), None, dx=-0.37,
    ),
    (True, SetArrangement.SIGNED_THEN_NON_ZERO): MarkerPlacement(
        Guard.require(DOUBLE_LETTER), Guard.require(NON_ZERO),
    ),
})


def arrangement_text(base: str, arrangement: SetArrangement, sign: str = "_+") -> str:
    """Source text of a set symbol written in the given arrangement."""
    if arrangement is SetArrangement.NON_ZERO:
        return base + "^*"
    if arrangement is SetArrangement.SIGNED:
        return base + sign
    if arrangement is SetArrangement.NON_ZERO_THEN_SIGNED:
        return base + "^*" + sign
    return base + sign + "^*"


def expand_set_markers(palette: StylePalette, mode: RenderingMode) -> list[Rule]:
    rules: list[Rule] = []
    for marker in SET_MARKERS:
        for (signed, arrangement), placement in MARKER_PLACEMENTS.items():
            if signed != marker.signed:
                continue
            if marker.signed:
                style = palette.style("set", dx=placement.dx)
            else:
                style = palette.style("set", scale=0.6, dy=0.3, dx=placement.dx)
            rule = compile_rule(
                marker.source,
                marker.glyph,
                style,
                placement.before,
                placement.after,
                category="set-variants",
                sub_key=f"{marker.name}:{arrangement.value}",
                mode=mode,
                min_mode=RenderingMode.MEDIUM,
            )
            if rule is not None:
                rules.append(rule)
    return rules


# ---------------- styled alphabets ----------------


@dataclass(frozen=True, slots=True)
class Alphabet:
    """A Unicode mathematical alphabet addressed as ``name(X)``."""

    name: str
    upper: int
    lower: int
    digits: int | None = None
    exceptions: Mapping[str, str] = field(default_factory=dict)
    min_mode: RenderingMode = RenderingMode.MEDIUM

    def glyph(self, char: str) -> str | None:
        if char in self.exceptions:
            return self.exceptions[char]
        if char in string.ascii_uppercase:
            return chr(self.upper + ord(char) - ord("A"))
        if char in string.ascii_lowercase:
            return chr(self.lower + ord(char) - ord("a"))
        if char in string.digits and self.digits is not None:
            return chr(self.digits + ord(char) - ord("0"))
        return None

    def characters(self) -> str:
        chars = string.ascii_uppercase + string.ascii_lowercase
        if self.digits is not None:
            chars += string.digits
        return chars


# Holes in the Mathematical Alphanumeric block live in Letterlike Symbols.
ALPHABETS = (
    Alphabet("bb", 0x1D538, 0x1D552, 0x1D7D8, {
        "C": "ℂ", "H": "ℍ", "N": "ℕ", "P": "ℙ", "Q": "ℚ", "R": "ℝ", "Z": "ℤ",
    }),
    Alphabet("cal", 0x1D49C, 0x1D4B6, None, {
        "B": "ℬ", "E": "ℰ", "F": "ℱ", "H": "ℋ", "I": "ℐ", "L": "ℒ", "M": "ℳ", "R": "ℛ",
        "e": "ℯ", "g": "ℊ", "o": "ℴ",
    }),
    Alphabet("frak", 0x1D504, 0x1D51E, None, {
        "C": "ℭ", "H": "ℌ", "I": "ℑ", "R": "ℜ", "Z": "ℨ",
    }),
    Alphabet("bold", 0x1D400, 0x1D41A, 0x1D7CE, min_mode=RenderingMode.FULL),
    Alphabet("italic", 0x1D434, 0x1D44E, None, {"h": "ℎ"}, min_mode=RenderingMode.FULL),
    Alphabet("sans", 0x1D5A0, 0x1D5BA, 0x1D7E2, min_mode=RenderingMode.FULL),
    Alphabet("mono", 0x1D670, 0x1D68A, 0x1D7F6, min_mode=RenderingMode.FULL),
)


def expand_alphabet(alphabet: Alphabet, palette: StylePalette, mode: RenderingMode) -> list[Rule]:
    if mode < alphabet.min_mode:
        return []
    style = palette.style("letter", font_family=palette.font_family)
    rules: list[Rule] = []
    for char in alphabet.characters():
        glyph = alphabet.glyph(char)
        if glyph is None:
            continue
        source = f"{alphabet.name}({char})"
        rule = compile_rule(
            source,
            glyph,
            style,
            START_WORD,
            category="letters",
            sub_key=source,
            mode=mode,
            min_mode=alphabet.min_mode,
        )
        if rule is not None:
            rules.append(rule)
    return rules


# ---------------- greek letters ----------------

# The bare name must not fire inside its own upright/bold variants.
PLAIN_GREEK_START = Guard.forbid(r"[A-Za-z.]|\b(?:upright|bold)\(")


def bold_greek(glyph: str) -> str | None:
    if len(glyph) != 1:
        return None
    code = ord(glyph)
    if 0x391 <= code <= 0x3A9 and code != 0x3A2:
        return chr(0x1D6A8 + code - 0x391)
    if 0x3B1 <= code <= 0x3C9:
        return chr(0x1D6C2 + code - 0x3B1)
    return None


def expand_greek_letter(entry: GlyphTableEntry, palette: StylePalette, mode: RenderingMode) -> list[Rule]:
    style = palette.style("letter")
    bold = bold_greek(entry.glyph)
    variants = (
        (entry.source, entry.glyph, style, PLAIN_GREEK_START, END_WORD),
        (f"upright({entry.source})", entry.glyph, style, START_WORD, None),
        (
            f"bold({entry.source})",
            bold or entry.glyph,
            style if bold else palette.style("letter", bold=True),
            START_WORD,
            None,
        ),
    )
    rules: list[Rule] = []
    for source, glyph, variant_style, before, after in variants:
        rule = compile_rule(
            source,
            glyph,
            variant_style,
            before,
            after,
            category="greek-letters",
            sub_key=source,
            mode=mode,
            min_mode=RenderingMode.MEDIUM,
        )
        if rule is not None:
            rules.append(rule)
    return rules
