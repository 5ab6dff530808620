"""Dynamic rules: glyphs computed from the matched text on every pass."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable

from glyphoverlay.decorations.guards import Guard
from glyphoverlay.decorations.registry import DecorationRegistry
from glyphoverlay.decorations.rules import GlyphTransform, MatchInstance, Rule
from glyphoverlay.decorations.styles import DecorationStyle, StylePalette
from glyphoverlay.settings_models import RenderingMode

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUBSCRIPT_DIGITS = "₀₁₂₃₄₅₆₇₈₉"
SUPERSCRIPT_MINUS = "⁻"
SUBSCRIPT_MINUS = "₋"

ABS_BAR = "|"
_ABS_OPEN = "abs("
_ABS_INTEGER = re.compile(r"-?[0-9]+")


def map_digits(digits: str, table: str) -> str:
    return "".join(table[ord(ch) - ord("0")] for ch in digits)


def to_superscript(number: str) -> str:
    if number.startswith("-"):
        return SUPERSCRIPT_MINUS + map_digits(number[1:], SUPERSCRIPT_DIGITS)
    return map_digits(number, SUPERSCRIPT_DIGITS)


def to_subscript(number: str) -> str:
    if number.startswith("-"):
        return SUBSCRIPT_MINUS + map_digits(number[1:], SUBSCRIPT_DIGITS)
    return map_digits(number, SUBSCRIPT_DIGITS)


def _strip_script(m: re.Match) -> str:
    # "^12" -> "12", "_(-3)" -> "-3"
    content = m.group(0)[1:]
    if content.startswith("(") and content.endswith(")"):
        content = content[1:-1]
    return content


def digit_transform(convert: Callable[[str], str]) -> GlyphTransform:
    def transform(m: re.Match) -> tuple[str, str]:
        number = _strip_script(m)
        return number, convert(number)
    return transform


def verbatim_transform(m: re.Match) -> tuple[str, str]:
    content = _strip_script(m)
    return content, content


def dynamic_rules(palette: StylePalette, mode: RenderingMode) -> list[Rule]:
    """Per-pass rules; empty when decoration is off."""
    if mode == RenderingMode.OFF:
        return []

    sup = palette.script_style()
    sup_signed = palette.script_style(letter_spacing=-0.1)
    sub = palette.script_style(dx=-0.05, dy=-0.2)
    sub_signed = palette.script_style(dx=-0.05, dy=-0.2, letter_spacing=-0.1)
    small_sup = palette.style("number", font_family=palette.font_family, scale=0.8, dy=0.3)
    small_sub = palette.style("number", font_family=palette.font_family, scale=0.8, dy=-0.2)

    declarations = (
        (r"\^(?:[0-9]+\b|\([0-9]+\))", "powers", "digits", sup, digit_transform(to_superscript)),
        (r"\^\(-[0-9]+\)", "powers", "negative", sup_signed, digit_transform(to_superscript)),
        (r"_(?:[0-9]+\b|\([0-9]+\))", "subscripts", "digits", sub, digit_transform(to_subscript)),
        (r"_\(-[0-9]+\)", "subscripts", "negative", sub_signed, digit_transform(to_subscript)),
        (r"\^\([A-Za-z][+=-].\)", "powers", "letter", small_sup, verbatim_transform),
        (r"_\([A-Za-z][+=-].\)", "subscripts", "letter", small_sub, verbatim_transform),
    )
    return [
        Rule(
            pattern=re.compile(pattern),
            category=category,
            sub_key=sub_key,
            style=style,
            transform=transform,
        )
        for pattern, category, sub_key, style, transform in declarations
    ]


@dataclass(frozen=True, slots=True)
class AbsPair:
    open_start: int
    close_start: int
    content: str

    @property
    def open_end(self) -> int:
        return self.open_start + len(_ABS_OPEN)

    @property
    def close_end(self) -> int:
        return self.close_start + 1


def find_abs_pairs(text: str) -> list[AbsPair]:
    """Pair ``abs(`` with its depth-balanced ``)`` around an integer literal.

    Parentheses nest, so ``abs((1))`` and ``abs(abs(-1))`` close correctly;
    only the pairs whose balanced content is an integer literal are kept.
    Unbalanced or unclosed constructs produce nothing.
    """
    pairs: list[AbsPair] = []
    # (is_abs, content_start)
    stack: list[tuple[bool, int]] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "a" and text.startswith(_ABS_OPEN, i) and (i == 0 or not _is_word_char(text[i - 1])):
            stack.append((True, i + len(_ABS_OPEN)))
            i += len(_ABS_OPEN)
            continue
        if ch == "(":
            stack.append((False, i + 1))
        elif ch == ")" and stack:
            is_abs, content_start = stack.pop()
            content = text[content_start:i]
            if is_abs and _ABS_INTEGER.fullmatch(content):
                pairs.append(AbsPair(content_start - len(_ABS_OPEN), i, content))
        i += 1
    pairs.sort(key=lambda pair: pair.open_start)
    return pairs


def _is_word_char(ch: str) -> bool:
    return ch.isalpha() or ch == "."


class DynamicEvaluator:
    """Scans the live text and writes computed glyphs into the registry."""

    def __init__(
        self,
        registry: DecorationRegistry,
        *,
        keep: Callable[[MatchInstance], bool] | None = None,
    ) -> None:
        self.registry = registry
        self._keep = keep

    def scan(
        self,
        text: str,
        pattern: re.Pattern[str] | str,
        category: str,
        sub_key: str,
        style: DecorationStyle,
        transform: GlyphTransform,
        before: Guard | None = None,
        after: Guard | None = None,
    ) -> None:
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        rule = Rule(
            pattern=compiled,
            category=category,
            sub_key=sub_key,
            style=style,
            transform=transform,
            before=before,
            after=after,
        )
        self.apply(text, rule)

    def apply(self, text: str, rule: Rule) -> None:
        self.registry.add(rule.category, rule.sub_key, rule.style, self._filter(rule.scan(text)))

    def scan_abs(self, text: str, style: DecorationStyle) -> None:
        opens: list[MatchInstance] = []
        closes: list[MatchInstance] = []
        for pair in find_abs_pairs(text):
            opens.append(MatchInstance(pair.open_start, pair.open_end, ABS_BAR, _ABS_OPEN))
            closes.append(MatchInstance(pair.close_start, pair.close_end, ABS_BAR, ")"))
        self.registry.add("abs", "open", style, self._filter(opens))
        self.registry.add("abs", "close", style, self._filter(closes))

    def run(self, text: str, rules: Iterable[Rule], abs_style: DecorationStyle | None = None) -> None:
        for rule in rules:
            self.apply(text, rule)
        if abs_style is not None:
            self.scan_abs(text, abs_style)

    def _filter(self, matches: Iterable[MatchInstance]) -> list[MatchInstance]:
        if self._keep is None:
            return list(matches)
        return [m for m in matches if self._keep(m)]
