"""Decoration rules and the static rule compiler."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterator

from glyphoverlay.decorations.guards import Guard, accepts
from glyphoverlay.decorations.styles import DecorationStyle
from glyphoverlay.settings_models import RenderingMode

logger = logging.getLogger(__name__)

# transform(match) -> (source, glyph)
GlyphTransform = Callable[[re.Match], tuple[str, str]]


@dataclass(frozen=True, slots=True)
class MatchInstance:
    start: int
    end: int
    glyph: str
    source: str = ""

    @property
    def span(self) -> tuple[int, int]:
        return self.start, self.end


@dataclass(frozen=True, slots=True)
class Rule:
    pattern: re.Pattern[str]
    category: str
    sub_key: str
    style: DecorationStyle
    glyph: str | None = None
    transform: GlyphTransform | None = None
    before: Guard | None = None
    after: Guard | None = None
    min_mode: RenderingMode = RenderingMode.BASIC

    @property
    def key(self) -> tuple[str, str]:
        return self.category, self.sub_key

    @property
    def is_dynamic(self) -> bool:
        return self.transform is not None

    def candidates(self, text: str) -> Iterator[re.Match]:
        """Yield guard-accepted, non-overlapping matches.

        A rejected candidate only advances the scan by one character so that
        a valid match starting inside it is still found.
        """
        pos = 0
        length = len(text)
        while pos <= length:
            m = self.pattern.search(text, pos)
            if m is None:
                return
            start, end = m.span()
            if end > start and accepts(text, start, end, self.before, self.after):
                yield m
                pos = end
            else:
                pos = start + 1

    def resolve(self, m: re.Match) -> MatchInstance | None:
        if self.transform is None:
            return MatchInstance(m.start(), m.end(), self.glyph or "", m.group(0))
        source, glyph = self.transform(m)
        if not glyph:
            return None
        return MatchInstance(m.start(), m.end(), glyph, source)

    def scan(self, text: str) -> list[MatchInstance]:
        out: list[MatchInstance] = []
        for m in self.candidates(text):
            instance = self.resolve(m)
            if instance is not None:
                out.append(instance)
        return out


def build_pattern(pattern: str | re.Pattern[str], *, literal: bool = True) -> re.Pattern[str] | None:
    if isinstance(pattern, re.Pattern):
        return pattern
    if not isinstance(pattern, str) or not pattern:
        return None
    try:
        return re.compile(re.escape(pattern) if literal else pattern)
    except re.error as exc:
        logger.warning("Dropping rule with invalid pattern %r: %s", pattern, exc)
        return None


def compile_rule(
    pattern: str | re.Pattern[str],
    glyph: str,
    style: DecorationStyle,
    before: Guard | None = None,
    after: Guard | None = None,
    *,
    category: str,
    sub_key: str | None = None,
    mode: RenderingMode,
    min_mode: RenderingMode = RenderingMode.BASIC,
) -> Rule | None:
    """Build a fixed-glyph rule, or ``None`` when the mode disables it.

    String patterns are treated as literal fragments and escaped; pass a
    compiled pattern to use a regular expression.
    """
    if mode == RenderingMode.OFF or mode < min_mode:
        return None
    compiled = build_pattern(pattern)
    if compiled is None:
        return None
    return Rule(
        pattern=compiled,
        category=category,
        sub_key=sub_key if sub_key is not None else compiled.pattern,
        style=style,
        glyph=glyph,
        before=before,
        after=after,
        min_mode=min_mode,
    )
