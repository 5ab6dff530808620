"""Glyph table loading: named sections of source fragment -> glyph."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Sequence

from glyphoverlay.errors import GlyphTableError

logger = logging.getLogger(__name__)

SECTION_NAMES = (
    "comparison",
    "arrows",
    "operators",
    "basics",
    "bigLetters",
    "keywords",
    "sets",
    "setsVariants",
    "greekLetters",
)

# "big-letters", "big_letters" and "BigLetters" all name the same section.
_SECTION_ALIASES = {name.lower(): name for name in SECTION_NAMES}


def default_symbols_path() -> Path:
    return Path(__file__).resolve().with_name("data") / "symbols.json"


def canonical_section_name(name: str) -> str | None:
    key = str(name or "").replace("-", "").replace("_", "").strip().lower()
    return _SECTION_ALIASES.get(key)


def literal_pattern(fragment: str) -> re.Pattern[str] | None:
    """Compile a literal fragment into an escaped pattern, ``None`` if unusable."""
    if not isinstance(fragment, str) or not fragment:
        return None
    try:
        return re.compile(re.escape(fragment))
    except re.error:
        return None


@dataclass(frozen=True, slots=True)
class GlyphTableEntry:
    section: str
    source: str
    glyph: str
    pattern: re.Pattern[str]


class GlyphTable:
    """Immutable, pre-validated glyph table."""

    def __init__(self, sections: Mapping[str, Sequence[GlyphTableEntry]] | None = None) -> None:
        resolved: dict[str, tuple[GlyphTableEntry, ...]] = {name: () for name in SECTION_NAMES}
        for name, entries in (sections or {}).items():
            canonical = canonical_section_name(name)
            if canonical is None:
                continue
            resolved[canonical] = resolved[canonical] + tuple(entries)
        self._sections = MappingProxyType(resolved)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, origin: str = "<memory>") -> "GlyphTable":
        sections: dict[str, list[GlyphTableEntry]] = {}
        for raw_name, raw_section in data.items():
            name = canonical_section_name(raw_name)
            if name is None:
                logger.warning("Ignoring unknown glyph table section %r in %s", raw_name, origin)
                continue
            if not isinstance(raw_section, Mapping):
                logger.warning(
                    "Glyph table section %r in %s must be an object, found %s",
                    raw_name,
                    origin,
                    type(raw_section).__name__,
                )
                continue
            bucket = sections.setdefault(name, [])
            for source, glyph in raw_section.items():
                entry = _build_entry(name, source, glyph)
                if entry is None:
                    logger.warning("Skipping malformed glyph entry %r -> %r in %s", source, glyph, origin)
                    continue
                bucket.append(entry)
        return cls(sections)

    def section(self, name: str) -> tuple[GlyphTableEntry, ...]:
        canonical = canonical_section_name(name)
        if canonical is None:
            return ()
        return self._sections[canonical]

    def sections(self) -> Mapping[str, tuple[GlyphTableEntry, ...]]:
        return self._sections

    def __iter__(self) -> Iterator[GlyphTableEntry]:
        for name in SECTION_NAMES:
            yield from self._sections[name]

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._sections.values())

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {
            name: {entry.source: entry.glyph for entry in entries}
            for name, entries in self._sections.items()
        }


def _build_entry(section: str, source: Any, glyph: Any) -> GlyphTableEntry | None:
    if not isinstance(glyph, str) or not glyph:
        return None
    pattern = literal_pattern(source)
    if pattern is None:
        return None
    return GlyphTableEntry(section=section, source=source, glyph=glyph, pattern=pattern)


def load_glyph_table(path: str | Path | None = None) -> GlyphTable:
    """Read a glyph table JSON file.

    Missing sections are empty and malformed entries are skipped. A file that
    cannot be read or parsed, or whose root is not an object, raises
    ``GlyphTableError``.
    """
    target = Path(path) if path is not None else default_symbols_path()
    try:
        raw = json.loads(target.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise GlyphTableError(f"Could not read glyph table '{target}': {exc}") from exc
    if not isinstance(raw, dict):
        raise GlyphTableError(
            f"Glyph table root in '{target}' must be a JSON object, found {type(raw).__name__}."
        )
    table = GlyphTable.from_mapping(raw, origin=str(target))
    logger.debug("Loaded %d glyph entries from %s", len(table), target)
    return table
