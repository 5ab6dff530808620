from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from glyphoverlay.decorations.rules import MatchInstance
from glyphoverlay.decorations.styles import DecorationStyle


@dataclass(slots=True)
class RegistryEntry:
    style: DecorationStyle
    matches: list[MatchInstance] = field(default_factory=list)


class DecorationRegistry:
    """Stable (category, sub-key) -> style table with per-pass match lists.

    Styles survive ``reset_ranges`` so renderers can keep their visual handles
    between redraws; only ``reset_all`` drops them.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], RegistryEntry] = {}

    def entry(self, category: str, sub_key: str, style: DecorationStyle) -> RegistryEntry:
        key = (category, sub_key)
        existing = self._entries.get(key)
        if existing is None:
            existing = RegistryEntry(style=style)
            self._entries[key] = existing
        return existing

    def add(
        self,
        category: str,
        sub_key: str,
        style: DecorationStyle,
        matches: Iterable[MatchInstance],
    ) -> RegistryEntry:
        """Register ranges under a key; ranges already held by the key are not added again."""
        entry = self.entry(category, sub_key, style)
        held = {(m.start, m.end, m.glyph) for m in entry.matches}
        for match in matches:
            ident = (match.start, match.end, match.glyph)
            if ident in held:
                continue
            held.add(ident)
            entry.matches.append(match)
        return entry

    def get(self, category: str, sub_key: str) -> RegistryEntry | None:
        return self._entries.get((category, sub_key))

    def keys(self) -> list[tuple[str, str]]:
        return list(self._entries)

    def reset_ranges(self) -> None:
        for entry in self._entries.values():
            entry.matches = []

    def reset_all(self) -> None:
        self._entries.clear()

    def flatten(self) -> list[tuple[DecorationStyle, list[MatchInstance]]]:
        return [(entry.style, list(entry.matches)) for entry in self._entries.values()]

    def snapshot(self) -> dict[tuple[str, str], tuple[MatchInstance, ...]]:
        return {key: tuple(entry.matches) for key, entry in self._entries.items()}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
