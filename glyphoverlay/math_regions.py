"""Locate ``$...$`` math spans so decoration can stay inside math mode."""

from __future__ import annotations

import bisect
from dataclasses import dataclass


def find_math_regions(text: str) -> list[tuple[int, int]]:
    """Return (start, end) offsets of the content between math delimiters.

    ``\\$`` is an escaped dollar, and an unterminated ``$`` runs to the end of
    the text so math being typed is already decorated.
    """
    regions: list[tuple[int, int]] = []
    open_at: int | None = None
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "$":
            if open_at is None:
                open_at = i + 1
            else:
                regions.append((open_at, i))
                open_at = None
        i += 1
    if open_at is not None:
        regions.append((open_at, n))
    return regions


@dataclass(slots=True)
class MathRegions:
    regions: list[tuple[int, int]]

    @classmethod
    def of(cls, text: str) -> "MathRegions":
        return cls(find_math_regions(text))

    def contains(self, start: int, end: int) -> bool:
        idx = bisect.bisect_right(self.regions, (start, float("inf"))) - 1
        if idx < 0:
            return False
        region_start, region_end = self.regions[idx]
        return region_start <= start and end <= region_end
