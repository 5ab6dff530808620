"""Adjacency guards deciding whether a candidate match may be decorated."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Before-guards only see this many characters preceding a match.
LOOKBEHIND_WINDOW = 32


@dataclass(frozen=True, slots=True)
class Guard:
    """Context pattern that must (or must not) touch a match.

    A required guard fails at a text boundary it cannot match; a forbidden
    guard is satisfied there, since nothing forbidden is present.
    """

    pattern: str
    forbidden: bool = False
    _before: re.Pattern[str] = field(init=False, repr=False, compare=False)
    _after: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_before", re.compile(rf"(?:{self.pattern})\Z"))
        object.__setattr__(self, "_after", re.compile(rf"(?:{self.pattern})"))

    @classmethod
    def require(cls, pattern: str) -> "Guard":
        return cls(pattern, forbidden=False)

    @classmethod
    def forbid(cls, pattern: str) -> "Guard":
        return cls(pattern, forbidden=True)

    def test_before(self, text: str, start: int) -> bool:
        window = max(0, start - LOOKBEHIND_WINDOW)
        found = self._before.search(text, window, start) is not None
        return found != self.forbidden

    def test_after(self, text: str, end: int) -> bool:
        found = self._after.match(text, end) is not None
        return found != self.forbidden


def accepts(
    text: str,
    start: int,
    end: int,
    before: Guard | None = None,
    after: Guard | None = None,
) -> bool:
    if before is not None and not before.test_before(text, start):
        return False
    if after is not None and not after.test_after(text, end):
        return False
    return True


# Shared guard vocabulary.
START_WORD = Guard.forbid(r"[A-Za-z.]")
END_WORD = Guard.forbid(r"[A-Za-z.]")
ARROW_LIMIT = Guard.forbid(r"[-<>=!:|~]")
DOUBLE_LETTER = r"\b([A-Z])\1"
