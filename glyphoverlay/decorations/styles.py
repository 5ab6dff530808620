from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from glyphoverlay.settings_models import DEFAULT_COLORS


@dataclass(frozen=True, slots=True)
class DecorationStyle:
    """Visual properties of one decoration; offsets and spacing are in em."""

    category: str
    color: str
    font_family: str | None = None
    scale: float = 1.0
    dx: float = 0.0
    dy: float = 0.0
    letter_spacing: float = 0.0
    bold: bool = False
    italic: bool = False


class StylePalette:
    """Builds category styles from the configured colors and font."""

    def __init__(self, colors: Mapping[str, str] | None = None, *, font_family: str | None = "JuliaMono") -> None:
        self.colors: dict[str, str] = dict(DEFAULT_COLORS)
        if colors:
            self.colors.update({str(k): str(v) for k, v in colors.items() if v})
        self.font_family = font_family

    def color(self, category: str) -> str:
        return self.colors.get(category, self.colors["operator"])

    def style(self, category: str, **overrides) -> DecorationStyle:
        return DecorationStyle(category=category, color=self.color(category), **overrides)

    def script_style(self, category: str = "number", **overrides) -> DecorationStyle:
        params = {"font_family": self.font_family, "letter_spacing": -0.15, "dx": -0.15}
        params.update(overrides)
        return self.style(category, **params)
