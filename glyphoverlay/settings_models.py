from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Mapping, TypedDict


class RenderingMode(IntEnum):
    """How aggressively source notation is replaced by glyphs."""

    OFF = 0
    BASIC = 1
    MEDIUM = 2
    FULL = 3

    @classmethod
    def coerce(cls, value: Any, default: "RenderingMode | None" = None) -> "RenderingMode":
        fallback = cls.MEDIUM if default is None else default
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return fallback


class GenerationPhase(Enum):
    INITIAL = "initial"
    SUBSEQUENT = "subsequent"


class OverlayColorsSettings(TypedDict, total=False):
    comparison: str
    keyword: str
    number: str
    letter: str
    operator: str
    set: str
    function: str
    bracket: str


class OverlaySettings(TypedDict, total=False):
    rendering_mode: int
    show_symbols: bool
    math_only: bool
    debounce_ms: int
    symbols_path: str
    font_family: str
    colors: OverlayColorsSettings


DEFAULT_COLORS: OverlayColorsSettings = {
    "comparison": "#C586C0",
    "keyword": "#569CFF",
    "number": "#B5CEA8",
    "letter": "#9CDCFE",
    "operator": "#D4D4D4",
    "set": "#4EC9B0",
    "function": "#DCDCAA",
    "bracket": "#FFD580",
}

DEFAULT_OVERLAY_SETTINGS: OverlaySettings = {
    "rendering_mode": int(RenderingMode.MEDIUM),
    "show_symbols": True,
    "math_only": False,
    "debounce_ms": 150,
    "symbols_path": "",
    "font_family": "JuliaMono",
    "colors": DEFAULT_COLORS,
}


def default_overlay_settings() -> OverlaySettings:
    return deepcopy(DEFAULT_OVERLAY_SETTINGS)


@dataclass(slots=True, frozen=True)
class OverlayConfig:
    """Normalized view over an ``OverlaySettings`` mapping."""

    rendering_mode: RenderingMode = RenderingMode.MEDIUM
    show_symbols: bool = True
    math_only: bool = False
    debounce_ms: int = 150
    symbols_path: Path | None = None
    font_family: str = "JuliaMono"
    colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OverlayConfig":
        colors = dict(DEFAULT_COLORS)
        raw_colors = data.get("colors")
        if isinstance(raw_colors, Mapping):
            for key, value in raw_colors.items():
                if isinstance(value, str) and value.strip():
                    colors[str(key)] = value.strip()

        symbols_text = str(data.get("symbols_path") or "").strip()
        try:
            debounce = max(0, int(data.get("debounce_ms", 150)))
        except (TypeError, ValueError):
            debounce = 150

        return cls(
            rendering_mode=RenderingMode.coerce(data.get("rendering_mode")),
            show_symbols=bool(data.get("show_symbols", True)),
            math_only=bool(data.get("math_only", False)),
            debounce_ms=debounce,
            symbols_path=Path(symbols_text).expanduser() if symbols_text else None,
            font_family=str(data.get("font_family") or "JuliaMono"),
            colors=colors,
        )
