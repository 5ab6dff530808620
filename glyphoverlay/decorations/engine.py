"""Decoration engine: one sequential pass per redraw over a text snapshot."""

from __future__ import annotations

import logging
from pathlib import Path

from glyphoverlay.decorations.dynamic_rules import DynamicEvaluator, dynamic_rules
from glyphoverlay.decorations.registry import DecorationRegistry
from glyphoverlay.decorations.rules import MatchInstance, Rule
from glyphoverlay.decorations.static_rules import StaticRuleCatalogue
from glyphoverlay.decorations.styles import DecorationStyle, StylePalette
from glyphoverlay.errors import GlyphTableError
from glyphoverlay.glyph_table import GlyphTable, load_glyph_table
from glyphoverlay.math_regions import MathRegions
from glyphoverlay.settings_models import GenerationPhase, OverlayConfig, RenderingMode

logger = logging.getLogger(__name__)

PaintList = list[tuple[DecorationStyle, list[MatchInstance]]]


class DecorationEngine:
    """Owns the rule caches and the registry for one document view.

    Static rules are compiled once and reused; the first generation in FULL
    mode also compiles the function-name family, which then stays cached.
    Dynamic rules run on every pass. ``show_symbols`` only suppresses output,
    so toggling back on needs no recompilation.
    """

    def __init__(
        self,
        table: GlyphTable | None = None,
        *,
        mode: RenderingMode = RenderingMode.MEDIUM,
        show_symbols: bool = True,
        math_only: bool = False,
        palette: StylePalette | None = None,
        registry: DecorationRegistry | None = None,
    ) -> None:
        self.table = table
        self.mode = RenderingMode(mode)
        self.show_symbols = bool(show_symbols)
        self.math_only = bool(math_only)
        self.palette = palette or StylePalette()
        self.registry = registry if registry is not None else DecorationRegistry()
        self.load_error: str | None = None
        self._phase = GenerationPhase.INITIAL
        self._static_rules: list[Rule] | None = None
        self._dynamic_rules: list[Rule] | None = None
        self._last_revision: int | None = None

    @classmethod
    def from_config(cls, config: OverlayConfig, *, table: GlyphTable | None = None) -> "DecorationEngine":
        engine = cls(
            table,
            mode=config.rendering_mode,
            show_symbols=config.show_symbols,
            math_only=config.math_only,
            palette=StylePalette(config.colors, font_family=config.font_family),
        )
        if table is None:
            try:
                engine.load_table(config.symbols_path)
            except GlyphTableError as exc:
                logger.error("%s; decorations are disabled", exc)
        return engine

    # ---------- state ----------

    @property
    def enabled(self) -> bool:
        return self.table is not None and self.mode != RenderingMode.OFF and self.show_symbols

    @property
    def phase(self) -> GenerationPhase:
        return self._phase

    def load_table(self, path: str | Path | None = None) -> GlyphTable:
        """Load the glyph table; on failure stay in no-decoration mode and re-raise."""
        try:
            table = load_glyph_table(path)
        except GlyphTableError as exc:
            self.table = None
            self.load_error = str(exc)
            self.reset_generation()
            raise
        self.table = table
        self.load_error = None
        self.reset_generation()
        return table

    def toggle_symbols(self) -> bool:
        self.show_symbols = not self.show_symbols
        return self.show_symbols

    def set_rendering_mode(self, mode: RenderingMode) -> None:
        mode = RenderingMode(mode)
        if mode == self.mode:
            return
        self.mode = mode
        self.reset_generation()

    def set_palette(self, palette: StylePalette) -> None:
        self.palette = palette
        self.reset_generation()

    def reset_generation(self) -> None:
        """Full reset: forget compiled rules and every registry entry."""
        self._phase = GenerationPhase.INITIAL
        self._static_rules = None
        self._dynamic_rules = None
        self._last_revision = None
        self.registry.reset_all()

    # ---------- generation ----------

    def generate_static(self, phase: GenerationPhase) -> list[Rule]:
        if self.table is None or self.mode == RenderingMode.OFF:
            return []
        return StaticRuleCatalogue(self.table, self.palette, self.mode).generate(phase)

    def static_rules(self) -> list[Rule]:
        if self._static_rules is None:
            self._static_rules = self.generate_static(self._phase)
            logger.debug("Compiled %d static rules (%s)", len(self._static_rules), self._phase.value)
            self._phase = GenerationPhase.SUBSEQUENT
        return self._static_rules

    def dynamic_rules(self) -> list[Rule]:
        if self._dynamic_rules is None:
            self._dynamic_rules = dynamic_rules(self.palette, self.mode)
        return self._dynamic_rules

    # ---------- passes ----------

    def is_stale(self, revision: int | None) -> bool:
        return revision is not None and self._last_revision is not None and revision < self._last_revision

    def redraw(self, text: str, *, revision: int | None = None) -> PaintList | None:
        """Run one pass and return the paint list.

        Returns ``None`` without touching the registry when ``revision`` is
        older than the last applied pass.
        """
        if self.is_stale(revision):
            logger.debug("Dropping stale pass for revision %s", revision)
            return None
        if revision is not None:
            self._last_revision = revision
        if not self.enabled:
            return []

        keep = self._math_filter(text)
        self.registry.reset_ranges()
        for rule in self.static_rules():
            matches = rule.scan(text)
            if keep is not None:
                matches = [m for m in matches if keep(m)]
            self.registry.add(rule.category, rule.sub_key, rule.style, matches)

        evaluator = DynamicEvaluator(self.registry, keep=keep)
        evaluator.run(text, self.dynamic_rules(), abs_style=self.palette.style("operator"))
        return self.registry.flatten()

    def decorations(self, text: str) -> list[MatchInstance]:
        """Convenience: every match of one pass, ordered by position."""
        painted = self.redraw(text) or []
        return sorted((m for _, matches in painted for m in matches), key=lambda m: (m.start, m.end))

    def _math_filter(self, text: str):
        if not self.math_only:
            return None
        regions = MathRegions.of(text)
        return lambda m: regions.contains(m.start, m.end)
