"""Static rule catalogue: every fixed-glyph rule, in declaration order."""

from __future__ import annotations

from typing import Iterable

from glyphoverlay.decorations.guards import ARROW_LIMIT, END_WORD, START_WORD, Guard
from glyphoverlay.decorations.rules import Rule, compile_rule
from glyphoverlay.decorations.styles import DecorationStyle, StylePalette
from glyphoverlay.decorations.variants import ALPHABETS, expand_alphabet, expand_greek_letter, expand_set_markers
from glyphoverlay.glyph_table import GlyphTable
from glyphoverlay.settings_models import GenerationPhase, RenderingMode


def _forbid(chars: str) -> Guard:
    return Guard.forbid(f"[{chars}]")


# Symbolic comparison and arrow rules. The guards keep a shorter rule out of a
# longer rule's text, e.g. "<=" never fires inside "<==" or "<=>".
SYMBOLIC_RULES: tuple[tuple[str, str, Guard | None, Guard | None], ...] = (
    # "=" keeps its glyph and only picks up the comparison color.
    ("=", "=", Guard.forbid(r"[:<>!=]|[\^_]\([A-Za-z]"), _forbid(":<>!=")),
    ("<", "<", ARROW_LIMIT, ARROW_LIMIT),
    (">", ">", ARROW_LIMIT, ARROW_LIMIT),
    ("<<", "≪", ARROW_LIMIT, ARROW_LIMIT),
    (">>", "≫", ARROW_LIMIT, ARROW_LIMIT),
    ("<<<", "⋘", ARROW_LIMIT, ARROW_LIMIT),
    (">>>", "⋙", ARROW_LIMIT, ARROW_LIMIT),
    ("!=", "≠", None, None),
    (":=", "≔", _forbid(":"), None),
    ("::=", "⩴", None, None),
    ("=>", "⇒", _forbid("<="), None),
    ("==>", "⟹", _forbid("<"), None),
    ("<=>", "⇔", _forbid("<"), None),
    ("<==>", "⟺", _forbid("<"), None),
    ("<==", "⟸", _forbid("<"), _forbid(">")),
    ("<=", "≤", _forbid("<"), _forbid(">=")),
    (">=", "≥", _forbid(">"), _forbid(">=")),
    ("->", "→", _forbid(r"\-><|"), None),
    ("-->", "⟶", _forbid(r"\-><|"), None),
    ("|->", "↦", None, None),
    ("<-", "←", None, _forbid(r"\-><|")),
    ("<--", "⟵", None, _forbid(r"\-><|")),
    ("<->", "↔", None, None),
    ("<-->", "⟷", None, None),
)

BRACKET_RULES: tuple[tuple[str, str, Guard | None, Guard | None], ...] = (
    ("[", "[", None, _forbid("|")),
    ("]", "]", _forbid("|"), None),
    ("[|", "⟦", None, None),
    ("|]", "⟧", None, None),
)

# (glyph table section, category, style category, minimum mode)
TABLE_SECTIONS = (
    ("comparison", "comparison", "comparison", RenderingMode.BASIC),
    ("arrows", "arrows", "comparison", RenderingMode.BASIC),
    ("operators", "operators", "operator", RenderingMode.BASIC),
    ("basics", "basics", "number", RenderingMode.MEDIUM),
    ("bigLetters", "big-letters", "operator", RenderingMode.MEDIUM),
    ("keywords", "keywords", "keyword", RenderingMode.MEDIUM),
    ("sets", "sets", "set", RenderingMode.MEDIUM),
    ("setsVariants", "set-variants", "set", RenderingMode.MEDIUM),
)

FUNCTION_NAMES = (
    "arccos", "arcsin", "arctan", "arg", "cos", "cosh", "cot", "coth", "csc",
    "deg", "det", "dim", "exp", "gcd", "hom", "inf", "ker", "lcm", "lg", "lim",
    "liminf", "limsup", "ln", "log", "max", "min", "mod", "Pr", "sec", "sin",
    "sinh", "sup", "tan", "tanh", "tr",
)


class StaticRuleCatalogue:
    """Compiles the static rules for one rendering mode and palette."""

    def __init__(self, table: GlyphTable, palette: StylePalette, mode: RenderingMode) -> None:
        self.table = table
        self.palette = palette
        self.mode = mode

    def generate(self, phase: GenerationPhase = GenerationPhase.SUBSEQUENT) -> list[Rule]:
        if self.mode == RenderingMode.OFF:
            return []
        rules: list[Rule] = []
        rules += self._literal_rules(SYMBOLIC_RULES, "comparison", self.palette.style("comparison"))
        rules += self.table_rules()
        rules += self._literal_rules(BRACKET_RULES, "brackets", self.palette.style("bracket"))
        rules += expand_set_markers(self.palette, self.mode)
        for alphabet in ALPHABETS:
            rules += expand_alphabet(alphabet, self.palette, self.mode)
        if phase is GenerationPhase.INITIAL and self.mode == RenderingMode.FULL:
            rules += self.function_rules()
        return rules

    def table_rules(self) -> list[Rule]:
        rules: list[Rule] = []
        for section, category, style_category, min_mode in TABLE_SECTIONS:
            style = self._section_style(section, style_category)
            for entry in self.table.section(section):
                rule = compile_rule(
                    entry.pattern,
                    entry.glyph,
                    style,
                    START_WORD,
                    END_WORD,
                    category=category,
                    sub_key=entry.source,
                    mode=self.mode,
                    min_mode=min_mode,
                )
                if rule is not None:
                    rules.append(rule)
        for entry in self.table.section("greekLetters"):
            rules += expand_greek_letter(entry, self.palette, self.mode)
        return rules

    def function_rules(self) -> list[Rule]:
        style = self.palette.style("function")
        rules: list[Rule] = []
        for name in FUNCTION_NAMES:
            rule = compile_rule(
                name,
                name,
                style,
                START_WORD,
                END_WORD,
                category="functions",
                sub_key=name,
                mode=self.mode,
                min_mode=RenderingMode.FULL,
            )
            if rule is not None:
                rules.append(rule)
        return rules

    def _section_style(self, section: str, style_category: str) -> DecorationStyle:
        if section == "bigLetters":
            return self.palette.style(style_category, scale=1.2)
        return self.palette.style(style_category)

    def _literal_rules(
        self,
        declarations: Iterable[tuple[str, str, Guard | None, Guard | None]],
        category: str,
        style: DecorationStyle,
    ) -> list[Rule]:
        rules: list[Rule] = []
        for source, glyph, before, after in declarations:
            rule = compile_rule(
                source,
                glyph,
                style,
                before,
                after,
                category=category,
                sub_key=source,
                mode=self.mode,
            )
            if rule is not None:
                rules.append(rule)
        return rules
