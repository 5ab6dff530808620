"""Decoration-matching engine: guards, rules, variants, registry and passes."""

from .engine import DecorationEngine, PaintList
from .guards import Guard, accepts
from .registry import DecorationRegistry, RegistryEntry
from .rules import MatchInstance, Rule, compile_rule
from .styles import DecorationStyle, StylePalette

__all__ = [
    "DecorationEngine",
    "DecorationRegistry",
    "DecorationStyle",
    "Guard",
    "MatchInstance",
    "PaintList",
    "RegistryEntry",
    "Rule",
    "StylePalette",
    "accepts",
    "compile_rule",
]
