"""Translate MySQL statements into SQLite-compatible SQL."""

from .diagnostics import Diagnostic
from .engine import cleanup, mark_unsupported, rewrite
from .formatter import Shape, detect_shape, format_statement
from .rules import RULES, FunctionRule, PatternRule, Rule
from .translator import Translation, translate, translate_with_diagnostics

__all__ = [
    "translate",
    "translate_with_diagnostics",
    "Translation",
    "Diagnostic",
    "rewrite",
    "cleanup",
    "mark_unsupported",
    "format_statement",
    "detect_shape",
    "Shape",
    "RULES",
    "Rule",
    "FunctionRule",
    "PatternRule",
]
