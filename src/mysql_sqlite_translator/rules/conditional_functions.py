"""Conditional function rules."""

from .base import FunctionRule, template

IFNULL = FunctionRule("ifnull", "IFNULL", template("COALESCE({0}, {1})", 2))
IF = FunctionRule("if", "IF", template("CASE WHEN {0} THEN {1} ELSE {2} END", 3))
NULLIF = FunctionRule("nullif", "NULLIF", template("CASE WHEN {0} = {1} THEN NULL ELSE {0} END", 2))

CONDITIONAL_RULES = (
    IFNULL,
    IF,
    NULLIF,
)
