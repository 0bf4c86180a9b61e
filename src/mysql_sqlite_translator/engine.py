"""Rewrite Engine: apply the rule table, strip MySQL-only clauses, flag leftovers."""

import logging
import re
from typing import Optional

from .diagnostics import Diagnostic, marker
from .rules import RULES, Rule
from .rules.string_functions import split_separator
from .utils import rewrite_calls, sub_outside_literals

logger = logging.getLogger(__name__)

# Table and column options with no SQLite counterpart
_MYSQL_OPTIONS = re.compile(
    r"\bENGINE\s*=\s*\w+"
    r"|\b(?:DEFAULT\s+)?(?:CHARSET|CHARACTER\s+SET)\s*=?\s*\w+"
    r"|\bCOLLATE\s*=\s*\w+"
    r"|\bCOLLATE\s+(?!(?:NOCASE|BINARY|RTRIM)\b)\w+"
    r"|\bAUTO_INCREMENT\s*=\s*\d+"
    r"|\bON\s+UPDATE\s+CURRENT_TIMESTAMP\b(?:\s*\(\s*\d*\s*\))?",
    re.IGNORECASE,
)
_HORIZONTAL_WHITESPACE = re.compile(r"[ \t]+")
_TRAILING_WHITESPACE = re.compile(r" +(?=\n)")
_BLANK_LINES = re.compile(r"\n\s*\n")

_ROLLUP = re.compile(r"\bWITH\s+ROLLUP\b", re.IGNORECASE)
_INTERVAL_FUNCTIONS = ("DATE_ADD", "DATE_SUB")


def rewrite(sql: str, rules: tuple[Rule, ...] = RULES) -> tuple[str, list[Diagnostic]]:
    """Rewrite a MySQL statement into SQLite syntax.

    Rules run in table order, each over the output of the previous one.
    Never raises on malformed input; the result may not be valid SQL.

    Returns:
        The rewritten statement and the diagnostics for every construct
        that was replaced by a not-supported marker.
    """
    for rule in rules:
        rewritten = rule.apply(sql)
        if rewritten != sql:
            logger.debug("Rule %r rewrote statement", rule.name)
        sql = rewritten

    return mark_unsupported(cleanup(sql))


def cleanup(sql: str) -> str:
    """Delete MySQL-only options and normalize whitespace."""
    sql = sub_outside_literals(_MYSQL_OPTIONS, "", sql)
    sql = sub_outside_literals(_HORIZONTAL_WHITESPACE, " ", sql)
    sql = sub_outside_literals(_TRAILING_WHITESPACE, "", sql)
    sql = sub_outside_literals(_BLANK_LINES, "\n", sql)
    return sql.strip()


def mark_unsupported(sql: str) -> tuple[str, list[Diagnostic]]:
    """Replace constructs SQLite cannot express with inline markers."""
    diagnostics = []

    def rollup(match: re.Match) -> str:
        diagnostics.append(Diagnostic(
            match.group(0), "GROUP BY ... WITH ROLLUP is not supported in SQLite",
        ))
        return marker("WITH ROLLUP")

    sql = sub_outside_literals(_ROLLUP, rollup, sql)

    def distinct_separator(args: list[str]) -> Optional[str]:
        parts = split_separator(args)
        if parts is None:
            return None
        expr, delimiter = parts
        fragment = f"SEPARATOR {delimiter}"
        diagnostics.append(Diagnostic(
            fragment, "GROUP_CONCAT(DISTINCT ...) only uses SQLite's default ',' separator",
        ))
        return f"GROUP_CONCAT({expr}) {marker(fragment)}"

    sql = rewrite_calls(sql, "GROUP_CONCAT", distinct_separator)

    for function in _INTERVAL_FUNCTIONS:

        def interval(args: list[str], function: str = function) -> str:
            fragment = f"{function}({', '.join(args)})"
            diagnostics.append(Diagnostic(
                fragment, f"{function} is only translated for DAY intervals",
            ))
            return marker(fragment)

        sql = rewrite_calls(sql, function, interval)

    for diagnostic in diagnostics:
        logger.debug("Unsupported construct: %s", diagnostic.fragment)

    return sql, diagnostics
