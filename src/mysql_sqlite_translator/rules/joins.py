"""Join keyword rules.

SQLite is treated as supporting a single outer-join direction, so RIGHT and
FULL joins are rewritten to LEFT JOIN. This is lossy: the rows kept from
the right-hand table are not the same. Bare JOIN becomes an explicit INNER
JOIN without touching joins that are already qualified.
"""

import re

from .base import PatternRule, pattern_rule

# Words that already qualify a following JOIN
_JOIN_QUALIFIERS = {"LEFT", "RIGHT", "FULL", "OUTER", "CROSS", "NATURAL"}


def _inner_join(match: re.Match) -> str:
    previous, gap = match.group(1), match.group(2)
    if previous is None or previous.upper() == "INNER":
        return "INNER JOIN"
    if previous.upper() in _JOIN_QUALIFIERS:
        return match.group(0)
    return f"{previous}{gap}INNER JOIN"


OUTER_JOIN = pattern_rule(
    "outer join",
    r"\b(?:LEFT|RIGHT|FULL)\s+(?:OUTER\s+)?JOIN\b",
    "LEFT JOIN",
)
INNER_JOIN = PatternRule(
    "inner join",
    re.compile(r"(?:\b(\w+)(\s+))?\bJOIN\b", re.IGNORECASE),
    _inner_join,
)

JOIN_RULES = (
    OUTER_JOIN,
    INNER_JOIN,
)
