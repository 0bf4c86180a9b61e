"""Numeric function rules.

CEIL and FLOOR compare the value against its truncation instead of adding
0.5 before truncating, which is wrong for integral and negative inputs:

    CEIL(-2.3)   ->  (CAST(-2.3 AS INTEGER) + (-2.3 > CAST(-2.3 AS INTEGER)))   = -2
    FLOOR(-2.3)  ->  (CAST(-2.3 AS INTEGER) - (-2.3 < CAST(-2.3 AS INTEGER)))   = -3

The argument appears three times, so a random argument is first bound once
in a scalar subquery:

    CEIL(RAND() * 10)  ->  (SELECT (CAST(v AS INTEGER) + ...) FROM (SELECT RAND() * 10 AS v LIMIT 1 OFFSET 0))

SQLite never flattens a subquery that has an OFFSET, so v is not replaced
by three copies of the argument again.
"""

import re
from typing import Optional

from ..utils import in_spans, literal_spans
from .base import FunctionRule, Rewrite, template

_CEIL = "(CAST({0} AS INTEGER) + ({0} > CAST({0} AS INTEGER)))"
_FLOOR = "(CAST({0} AS INTEGER) - ({0} < CAST({0} AS INTEGER)))"
_RANDOM_CALL = re.compile(r"\bRAND(?:OM)?\s*\(", re.IGNORECASE)


def _is_random(expr: str) -> bool:
    spans = literal_spans(expr)
    return any(not in_spans(spans, match.start()) for match in _RANDOM_CALL.finditer(expr))


def _rounding(fmt: str) -> Rewrite:
    def rewrite(args: list[str]) -> Optional[str]:
        if len(args) != 1:
            return None
        if _is_random(args[0]):
            return f"(SELECT {fmt.format('v')} FROM (SELECT {args[0]} AS v LIMIT 1 OFFSET 0))"
        return fmt.format(args[0])

    return rewrite


CEIL = FunctionRule("ceil", "CEIL", _rounding(_CEIL))
CEILING = FunctionRule("ceiling", "CEILING", _rounding(_CEIL))
FLOOR = FunctionRule("floor", "FLOOR", _rounding(_FLOOR))
MOD = FunctionRule("mod", "MOD", template("({0} % {1})", 2))
# Uniform in [0, 1) like MySQL's RAND(); seeded RAND(n) has no equivalent
RAND = FunctionRule("rand", "RAND", template("(ABS(RANDOM()) % 1000000) / 1000000.0", 0))

NUMERIC_RULES = (
    CEIL,
    CEILING,
    FLOOR,
    MOD,
    RAND,
)
