"""Date and time function rules.

Only day-granularity DATE_ADD/DATE_SUB intervals are rewritten; calls with
any other unit are left in place and reported by the engine.
"""

import re
from typing import Optional

from .base import FunctionRule, Rewrite, template

_DAY_INTERVAL = re.compile(r"^INTERVAL\s+([+-]?)\s*(\d+)\s+DAY$", re.IGNORECASE)


def _date_offset(direction: int) -> Rewrite:
    def rewrite(args: list[str]) -> Optional[str]:
        if len(args) != 2:
            return None
        interval = _DAY_INTERVAL.match(args[1])
        if interval is None:
            return None
        days = direction * int(interval.group(2))
        if interval.group(1) == "-":
            days = -days
        return f"DATETIME({args[0]}, '{days:+d} days')"

    return rewrite


def _extract(fmt: str) -> Rewrite:
    return template(f"CAST(strftime('{fmt}', {{0}}) AS INTEGER)", 1)


def _unix_timestamp(args: list[str]) -> Optional[str]:
    if len(args) > 1:
        return None
    value = args[0] if args else "'now'"
    return f"CAST(strftime('%s', {value}) AS INTEGER)"


DATE_ADD = FunctionRule("date_add", "DATE_ADD", _date_offset(1))
DATE_SUB = FunctionRule("date_sub", "DATE_SUB", _date_offset(-1))
DATEDIFF = FunctionRule(
    "datediff", "DATEDIFF",
    template("CAST(JULIANDAY(DATE({0})) - JULIANDAY(DATE({1})) AS INTEGER)", 2),
)
YEAR = FunctionRule("year", "YEAR", _extract("%Y"))
MONTH = FunctionRule("month", "MONTH", _extract("%m"))
DAY = FunctionRule("day", "DAY", _extract("%d"))
DAYOFMONTH = FunctionRule("dayofmonth", "DAYOFMONTH", _extract("%d"))
DAYOFYEAR = FunctionRule("dayofyear", "DAYOFYEAR", _extract("%j"))
# MySQL numbers weekdays from 1 (Sunday), strftime from 0
DAYOFWEEK = FunctionRule(
    "dayofweek", "DAYOFWEEK",
    template("(CAST(strftime('%w', {0}) AS INTEGER) + 1)", 1),
)
HOUR = FunctionRule("hour", "HOUR", _extract("%H"))
MINUTE = FunctionRule("minute", "MINUTE", _extract("%M"))
SECOND = FunctionRule("second", "SECOND", _extract("%S"))
NOW = FunctionRule("now", "NOW", template("DATETIME('now')", 0))
CURDATE = FunctionRule("curdate", "CURDATE", template("DATE('now')", 0))
CURTIME = FunctionRule("curtime", "CURTIME", template("TIME('now')", 0))
UNIX_TIMESTAMP = FunctionRule("unix_timestamp", "UNIX_TIMESTAMP", _unix_timestamp)
FROM_UNIXTIME = FunctionRule(
    "from_unixtime", "FROM_UNIXTIME", template("DATETIME({0}, 'unixepoch')", 1),
)

DATE_RULES = (
    DATE_ADD,
    DATE_SUB,
    DATEDIFF,
    YEAR,
    MONTH,
    DAY,
    DAYOFMONTH,
    DAYOFYEAR,
    DAYOFWEEK,
    HOUR,
    MINUTE,
    SECOND,
    NOW,
    CURDATE,
    CURTIME,
    UNIX_TIMESTAMP,
    FROM_UNIXTIME,
)
