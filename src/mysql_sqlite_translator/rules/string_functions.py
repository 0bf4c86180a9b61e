"""String function rules.

Rewrites:
    CONCAT(a, ' ', b)                          ->  a || ' ' || b
    SUBSTRING(s, 2, 3) / SUBSTRING(s FROM 2 FOR 3)  ->  SUBSTR(s, 2, 3)
    LCASE(s) / UCASE(s)                        ->  LOWER(s) / UPPER(s)
    CHAR_LENGTH(s)                             ->  LENGTH(s)
    LOCATE(sub, s)                             ->  INSTR(s, sub)
    GROUP_CONCAT(x ORDER BY y SEPARATOR '|')   ->  GROUP_CONCAT(x, '|' ORDER BY y)
"""

import re
from typing import Optional

from ..utils import find_top_level
from .base import FunctionRule, template

_SUBSTRING_FROM_FOR = re.compile(
    r"^(.*?)\s+FROM\s+(.+?)(?:\s+FOR\s+(.+))?$",
    re.IGNORECASE | re.DOTALL,
)
_SEPARATOR = re.compile(r"\bSEPARATOR\b", re.IGNORECASE)
_ORDER_BY = re.compile(r"\bORDER\s+BY\b", re.IGNORECASE)
_DISTINCT = re.compile(r"DISTINCT\b", re.IGNORECASE)


def _concat(args: list[str]) -> Optional[str]:
    if not args:
        return None
    return " || ".join(args)


def _substring(args: list[str]) -> Optional[str]:
    if len(args) == 1:
        # SQL-standard form: SUBSTRING(s FROM p [FOR n])
        match = _SUBSTRING_FROM_FOR.match(args[0])
        if match is None:
            return None
        args = [group for group in match.groups() if group is not None]
    if len(args) not in (2, 3):
        return None
    return f"SUBSTR({', '.join(args)})"


def split_separator(args: list[str]) -> Optional[tuple[str, str]]:
    """Split GROUP_CONCAT arguments into (expression, separator).

    Returns None when there is no top-level SEPARATOR clause.
    """
    body = ", ".join(args)
    separator = find_top_level(_SEPARATOR, body)
    if separator is None:
        return None

    expr = body[:separator.start()].rstrip()
    delimiter = body[separator.end():].strip()
    if not expr or not delimiter:
        return None
    return expr, delimiter


def _group_concat(args: list[str]) -> Optional[str]:
    """Move a trailing SEPARATOR clause into SQLite's second argument.

    SQLite rejects DISTINCT aggregates with more than one argument, so
    those calls are left for the engine to mark as not supported.
    """
    parts = split_separator(args)
    if parts is None:
        return None

    expr, delimiter = parts
    if _DISTINCT.match(expr):
        return None

    order_by = find_top_level(_ORDER_BY, expr)
    if order_by is None:
        return f"GROUP_CONCAT({expr}, {delimiter})"

    values = expr[:order_by.start()].rstrip()
    return f"GROUP_CONCAT({values}, {delimiter} {expr[order_by.start():]})"


CONCAT = FunctionRule("concat", "CONCAT", _concat)
SUBSTRING = FunctionRule("substring", "SUBSTRING", _substring)
LCASE = FunctionRule("lcase", "LCASE", template("LOWER({0})", 1))
UCASE = FunctionRule("ucase", "UCASE", template("UPPER({0})", 1))
CHAR_LENGTH = FunctionRule("char_length", "CHAR_LENGTH", template("LENGTH({0})", 1))
LOCATE = FunctionRule("locate", "LOCATE", template("INSTR({1}, {0})", 2))
GROUP_CONCAT_SEPARATOR = FunctionRule("group_concat separator", "GROUP_CONCAT", _group_concat)

STRING_RULES = (
    CONCAT,
    SUBSTRING,
    LCASE,
    UCASE,
    CHAR_LENGTH,
    LOCATE,
    GROUP_CONCAT_SEPARATOR,
)
