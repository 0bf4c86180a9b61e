"""Statement Formatter: re-render a rewritten statement according to its shape.

Shape detection is a keyword sniff on the statement text, not a parse; a
string literal mentioning "group_concat" is enough to change the shape.
"""

import re
from enum import Enum
from typing import Optional

from .utils import (
    collapse_whitespace,
    find_matching_paren,
    line_comments_to_block,
    rewrite_calls,
    split_arguments,
    sub_outside_literals,
)

INDENT = "    "

_CREATE_TABLE = re.compile(
    r"CREATE\s+TABLE\s+(IF\s+NOT\s+EXISTS\s+)?([^\s(]+)\s*",
    re.IGNORECASE,
)
_QUALIFIED_NAME = re.compile(r"(\w)\s*\.\s*(\w)")
_CLAUSE_KEYWORDS = ("FROM", "WHERE", "GROUP BY", "HAVING", "ORDER BY", "LIMIT")


class Shape(str, Enum):
    DEFINITION = "definition"
    AGGREGATE_QUERY = "aggregate-query"
    PLAIN_QUERY = "plain-query"


class _State(Enum):
    """Plain-query layout state; the value is the indentation level."""

    BASE = 0
    SELECT_BODY = 1


def detect_shape(sql: str) -> Shape:
    lowered = sql.lower()
    if lowered.startswith("create table"):
        return Shape.DEFINITION
    if "group_concat" in lowered:
        return Shape.AGGREGATE_QUERY
    return Shape.PLAIN_QUERY


def format_statement(sql: str, shape: Optional[Shape] = None) -> str:
    """Dispatch to the formatting strategy for the statement's shape.

    The shape is detected from sql unless the caller already knows it.
    """
    if shape is None:
        shape = detect_shape(sql)
    return _STRATEGIES[shape](sql)


def format_definition(sql: str) -> str:
    """Lay out CREATE TABLE with one indented column or constraint per line.

    Statements without a recognizable column list are returned unchanged.
    """
    header = _CREATE_TABLE.match(sql)
    if header is None or header.end() >= len(sql) or sql[header.end()] != "(":
        return sql

    try:
        close_paren = find_matching_paren(sql, header.end())
    except ValueError:
        return sql

    columns = [
        collapse_whitespace(line_comments_to_block(column))
        for column in split_arguments(sql[header.end() + 1:close_paren])
    ]
    columns = [column for column in columns if column]
    if not columns:
        return sql

    if_not_exists = "IF NOT EXISTS " if header.group(1) else ""
    lines = [f"CREATE TABLE {if_not_exists}{header.group(2)} ("]
    for index, column in enumerate(columns):
        lines.append(INDENT + column + ("," if index < len(columns) - 1 else ""))

    # Keep whatever follows the column list, e.g. WITHOUT ROWID
    tail = collapse_whitespace(line_comments_to_block(sql[close_paren + 1:])).rstrip(";").strip()
    lines.append(f") {tail};" if tail else ");")
    return "\n".join(lines)


def format_aggregate(sql: str) -> str:
    """Normalize GROUP_CONCAT arguments, leaving the statement layout alone."""

    def normalize(args: list[str]) -> str:
        args = [
            sub_outside_literals(
                _QUALIFIED_NAME, r"\1.\2", collapse_whitespace(line_comments_to_block(arg)),
            )
            for arg in args
        ]
        return f"GROUP_CONCAT({', '.join(args)})"

    return rewrite_calls(sql, "GROUP_CONCAT", normalize)


def format_plain(sql: str) -> str:
    """Compact simple one-liners; otherwise re-indent clause by clause.

    Assumes one logical clause per input line: a SELECT line indents the
    lines after it until the next major clause keyword.
    """
    lowered = sql.lower()
    if "\n" not in sql and "case when" not in lowered and "group by" not in lowered:
        return collapse_whitespace(sql)

    result = []
    state = _State.BASE

    for line in sql.split("\n"):
        line = line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith(_CLAUSE_KEYWORDS):
            state = _State.BASE

        result.append(INDENT * state.value + line)

        if upper.startswith("SELECT"):
            state = _State.SELECT_BODY

    return "\n".join(result)


_STRATEGIES = {
    Shape.DEFINITION: format_definition,
    Shape.AGGREGATE_QUERY: format_aggregate,
    Shape.PLAIN_QUERY: format_plain,
}
