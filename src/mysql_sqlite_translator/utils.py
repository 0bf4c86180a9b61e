"""Shared utilities for SQL string scanning.

Every helper here treats the following as opaque literals and never looks
inside them:

- single-quoted strings (with '' and backslash escapes)
- double-quoted and backtick-quoted identifiers
- ``--`` line comments and ``/* */`` block comments
"""

import re
from bisect import bisect_right
from typing import Callable, Optional

_WHITESPACE = re.compile(r"\s+")


def _skip_literal(sql: str, pos: int) -> int:
    """Return the index just past the literal starting at pos, or pos if none does."""
    length = len(sql)
    ch = sql[pos]

    if ch == "'":
        i = pos + 1
        while i < length:
            if sql[i] == "\\":
                i += 2
            elif sql[i] == "'":
                if i + 1 < length and sql[i + 1] == "'":
                    i += 2  # escaped quote
                else:
                    return i + 1
            else:
                i += 1
        return length

    if ch == '"' or ch == "`":
        end = sql.find(ch, pos + 1)
        return length if end == -1 else end + 1

    if sql.startswith("--", pos):
        end = sql.find("\n", pos)
        return length if end == -1 else end

    if sql.startswith("/*", pos):
        end = sql.find("*/", pos + 2)
        return length if end == -1 else end + 2

    return pos


def literal_spans(sql: str) -> list[tuple[int, int]]:
    """Return the sorted (start, end) spans of every literal and comment in sql."""
    spans = []
    i = 0
    length = len(sql)

    while i < length:
        end = _skip_literal(sql, i)
        if end > i:
            spans.append((i, end))
            i = end
        else:
            i += 1

    return spans


def in_spans(spans: list[tuple[int, int]], pos: int) -> bool:
    """Check if pos falls inside one of the spans returned by literal_spans."""
    index = bisect_right(spans, (pos, float("inf"))) - 1
    return index >= 0 and spans[index][0] <= pos < spans[index][1]


def find_matching_paren(sql: str, open_pos: int) -> int:
    """Find the position of the closing parenthesis matching the one at open_pos.

    Args:
        sql: The SQL string.
        open_pos: Index of the opening '(' character.

    Returns:
        Index of the matching ')' character.

    Raises:
        ValueError: If no matching closing paren is found.
    """
    if sql[open_pos] != "(":
        raise ValueError(f"Character at position {open_pos} is {sql[open_pos]!r}, not '('")

    depth = 1
    i = open_pos + 1
    length = len(sql)

    while i < length:
        end = _skip_literal(sql, i)
        if end > i:
            i = end
            continue

        ch = sql[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i

        i += 1

    raise ValueError(f"No matching closing paren for '(' at position {open_pos}")


def split_arguments(inner: str) -> list[str]:
    """Split a call's argument list by commas, respecting parentheses and literals."""
    if not inner.strip():
        return []

    parts = []
    depth = 0
    start = 0
    i = 0
    length = len(inner)

    while i < length:
        end = _skip_literal(inner, i)
        if end > i:
            i = end
            continue

        ch = inner[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append(inner[start:i].strip())
            start = i + 1

        i += 1

    parts.append(inner[start:].strip())
    return parts


def sub_outside_literals(pattern: re.Pattern, repl, sql: str) -> str:
    """Like pattern.sub(repl, sql), but leave literals and comments untouched."""
    parts = []
    last = 0

    for start, end in literal_spans(sql):
        parts.append(pattern.sub(repl, sql[last:start]))
        parts.append(sql[start:end])
        last = end

    parts.append(pattern.sub(repl, sql[last:]))
    return "".join(parts)


def line_comments_to_block(sql: str) -> str:
    """Rewrite every ``--`` comment as ``/* */`` so it ends where it started.

    A line comment swallows the rest of its line, so text joined onto that
    line (e.g. by collapse_whitespace) would otherwise become comment text.
    """
    parts = []
    last = 0

    for start, end in literal_spans(sql):
        if not sql.startswith("--", start):
            continue
        text = sql[start + 2:end].strip().replace("*/", "* /")
        parts.append(sql[last:start])
        parts.append(f"/* {text} */" if text else "/* */")
        last = end

    parts.append(sql[last:])
    return "".join(parts)


def collapse_whitespace(sql: str) -> str:
    """Collapse every whitespace run outside literals to one space and trim."""
    return sub_outside_literals(_WHITESPACE, " ", sql).strip()


def find_top_level(pattern: re.Pattern, sql: str) -> Optional[re.Match]:
    """Return the first match of pattern at parenthesis depth 0, outside literals."""
    spans = literal_spans(sql)

    for match in pattern.finditer(sql):
        if in_spans(spans, match.start()):
            continue
        if _depth_at(sql, spans, match.start()) == 0:
            return match

    return None


def _depth_at(sql: str, spans: list[tuple[int, int]], pos: int) -> int:
    depth = 0
    for i in range(pos):
        if sql[i] in "()" and not in_spans(spans, i):
            depth += 1 if sql[i] == "(" else -1
    return depth


def _continues_identifier(sql: str, index: int) -> bool:
    """Check if the character at index would make a name part of a longer identifier."""
    if index < 0:
        return False
    ch = sql[index]
    return ch.isalnum() or ch in ("_", ".", "$")


def rewrite_calls(
    sql: str,
    function: str,
    rewrite: Callable[[list[str]], Optional[str]],
) -> str:
    """Replace every FUNCTION(...) call in sql with rewrite(arguments).

    Calls nested inside the arguments of a matched call are rewritten first.
    When rewrite returns None the call is kept as written.
    """
    call = re.compile(re.escape(function) + r"\(", re.IGNORECASE)
    spans = literal_spans(sql)
    result = []
    i = 0

    while True:
        match = call.search(sql, i)
        if match is None:
            result.append(sql[i:])
            break

        match_pos = match.start()
        open_pos = match.end() - 1

        # Make sure it's not part of a longer identifier or inside a literal
        if _continues_identifier(sql, match_pos - 1) or in_spans(spans, match_pos):
            result.append(sql[i:open_pos])
            i = open_pos
            continue

        try:
            close_paren = find_matching_paren(sql, open_pos)
        except ValueError:
            result.append(sql[i:open_pos])
            i = open_pos
            continue

        inner = rewrite_calls(sql[open_pos + 1:close_paren], function, rewrite)
        replacement = rewrite(split_arguments(inner))
        if replacement is None:
            replacement = sql[match_pos:open_pos + 1] + inner + ")"

        result.append(sql[i:match_pos])
        result.append(replacement)
        i = close_paren + 1

    return "".join(result)
