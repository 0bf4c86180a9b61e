"""Warnings for constructs that have no SQLite equivalent."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Diagnostic:
    """A construct that was replaced by a not-supported marker.

    Diagnostics never stop a translation; the marker keeps the statement
    text readable and the record lets the caller report it.
    """

    fragment: str
    message: str


def marker(fragment: str) -> str:
    """Render fragment as an inline SQL comment that cannot end early."""
    safe = fragment.replace("/*", "/ *").replace("*/", "* /")
    return f"/* {safe} not supported */"
