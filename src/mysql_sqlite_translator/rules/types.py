"""Column type rules.

SQLite only has INTEGER, TEXT, REAL and BLOB storage classes, so every
width and precision suffix is dropped:

    INT(11) UNSIGNED   ->  INTEGER
    VARCHAR(255)       ->  TEXT
    DECIMAL(10,2)      ->  REAL
    TIMESTAMP          ->  DATETIME
    VARBINARY(16)      ->  BLOB

These patterns also match function-call spellings such as CHAR(65) and the
BINARY operator; there is no statement context to tell them apart.
"""

from .base import FunctionRule, pattern_rule

SIGNED_CAST = pattern_rule(
    "signed cast",
    r"\bAS\s+(?:UN)?SIGNED(?:\s+INTEGER)?\b",
    "AS INTEGER",
)
INTEGER_TYPES = pattern_rule(
    "integer types",
    r"\b(?:TINY|SMALL|MEDIUM|BIG)?INT(?:EGER)?\b(?:\s*\(\s*\d+\s*\))?"
    r"(?:\s+UNSIGNED\b)?(?:\s+ZEROFILL\b)?",
    "INTEGER",
)
TEXT_TYPES = pattern_rule(
    "text types",
    r"\bN?(?:VAR)?CHAR\s*\(\s*\d+\s*\)"
    r"|\b(?:TINY|MEDIUM|LONG)?TEXT\b(?:\s*\(\s*\d+\s*\))?",
    "TEXT",
)
ENUM = FunctionRule("enum", "ENUM", lambda args: "TEXT")
REAL_TYPES = pattern_rule(
    "real types",
    r"\b(?:DECIMAL|NUMERIC|FLOAT|DOUBLE(?:\s+PRECISION)?|REAL)\s*\(\s*\d+\s*(?:,\s*\d+\s*)?\)"
    r"|\bDOUBLE(?:\s+PRECISION)?\b",
    "REAL",
)
TIMESTAMP = pattern_rule("timestamp", r"\bTIMESTAMP\b(?:\s*\(\s*\d+\s*\))?", "DATETIME")


def _blob(match):
    # COLLATE BINARY is a valid SQLite collation, not a column type
    if match.group("collate"):
        return match.group(0)
    return "BLOB"


BLOB_TYPES = pattern_rule(
    "blob types",
    r"(?P<collate>\bCOLLATE\s+)?"
    r"(?:\b(?:VAR)?BINARY\s*\(\s*\d+\s*\)"
    r"|\b(?:TINY|MEDIUM|LONG)?BLOB\b"
    r"|\bBINARY\b)",
    _blob,
)

TYPE_RULES = (
    SIGNED_CAST,
    INTEGER_TYPES,
    TEXT_TYPES,
    ENUM,
    REAL_TYPES,
    TIMESTAMP,
    BLOB_TYPES,
)
