"""Auto-increment key rules.

Both MySQL orderings, and a bare AUTO_INCREMENT column attribute, become
SQLite's PRIMARY KEY AUTOINCREMENT. The AUTO_INCREMENT=n table option is
left for the engine's cleanup pass.
"""

from .base import pattern_rule

_SQLITE_KEY = "PRIMARY KEY AUTOINCREMENT"

AUTO_INCREMENT_PRIMARY_KEY = pattern_rule(
    "auto_increment primary key",
    r"\bAUTO_INCREMENT\s+PRIMARY\s+KEY\b",
    _SQLITE_KEY,
)
PRIMARY_KEY_AUTO_INCREMENT = pattern_rule(
    "primary key auto_increment",
    r"\bPRIMARY\s+KEY\s+AUTO_INCREMENT\b",
    _SQLITE_KEY,
)
AUTO_INCREMENT = pattern_rule(
    "auto_increment",
    r"\bAUTO_INCREMENT\b(?!\s*=)",
    _SQLITE_KEY,
)

KEY_RULES = (
    AUTO_INCREMENT_PRIMARY_KEY,
    PRIMARY_KEY_AUTO_INCREMENT,
    AUTO_INCREMENT,
)
