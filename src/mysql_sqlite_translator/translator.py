import logging
from dataclasses import dataclass, field

from .diagnostics import Diagnostic
from .engine import rewrite
from .formatter import detect_shape, format_statement
from .rules import RULES, Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Translation:
    """Result of a translation with its side-channel warnings."""

    sql: str
    diagnostics: list[Diagnostic] = field(default_factory=list)


def translate_with_diagnostics(sql: str, rules: tuple[Rule, ...] = RULES) -> Translation:
    """Translate a MySQL statement into SQLite and report unsupported constructs.

    Pipeline order matters: the rule table runs first, then cleanup and
    not-supported markers, and formatting last because the statement shape
    is sniffed from the rewritten text.
    """
    rewritten, diagnostics = rewrite(sql, rules)
    shape = detect_shape(rewritten)
    logger.debug("Formatting statement as %s", shape.value)
    return Translation(format_statement(rewritten, shape), diagnostics)


def translate(sql: str, rules: tuple[Rule, ...] = RULES) -> str:
    """Translate a MySQL statement into SQLite.

    Unsupported constructs are replaced by ``/* ... not supported */``
    comments; use translate_with_diagnostics to also get them as a list.
    """
    return translate_with_diagnostics(sql, rules).sql
