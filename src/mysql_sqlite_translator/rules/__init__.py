"""The ordered rule table.

Order matters: each rule sees the output of every rule before it. The bare
JOIN rule relies on outer joins having been normalized already, and the
type rules run after the function rules have produced their CASTs.
"""

from .base import FunctionRule, PatternRule, Rule, pattern_rule, template
from .conditional_functions import CONDITIONAL_RULES
from .date_functions import DATE_RULES
from .joins import JOIN_RULES
from .keys import KEY_RULES
from .numeric_functions import NUMERIC_RULES
from .string_functions import STRING_RULES
from .types import TYPE_RULES

RULES: tuple[Rule, ...] = (
    *STRING_RULES,
    *DATE_RULES,
    *NUMERIC_RULES,
    *CONDITIONAL_RULES,
    *TYPE_RULES,
    *JOIN_RULES,
    *KEY_RULES,
)

__all__ = [
    "RULES",
    "Rule",
    "FunctionRule",
    "PatternRule",
    "pattern_rule",
    "template",
]
