"""Rule types shared by every rule group."""

import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

from ..utils import rewrite_calls, sub_outside_literals

Rewrite = Callable[[list[str]], Optional[str]]


@dataclass(frozen=True)
class Rule:
    """A named rewrite over the whole statement text."""

    name: str

    def apply(self, sql: str) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class FunctionRule(Rule):
    """Rewrite every call to ``function`` using its captured argument list."""

    function: str
    rewrite: Rewrite

    def apply(self, sql: str) -> str:
        return rewrite_calls(sql, self.function, self.rewrite)


@dataclass(frozen=True)
class PatternRule(Rule):
    """Substitute a regular expression everywhere outside literals."""

    pattern: re.Pattern
    replacement: Union[str, Callable[[re.Match], str]]

    def apply(self, sql: str) -> str:
        return sub_outside_literals(self.pattern, self.replacement, sql)


def template(fmt: str, arity: int) -> Rewrite:
    """Build a rewrite that fills fmt with exactly ``arity`` arguments.

    Calls with a different argument count are left unchanged.
    """

    def rewrite(args: list[str]) -> Optional[str]:
        if len(args) != arity:
            return None
        return fmt.format(*args)

    return rewrite


def pattern_rule(name: str, pattern: str, replacement) -> PatternRule:
    return PatternRule(name, re.compile(pattern, re.IGNORECASE), replacement)
