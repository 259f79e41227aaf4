"""Value matchers implementing the InputMatcher protocol.

Every matcher is a frozen dataclass and returns False for a missing (None)
component. Exact comparison is case-sensitive unless ``ignore_case`` is set;
URL components are never normalized before comparison.

Regex uses ``google-re2``: matching time is linear in the input, and patterns
that need backtracking (backreferences, lookaround) are rejected up front.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import re2

from urlstub._errors import MatcherError

if TYPE_CHECKING:
    from urlstub._types import MatchingData


def _fold(value: str, ignore_case: bool) -> str:
    return value.casefold() if ignore_case else value


@dataclass(frozen=True, slots=True)
class ExactMatcher:
    """Component equals ``value``."""

    value: str
    ignore_case: bool = False
    _expected: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", _fold(self.value, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        if value is None:
            return False
        return _fold(value, self.ignore_case) == self._expected


@dataclass(frozen=True, slots=True)
class PrefixMatcher:
    """Component starts with ``prefix``."""

    prefix: str
    ignore_case: bool = False
    _expected: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", _fold(self.prefix, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        if value is None:
            return False
        return _fold(value, self.ignore_case).startswith(self._expected)


@dataclass(frozen=True, slots=True)
class SuffixMatcher:
    """Component ends with ``suffix``."""

    suffix: str
    ignore_case: bool = False
    _expected: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", _fold(self.suffix, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        if value is None:
            return False
        return _fold(value, self.ignore_case).endswith(self._expected)


@dataclass(frozen=True, slots=True)
class ContainsMatcher:
    """Component contains ``substring``."""

    substring: str
    ignore_case: bool = False
    _expected: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_expected", _fold(self.substring, self.ignore_case))

    def matches(self, value: MatchingData, /) -> bool:
        if value is None:
            return False
        return self._expected in _fold(value, self.ignore_case)


@dataclass(frozen=True, slots=True)
class RegexMatcher:
    """Component contains a match for ``pattern`` (search, not fullmatch).

    Anchor the pattern with ``^``/``$`` to match the whole component.

    Raises:
        MatcherError: If the pattern is not valid RE2 syntax.
    """

    pattern: str
    _compiled: re2._Regexp = field(init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            compiled = re2.compile(self.pattern)
        except re2.error as e:
            msg = f'invalid regex pattern "{self.pattern}": {e}'
            raise MatcherError(msg) from e
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, value: MatchingData, /) -> bool:
        if value is None:
            return False
        return self._compiled.search(value) is not None
