"""Predicate constructors for the common URL checks.

Each returns a predicate that compares one URL component for exact,
case-sensitive equality. A request without a URL never matches.

    >>> from urlstub import is_scheme, is_host
    >>> secure_example = is_scheme("https") & is_host("example.com")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from urlstub._inputs import ExtensionInput, HostInput, PathInput, SchemeInput
from urlstub._predicate import QueryParamsPredicate, SinglePredicate
from urlstub._string_matchers import ExactMatcher

if TYPE_CHECKING:
    from collections.abc import Mapping


def is_scheme(scheme: str) -> SinglePredicate:
    """Match requests whose URL scheme is exactly ``scheme``."""
    return SinglePredicate(SchemeInput(), ExactMatcher(scheme))


def is_host(host: str) -> SinglePredicate:
    """Match requests whose URL host is exactly ``host``."""
    return SinglePredicate(HostInput(), ExactMatcher(host))


def is_path(path: str) -> SinglePredicate:
    """Match requests whose URL path is exactly ``path``.

    Paths of absolute URLs start with ``/``, so include it. Trailing slashes
    and percent-escapes are compared as written.
    """
    return SinglePredicate(PathInput(), ExactMatcher(path))


def is_extension(ext: str) -> SinglePredicate:
    """Match requests whose path ends with the extension ``ext`` (no dot)."""
    return SinglePredicate(ExtensionInput(), ExactMatcher(ext))


def contains_query_params(params: Mapping[str, str | None]) -> QueryParamsPredicate:
    """Match requests carrying every given query parameter.

    ``{"q": ""}`` matches ``?q=`` (empty value) while ``{"q": None}``
    matches ``?q`` (no value at all). A URL without any query item never
    matches, even if ``params`` is empty.
    """
    return QueryParamsPredicate(tuple(params.items()))
