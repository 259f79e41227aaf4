"""Core protocols and type aliases for urlstub.

- Request is whatever the stubbing library hands to a matcher; only its
  ``url`` attribute is read
- DataInput extracts one URL component from a Request
- InputMatcher compares an extracted component against an expected value
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

# None means "component not available" and always evaluates to False.
MatchingData = str | None

# requests-mock passes a _RequestObjectProxy, requests a PreparedRequest,
# httpx an httpx.Request. All of them expose ``url``.
type Request = Any


@runtime_checkable
class DataInput(Protocol):
    """Extract a URL component from a request.

    Returning None signals that the request has no such component, which
    makes the enclosing predicate evaluate to False.
    """

    def get(self, request: Request, /) -> MatchingData: ...


@runtime_checkable
class InputMatcher(Protocol):
    """Match against an extracted URL component."""

    def matches(self, value: MatchingData, /) -> bool: ...
