"""Error root for urlstub.

Errors are raised only while building matchers. Evaluating a predicate
against a request never raises.
"""

from __future__ import annotations


class MatcherError(Exception):
    """Errors from matcher construction and validation."""
