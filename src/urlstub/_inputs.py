"""DataInput implementations over a request URL.

Each input extracts one component of ``request.url``. A request without a
URL yields None for every input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from urlstub._url import url_parts

if TYPE_CHECKING:
    from urlstub._types import MatchingData, Request


@dataclass(frozen=True, slots=True)
class SchemeInput:
    """Extracts the URL scheme, case preserved."""

    def get(self, request: Request, /) -> MatchingData:
        parts = url_parts(request)
        return parts.scheme if parts is not None else None


@dataclass(frozen=True, slots=True)
class HostInput:
    """Extracts the URL host (no userinfo, no port), case preserved."""

    def get(self, request: Request, /) -> MatchingData:
        parts = url_parts(request)
        return parts.host if parts is not None else None


@dataclass(frozen=True, slots=True)
class PathInput:
    """Extracts the raw URL path (without query string or fragment)."""

    def get(self, request: Request, /) -> MatchingData:
        parts = url_parts(request)
        return parts.path if parts is not None else None


@dataclass(frozen=True, slots=True)
class ExtensionInput:
    """Extracts the path extension without its leading dot."""

    def get(self, request: Request, /) -> MatchingData:
        parts = url_parts(request)
        return parts.extension if parts is not None else None
