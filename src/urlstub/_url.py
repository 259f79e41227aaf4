"""URL component extraction.

Splits a request URL with the RFC 3986 appendix B expression instead of
``urllib.parse``, which lowercases the scheme and host. Components are
returned as they appear on the wire: no case folding, no trailing-slash
trimming, no percent-decoding of the path.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING
from urllib.parse import unquote

import re2

if TYPE_CHECKING:
    from urlstub._types import Request

_URL_RE = re2.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?")

# (name, value) where value is None for a bare "?name".
type QueryItem = tuple[str, str | None]


@dataclass(frozen=True, slots=True)
class UrlParts:
    """The components of a request URL.

    ``host`` is None when the URL has no authority or an empty one.
    ``query`` is None when the URL has no ``?`` at all, and an empty tuple
    when the query string holds no items.
    """

    scheme: str | None
    host: str | None
    path: str
    query: tuple[QueryItem, ...] | None

    @property
    def extension(self) -> str:
        """Extension of the last non-empty path segment, without the dot.

        A trailing ``/`` is ignored; "" when the segment has no extension.
        """
        segment = self.path.rstrip("/").rsplit("/", 1)[-1]
        stem, dot, ext = segment.rpartition(".")
        if not dot or not stem:
            return ""
        return ext


def request_url(request: Request) -> str | None:
    """Return the request URL as text, or None if the request has none."""
    url = getattr(request, "url", None)
    if url is None:
        return None
    if isinstance(url, bytes):
        url = url.decode("utf-8", "replace")
    elif not isinstance(url, str):
        url = str(url)
    # RE2 needs valid UTF-8; lone surrogates (os.fsdecode) become U+FFFD.
    url = url.encode("utf-8", "surrogatepass").decode("utf-8", "replace")
    return url or None


def url_parts(request: Request) -> UrlParts | None:
    """Split the URL of ``request``, or return None if it has no URL."""
    url = request_url(request)
    if url is None:
        return None
    return split_url(url)


@lru_cache(maxsize=1024)
def split_url(url: str) -> UrlParts | None:
    m = _URL_RE.match(url)
    if m is None:  # pragma: no cover
        return None
    scheme, authority, path, query = m.group(1), m.group(2), m.group(3), m.group(4)
    return UrlParts(
        scheme=scheme,
        host=_host(authority),
        path=path or "",
        query=_query_items(query),
    )


def _host(authority: str | None) -> str | None:
    if not authority:
        return None
    hostport = authority.rpartition("@")[2]
    if hostport.startswith("["):
        host = hostport[1:].partition("]")[0]
    else:
        host = hostport.partition(":")[0]
    return host or None


def _query_items(query: str | None) -> tuple[QueryItem, ...] | None:
    if query is None:
        return None
    items: list[QueryItem] = []
    for part in query.split("&"):
        if not part:
            continue
        if "=" in part:
            name, value = part.split("=", 1)
            items.append((unquote(name), unquote(value)))
        else:
            items.append((unquote(part), None))
    return tuple(items)
