"""Request doubles shared by the unit tests."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FakeRequest:
    """Minimal request: the predicates only ever read ``url``."""

    url: str | None


def req(url: str | None) -> FakeRequest:
    return FakeRequest(url)


SCENARIO_URL = "https://example.com/path/file.json?q=&x=1"
