"""Fixture responses and stub registration on top of requests-mock.

requests-mock owns interception, matching order and stub lifetime. This
module only turns a predicate and a FixtureResponse factory into a
``register_uri`` call:

- the predicate becomes the ``additional_matcher``
- the factory runs when the stub fires; its status and headers are copied
  onto the response context and the fixture bytes become the body
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import requests_mock
from requests.structures import CaseInsensitiveDict

from urlstub._predicate import Predicate, as_predicate

if TYPE_CHECKING:
    from os import PathLike

    from urlstub._types import Request

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FixtureResponse:
    """A canned response whose body is the content of a fixture file.

    The file is read by ``body()``, which runs only when a stub fires.
    Headers are copied into a read-only, case-insensitive mapping.
    """

    path: Path
    status: int = 200
    headers: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "headers", MappingProxyType(CaseInsensitiveDict(self.headers))
        )

    def body(self) -> bytes:
        """Read the fixture file.

        Raises:
            FileNotFoundError: If the fixture does not exist.
        """
        return self.path.read_bytes()


type ResponseFactory = Callable[[Request], FixtureResponse]

# requests-mock exposes register_uri on both.
type Mock = requests_mock.Mocker | requests_mock.Adapter


def fixture(
    file_path: str | PathLike[str],
    status: int = 200,
    headers: Mapping[str, str] | None = None,
) -> FixtureResponse:
    """Build a response that serves ``file_path`` with ``status`` and ``headers``.

    Existence of the file is not checked here.
    """
    return FixtureResponse(
        path=Path(file_path),
        status=status,
        headers=headers or {},
    )


def stub(
    mocker: Mock,
    condition: Predicate | Callable[[Request], bool],
    response: ResponseFactory | FixtureResponse,
) -> Any:
    """Register a stub that answers requests matching ``condition``.

    ``response`` is called with the matched request each time the stub
    fires; a bare FixtureResponse is served as-is.

    Returns the requests-mock matcher handle, which records ``called``,
    ``call_count`` and ``request_history``. Stubs registered later take
    precedence.
    """
    predicate = as_predicate(condition)
    factory = _as_factory(response)

    def content(request: Request, context: Any) -> bytes:
        descriptor = factory(request)
        body = descriptor.body()
        context.status_code = descriptor.status
        context.headers.update(descriptor.headers)
        logger.debug("served %s for %s %s", descriptor.path, request.method, request.url)
        return body

    handle = mocker.register_uri(
        requests_mock.ANY,
        requests_mock.ANY,
        additional_matcher=predicate,
        content=content,
    )
    logger.debug("registered stub %r", predicate)
    return handle


@dataclass(frozen=True, slots=True)
class Stub:
    """A predicate paired with the fixture it answers with."""

    predicate: Predicate
    response: FixtureResponse


def stub_all(mocker: Mock, stubs: Iterable[Stub]) -> list[Any]:
    """Register every stub in order and return their handles."""
    return [stub(mocker, s.predicate, s.response) for s in stubs]


def _as_factory(response: ResponseFactory | FixtureResponse) -> ResponseFactory:
    if isinstance(response, FixtureResponse):
        return lambda _request: response
    return response
