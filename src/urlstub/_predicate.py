"""Predicate composition: boolean logic over URL extraction + matching.

SinglePredicate combines a DataInput (extract) with an InputMatcher (match).
QueryParamsPredicate checks query items. And, Or, Not compose predicates
with short-circuit evaluation, and every predicate supports ``&``, ``|``
and ``~``.

Predicates are callable, so they can be handed straight to requests-mock as
an ``additional_matcher``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from urlstub._url import QueryItem, url_parts

if TYPE_CHECKING:
    from urlstub._types import DataInput, InputMatcher, Request


class _Composable:
    """Call and operator support shared by every predicate."""

    __slots__ = ()

    def evaluate(self, request: Request) -> bool:  # pragma: no cover
        raise NotImplementedError

    def __call__(self, request: Request) -> bool:
        return self.evaluate(request)

    def __and__(self, other: Any) -> And:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return And((self, rhs))

    def __rand__(self, other: Any) -> And:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return And((lhs, self))

    def __or__(self, other: Any) -> Or:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Or((self, rhs))

    def __ror__(self, other: Any) -> Or:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return Or((lhs, self))

    def __invert__(self) -> Not:
        return Not(self)


@dataclass(frozen=True, slots=True)
class SinglePredicate(_Composable):
    """A single predicate: extract a URL component, then match it.

    If the DataInput returns None the predicate is False and the matcher is
    never consulted.
    """

    input: DataInput
    matcher: InputMatcher

    def evaluate(self, request: Request) -> bool:
        value = self.input.get(request)
        if value is None:
            return False
        return self.matcher.matches(value)


@dataclass(frozen=True, slots=True)
class QueryParamsPredicate(_Composable):
    """Every (name, value) in ``params`` appears among the URL's query items.

    A value of None matches a bare ``?name``; ``""`` matches ``?name=``.
    A URL without query items never matches, even when ``params`` is empty.
    """

    params: tuple[QueryItem, ...]

    def evaluate(self, request: Request) -> bool:
        parts = url_parts(request)
        if parts is None or not parts.query:
            return False
        return all(param in parts.query for param in self.params)


@dataclass(frozen=True, slots=True)
class CallablePredicate(_Composable):
    """Wraps a plain ``request -> bool`` callable."""

    fn: Callable[[Request], bool]

    def evaluate(self, request: Request) -> bool:
        return bool(self.fn(request))


@dataclass(frozen=True, slots=True)
class And(_Composable):
    """All predicates must match. Empty And is True."""

    predicates: tuple[Predicate, ...]

    def evaluate(self, request: Request) -> bool:
        return all(p.evaluate(request) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Or(_Composable):
    """Any predicate must match. Empty Or is False."""

    predicates: tuple[Predicate, ...]

    def evaluate(self, request: Request) -> bool:
        return any(p.evaluate(request) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class Not(_Composable):
    """Inverts the inner predicate."""

    predicate: Predicate

    def evaluate(self, request: Request) -> bool:
        return not self.predicate.evaluate(request)


type Predicate = (
    SinglePredicate | QueryParamsPredicate | CallablePredicate | And | Or | Not
)


def _coerce(value: Any) -> Predicate | None:
    if isinstance(value, _Composable):
        return value  # type: ignore[return-value]
    if callable(value):
        return CallablePredicate(value)
    return None


def as_predicate(value: Predicate | Callable[[Request], bool]) -> Predicate:
    """Return ``value`` as a predicate, wrapping plain callables.

    Raises:
        TypeError: If ``value`` is not callable.
    """
    predicate = _coerce(value)
    if predicate is None:
        msg = f"expected a predicate or callable, got {type(value).__name__}"
        raise TypeError(msg)
    return predicate


def predicate_depth(p: Predicate) -> int:
    """Calculate the nesting depth of a predicate tree."""
    match p:
        case And(predicates=ps) | Or(predicates=ps):
            return 1 + max((predicate_depth(sub) for sub in ps), default=0)
        case Not(predicate=inner):
            return 1 + predicate_depth(inner)
        case _:
            return 1
