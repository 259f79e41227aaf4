"""Config types for declaring stubs in YAML or plain dicts.

Config-driven stub construction path:
  dict → parse_stubs_config() → StubsConfig → load_stubs() → list[Stub]

Relationship to runtime types:

| Config type            | Runtime type          |
|------------------------|-----------------------|
| StubConfig             | Stub                  |
| PredicateConfig        | Predicate             |
| SinglePredicateConfig  | SinglePredicate       |
| QueryPredicateConfig   | QueryParamsPredicate  |
| BuiltInMatch           | InputMatcher          |
| ResponseConfig         | FixtureResponse       |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# ═══════════════════════════════════════════════════════════════════════════════
# Config types
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BuiltInMatch:
    """Built-in string matching on a URL component.

    Written as ``{Exact: "example.com"}``, ``{Prefix: "/api"}``,
    ``{Regex: "^/v[0-9]+/"}``, with an optional ``ignore_case: true``.
    """

    variant: str
    value: str
    ignore_case: bool = False


@dataclass(frozen=True, slots=True)
class SinglePredicateConfig:
    """Config for a SinglePredicate: URL component + value match."""

    input: str
    matcher: BuiltInMatch


@dataclass(frozen=True, slots=True)
class QueryPredicateConfig:
    """Required query parameters; a None value means "present without value"."""

    params: tuple[tuple[str, str | None], ...]


@dataclass(frozen=True, slots=True)
class AndPredicateConfig:
    """All child predicates must match (logical AND)."""

    predicates: tuple[PredicateConfig, ...]


@dataclass(frozen=True, slots=True)
class OrPredicateConfig:
    """Any child predicate must match (logical OR)."""

    predicates: tuple[PredicateConfig, ...]


@dataclass(frozen=True, slots=True)
class NotPredicateConfig:
    """Inverts the inner predicate (logical NOT)."""

    predicate: PredicateConfig


type PredicateConfig = (
    SinglePredicateConfig
    | QueryPredicateConfig
    | AndPredicateConfig
    | OrPredicateConfig
    | NotPredicateConfig
)


@dataclass(frozen=True, slots=True)
class ResponseConfig:
    """Fixture path (relative paths resolve against the config's directory)."""

    fixture: str
    status: int = 200
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class StubConfig:
    predicate: PredicateConfig
    response: ResponseConfig


@dataclass(frozen=True, slots=True)
class StubsConfig:
    """Top-level config: an ordered list of stubs."""

    stubs: tuple[StubConfig, ...]


# ═══════════════════════════════════════════════════════════════════════════════
# Parsing (dict → config types)
# ═══════════════════════════════════════════════════════════════════════════════

MAX_DEPTH = 32

INPUT_NAMES = frozenset({"scheme", "host", "path", "extension"})

_STRING_MATCH_VARIANTS = frozenset({"Exact", "Prefix", "Suffix", "Contains", "Regex"})


class ConfigParseError(Exception):
    """Error parsing a config dict into config types."""


def parse_stubs_config(data: dict[str, Any]) -> StubsConfig:
    """Parse a dict into a StubsConfig.

    Raises:
        ConfigParseError: If the dict is malformed.
    """
    if not isinstance(data, dict):
        msg = f"expected dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    raw_stubs = data.get("stubs")
    if raw_stubs is None:
        msg = "missing required field 'stubs'"
        raise ConfigParseError(msg)
    if not isinstance(raw_stubs, list):
        msg = f"'stubs' must be a list, got {type(raw_stubs).__name__}"
        raise ConfigParseError(msg)

    return StubsConfig(stubs=tuple(_parse_stub(s) for s in raw_stubs))


def _parse_stub(data: Any) -> StubConfig:
    if not isinstance(data, dict):
        msg = f"stub must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)
    if "predicate" not in data:
        msg = "stub missing required field 'predicate'"
        raise ConfigParseError(msg)
    if "response" not in data:
        msg = "stub missing required field 'response'"
        raise ConfigParseError(msg)

    return StubConfig(
        predicate=_parse_predicate(data["predicate"], depth=1),
        response=_parse_response(data["response"]),
    )


def _parse_predicate(data: Any, depth: int) -> PredicateConfig:
    """Parse a predicate config dict.

    Uses 'type' discriminant: single, query, and, or, not. Nesting past
    MAX_DEPTH is rejected before descending into it.
    """
    if depth > MAX_DEPTH:
        msg = f"predicate depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
        raise ConfigParseError(msg)
    if not isinstance(data, dict):
        msg = f"predicate must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    pred_type = data.get("type")
    if pred_type is None:
        msg = "predicate missing required field 'type'"
        raise ConfigParseError(msg)

    match pred_type:
        case "single":
            return _parse_single_predicate(data)
        case "query":
            return _parse_query_predicate(data)
        case "and":
            return AndPredicateConfig(predicates=_parse_children(data, "and", depth))
        case "or":
            return OrPredicateConfig(predicates=_parse_children(data, "or", depth))
        case "not":
            if "predicate" not in data:
                msg = "not predicate missing required field 'predicate'"
                raise ConfigParseError(msg)
            return NotPredicateConfig(
                predicate=_parse_predicate(data["predicate"], depth + 1)
            )

    msg = f"unknown predicate type: {pred_type!r}"
    raise ConfigParseError(msg)


def _parse_children(
    data: dict[str, Any], kind: str, depth: int
) -> tuple[PredicateConfig, ...]:
    children = data.get("predicates", [])
    if not isinstance(children, list):
        msg = f"{kind} predicate 'predicates' must be a list, got {type(children).__name__}"
        raise ConfigParseError(msg)
    return tuple(_parse_predicate(p, depth + 1) for p in children)


def _parse_single_predicate(data: dict[str, Any]) -> SinglePredicateConfig:
    input_name = data.get("input")
    if input_name is None:
        msg = "single predicate missing required field 'input'"
        raise ConfigParseError(msg)
    if input_name not in INPUT_NAMES:
        msg = f"unknown input {input_name!r}, expected one of {sorted(INPUT_NAMES)}"
        raise ConfigParseError(msg)
    if "value_match" not in data:
        msg = "single predicate missing required field 'value_match'"
        raise ConfigParseError(msg)

    return SinglePredicateConfig(
        input=input_name, matcher=_parse_value_match(data["value_match"])
    )


def _parse_value_match(data: Any) -> BuiltInMatch:
    """Parse a value_match dict: exactly one variant key, optional ignore_case."""
    if not isinstance(data, dict):
        msg = f"value_match must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    variants = [v for v in sorted(_STRING_MATCH_VARIANTS) if v in data]
    if len(variants) != 1:
        expected = sorted(_STRING_MATCH_VARIANTS)
        msg = (
            f"value_match must contain exactly one of {expected}, "
            f"got keys: {sorted(data.keys())}"
        )
        raise ConfigParseError(msg)

    variant = variants[0]
    value = data[variant]
    if not isinstance(value, str):
        msg = f"value_match {variant} value must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)

    ignore_case = data.get("ignore_case", False)
    if not isinstance(ignore_case, bool):
        msg = f"ignore_case must be a bool, got {type(ignore_case).__name__}"
        raise ConfigParseError(msg)
    if ignore_case and variant == "Regex":
        msg = "ignore_case is not supported for Regex, use (?i) in the pattern"
        raise ConfigParseError(msg)

    return BuiltInMatch(variant=variant, value=value, ignore_case=ignore_case)


def _parse_query_predicate(data: dict[str, Any]) -> QueryPredicateConfig:
    params = data.get("params")
    if params is None:
        msg = "query predicate missing required field 'params'"
        raise ConfigParseError(msg)
    if not isinstance(params, dict):
        msg = f"query predicate 'params' must be a dict, got {type(params).__name__}"
        raise ConfigParseError(msg)

    for name, value in params.items():
        if not isinstance(name, str):
            msg = f"query parameter name must be a string, got {type(name).__name__}"
            raise ConfigParseError(msg)
        if value is not None and not isinstance(value, str):
            msg = (
                f"query parameter {name!r} value must be a string or null, "
                f"got {type(value).__name__}"
            )
            raise ConfigParseError(msg)

    return QueryPredicateConfig(params=tuple(params.items()))


def _parse_response(data: Any) -> ResponseConfig:
    if not isinstance(data, dict):
        msg = f"response must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    path = data.get("fixture")
    if path is None:
        msg = "response missing required field 'fixture'"
        raise ConfigParseError(msg)
    if not isinstance(path, str):
        msg = f"fixture must be a string, got {type(path).__name__}"
        raise ConfigParseError(msg)

    status = data.get("status", 200)
    if isinstance(status, bool) or not isinstance(status, int):
        msg = f"status must be an integer, got {type(status).__name__}"
        raise ConfigParseError(msg)

    headers = data.get("headers", {})
    if not isinstance(headers, dict):
        msg = f"headers must be a dict, got {type(headers).__name__}"
        raise ConfigParseError(msg)
    for name, value in headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            msg = f"header {name!r} must map a string to a string"
            raise ConfigParseError(msg)

    return ResponseConfig(fixture=path, status=status, headers=dict(headers))
