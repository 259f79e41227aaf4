"""Compile stub config into runtime stubs.

Example::

    stubs = load_stubs_file("tests/stubs.yaml")
    with requests_mock.Mocker() as m:
        stub_all(m, stubs)
        ...

Fixture paths are resolved when loading but the files are read only when a
stub fires.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from urlstub._config import (
    MAX_DEPTH,
    AndPredicateConfig,
    ConfigParseError,
    NotPredicateConfig,
    OrPredicateConfig,
    QueryPredicateConfig,
    SinglePredicateConfig,
    parse_stubs_config,
)
from urlstub._errors import MatcherError
from urlstub._inputs import ExtensionInput, HostInput, PathInput, SchemeInput
from urlstub._predicate import (
    And,
    Not,
    Or,
    QueryParamsPredicate,
    SinglePredicate,
)
from urlstub._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)
from urlstub._stub import Stub, fixture

if TYPE_CHECKING:
    from os import PathLike

    from urlstub._config import BuiltInMatch, PredicateConfig, StubConfig, StubsConfig
    from urlstub._predicate import Predicate
    from urlstub._types import DataInput, InputMatcher

logger = logging.getLogger(__name__)

# ═══════════════════════════════════════════════════════════════════════════════
# Limits
# ═══════════════════════════════════════════════════════════════════════════════

MAX_PREDICATES_PER_COMPOUND = 256
MAX_PATTERN_LENGTH = 8192
MAX_REGEX_PATTERN_LENGTH = 4096

_INPUTS: dict[str, DataInput] = {
    "scheme": SchemeInput(),
    "host": HostInput(),
    "path": PathInput(),
    "extension": ExtensionInput(),
}

# ═══════════════════════════════════════════════════════════════════════════════
# Error types
# ═══════════════════════════════════════════════════════════════════════════════


class InvalidConfigError(MatcherError):
    """A config payload was malformed or semantically invalid."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"invalid config: {source}")


class TooManyPredicatesError(MatcherError):
    """Compound predicate has too many children."""

    def __init__(self, count: int, max_: int) -> None:
        self.count = count
        self.max = max_
        super().__init__(f"too many predicates in compound: {count} exceeds maximum {max_}")


class PatternTooLongError(MatcherError):
    """A match pattern exceeds the length limit."""

    def __init__(self, length: int, max_: int) -> None:
        self.length = length
        self.max = max_
        super().__init__(f"pattern length {length} exceeds maximum {max_}")


# ═══════════════════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════════════════


def load_stubs(
    config: StubsConfig, base_dir: str | PathLike[str] | None = None
) -> list[Stub]:
    """Compile a StubsConfig into stubs, in declaration order.

    Relative fixture paths are resolved against ``base_dir`` when given.

    Raises:
        TooManyPredicatesError: compound predicate has too many children
        PatternTooLongError: pattern exceeds length limit
        InvalidConfigError: invalid regex
        MatcherError: predicate depth exceeded
    """
    base = Path(base_dir) if base_dir is not None else None
    return [_load_stub(sc, base) for sc in config.stubs]


def load_stubs_file(path: str | PathLike[str]) -> list[Stub]:
    """Read a YAML stub file and compile every document's stubs.

    Fixture paths resolve against the file's directory.

    Raises:
        ConfigParseError: YAML is invalid or a document is malformed
        MatcherError: see load_stubs()
    """
    path = Path(path)
    stubs: list[Stub] = []
    with path.open(encoding="utf-8") as f:
        try:
            docs = [doc for doc in yaml.safe_load_all(f) if doc is not None]
        except yaml.YAMLError as e:
            msg = f"{path}: {e}"
            raise ConfigParseError(msg) from e

    for doc in docs:
        stubs.extend(load_stubs(parse_stubs_config(doc), base_dir=path.parent))

    logger.info("loaded %d stubs from %s", len(stubs), path)
    return stubs


def _load_stub(config: StubConfig, base_dir: Path | None) -> Stub:
    predicate = _load_predicate(config.predicate, depth=1)

    response = config.response
    fixture_path = Path(response.fixture)
    if base_dir is not None and not fixture_path.is_absolute():
        fixture_path = base_dir / fixture_path

    return Stub(
        predicate=predicate,
        response=fixture(fixture_path, status=response.status, headers=response.headers),
    )


def _load_predicate(config: PredicateConfig, depth: int) -> Predicate:
    if depth > MAX_DEPTH:
        msg = f"predicate depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
        raise MatcherError(msg)
    match config:
        case SinglePredicateConfig(input=name, matcher=matcher):
            return SinglePredicate(input=_INPUTS[name], matcher=_compile_built_in(matcher))
        case QueryPredicateConfig(params=params):
            return QueryParamsPredicate(params)
        case AndPredicateConfig(predicates=children):
            return And(_load_children(children, depth))
        case OrPredicateConfig(predicates=children):
            return Or(_load_children(children, depth))
        case NotPredicateConfig(predicate=inner):
            return Not(_load_predicate(inner, depth + 1))
        case _:  # pragma: no cover
            msg = f"unknown predicate config type: {type(config).__name__}"
            raise InvalidConfigError(msg)


def _load_children(children: tuple[PredicateConfig, ...], depth: int) -> tuple[Any, ...]:
    if len(children) > MAX_PREDICATES_PER_COMPOUND:
        raise TooManyPredicatesError(len(children), MAX_PREDICATES_PER_COMPOUND)
    return tuple(_load_predicate(p, depth + 1) for p in children)


# ═══════════════════════════════════════════════════════════════════════════════
# Built-in matcher compilation
# ═══════════════════════════════════════════════════════════════════════════════


def _check_pattern_length(variant: str, value: str) -> None:
    limit = MAX_REGEX_PATTERN_LENGTH if variant == "Regex" else MAX_PATTERN_LENGTH
    if len(value) > limit:
        raise PatternTooLongError(len(value), limit)


def _compile_built_in(config: BuiltInMatch) -> InputMatcher:
    _check_pattern_length(config.variant, config.value)

    match config.variant:
        case "Exact":
            return ExactMatcher(config.value, ignore_case=config.ignore_case)
        case "Prefix":
            return PrefixMatcher(config.value, ignore_case=config.ignore_case)
        case "Suffix":
            return SuffixMatcher(config.value, ignore_case=config.ignore_case)
        case "Contains":
            return ContainsMatcher(config.value, ignore_case=config.ignore_case)
        case "Regex":
            try:
                return RegexMatcher(config.value)
            except MatcherError as e:
                raise InvalidConfigError(str(e)) from e
        case _:
            msg = f"unknown built-in match variant: {config.variant!r}"
            raise InvalidConfigError(msg)
