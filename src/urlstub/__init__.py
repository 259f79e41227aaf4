"""urlstub: URL predicates and fixture responses for requests-mock.

All public types are exported from this module for flat imports:

    from urlstub import fixture, stub, is_host, is_path

    with requests_mock.Mocker() as m:
        stub(m, is_host("api.example.com") & is_path("/users"),
             fixture("tests/fixtures/users.json",
                     headers={"Content-Type": "application/json"}))
"""

__version__ = "0.1.0"

# Config types, see urlstub._config for details
from urlstub._config import (
    MAX_DEPTH,
    AndPredicateConfig,
    BuiltInMatch,
    ConfigParseError,
    NotPredicateConfig,
    OrPredicateConfig,
    PredicateConfig,
    QueryPredicateConfig,
    ResponseConfig,
    SinglePredicateConfig,
    StubConfig,
    StubsConfig,
    parse_stubs_config,
)
from urlstub._errors import MatcherError
from urlstub._inputs import ExtensionInput, HostInput, PathInput, SchemeInput

# Loading, see urlstub._loader for details
from urlstub._loader import (
    MAX_PATTERN_LENGTH,
    MAX_PREDICATES_PER_COMPOUND,
    MAX_REGEX_PATTERN_LENGTH,
    InvalidConfigError,
    PatternTooLongError,
    TooManyPredicatesError,
    load_stubs,
    load_stubs_file,
)

# URL predicate constructors
from urlstub._matchers import (
    contains_query_params,
    is_extension,
    is_host,
    is_path,
    is_scheme,
)

# Predicates
from urlstub._predicate import (
    And,
    CallablePredicate,
    Not,
    Or,
    Predicate,
    QueryParamsPredicate,
    SinglePredicate,
    as_predicate,
    predicate_depth,
)

# Value matchers
from urlstub._string_matchers import (
    ContainsMatcher,
    ExactMatcher,
    PrefixMatcher,
    RegexMatcher,
    SuffixMatcher,
)

# Stubbing
from urlstub._stub import (
    FixtureResponse,
    ResponseFactory,
    Stub,
    fixture,
    stub,
    stub_all,
)
from urlstub._types import DataInput, InputMatcher, MatchingData, Request
from urlstub._url import UrlParts, url_parts

__all__ = [
    # Protocols
    "DataInput",
    "InputMatcher",
    "MatchingData",
    "Request",
    # URL
    "UrlParts",
    "url_parts",
    # Inputs
    "SchemeInput",
    "HostInput",
    "PathInput",
    "ExtensionInput",
    # Predicates
    "SinglePredicate",
    "QueryParamsPredicate",
    "CallablePredicate",
    "And",
    "Or",
    "Not",
    "Predicate",
    "as_predicate",
    "predicate_depth",
    # URL predicate constructors
    "is_scheme",
    "is_host",
    "is_path",
    "is_extension",
    "contains_query_params",
    # Value matchers
    "ExactMatcher",
    "PrefixMatcher",
    "SuffixMatcher",
    "ContainsMatcher",
    "RegexMatcher",
    # Stubbing
    "FixtureResponse",
    "ResponseFactory",
    "Stub",
    "fixture",
    "stub",
    "stub_all",
    # Config
    "BuiltInMatch",
    "SinglePredicateConfig",
    "QueryPredicateConfig",
    "AndPredicateConfig",
    "OrPredicateConfig",
    "NotPredicateConfig",
    "PredicateConfig",
    "ResponseConfig",
    "StubConfig",
    "StubsConfig",
    "ConfigParseError",
    "parse_stubs_config",
    # Loading
    "load_stubs",
    "load_stubs_file",
    "MatcherError",
    "InvalidConfigError",
    "TooManyPredicatesError",
    "PatternTooLongError",
    "MAX_DEPTH",
    "MAX_PREDICATES_PER_COMPOUND",
    "MAX_PATTERN_LENGTH",
    "MAX_REGEX_PATTERN_LENGTH",
]
