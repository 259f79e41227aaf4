"""Tests for compiling stub config into runtime stubs (urlstub._loader)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import requests
import requests_mock

from urlstub import (
    MAX_DEPTH,
    MAX_PATTERN_LENGTH,
    MAX_PREDICATES_PER_COMPOUND,
    MAX_REGEX_PATTERN_LENGTH,
    And,
    AndPredicateConfig,
    BuiltInMatch,
    ConfigParseError,
    ExactMatcher,
    HostInput,
    InvalidConfigError,
    MatcherError,
    Not,
    NotPredicateConfig,
    PatternTooLongError,
    PredicateConfig,
    QueryParamsPredicate,
    QueryPredicateConfig,
    ResponseConfig,
    SinglePredicate,
    SinglePredicateConfig,
    StubConfig,
    StubsConfig,
    SuffixMatcher,
    TooManyPredicatesError,
    load_stubs,
    load_stubs_file,
    parse_stubs_config,
    stub_all,
)

from .helpers import SCENARIO_URL, req

if TYPE_CHECKING:
    from pathlib import Path


def _host(value: str) -> dict:
    return {"type": "single", "input": "host", "value_match": {"Exact": value}}


def _load(predicate: dict, response: dict | None = None, base_dir=None):  # noqa: ANN001, ANN202
    data = {"stubs": [{"predicate": predicate, "response": response or {"fixture": "a.json"}}]}
    return load_stubs(parse_stubs_config(data), base_dir=base_dir)


STUBS_YAML = """\
stubs:
  - predicate:
      type: and
      predicates:
        - {type: single, input: scheme, value_match: {Exact: https}}
        - {type: single, input: host, value_match: {Exact: api.example.com}}
        - {type: single, input: path, value_match: {Regex: '^/users/[0-9]+$'}}
    response:
      fixture: data/users.json
      headers: {Content-Type: application/json}
  - predicate: {type: query, params: {brew: null}}
    response: {fixture: data/teapot.txt, status: 418}
---
stubs:
  - predicate:
      type: not
      predicate: {type: single, input: host, value_match: {Suffix: example.com}}
    response: {fixture: data/empty.txt, status: 204}
"""


class TestLoadStubs:
    def test_single(self) -> None:
        [s] = _load(_host("example.com"))
        assert s.predicate == SinglePredicate(HostInput(), ExactMatcher("example.com"))
        assert s.predicate(req(SCENARIO_URL)) is True

    def test_ignore_case(self) -> None:
        [s] = _load(
            {
                "type": "single",
                "input": "host",
                "value_match": {"Suffix": ".EXAMPLE.COM", "ignore_case": True},
            }
        )
        assert s.predicate == SinglePredicate(
            HostInput(), SuffixMatcher(".EXAMPLE.COM", ignore_case=True)
        )
        assert s.predicate(req("https://api.example.com/")) is True

    def test_compound(self) -> None:
        [s] = _load({"type": "and", "predicates": [_host("a"), {"type": "not", "predicate": _host("b")}]})
        assert isinstance(s.predicate, And)
        assert isinstance(s.predicate.predicates[1], Not)

    def test_query(self) -> None:
        [s] = _load({"type": "query", "params": {"q": "", "x": "1"}})
        assert s.predicate == QueryParamsPredicate((("q", ""), ("x", "1")))
        assert s.predicate(req(SCENARIO_URL)) is True

    def test_response(self) -> None:
        [s] = _load(_host("a"), {"fixture": "/abs/x.json", "status": 201, "headers": {"X-A": "1"}})
        assert str(s.response.path) == "/abs/x.json"
        assert s.response.status == 201
        assert s.response.headers["x-a"] == "1"

    def test_relative_fixture_resolved(self, tmp_path: Path) -> None:
        [s] = _load(_host("a"), {"fixture": "data/x.json"}, base_dir=tmp_path)
        assert s.response.path == tmp_path / "data" / "x.json"

    def test_absolute_fixture_kept(self, tmp_path: Path) -> None:
        absolute = tmp_path / "elsewhere.json"
        [s] = _load(_host("a"), {"fixture": str(absolute)}, base_dir=tmp_path / "sub")
        assert s.response.path == absolute

    def test_order_preserved(self) -> None:
        data = {
            "stubs": [
                {"predicate": _host(name), "response": {"fixture": f"{name}.json"}}
                for name in ("a", "b", "c")
            ]
        }
        stubs = load_stubs(parse_stubs_config(data))
        assert [s.response.path.name for s in stubs] == ["a.json", "b.json", "c.json"]


class TestLimits:
    def test_too_many_predicates(self) -> None:
        children = [_host("a")] * (MAX_PREDICATES_PER_COMPOUND + 1)
        with pytest.raises(TooManyPredicatesError) as exc_info:
            _load({"type": "or", "predicates": children})
        assert exc_info.value.count == MAX_PREDICATES_PER_COMPOUND + 1

    def test_max_predicates_allowed(self) -> None:
        children = [_host("a")] * MAX_PREDICATES_PER_COMPOUND
        [s] = _load({"type": "or", "predicates": children})
        assert len(s.predicate.predicates) == MAX_PREDICATES_PER_COMPOUND

    def test_pattern_too_long(self) -> None:
        with pytest.raises(PatternTooLongError):
            _load(_host("a" * (MAX_PATTERN_LENGTH + 1)))

    def test_regex_too_long(self) -> None:
        pattern = "a" * (MAX_REGEX_PATTERN_LENGTH + 1)
        with pytest.raises(PatternTooLongError):
            _load({"type": "single", "input": "path", "value_match": {"Regex": pattern}})

    def test_invalid_regex(self) -> None:
        with pytest.raises(InvalidConfigError, match="invalid regex"):
            _load({"type": "single", "input": "path", "value_match": {"Regex": "[oops"}})

    def test_depth_limit(self) -> None:
        predicate = _host("a")
        for _ in range(MAX_DEPTH - 1):
            predicate = {"type": "not", "predicate": predicate}
        _load(predicate)

        with pytest.raises(ConfigParseError, match="depth 33"):
            _load({"type": "not", "predicate": predicate})

    def test_deeply_nested_dict_rejected_while_parsing(self) -> None:
        predicate = _host("a")
        for i in range(2000):
            kind = ("not", "and", "or")[i % 3]
            if kind == "not":
                predicate = {"type": "not", "predicate": predicate}
            else:
                predicate = {"type": kind, "predicates": [predicate]}

        with pytest.raises(ConfigParseError, match="exceeds maximum allowed depth"):
            _load(predicate)

    def test_depth_limit_on_built_config(self) -> None:
        leaf = SinglePredicateConfig(input="host", matcher=BuiltInMatch("Exact", "a"))
        predicate: PredicateConfig = leaf
        for _ in range(MAX_DEPTH):
            predicate = NotPredicateConfig(predicate=predicate)
        config = StubsConfig(stubs=(StubConfig(predicate, ResponseConfig("a.json")),))

        with pytest.raises(MatcherError, match="depth 33"):
            load_stubs(config)

    def test_deeply_nested_built_config_rejected(self) -> None:
        predicate: PredicateConfig = QueryPredicateConfig(params=())
        for _ in range(2000):
            predicate = AndPredicateConfig(predicates=(NotPredicateConfig(predicate),))
        config = StubsConfig(stubs=(StubConfig(predicate, ResponseConfig("a.json")),))

        with pytest.raises(MatcherError, match="exceeds maximum allowed depth"):
            load_stubs(config)

    def test_errors_share_root(self) -> None:
        assert issubclass(InvalidConfigError, MatcherError)
        assert issubclass(TooManyPredicatesError, MatcherError)
        assert issubclass(PatternTooLongError, MatcherError)


class TestLoadStubsFile:
    def test_end_to_end(self, fixture_dir: Path) -> None:
        path = fixture_dir / "stubs.yaml"
        path.write_text(STUBS_YAML, encoding="utf-8")

        stubs = load_stubs_file(path)
        assert len(stubs) == 3
        assert stubs[0].response.path == fixture_dir / "data" / "users.json"

        with requests_mock.Mocker() as m:
            stub_all(m, stubs)

            resp = requests.get("https://api.example.com/users/42")
            assert resp.headers["Content-Type"] == "application/json"
            assert resp.json() == [{"id": 1, "name": "alice"}]

            assert requests.get("https://api.example.com/users/42.json?brew").status_code == 418
            assert requests.get("https://other.test/x").status_code == 204

    def test_empty_documents_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "stubs.yaml"
        path.write_text("---\n---\nstubs: []\n", encoding="utf-8")
        assert load_stubs_file(path) == []

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "stubs.yaml"
        path.write_text("stubs: [\n", encoding="utf-8")
        with pytest.raises(ConfigParseError, match="stubs.yaml"):
            load_stubs_file(path)

    def test_malformed_document(self, tmp_path: Path) -> None:
        path = tmp_path / "stubs.yaml"
        path.write_text("matchers: []\n", encoding="utf-8")
        with pytest.raises(ConfigParseError, match="missing required field 'stubs'"):
            load_stubs_file(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_stubs_file(tmp_path / "nope.yaml")
