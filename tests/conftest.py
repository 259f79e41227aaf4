"""Shared fixtures for urlstub tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import requests_mock

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def fixture_dir(tmp_path: Path) -> Path:
    """A directory holding a few fixture files under ``data/``."""
    data = tmp_path / "data"
    data.mkdir()
    (data / "users.json").write_bytes(b'[{"id": 1, "name": "alice"}]')
    (data / "empty.txt").write_bytes(b"")
    (data / "teapot.txt").write_text("short and stout", encoding="utf-8")
    return tmp_path


@pytest.fixture
def mocker():
    with requests_mock.Mocker() as m:
        yield m
