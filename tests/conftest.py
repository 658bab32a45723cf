"""Pytest fixtures for Roster tests.

This module provides fixtures for test configuration, a scripted in-process
API, and a fake HTTP backend running on a local port.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from roster.core.models import Part, Record
from roster.core.sync_controller import SyncController
from tests.fake_backend import RecordStore, run_fake_backend
from tests.helpers import ANN, ScriptedApi


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create temporary config directory for tests.

    Args:
        tmp_path: pytest temporary directory fixture

    Returns:
        Path to temporary config directory.
    """
    config_dir = tmp_path / "roster_test"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def scripted_api() -> ScriptedApi:
    """Scripted API holding Ann (web) and two server members."""
    return ScriptedApi([
        ANN,
        Record(id=2, name="Cy", age=27, part=Part.SERVER),
        Record(id=3, name="Di", age=31, part=Part.SERVER),
    ])


@pytest.fixture
def controller(scripted_api: ScriptedApi) -> SyncController:
    """Controller on the web part over the scripted API."""
    return SyncController(scripted_api, part=Part.WEB)


@pytest.fixture
def backend_store() -> RecordStore:
    """Fake backend storage seeded with Ann in the web part."""
    store = RecordStore()
    store.create("Ann", 22, "web")
    return store


@pytest.fixture
def backend_url(backend_store: RecordStore) -> Generator[str, None, None]:
    """Base URL of a running fake backend."""
    with run_fake_backend(backend_store) as url:
        yield url
