from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import get_config
from app.data.repository import load_repository_config
from app.domain.entities import Repository
from app.domain.models import RepositoryConfig
from app.main import app
from app.storage.file_store import FileSystemPackageStore


def write_metadata(packages_dir: Path, identifier: str, text: str) -> Path:
    path = packages_dir / f"{identifier}.opm"
    path.write_text(text, encoding="utf-8")
    return path


def write_archive(data_dir: Path, filename: str, size: int) -> Path:
    path = data_dir / filename
    path.write_bytes(b"\0" * size)
    return path


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    (root / "packages").mkdir(parents=True)
    (root / "packagedata").mkdir()
    return root


@pytest.fixture
def config(repo_root: Path) -> RepositoryConfig:
    return load_repository_config(repo_root)


@pytest.fixture
def repository(config: RepositoryConfig) -> Repository:
    return Repository(FileSystemPackageStore(), config)


@pytest.fixture
def client(config: RepositoryConfig) -> Iterator[TestClient]:
    app.dependency_overrides[get_config] = lambda: config
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
