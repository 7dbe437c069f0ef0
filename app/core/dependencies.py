from typing import Optional

from fastapi import Depends

from app.data.repository import load_repository_config
from app.domain.entities import Repository
from app.domain.models import RepositoryConfig
from app.storage.file_store import FileSystemPackageStore
from app.storage.package_store import PackageStore

_config: Optional[RepositoryConfig] = None
_store: Optional[PackageStore] = None


def get_config() -> RepositoryConfig:
    global _config
    if _config is None:
        _config = load_repository_config()
    return _config


def get_store() -> PackageStore:
    global _store
    if _store is None:
        _store = FileSystemPackageStore()
    return _store


def get_repository(
    config: RepositoryConfig = Depends(get_config),
    store: PackageStore = Depends(get_store),
) -> Repository:
    return Repository(store, config)
