from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from app.domain.models import RepositoryConfig

logger = logging.getLogger(__name__)

REPO_ROOT_ENV_VAR = "OPM_REPO_ROOT"

# Resolve project root (not the Python package root)
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_DEFAULT_REPO_ROOT = _PROJECT_ROOT / "repo"


def get_repo_root() -> Path:
    """
    Determine the package store root.

    Priority:
    1. Environment variable OPM_REPO_ROOT
    2. '<project root>/repo'
    """
    env_path = os.environ.get(REPO_ROOT_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return _DEFAULT_REPO_ROOT


def load_repository_config(repo_root: Optional[Path] = None) -> RepositoryConfig:
    """
    Build the repository configuration, applying overrides from
    <repo_root>/repository.json when present.

    The store is read-only, so the file is never written back. A broken
    file falls back to the defaults.
    """
    repo_root = repo_root or get_repo_root()
    path = repo_root / "repository.json"

    raw: dict = {}
    if path.is_file():
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable {path}: {e}")
            raw = {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring {path}: expected a JSON object")
            raw = {}

    raw["repo_root"] = repo_root
    try:
        return RepositoryConfig(**raw)
    except ValidationError as e:
        logger.warning(f"Invalid settings in {path}, using defaults: {e}")
        return RepositoryConfig(repo_root=repo_root)
