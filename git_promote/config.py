"""Configuration management."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import yaml

from . import render
from .models import is_valid_scope

logger = logging.getLogger(__name__)

SCOPE_CONFIG_NAMES = ("cicd.config.yaml", "cicd.config.yml")


@dataclass
class Config:
    """Application defaults."""

    test_branch: str = "test"
    main_branch: str = "main"
    deploy_env: str = "staging"


def get_default_test_branch() -> str:
    """Get the promote-to-test target branch from env or config."""
    return os.getenv("GIT_PROMOTE_TEST_BRANCH") or Config.test_branch


def get_default_main_branch() -> str:
    """Get the promote-to-main target branch from env or config."""
    return os.getenv("GIT_PROMOTE_MAIN_BRANCH") or Config.main_branch


def get_default_deploy_env() -> str:
    return os.getenv("GIT_PROMOTE_DEPLOY_ENV") or Config.deploy_env


def resolve_option(value: str | None, default: str) -> str:
    """Return the trimmed override, falling back to ``default`` when blank."""
    if value and value.strip():
        return value.strip()
    return default


def normalize_scope(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not is_valid_scope(trimmed):
        return None
    return trimmed


def find_scope_config(cwd: Path) -> Path | None:
    for name in SCOPE_CONFIG_NAMES:
        candidate = cwd / name
        if candidate.is_file():
            return candidate
    return None


def load_scopes(cwd: Path) -> list[str] | None:
    """Load the scope pick-list from ``cicd.config.yaml`` in ``cwd``.

    A missing file means no scopes. An unreadable or malformed file logs a
    warning and also means no scopes; it never fails the workflow.
    """

    config_path = find_scope_config(cwd)
    if config_path is None:
        return None
    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.debug("Scope config error: %s", exc)
        render.warning(f"Failed to read cicd config scopes from {config_path}; ignoring.")
        return None
    if not isinstance(data, dict):
        render.warning(f"Failed to read cicd config scopes from {config_path}; ignoring.")
        return None
    raw = data.get("scopes")
    if not isinstance(raw, list):
        return None
    return _unique(normalize_scope(item) for item in raw) or None


def _unique(values: Iterable[str | None]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
