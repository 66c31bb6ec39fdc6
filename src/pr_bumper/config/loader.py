"""Configuration loading.

Configuration is assembled from two sources, later ones winning:

1. The ``pr-bumper`` section of the project manifest (``package.json``).
   Its ``coverage`` key holds the recorded baseline coverage.
2. Build metadata exported by the CI platform (Travis CI or GitHub Actions).
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from pr_bumper.config.models import PrBumperConfig
from pr_bumper.exceptions import (
    ConfigNotFoundError,
    ConfigValidationError,
    ManifestError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

MANIFEST_FILENAME = "package.json"
CONFIG_SECTION = "pr-bumper"

_GITHUB_PR_REF = re.compile(r"^refs/pull/(\d+)/")


def find_manifest(start: Path | None = None, filename: str = MANIFEST_FILENAME) -> Path:
    """Find the project manifest by walking up from ``start``.

    Args:
        start: Directory to start searching from (defaults to cwd)
        filename: Manifest file name

    Returns:
        Path to the manifest

    Raises:
        ConfigNotFoundError: If no manifest exists in start or its parents
    """
    current = (start or Path.cwd()).resolve()

    for directory in (current, *current.parents):
        candidate = directory / filename
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"Could not find {filename} in {current} or any parent directory")


def load_manifest(path: Path) -> dict[str, Any]:
    """Load and parse a JSON manifest.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ManifestError: If the file is not a JSON object
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Manifest not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Expected a JSON object in {path}")

    return data


def extract_pr_bumper_config(manifest: Mapping[str, Any]) -> dict[str, Any]:
    """Extract pr-bumper options from a parsed manifest.

    The section's ``coverage`` key is exposed as ``baselineCoverage``.

    Returns:
        Options dict (empty when the manifest has no pr-bumper section)
    """
    section = dict(manifest.get(CONFIG_SECTION) or {})
    if "coverage" in section:
        section["baselineCoverage"] = section.pop("coverage")
    return section


def read_ci_environment(env: Mapping[str, str]) -> dict[str, Any]:
    """Translate CI environment variables into configuration options.

    Args:
        env: Environment mapping (usually ``os.environ``)

    Returns:
        Options dict, empty when no supported CI platform is detected
    """
    if env.get("GITHUB_ACTIONS") == "true":
        return _read_github_actions(env)
    if env.get("TRAVIS") == "true":
        return _read_travis(env)
    return {}


def _read_travis(env: Mapping[str, str]) -> dict[str, Any]:
    pr = env.get("TRAVIS_PULL_REQUEST", "false")
    is_pr = pr != "false"
    return _drop_none(
        {
            "isPr": is_pr,
            "prNumber": pr if is_pr else None,
            "ci": _drop_none(
                {
                    "provider": "travis",
                    "buildNumber": env.get("TRAVIS_BUILD_NUMBER"),
                    "branch": env.get("TRAVIS_BRANCH"),
                }
            ),
            "vcs": _drop_none({"repository": env.get("TRAVIS_REPO_SLUG")}),
        }
    )


def _read_github_actions(env: Mapping[str, str]) -> dict[str, Any]:
    is_pr = env.get("GITHUB_EVENT_NAME") in ("pull_request", "pull_request_target")
    pr_number = None
    if is_pr:
        match = _GITHUB_PR_REF.match(env.get("GITHUB_REF", ""))
        pr_number = match.group(1) if match else None

    return _drop_none(
        {
            "isPr": is_pr,
            "prNumber": pr_number,
            "ci": _drop_none(
                {
                    "provider": "github",
                    "buildNumber": env.get("GITHUB_RUN_NUMBER"),
                    "branch": env.get("GITHUB_BASE_REF") if is_pr else env.get("GITHUB_REF_NAME"),
                }
            ),
            "vcs": _drop_none({"repository": env.get("GITHUB_REPOSITORY")}),
        }
    )


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> PrBumperConfig:
    """Load pr-bumper configuration for a project.

    Args:
        path: Project directory (defaults to cwd)
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If no manifest is found
        ConfigValidationError: If options fail validation
    """
    manifest_path = find_manifest(path)
    options = extract_pr_bumper_config(load_manifest(manifest_path))
    options.setdefault("manifestFile", manifest_path.name)
    options = _deep_merge(options, read_ci_environment(os.environ if env is None else env))

    try:
        return PrBumperConfig.model_validate(options)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid pr-bumper configuration:\n{e}") from e
