"""Project manifest (``package.json``) manipulation.

The manifest holds the released version and, under the ``pr-bumper``
section, the recorded baseline coverage. It is rewritten with two-space
indentation and its original key order preserved.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from pr_bumper.config.loader import CONFIG_SECTION, load_manifest
from pr_bumper.exceptions import ManifestError, VersionNotFoundError

if TYPE_CHECKING:
    from pathlib import Path


def write_manifest(path: Path, data: dict[str, Any]) -> None:
    """Serialize ``data`` back into the manifest at ``path``."""
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def get_manifest_version(path: Path) -> str:
    """Get the version from a manifest.

    Raises:
        VersionNotFoundError: If version cannot be found
    """
    version = load_manifest(path).get("version")
    if not isinstance(version, str) or not version:
        raise VersionNotFoundError(f"Could not find version in {path}.")
    return version


def update_manifest_version(path: Path, new_version: str) -> Path:
    """Set the manifest's version field.

    Returns:
        Path to the updated manifest

    Raises:
        VersionNotFoundError: If the manifest has no version to update
    """
    data = load_manifest(path)
    if "version" not in data:
        raise VersionNotFoundError(f"Could not find version to update in {path}.")

    data["version"] = new_version
    write_manifest(path, data)
    return path


def update_manifest_coverage(path: Path, coverage: float) -> Path:
    """Record ``coverage`` as the manifest's baseline coverage.

    Raises:
        ManifestError: If the pr-bumper section is not a JSON object
    """
    data = load_manifest(path)
    section = data.setdefault(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ManifestError(f'"{CONFIG_SECTION}" in {path} must be an object')

    section["coverage"] = coverage
    write_manifest(path, data)
    return path
