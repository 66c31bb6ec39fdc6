"""Dependency compliance report.

Lists every installed npm package with its version, license and
repository so releases can be audited for license compliance.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from pr_bumper.config.models import PrBumperConfig

logger = logging.getLogger(__name__)

REPORT_FILENAME = "dependencies.json"


def _license_of(package: dict[str, Any]) -> str:
    license_ = package.get("license")
    if isinstance(license_, dict):
        return license_.get("type") or "UNKNOWN"
    if isinstance(license_, str):
        return license_

    # Deprecated "licenses" array form.
    licenses = package.get("licenses")
    if isinstance(licenses, list) and licenses:
        return " OR ".join(
            item.get("type", "UNKNOWN") if isinstance(item, dict) else str(item) for item in licenses
        )
    return "UNKNOWN"


def _repository_of(package: dict[str, Any]) -> str | None:
    repository = package.get("repository")
    if isinstance(repository, dict):
        return repository.get("url")
    return repository


def _iter_package_manifests(node_modules: Path) -> Iterator[Path]:
    for entry in sorted(node_modules.iterdir()):
        if entry.name.startswith("."):
            continue
        if entry.name.startswith("@") and entry.is_dir():
            yield from (scoped / "package.json" for scoped in sorted(entry.iterdir()))
        else:
            yield entry / "package.json"


def collect_dependencies(cwd: Path) -> list[dict[str, Any]]:
    """Collect metadata of the packages installed under ``cwd/node_modules``."""
    node_modules = cwd / "node_modules"
    if not node_modules.is_dir():
        logger.warning("No node_modules directory in %s", cwd)
        return []

    dependencies = []
    for manifest in _iter_package_manifests(node_modules):
        if not manifest.is_file():
            continue
        try:
            package = json.loads(manifest.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Skipping unreadable %s", manifest)
            continue

        dependencies.append(
            {
                "name": package.get("name", manifest.parent.name),
                "version": package.get("version"),
                "license": _license_of(package),
                "repository": _repository_of(package),
            }
        )

    return sorted(dependencies, key=lambda dep: dep["name"])


class DependencyReporter:
    """Writes the dependency compliance report."""

    def run(self, cwd: Path, output_path: Path, config: PrBumperConfig) -> Path:
        """Generate the report for the project at ``cwd`` into ``output_path``.

        Returns:
            Path of the written report
        """
        output_path.mkdir(parents=True, exist_ok=True)
        report = output_path / REPORT_FILENAME

        dependencies = collect_dependencies(cwd)
        report.write_text(json.dumps(dependencies, indent=2) + "\n", encoding="utf-8")
        logger.info("Wrote %d dependencies to %s", len(dependencies), report)
        return report
