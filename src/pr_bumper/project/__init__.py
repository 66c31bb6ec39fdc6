"""Project manifest handling."""

from __future__ import annotations

from pr_bumper.project.manifest import (
    get_manifest_version,
    update_manifest_coverage,
    update_manifest_version,
)

__all__ = ["get_manifest_version", "update_manifest_coverage", "update_manifest_version"]
