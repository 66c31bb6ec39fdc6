"""Changelog entry formatting and prepending.

Each release adds one entry to the top of the changelog file::

    # 1.3.0 (2024-01-01)
    * Added the thing

followed by the previous contents of the file.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def format_changelog_entry(version: str, changelog: str, today: date | None = None) -> str:
    """Format the changelog block for a release.

    Args:
        version: Version being released
        changelog: Changelog text from the pull request
        today: Release date (defaults to the current UTC date)

    Returns:
        Heading, changelog text and a trailing blank line
    """
    if today is None:
        today = datetime.now(UTC).date()
    return f"# {version} ({today.isoformat()})\n{changelog}\n\n"


def prepend_changelog(path: Path, entry: str) -> None:
    """Prepend ``entry`` to the file at ``path``, creating it if missing."""
    existing = path.read_text(encoding="utf-8") if path.exists() else ""
    path.write_text(entry + existing, encoding="utf-8")
