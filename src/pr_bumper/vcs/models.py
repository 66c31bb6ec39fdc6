"""Data types exchanged with the version-control service."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PullRequest:
    """The parts of a pull request pr-bumper cares about."""

    number: str
    description: str = ""
    labels: tuple[str, ...] = field(default_factory=tuple)
