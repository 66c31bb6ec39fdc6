"""Release state and pipeline outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field

from pr_bumper.core.version import Scope


@dataclass
class ReleaseState:
    """Accumulating record threaded through the release pipeline.

    Attributes:
        scope: Bump scope of the merged or open pull request
        version: New version, present only when a release is made
        changelog: Changelog text from the pull request
        modified_files: Paths changed on disk, in the order stages changed them
    """

    scope: Scope
    version: str | None = None
    changelog: str = ""
    modified_files: list[str] = field(default_factory=list)

    @property
    def is_release(self) -> bool:
        return self.scope != Scope.NONE

    def add_modified_file(self, path: str) -> None:
        """Record a changed path; paths already recorded are ignored."""
        if path not in self.modified_files:
            self.modified_files.append(path)


@dataclass(frozen=True)
class Succeeded:
    """The flow ran to completion."""

    state: ReleaseState
    ok = True


@dataclass(frozen=True)
class Skipped:
    """The flow does not apply to this build."""

    reason: str
    ok = True


@dataclass(frozen=True)
class Cancelled:
    """The flow was stopped before any stage ran."""

    reason: str
    ok = True


@dataclass(frozen=True)
class Failed:
    """A stage raised; the remaining stages were not run."""

    error: Exception
    stage: str
    ok = False


Outcome = Succeeded | Skipped | Cancelled | Failed
