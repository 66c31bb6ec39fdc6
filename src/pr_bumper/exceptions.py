"""Exception hierarchy for pr-bumper.

Every error raised by the library derives from PrBumperError so the CLI
can report it uniformly. A cancelled bump is not an error and is modelled
as an outcome instead (see pr_bumper.core.state).
"""

from __future__ import annotations

#: Where users are sent when coverage information is missing.
COVERAGE_DOCS_LINK = "https://github.com/ciena-blueplanet/pr-bumper#code-coverage"


class PrBumperError(Exception):
    """Base class for all pr-bumper errors."""


# Configuration


class ConfigError(PrBumperError):
    """Configuration could not be loaded."""


class ConfigNotFoundError(ConfigError):
    """No manifest file was found."""


class ConfigValidationError(ConfigError):
    """Configuration values failed validation."""


# Project manifest


class ManifestError(PrBumperError):
    """The project manifest could not be read or written."""


class VersionNotFoundError(ManifestError):
    """The manifest has no usable version field."""


# Scope and changelog resolution


class InvalidScopeError(PrBumperError):
    """An unrecognized scope value reached version bumping."""

    def __init__(self, scope: object) -> None:
        self.scope = scope
        super().__init__(f"Invalid scope [{scope}]")


class ScopeError(PrBumperError):
    """The bump scope of a pull request could not be determined."""


class ScopeNotFoundError(ScopeError):
    """No scope marker was found and no default is configured."""


class MultipleScopesError(ScopeError):
    """More than one distinct scope marker was found."""


class PrNotFoundError(ScopeError):
    """The merged pull request could not be identified from git history."""


class ChangelogNotFoundError(PrBumperError):
    """The pull request description has no changelog section."""


# Coverage


class CoverageError(PrBumperError):
    """Base class for coverage gate failures."""


class MissingCoverageInfoError(CoverageError):
    """Baseline or current coverage information is unavailable."""

    def __init__(self, which: str) -> None:
        self.which = which
        super().__init__(
            f"No {which} coverage info found!\nSee {COVERAGE_DOCS_LINK} for configuration info."
        )


class CoverageDroppedError(CoverageError):
    """Current coverage is below the recorded baseline."""

    def __init__(self, message: str, *, current: float, baseline: float) -> None:
        self.current = current
        self.baseline = baseline
        super().__init__(message)


# External collaborators


class CommandError(PrBumperError):
    """A subprocess exited with a non-zero status."""

    def __init__(self, message: str, *, stderr: str | None = None) -> None:
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        base = super().__str__()
        if self.stderr:
            return f"{base}\n{self.stderr.strip()}"
        return base


class VcsError(PrBumperError):
    """A request to the version-control service failed."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
