"""Semantic version parsing and bumping."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from pr_bumper.exceptions import InvalidScopeError, VersionNotFoundError

_SEMVER = re.compile(
    r"^v?(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>[0-9A-Za-z.-]+))?(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


class Scope(StrEnum):
    """Semantic-version bump class of a change."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    @classmethod
    def parse(cls, value: object) -> Scope:
        """Coerce ``value`` into a Scope.

        Raises:
            InvalidScopeError: If value is not a recognized scope
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidScopeError(value) from None


@dataclass(frozen=True, order=True)
class Version:
    """A semantic version. Pre-release and build metadata are dropped on bump."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a version string such as ``1.2.3`` or ``1.2.3-beta.1``.

        Raises:
            VersionNotFoundError: If value is not a semantic version
        """
        match = _SEMVER.match(value.strip())
        if not match:
            raise VersionNotFoundError(f"Not a semantic version: {value!r}")
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            prerelease=match["prerelease"],
            build=match["build"],
        )

    def bump(self, scope: Scope | str) -> Version:
        """Return the version after applying ``scope``.

        Raises:
            InvalidScopeError: If scope is not a recognized value
        """
        scope = Scope.parse(scope)
        if scope is Scope.MAJOR:
            return Version(self.major + 1, 0, 0)
        if scope is Scope.MINOR:
            return Version(self.major, self.minor + 1, 0)
        if scope is Scope.PATCH:
            return Version(self.major, self.minor, self.patch + 1)
        return self

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def bump_version(version: str, scope: Scope | str) -> str:
    """Apply ``scope`` to a version string.

    >>> bump_version("1.2.3", "minor")
    '1.3.0'
    """
    return str(Version.parse(version).bump(scope))
