"""Configuration models for pr-bumper.

Options are read from the ``pr-bumper`` section of the project manifest
and from the CI environment. Keys are accepted in camelCase (as they
appear in ``package.json``) or by their Python field names.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from pr_bumper.core.version import Scope


class _ConfigModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


def _number_to_str(value: object) -> object:
    # CI platforms and JSON manifests hand out PR and build numbers as integers.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class GitUserConfig(_ConfigModel):
    """Identity used for commits created by pr-bumper."""

    name: str = "pr-bumper"
    email: str = "pr-bumper@users.noreply.github.com"


class CiConfig(_ConfigModel):
    """Build metadata provided by the CI platform."""

    provider: str | None = None
    build_number: str | None = None
    branch: str | None = None
    git_user: GitUserConfig = Field(default_factory=GitUserConfig)

    coerce_build_number = field_validator("build_number", mode="before")(_number_to_str)


class VcsConfig(_ConfigModel):
    """Version-control service (GitHub) settings.

    The access token itself is never stored; only the name of the
    environment variable holding it.
    """

    repository: str | None = None
    api_url: str = "https://api.github.com"
    token_env: str = "GITHUB_TOKEN"
    timeout: float = 30.0


class DependenciesOutputConfig(_ConfigModel):
    """Where the dependency compliance report is written."""

    directory: Path | None = None

    @field_validator("directory", mode="before")
    @classmethod
    def empty_means_unset(cls, value: object) -> object:
        # Path("") would become ".", i.e. the project root.
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return value


class DependenciesConfig(_ConfigModel):
    """Dependency compliance report settings."""

    output: DependenciesOutputConfig = Field(default_factory=DependenciesOutputConfig)


class PrBumperConfig(_ConfigModel):
    """Root configuration, immutable for the duration of a run."""

    manifest_file: Path = Path("package.json")
    changelog_file: Path = Path("CHANGELOG.md")
    prepend_changelog: bool = False
    dependency_snapshot_file: str | None = None
    dependencies: DependenciesConfig = Field(default_factory=DependenciesConfig)
    baseline_coverage: float | None = None
    coverage_summary_file: Path = Path("coverage/coverage-summary.json")
    default_scope: Scope | None = None
    comments: bool = True
    is_pr: bool = False
    pr_number: str | None = None
    ci: CiConfig = Field(default_factory=CiConfig)
    vcs: VcsConfig = Field(default_factory=VcsConfig)

    coerce_pr_number = field_validator("pr_number", mode="before")(_number_to_str)

    @field_validator("baseline_coverage", mode="before")
    @classmethod
    def drop_non_numeric_coverage(cls, value: object) -> object:
        # A baseline that is not a number is treated as no baseline at all.
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            try:
                return float(value)
            except ValueError:
                return None
        return value

    @property
    def build_number(self) -> str:
        return self.ci.build_number or "unknown"

    @property
    def dependencies_output_directory(self) -> Path | None:
        return self.dependencies.output.directory
