"""The stages of the merge-build release pipeline.

Each stage is a ``Stage`` pairing a skip predicate with an action.
``BUMP_STAGES`` lists them in the order they must run: commit follows
every stage that can modify files, tag follows commit, push runs last.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pr_bumper import TOOL_NAME
from pr_bumper.core.changelog import format_changelog_entry, prepend_changelog
from pr_bumper.core.coverage import NO_COVERAGE
from pr_bumper.core.pipeline import Stage
from pr_bumper.core.version import Scope, bump_version
from pr_bumper.exceptions import MissingCoverageInfoError
from pr_bumper.project.manifest import (
    get_manifest_version,
    update_manifest_coverage,
    update_manifest_version,
)

if TYPE_CHECKING:
    from pr_bumper.config.models import PrBumperConfig
    from pr_bumper.core.pipeline import StageContext
    from pr_bumper.core.state import ReleaseState

#: Prefix of every commit subject this tool writes.
COMMIT_PREFIX = f"[{TOOL_NAME}]"

VERSION_BUMP_SUBJECT = f"{COMMIT_PREFIX} Automated version bump"
COVERAGE_UPDATE_SUBJECT = f"{COMMIT_PREFIX} Automated code coverage update"

#: Lock artifact written by ``npm shrinkwrap``.
SHRINKWRAP_FILE = "npm-shrinkwrap.json"


# Version


def _bump_version_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if state.scope == Scope.NONE:
        return 'Skipping version bump because of "none" scope.'
    return None


def _bump_version(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    scope = Scope.parse(state.scope)
    manifest = ctx.resolve(ctx.config.manifest_file)

    state.version = bump_version(get_manifest_version(manifest), scope)
    update_manifest_version(manifest, state.version)
    state.add_modified_file(str(ctx.config.manifest_file))
    return state


# Changelog


def _changelog_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if not config.prepend_changelog:
        return "Skipping prepending changelog because of config option."
    if state.scope == Scope.NONE:
        return 'Skipping prepending changelog because of "none" scope.'
    return None


def _prepend_changelog(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    entry = format_changelog_entry(state.version, state.changelog)
    prepend_changelog(ctx.resolve(ctx.config.changelog_file), entry)
    state.add_modified_file(str(ctx.config.changelog_file))
    return state


# Dependencies


def _snapshot_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if not config.dependency_snapshot_file:
        return "Skipping generating dependency snapshot because of config option."
    if state.scope == Scope.NONE:
        return 'Skipping generating dependency snapshot because of "none" scope.'
    return None


def _generate_dependency_snapshot(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    target = ctx.config.dependency_snapshot_file

    # Extraneous packages make shrinkwrap fail, so prune first.
    ctx.runner(["npm", "prune"], cwd=ctx.cwd)
    ctx.runner(["npm", "shrinkwrap", "--dev"], cwd=ctx.cwd)
    ctx.resolve(SHRINKWRAP_FILE).replace(ctx.resolve(target))

    state.add_modified_file(target)
    return state


def _compliance_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if config.dependencies_output_directory is None:
        return "Skipping generating dependency compliance report because of config option."
    if state.scope == Scope.NONE:
        return 'Skipping generating dependency compliance report because of "none" scope.'
    return None


def _generate_compliance_report(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    directory = ctx.config.dependencies_output_directory
    ctx.reporter.run(ctx.cwd, ctx.resolve(directory), ctx.config)
    state.add_modified_file(str(directory))
    return state


# Coverage


def _coverage_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if config.baseline_coverage is None:
        return "Skipping updating baseline code coverage because no valid coverage found."
    return None


def _update_baseline_coverage(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    current = ctx.coverage.get_current_coverage()
    if current == NO_COVERAGE:
        raise MissingCoverageInfoError("current")

    update_manifest_coverage(ctx.resolve(ctx.config.manifest_file), current)
    state.add_modified_file(str(ctx.config.manifest_file))
    return state


# Git


def _nothing_changed_skip(message: str):
    def skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
        return None if state.modified_files else message

    return skip


def _commit_changes(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    subject = VERSION_BUMP_SUBJECT if state.is_release else COVERAGE_UPDATE_SUBJECT

    ctx.ci.setup_git_env()
    ctx.ci.add(list(state.modified_files))
    ctx.ci.commit(subject, f"From CI build {ctx.config.build_number}")
    return state


def _tag_skip(config: PrBumperConfig, state: ReleaseState) -> str | None:
    if state.scope == Scope.NONE:
        return 'Skipping tagging because of "none" scope.'
    return None


def _create_tag(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    ctx.ci.tag(f"v{state.version}", f"Generated tag from CI build {ctx.config.build_number}")
    return state


def _push_changes(ctx: StageContext, state: ReleaseState) -> ReleaseState:
    ctx.ci.push(ctx.vcs)
    return state


BUMP_VERSION = Stage("bump-version", _bump_version_skip, _bump_version)
PREPEND_CHANGELOG = Stage("prepend-changelog", _changelog_skip, _prepend_changelog)
DEPENDENCY_SNAPSHOT = Stage("dependency-snapshot", _snapshot_skip, _generate_dependency_snapshot)
UPDATE_BASELINE_COVERAGE = Stage(
    "update-baseline-coverage", _coverage_skip, _update_baseline_coverage
)
COMMIT_CHANGES = Stage(
    "commit",
    _nothing_changed_skip("Skipping commit because no files were changed."),
    _commit_changes,
)
CREATE_TAG = Stage("tag", _tag_skip, _create_tag)
COMPLIANCE_REPORT = Stage("compliance-report", _compliance_skip, _generate_compliance_report)
PUSH_CHANGES = Stage(
    "push",
    _nothing_changed_skip("Skipping push because nothing changed."),
    _push_changes,
)

BUMP_STAGES: tuple[Stage, ...] = (
    BUMP_VERSION,
    PREPEND_CHANGELOG,
    DEPENDENCY_SNAPSHOT,
    UPDATE_BASELINE_COVERAGE,
    COMMIT_CHANGES,
    CREATE_TAG,
    COMPLIANCE_REPORT,
    PUSH_CHANGES,
)
