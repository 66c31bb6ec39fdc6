"""Scope and changelog resolution from pull-request metadata.

A pull request declares its bump scope either with a label or with a
``#scope#`` marker in its description, for example::

    This fixes the parser. #patch#

    ## CHANGELOG
    * Fixed the parser choking on empty input
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from pr_bumper.core.version import Scope
from pr_bumper.exceptions import ChangelogNotFoundError, MultipleScopesError, ScopeNotFoundError

if TYPE_CHECKING:
    from pr_bumper.vcs.models import PullRequest

SCOPE_ALIASES: dict[str, Scope] = {
    "none": Scope.NONE,
    "patch": Scope.PATCH,
    "fix": Scope.PATCH,
    "minor": Scope.MINOR,
    "feature": Scope.MINOR,
    "major": Scope.MAJOR,
    "breaking": Scope.MAJOR,
}

_SCOPE_MARKER = re.compile(r"#(\w+)#")
_CHANGELOG_HEADING = re.compile(r"^#+\s*CHANGELOG\s*$", re.IGNORECASE | re.MULTILINE)


def find_scopes(pr: PullRequest) -> list[Scope]:
    """Return the distinct scopes declared by a PR, in order of appearance.

    Labels are considered before description markers.
    """
    tokens = [label.strip().lower() for label in pr.labels]
    tokens.extend(token.lower() for token in _SCOPE_MARKER.findall(pr.description))

    found: list[Scope] = []
    for token in tokens:
        scope = SCOPE_ALIASES.get(token)
        if scope is not None and scope not in found:
            found.append(scope)
    return found


def get_scope_for_pr(pr: PullRequest, default_scope: Scope | None = None) -> Scope:
    """Determine the bump scope of a pull request.

    Args:
        pr: Pull request to inspect
        default_scope: Scope to use when the PR declares none

    Returns:
        The declared scope, or ``default_scope``

    Raises:
        MultipleScopesError: If the PR declares more than one scope
        ScopeNotFoundError: If the PR declares none and there is no default
    """
    scopes = find_scopes(pr)

    if len(scopes) > 1:
        names = ", ".join(str(scope) for scope in scopes)
        raise MultipleScopesError(f"Too many version-bump scopes found for PR #{pr.number}: {names}")

    if scopes:
        return scopes[0]

    if default_scope is not None:
        return default_scope

    raise ScopeNotFoundError(f"No version-bump scope found for PR #{pr.number}")


def get_changelog_for_pr(pr: PullRequest) -> str:
    """Return the text under the ``## CHANGELOG`` heading of a PR description.

    Raises:
        ChangelogNotFoundError: If the description has no such heading
    """
    match = _CHANGELOG_HEADING.search(pr.description)
    if not match:
        raise ChangelogNotFoundError(f"No CHANGELOG section found in description of PR #{pr.number}")

    return pr.description[match.end() :].strip()
