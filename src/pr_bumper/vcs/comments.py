"""Best-effort pull-request comments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, TypeVar

from pr_bumper.exceptions import PrBumperError

if TYPE_CHECKING:
    from collections.abc import Callable

    from pr_bumper.config.models import PrBumperConfig
    from pr_bumper.core.pipeline import VcsClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


def maybe_post_comment(
    config: PrBumperConfig,
    vcs: VcsClient,
    message: str,
    is_error: bool = False,
) -> bool:
    """Post ``message`` on the current PR, if this is a PR build with comments on.

    A failure to post is logged and never raised, so it cannot mask
    whatever the caller is reporting.

    Returns:
        True if the comment was posted
    """
    if not (config.is_pr and config.comments and config.pr_number):
        return False

    body = f"## ERROR\n{message}" if is_error else message

    try:
        vcs.post_comment(config.pr_number, body)
    except Exception as e:
        logger.warning("Could not post comment on PR #%s: %s", config.pr_number, e)
        return False

    return True


def maybe_post_comment_on_error(
    config: PrBumperConfig,
    vcs: VcsClient,
    func: Callable[[], T],
) -> T:
    """Call ``func``; if it raises a pr-bumper error, comment on the PR and re-raise."""
    try:
        return func()
    except PrBumperError as e:
        maybe_post_comment(config, vcs, str(e), is_error=True)
        raise
