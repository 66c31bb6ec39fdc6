"""Version-control service integration."""

from __future__ import annotations

from pr_bumper.vcs.comments import maybe_post_comment, maybe_post_comment_on_error
from pr_bumper.vcs.github import GitHub
from pr_bumper.vcs.models import PullRequest

__all__ = ["GitHub", "PullRequest", "maybe_post_comment", "maybe_post_comment_on_error"]
