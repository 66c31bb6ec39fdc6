"""GitHub client.

Only the handful of REST endpoints pr-bumper needs are wrapped: reading a
pull request and commenting on it. The access token is read from the
environment variable named in the configuration.
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Any

import httpx

from pr_bumper.exceptions import VcsError
from pr_bumper.vcs.models import PullRequest

if TYPE_CHECKING:
    from pr_bumper.config.models import PrBumperConfig

logger = logging.getLogger(__name__)

_PUBLIC_API_HOST = "api.github.com"


class GitHub:
    """Client for the GitHub REST API."""

    def __init__(
        self,
        config: PrBumperConfig,
        *,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.repository = config.vcs.repository
        self._token = token if token is not None else os.environ.get(config.vcs.token_env)

        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        self._client = httpx.Client(
            base_url=config.vcs.api_url,
            headers=headers,
            timeout=config.vcs.timeout,
            transport=transport,
        )

    def __enter__(self) -> GitHub:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    @property
    def push_url(self) -> str | None:
        """Token-authenticated remote URL, or None to push to ``origin``."""
        if not self._token or not self.repository:
            return None

        host = httpx.URL(self.config.vcs.api_url).host
        if host == _PUBLIC_API_HOST:
            host = "github.com"
        return f"https://x-access-token:{self._token}@{host}/{self.repository}.git"

    def _repo_path(self) -> str:
        if not self.repository:
            raise VcsError("No GitHub repository configured (expected vcs.repository as owner/name)")
        return f"/repos/{self.repository}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise VcsError(
                f"GitHub API {method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise VcsError(f"GitHub API {method} {path} failed: {e}") from e

        return response.json() if response.content else None

    def get_pr(self, number: str) -> PullRequest:
        """Fetch a pull request by number."""
        data = self._request("GET", f"{self._repo_path()}/pulls/{number}")

        return PullRequest(
            number=str(data["number"]),
            description=data.get("body") or "",
            labels=tuple(label["name"] for label in data.get("labels") or []),
        )

    def post_comment(self, number: str, body: str) -> None:
        """Add a comment to a pull request."""
        self._request("POST", f"{self._repo_path()}/issues/{number}/comments", json={"body": body})
        logger.debug("Posted comment on PR #%s", number)
