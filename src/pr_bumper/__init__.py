"""pr-bumper: semantic-version release automation for CI.

Pull-request builds report the version-bump scope a change warrants;
merge builds bump the version, update the changelog, commit, tag and push.
"""

from __future__ import annotations

__version__ = "0.1.0"

#: Name used to tag the commits this tool creates.
TOOL_NAME = "pr-bumper"

__all__ = ["TOOL_NAME", "__version__"]
