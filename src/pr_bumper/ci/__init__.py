"""CI platform integration."""

from __future__ import annotations

from pr_bumper.ci.git import GitCi, run_command

__all__ = ["GitCi", "run_command"]
