"""Tests for the dependency compliance report."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from pr_bumper.dependencies import REPORT_FILENAME, DependencyReporter, collect_dependencies

if TYPE_CHECKING:
    from pathlib import Path

    from pr_bumper.config.models import PrBumperConfig


def _install(node_modules: Path, name: str, manifest: dict | str) -> None:
    package_dir = node_modules / name
    package_dir.mkdir(parents=True)
    content = manifest if isinstance(manifest, str) else json.dumps(manifest)
    (package_dir / "package.json").write_text(content)


@pytest.fixture
def installed(project: Path) -> Path:
    node_modules = project / "node_modules"
    _install(
        node_modules,
        "lodash",
        {
            "name": "lodash",
            "version": "4.17.21",
            "license": "MIT",
            "repository": {"type": "git", "url": "git+https://github.com/lodash/lodash.git"},
        },
    )
    _install(
        node_modules,
        "@babel/core",
        {"name": "@babel/core", "version": "7.24.0", "license": {"type": "MIT"}},
    )
    _install(
        node_modules,
        "old-pkg",
        {
            "name": "old-pkg",
            "version": "0.1.0",
            "licenses": [{"type": "MIT"}, {"type": "Apache-2.0"}],
            "repository": "github:someone/old-pkg",
        },
    )
    _install(node_modules, "broken", "{not json")
    (node_modules / ".bin").mkdir()
    return project


class TestCollectDependencies:
    """Tests for collect_dependencies()."""

    def test_collects_sorted_metadata(self, installed: Path):
        assert collect_dependencies(installed) == [
            {"name": "@babel/core", "version": "7.24.0", "license": "MIT", "repository": None},
            {
                "name": "lodash",
                "version": "4.17.21",
                "license": "MIT",
                "repository": "git+https://github.com/lodash/lodash.git",
            },
            {
                "name": "old-pkg",
                "version": "0.1.0",
                "license": "MIT OR Apache-2.0",
                "repository": "github:someone/old-pkg",
            },
        ]

    def test_unknown_license(self, project: Path):
        _install(project / "node_modules", "mystery", {"name": "mystery", "version": "1.0.0"})

        assert collect_dependencies(project)[0]["license"] == "UNKNOWN"

    def test_no_node_modules(self, project: Path, caplog: pytest.LogCaptureFixture):
        assert collect_dependencies(project) == []
        assert any("No node_modules" in message for message in caplog.messages)


class TestDependencyReporter:
    """Tests for DependencyReporter.run()."""

    def test_writes_report(self, installed: Path, config: PrBumperConfig):
        output = installed / "reports" / "deps"

        report = DependencyReporter().run(installed, output, config)

        assert report == output / REPORT_FILENAME
        data = json.loads(report.read_text())
        assert [dep["name"] for dep in data] == ["@babel/core", "lodash", "old-pkg"]
        assert report.read_text().endswith("]\n")
