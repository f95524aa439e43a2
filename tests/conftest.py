"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docs_versions.config import DocsConfig

INTRO = """\
---
slug: /
sidebar_position: 1
---
# Quick Start
"""

RESOURCES = "# Resources\n\nNo front matter here.\n"

SIDEBARS = {
    "tutorialSidebar": [
        {"type": "doc", "id": "intro", "label": "Quick Start"},
        {"type": "doc", "id": "resources", "label": "Resources"},
    ]
}


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Create a minimal docs site with two publishable pages."""
    (tmp_path / "intro.md").write_text(INTRO)
    (tmp_path / "resources.md").write_text(RESOURCES)
    (tmp_path / "README.md").write_text("# Docs site\n")
    (tmp_path / "sidebars.json").write_text(json.dumps(SIDEBARS, indent=2))
    return tmp_path


@pytest.fixture
def config(site: Path) -> DocsConfig:
    """Default layout rooted at the sample site."""
    return DocsConfig(root=site)


def _make_version(config: DocsConfig, label: str) -> None:
    version_dir = config.version_dir(label)
    version_dir.mkdir(parents=True)
    (version_dir / "intro.md").write_text(f"# {label}\n")
    sidebar = config.version_sidebar(label)
    sidebar.parent.mkdir(parents=True, exist_ok=True)
    sidebar.write_text("{}\n")


@pytest.fixture
def versioned_site(config: DocsConfig) -> DocsConfig:
    """Site with versions 2.0.0, 1.5.0, 1.4.0 and 1.0.0 already created."""
    labels = ["2.0.0", "1.5.0", "1.4.0", "1.0.0"]
    for label in labels:
        _make_version(config, label)
    config.versions_path.write_text(json.dumps(labels, indent=2) + "\n")
    return config
