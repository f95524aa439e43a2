"""Tests for docs_versions.cli."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from docs_versions.cli import cli
from docs_versions.config import DocsConfig
from docs_versions.github import ReleaseFetchError
from docs_versions.models import Release

CLEAN_ENV = {
    "GITHUB_REPOSITORY": "acme/sdk-go",
    "GITHUB_TOKEN": None,
    "KEEP_LAST": None,
    "DOCS_VERSIONS_ROOT": None,
}


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, root: Path, *args: str, **env: str | None):
    return runner.invoke(cli, ["--root", str(root), *args], env={**CLEAN_ENV, **env})


class TestCreate:
    def test_creates_version(self, runner: CliRunner, site: Path) -> None:
        result = _invoke(runner, site, "create", "1.2.0")

        assert result.exit_code == 0, result.output
        assert (site / "versioned_docs" / "version-1.2.0" / "intro.md").exists()
        assert json.loads((site / "versions.json").read_text()) == ["1.2.0"]

    def test_missing_label_is_usage_error(self, runner: CliRunner, site: Path) -> None:
        result = _invoke(runner, site, "create")

        assert result.exit_code == 1
        assert "Usage:" in result.output
        assert not (site / "versioned_docs").exists()

    def test_invalid_label(self, runner: CliRunner, site: Path) -> None:
        result = _invoke(runner, site, "create", "../1.0.0")

        assert result.exit_code != 0
        assert not (site / "versioned_docs").exists()

    def test_existing_version_fails(self, runner: CliRunner, site: Path) -> None:
        _invoke(runner, site, "create", "1.2.0")

        result = _invoke(runner, site, "create", "1.2.0")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_strip_flag(self, runner: CliRunner, site: Path) -> None:
        result = _invoke(runner, site, "create", "1.2.0", "--strip-front-matter")

        assert result.exit_code == 0, result.output
        intro = site / "versioned_docs" / "version-1.2.0" / "intro.md"
        assert not intro.read_text().startswith("---")


def test_strip_front_matter_defaults_to_versioned_docs(runner: CliRunner, site: Path) -> None:
    target = site / "versioned_docs" / "version-1.0.0"
    target.mkdir(parents=True)
    (target / "intro.md").write_text("---\nslug: /\n---\n# Intro\n")

    result = _invoke(runner, site, "strip-front-matter")

    assert result.exit_code == 0, result.output
    assert (target / "intro.md").read_text() == "# Intro\n"
    assert (site / "intro.md").read_text().startswith("---")
    assert "Fixed front matter in 1 of 1 file(s)" in result.output


def test_strip_front_matter_missing_directory(runner: CliRunner, site: Path) -> None:
    result = _invoke(runner, site, "strip-front-matter")

    assert result.exit_code == 0, result.output
    assert "No files needed fixing" in result.output


class TestPrune:
    @pytest.fixture
    def releases(self) -> list[Release]:
        published = "2024-01-01T00:00:00Z"
        return [
            Release(tag_name=tag, published_at=published)
            for tag in ("v1.0.0", "v1.4.0", "v2.0.0", "v1.5.0")
        ]

    @patch("docs_versions.cli.fetch_releases")
    def test_prunes_with_keep_last_env(
        self, mock_fetch: MagicMock, runner: CliRunner, versioned_site: DocsConfig, releases
    ) -> None:
        mock_fetch.return_value = releases

        result = _invoke(runner, versioned_site.root, "prune", KEEP_LAST="2")

        assert result.exit_code == 0, result.output
        assert json.loads(versioned_site.versions_path.read_text()) == ["2.0.0", "1.5.0"]
        assert not versioned_site.version_dir("1.0.0").exists()
        assert mock_fetch.call_args[0] == ("acme/sdk-go", None)

    @patch("docs_versions.cli.fetch_releases")
    def test_dry_run(
        self, mock_fetch: MagicMock, runner: CliRunner, versioned_site: DocsConfig, releases
    ) -> None:
        mock_fetch.return_value = releases
        before = versioned_site.versions_path.read_text()

        result = _invoke(runner, versioned_site.root, "prune", "--dry-run", "--keep-last", "2")

        assert result.exit_code == 0, result.output
        assert "DRY RUN" in result.output
        assert versioned_site.versions_path.read_text() == before
        assert versioned_site.version_dir("1.0.0").is_dir()

    @patch("docs_versions.cli.fetch_releases")
    def test_default_keeps_five(
        self, mock_fetch: MagicMock, runner: CliRunner, versioned_site: DocsConfig, releases
    ) -> None:
        mock_fetch.return_value = releases

        result = _invoke(runner, versioned_site.root, "prune")

        assert result.exit_code == 0, result.output
        assert "Nothing to do" in result.output
        assert len(json.loads(versioned_site.versions_path.read_text())) == 4

    @patch("docs_versions.cli.fetch_releases")
    def test_passes_token(
        self, mock_fetch: MagicMock, runner: CliRunner, versioned_site: DocsConfig
    ) -> None:
        mock_fetch.return_value = []

        _invoke(runner, versioned_site.root, "prune", "--dry-run", GITHUB_TOKEN="s3cret")

        assert mock_fetch.call_args[0] == ("acme/sdk-go", "s3cret")

    @patch("docs_versions.cli.fetch_releases")
    def test_fetch_error_exits_nonzero(
        self, mock_fetch: MagicMock, runner: CliRunner, versioned_site: DocsConfig
    ) -> None:
        mock_fetch.side_effect = ReleaseFetchError("Repository not found: acme/sdk-go")
        before = versioned_site.versions_path.read_text()

        result = _invoke(runner, versioned_site.root, "prune")

        assert result.exit_code == 1
        assert "Repository not found" in result.output
        assert versioned_site.versions_path.read_text() == before

    def test_invalid_keep_last(self, runner: CliRunner, versioned_site: DocsConfig) -> None:
        result = _invoke(runner, versioned_site.root, "prune", KEEP_LAST="zero")

        assert result.exit_code == 2


def test_sync_translations(runner: CliRunner, site: Path) -> None:
    (site / "versions.json").write_text('["1.0.0"]')
    source = site / "i18n" / "it" / "docusaurus-plugin-content-docs" / "current"
    source.mkdir(parents=True)
    (source / "current.json").write_text('{"version.label": {"message": "Next"}}')

    result = _invoke(runner, site, "sync-translations", "--locale", "it")

    assert result.exit_code == 0, result.output
    written = source.parent / "version-1.0.0" / "version-1.0.0.json"
    assert json.loads(written.read_text()) == {"version.label": {"message": "1.0.0"}}


def test_list_marks_missing_artifacts(runner: CliRunner, versioned_site: DocsConfig) -> None:
    versioned_site.version_sidebar("1.4.0").unlink()

    result = _invoke(runner, versioned_site.root, "list")

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0] == "2.0.0"
    assert "1.4.0  (missing: sidebar)" in lines


def test_root_from_environment(runner: CliRunner, site: Path) -> None:
    result = runner.invoke(cli, ["list"], env={**CLEAN_ENV, "DOCS_VERSIONS_ROOT": str(site)})

    assert result.exit_code == 0, result.output
    assert "No versions registered" in result.output
