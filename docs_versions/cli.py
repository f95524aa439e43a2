"""CLI entry point for docs-versions."""

from __future__ import annotations

from pathlib import Path

import click

from docs_versions.config import DocsConfig, load_config
from docs_versions.frontmatter import strip_tree
from docs_versions.github import ReleaseFetchError, fetch_releases
from docs_versions.prune import plan_prune, prune_versions, resolve_repository
from docs_versions.registry import load_versions
from docs_versions.shell import step
from docs_versions.snapshot import create_version
from docs_versions.translations import sync_translations
from docs_versions.versions import is_valid_label

pass_config = click.make_pass_decorator(DocsConfig)


@click.group()
@click.version_option(package_name="docs-versions")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="DOCS_VERSIONS_ROOT",
    default=None,
    help="Docs site directory. Defaults to the current directory.",
)
@click.pass_context
def cli(ctx: click.Context, root: Path | None) -> None:
    """Manage versioned Docusaurus docs: snapshot, prune, translate."""
    ctx.obj = load_config(root)


@cli.command("strip-front-matter")
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@pass_config
def strip_front_matter(config: DocsConfig, path: Path | None) -> None:
    """Remove front matter from versioned markdown files.

    PATH defaults to the versioned docs directory.
    """
    step("Fixing front matter in versioned docs")
    result = strip_tree(path or config.versioned_docs_path)
    if result.changed:
        click.echo(f"\n✅ Fixed front matter in {result.changed} of {result.scanned} file(s)")
    else:
        click.echo(f"\n✅ No files needed fixing ({result.scanned} scanned)")


def _check_label(ctx: click.Context, param: click.Parameter, value: str | None) -> str | None:
    if value is not None and not is_valid_label(value):
        raise click.BadParameter(
            "use letters, digits, '.', '_' or '-', starting with a letter or digit"
        )
    return value


@cli.command()
@click.argument("label", required=False, callback=_check_label)
@click.option(
    "--strip-front-matter",
    "strip",
    is_flag=True,
    help="Also remove front matter from the new snapshot.",
)
@click.pass_context
def create(ctx: click.Context, label: str | None, strip: bool) -> None:
    """Snapshot the current docs as version LABEL."""
    if label is None:
        err = click.UsageError("Version label is required, e.g. docs-versions create 1.2.0", ctx)
        err.exit_code = 1
        raise err
    create_version(ctx.find_object(DocsConfig), label, strip=strip)


@cli.command()
@click.option("--dry-run", is_flag=True, help="Report what would be removed; change nothing.")
@click.option(
    "--keep-last",
    type=click.IntRange(min=1),
    envvar="KEEP_LAST",
    default=None,
    help="Number of releases to keep.  [env: KEEP_LAST; default: from config, else 5]",
)
@click.option(
    "--repository",
    envvar="GITHUB_REPOSITORY",
    default=None,
    help="GitHub repository as owner/name.  [env: GITHUB_REPOSITORY]",
)
@click.option(
    "--token",
    envvar="GITHUB_TOKEN",
    default=None,
    help="GitHub token for private repos or higher rate limits.  [env: GITHUB_TOKEN]",
)
@pass_config
def prune(
    config: DocsConfig,
    dry_run: bool,
    keep_last: int | None,
    repository: str | None,
    token: str | None,
) -> None:
    """Remove versions that are not among the last published releases."""
    keep = keep_last or config.keep_last
    step(f"Cleaning up versioned docs (keeping the last {keep} release(s))")
    if dry_run:
        click.echo("  🔍 DRY RUN MODE - no files will be deleted")

    repo = resolve_repository(config, repository)
    try:
        releases = fetch_releases(repo, token, timeout=config.timeout)
    except ReleaseFetchError as exc:
        raise click.ClickException(
            f"{exc}\n\nCould not fetch releases from the GitHub API. "
            f"Alternatively, edit {config.versions_file} by hand to remove old versions."
        ) from exc

    local_versions = load_versions(config.versions_path, strict=True)
    plan = plan_prune(releases, local_versions, keep)
    click.echo(f"  Keeping last {keep} release(s): {', '.join(plan.keep) or '<none>'}")
    click.echo(
        f"  Found {len(local_versions)} local version(s): {', '.join(local_versions) or '<none>'}"
    )

    prune_versions(config, plan, dry_run=dry_run)


@cli.command("sync-translations")
@click.option(
    "--locale",
    "locales",
    multiple=True,
    help="Locale to sync (repeatable). Defaults to every locale with translations.",
)
@pass_config
def sync_translations_cmd(config: DocsConfig, locales: tuple[str, ...]) -> None:
    """Copy current translations into every registered version."""
    sync_translations(config, list(locales) or None)


@cli.command("list")
@pass_config
def list_versions(config: DocsConfig) -> None:
    """Show registered versions, newest first."""
    versions = load_versions(config.versions_path, strict=True)
    if not versions:
        click.echo(f"No versions registered in {config.versions_file}")
        return
    for label in versions:
        missing = []
        if not config.version_dir(label).is_dir():
            missing.append("docs")
        if not config.version_sidebar(label).is_file():
            missing.append("sidebar")
        suffix = f"  (missing: {', '.join(missing)})" if missing else ""
        click.echo(f"{label}{suffix}")
