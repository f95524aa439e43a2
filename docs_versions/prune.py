"""Prune versioned docs down to the newest published releases.

The keep-set is the newest ``keep_last`` published GitHub releases; any
registered version outside it loses its snapshot, its sidebar and its
translations, and is dropped from the registry.
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from .config import DocsConfig
from .github import repository_from_remote
from .models import PrunePlan, Release
from .registry import save_versions
from .shell import fatal, step, warn
from .translations import translation_version_dirs
from .versions import sort_versions_desc


def resolve_repository(config: DocsConfig, explicit: str | None = None) -> str:
    """Work out which GitHub repository to query.

    Order: explicit value (CLI / GITHUB_REPOSITORY), the configured
    ``repository``, then the URL of the configured git remote.

    Raises:
        SystemExit: If none of them yields "owner/repo".
    """
    if explicit:
        print(f"  Repository: {explicit}")
        return explicit
    if config.repository:
        print(f"  Repository: {config.repository} (from configuration)")
        return config.repository

    repo = repository_from_remote(config.remote)
    if not repo:
        fatal(
            "Could not determine repository. Set GITHUB_REPOSITORY or "
            "`repository` in docs-versions.toml.\n"
            "Example: GITHUB_REPOSITORY=owner/repo docs-versions prune"
        )
    print(f"  Repository: {repo} (from git remote {config.remote!r})")
    return repo


def plan_prune(
    releases: Iterable[Release], local_versions: list[str], keep_last: int
) -> PrunePlan:
    """Decide which local versions to keep and which to remove.

    Unpublished releases (drafts) are ignored. Tags that are not numeric
    versions are skipped with a warning.
    """
    published = [r.version for r in releases if r.published_at]
    ordered, skipped = sort_versions_desc(published)
    for tag in skipped:
        warn(f"Ignoring release {tag}: not a numeric version")

    keep = ordered[:keep_last]
    keep_set = set(keep)
    return PrunePlan(
        all_releases=ordered,
        keep=keep,
        remove=[v for v in local_versions if v not in keep_set],
        retained=[v for v in local_versions if v in keep_set],
    )


def version_paths(config: DocsConfig, label: str) -> list[Path]:
    """Every on-disk artifact that belongs to a version."""
    return [
        config.version_dir(label),
        config.version_sidebar(label),
        *translation_version_dirs(config, label),
    ]


def remove_path(path: Path) -> bool:
    """Delete a file or directory tree. Missing paths are not an error."""
    if path.is_dir():
        shutil.rmtree(path)
    elif path.exists():
        path.unlink()
    else:
        return False
    return True


def remove_version(config: DocsConfig, label: str, *, dry_run: bool = False) -> None:
    print(f"\n  Removing version: {label}")
    for path in version_paths(config, label):
        shown = os.path.relpath(path, config.root)
        if dry_run:
            print(f"    [DRY RUN] Would remove: {shown}")
        elif remove_path(path):
            print(f"    ✓ Removed: {shown}")


def prune_versions(config: DocsConfig, plan: PrunePlan, *, dry_run: bool = False) -> None:
    """Apply a prune plan to disk; in dry-run mode only report it."""
    if not plan.remove:
        print("\n✓ All local versions are in the last releases. Nothing to do.")
        return

    step(f"Removing {len(plan.remove)} version(s): {', '.join(plan.remove)}")
    if len(plan.all_releases) > len(plan.keep):
        older = plan.all_releases[len(plan.keep) :]
        print(f"  (Older releases: {', '.join(older)})")

    for label in plan.remove:
        remove_version(config, label, dry_run=dry_run)

    if dry_run:
        print(f"\n  [DRY RUN] Would update {config.versions_file} to: {', '.join(plan.retained)}")
        return

    save_versions(config.versions_path, plan.retained)
    print(f"\n✓ Updated {config.versions_file} to keep only: {', '.join(plan.retained)}")
    print(f"✓ Cleanup complete! Removed {len(plan.remove)} version(s).")
