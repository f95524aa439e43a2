"""Create a documentation version: copy → sidebar → register.

Only top-level markdown files are copied, which avoids the recursive
copy problem of snapshotting a docs directory that also contains the
versioned output and the site configuration.

The steps are not transactional. If a later step fails, earlier ones
are not rolled back; rerun after deleting the partial snapshot.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from .config import DocsConfig
from .frontmatter import strip_tree
from .registry import load_versions, save_versions
from .shell import fatal, step, warn
from .sidebars import load_sidebar_definition, write_versioned_sidebar
from .versions import is_valid_label


def is_excluded(filename: str) -> bool:
    """README and test files are never part of a published version."""
    return filename == "README.md" or "test" in filename or "TEST" in filename


def find_source_docs(docs_dir: Path) -> list[Path]:
    """Markdown files directly inside docs_dir, minus the excluded ones."""
    if not docs_dir.is_dir():
        return []
    return sorted(
        p
        for p in docs_dir.iterdir()
        if p.is_file() and p.suffix == ".md" and not is_excluded(p.name)
    )


def copy_docs(files: list[Path], dest: Path) -> int:
    """Copy files unmodified into dest and return how many were copied."""
    dest.mkdir(parents=True)
    for src in files:
        shutil.copyfile(src, dest / src.name)
        print(f"  ✓ Copied {src.name}")
    return len(files)


def register_version(versions_path: Path, label: str) -> bool:
    """Prepend label to the registry. Returns False if it was already there."""
    versions = load_versions(versions_path)
    if label in versions:
        warn(f"Version {label} already exists in {versions_path.name}")
        return False
    save_versions(versions_path, [label, *versions])
    print(f"  ✓ Updated {versions_path.name}")
    return True


def create_version(config: DocsConfig, label: str, *, strip: bool = False) -> Path:
    """Snapshot the live docs as a new version.

    Args:
        config: Site layout.
        label: Version label, e.g. "1.2.0".
        strip: Also strip front matter from the new snapshot.

    Returns:
        The new snapshot directory.

    Raises:
        SystemExit: If the label is invalid, the version already exists, or
            there are no markdown files to copy. Nothing is written in
            these cases.
    """
    if not is_valid_label(label):
        fatal(f"Invalid version label: {label!r}")

    version_dir = config.version_dir(label)
    if version_dir.exists():
        fatal(f"Version {label} already exists")

    files = find_source_docs(config.docs_path)
    if not files:
        fatal(f"No markdown files found in {config.docs_path}")

    step(f"Creating version {label}")

    copy_docs(files, version_dir)
    if strip:
        strip_tree(version_dir)

    definition = load_sidebar_definition(config.sidebar_path)
    write_versioned_sidebar(definition, config.version_sidebar(label))
    print("  ✓ Created sidebar configuration")

    register_version(config.versions_path, label)

    print(f"\n✅ Version {label} created successfully!")
    print("\nNext steps:")
    print(f"  1. Review the versioned files in {os.path.relpath(version_dir, config.root)}")
    print("  2. Make sure the version dropdown is enabled in docusaurus.config.js")
    print("  3. Preview the site locally before publishing")
    return version_dir
