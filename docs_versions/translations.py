"""Copy current-version translations into every versioned i18n directory.

Docusaurus looks up translations for a version under
``i18n/<locale>/docusaurus-plugin-content-docs/version-<label>/``, with the
version's UI strings in ``version-<label>.json``. This module derives those
from the locale's ``current`` translations.
"""

from __future__ import annotations

import copy
import json
import shutil
from pathlib import Path
from typing import Any

from .config import DocsConfig
from .registry import load_versions
from .shell import fatal, step

PLUGIN_DIR = "docusaurus-plugin-content-docs"
CURRENT = "current"
MESSAGES_FILE = "current.json"
LABEL_KEY = "version.label"


def plugin_dir(config: DocsConfig, locale: str) -> Path:
    return config.i18n_path / locale / PLUGIN_DIR


def discover_locales(config: DocsConfig) -> list[str]:
    """Configured locales, or every locale that has current-version translations."""
    if config.locales is not None:
        return list(config.locales)
    if not config.i18n_path.is_dir():
        return []
    return sorted(
        d.name for d in config.i18n_path.iterdir() if (d / PLUGIN_DIR / CURRENT).is_dir()
    )


def translation_version_dirs(config: DocsConfig, label: str) -> list[Path]:
    """Versioned translation directories for label, one per locale on disk."""
    if not config.i18n_path.is_dir():
        return []
    return [
        d / PLUGIN_DIR / f"version-{label}"
        for d in sorted(config.i18n_path.iterdir())
        if (d / PLUGIN_DIR).is_dir()
    ]


def source_files(source: Path) -> list[Path]:
    """Markdown files plus the message file, top level only."""
    return sorted(
        p
        for p in source.iterdir()
        if p.is_file() and (p.suffix == ".md" or p.name == MESSAGES_FILE)
    )


def relabel(messages: dict[str, Any], label: str) -> dict[str, Any]:
    """Return a copy of messages with the version label message set to label.

    All other keys, and their order, are left as they are. Files without a
    version label entry are copied unchanged.
    """
    updated = copy.deepcopy(messages)
    entry = updated.get(LABEL_KEY)
    if isinstance(entry, dict):
        entry["message"] = label
    return updated


def write_messages(source: Path, dest: Path, label: str) -> None:
    try:
        messages = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        fatal(f"Could not parse {source}: {exc}")
    dest.write_text(
        json.dumps(relabel(messages, label), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )


def sync_locale(config: DocsConfig, locale: str, versions: list[str]) -> int:
    """Sync one locale into every version. Returns the number of files written."""
    base = plugin_dir(config, locale)
    source = base / CURRENT
    if not source.is_dir():
        fatal(f"No current translations for locale {locale!r}: {source} not found")

    files = source_files(source)
    written = 0
    for label in versions:
        dest_dir = base / f"version-{label}"
        if not dest_dir.exists():
            dest_dir.mkdir(parents=True)
            print(f"  Created directory: {locale}/{PLUGIN_DIR}/version-{label}")

        for src in files:
            if src.name == MESSAGES_FILE:
                dest_name = f"version-{label}.json"
                write_messages(src, dest_dir / dest_name, label)
                print(f"  Copied and updated {src.name} -> version-{label}/{dest_name}")
            else:
                shutil.copyfile(src, dest_dir / src.name)
                print(f"  Copied {src.name} -> version-{label}/{src.name}")
            written += 1
    return written


def sync_translations(config: DocsConfig, locales: list[str] | None = None) -> int:
    """Sync current translations into every registered version.

    Args:
        config: Site layout.
        locales: Locales to sync; defaults to discover_locales().

    Returns:
        Total number of files written.
    """
    versions = load_versions(config.versions_path, strict=True)
    if not versions:
        print(f"No versions found in {config.versions_file}, nothing to sync.")
        return 0

    locales = locales if locales else discover_locales(config)
    if not locales:
        print(f"No translations found under {config.i18n_dir}, nothing to sync.")
        return 0

    written = 0
    for locale in locales:
        step(f"Syncing {locale} translations from 'current' to {len(versions)} version(s)")
        written += sync_locale(config, locale, versions)

    print("\nTranslation sync completed!")
    return written
