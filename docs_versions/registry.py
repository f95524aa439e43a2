"""Version registry (versions.json) reading and writing.

The registry is a JSON array of version labels, newest first. Docusaurus
reads it to build the version dropdown, so it is written the same way
Docusaurus writes it: two-space indentation and a trailing newline.
"""

from __future__ import annotations

import json
from pathlib import Path

from .shell import fatal, warn


def load_versions(path: Path, *, strict: bool = False) -> list[str]:
    """Load the registry.

    A missing file is an empty registry. An unreadable one is fatal when
    ``strict`` is set; otherwise a warning is printed and an empty registry
    is returned so a new one can be written in its place.
    """
    if not path.exists():
        return []

    try:
        versions = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        if strict:
            fatal(f"Could not parse {path}: {exc}")
        warn(f"Could not parse existing {path.name}, starting a new one")
        return []

    if not isinstance(versions, list) or not all(isinstance(v, str) for v in versions):
        if strict:
            fatal(f"{path} must contain a JSON array of version labels")
        warn(f"{path.name} is not a list of version labels, starting a new one")
        return []

    return versions


def save_versions(path: Path, versions: list[str]) -> None:
    """Write the registry, collapsing duplicate labels (first one wins)."""
    unique = list(dict.fromkeys(versions))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(unique, indent=2) + "\n", encoding="utf-8")
