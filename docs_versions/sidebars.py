"""Sidebar definition loading and versioning.

The live sidebar may be a JSON file or the ``sidebars.js`` module
Docusaurus scaffolds. JavaScript definitions are evaluated with node,
which every Docusaurus checkout already has.
"""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

from .models import SidebarDoc
from .shell import fatal, node


def load_sidebar_definition(path: Path) -> dict[str, Any]:
    """Load the live sidebar definition as a mapping of sidebar name → items.

    Raises:
        SystemExit: If the file is missing, cannot be evaluated, or does not
            describe a mapping.
    """
    if not path.exists():
        fatal(f"Sidebar definition not found: {path}")

    if path.suffix in {".js", ".cjs"}:
        script = f"JSON.stringify(require({json.dumps(str(path.resolve()))}))"
        try:
            raw = node("-p", script)
        except FileNotFoundError:
            fatal(f"node is required to read {path.name}")
        except subprocess.CalledProcessError as exc:
            fatal(f"Failed to evaluate {path.name}:\n{exc.stderr}")
    else:
        raw = path.read_text(encoding="utf-8")

    try:
        definition = json.loads(raw)
    except json.JSONDecodeError as exc:
        fatal(f"Could not parse sidebar definition {path.name}: {exc}")

    if not isinstance(definition, dict):
        fatal(f"Sidebar definition {path.name} must be an object of sidebars")
    return definition


def version_item(item: Any) -> Any:
    """Rewrite a single sidebar item for a versioned sidebar.

    Doc entries keep only their type, id and label so the ids resolve to
    the copied files. Every other item (categories, links, shorthand ids)
    passes through unchanged.
    """
    if isinstance(item, dict) and item.get("type") == "doc" and "id" in item:
        return SidebarDoc(id=item["id"], label=item.get("label")).model_dump(exclude_none=True)
    return item


def version_sidebars(definition: dict[str, Any]) -> dict[str, Any]:
    """Apply version_item() to every list-valued sidebar in the definition."""
    versioned: dict[str, Any] = {}
    for name, items in definition.items():
        if isinstance(items, list):
            versioned[name] = [version_item(item) for item in items]
        else:
            versioned[name] = items
    return versioned


def write_versioned_sidebar(definition: dict[str, Any], dest: Path) -> None:
    """Write the versioned form of a sidebar definition to dest."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(
        json.dumps(version_sidebars(definition), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
