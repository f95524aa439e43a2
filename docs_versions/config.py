"""Site layout configuration.

Settings are read with tomlkit from either a dedicated ``docs-versions.toml``
next to the site, or the ``[tool.docs-versions]`` table of the site's
``pyproject.toml``. Every key is optional; the defaults match the layout
Docusaurus uses for versioned docs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from tomlkit.exceptions import ParseError

from .shell import fatal

CONFIG_FILENAME = "docs-versions.toml"
TOOL_TABLE = "docs-versions"


class DocsConfig(BaseModel):
    """Where the site keeps its live docs, snapshots, sidebars and registry.

    Relative paths are resolved against ``root``.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    root: Path = Field(default_factory=Path.cwd)
    docs_dir: Path = Field(default=Path("."), alias="docs-dir")
    versioned_docs_dir: Path = Field(default=Path("versioned_docs"), alias="versioned-docs-dir")
    versioned_sidebars_dir: Path = Field(
        default=Path("versioned_sidebars"), alias="versioned-sidebars-dir"
    )
    versions_file: Path = Field(default=Path("versions.json"), alias="versions-file")
    sidebar_file: Path | None = Field(default=None, alias="sidebar-file")
    i18n_dir: Path = Field(default=Path("i18n"), alias="i18n-dir")
    locales: list[str] | None = None
    repository: str | None = None
    remote: str = "origin"
    keep_last: int = Field(default=5, ge=1, alias="keep-last")
    timeout: float = Field(default=30.0, gt=0)

    def resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path

    @property
    def docs_path(self) -> Path:
        return self.resolve(self.docs_dir)

    @property
    def versioned_docs_path(self) -> Path:
        return self.resolve(self.versioned_docs_dir)

    @property
    def versioned_sidebars_path(self) -> Path:
        return self.resolve(self.versioned_sidebars_dir)

    @property
    def versions_path(self) -> Path:
        return self.resolve(self.versions_file)

    @property
    def sidebar_path(self) -> Path:
        """Configured sidebar file, else sidebars.json, else sidebars.js."""
        if self.sidebar_file is not None:
            return self.resolve(self.sidebar_file)
        json_sidebar = self.root / "sidebars.json"
        js_sidebar = self.root / "sidebars.js"
        if not json_sidebar.exists() and js_sidebar.exists():
            return js_sidebar
        return json_sidebar

    @property
    def i18n_path(self) -> Path:
        return self.resolve(self.i18n_dir)

    def version_dir(self, label: str) -> Path:
        """Snapshot directory for a version label."""
        return self.versioned_docs_path / f"version-{label}"

    def version_sidebar(self, label: str) -> Path:
        """Sidebar descriptor file for a version label."""
        return self.versioned_sidebars_path / f"version-{label}-sidebars.json"


def read_settings(root: Path) -> dict[str, Any]:
    """Return the raw settings table for a site, or {} if none is configured.

    ``docs-versions.toml`` takes precedence over ``pyproject.toml``.
    """
    dedicated = root / CONFIG_FILENAME
    if dedicated.exists():
        return tomlkit.parse(dedicated.read_text(encoding="utf-8")).unwrap()

    pyproject = root / "pyproject.toml"
    if pyproject.exists():
        doc = tomlkit.parse(pyproject.read_text(encoding="utf-8"))
        table = doc.get("tool", {}).get(TOOL_TABLE)
        if table is not None:
            return table.unwrap()
    return {}


def load_config(root: Path | None = None) -> DocsConfig:
    """Load and validate the configuration for the site at ``root``.

    Raises:
        SystemExit: If the settings file is malformed or a value is invalid.
    """
    root = (root or Path.cwd()).resolve()
    try:
        settings = read_settings(root)
    except ParseError as exc:
        fatal(f"Could not parse configuration in {root}: {exc}")

    try:
        return DocsConfig.model_validate({**settings, "root": root})
    except ValidationError as exc:
        problems = "\n".join(
            f"  - {'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        fatal(f"Invalid docs-versions configuration:\n{problems}")
