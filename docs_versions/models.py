"""Data models for docs-versions.

These Pydantic models represent the records passed between the
commands: sidebar entries, releases fetched from GitHub, and the
results of stripping and pruning.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SidebarDoc(BaseModel):
    """A navigable document entry in a Docusaurus sidebar.

    Attributes:
        type: Always "doc"; other item kinds are not modelled.
        id: Document identifier, matching the markdown file name without
            its extension.
        label: Display label. Omitted from output when the live sidebar
               does not set one.
    """

    type: Literal["doc"] = "doc"
    id: str
    label: str | None = None


class Release(BaseModel):
    """A GitHub release as returned by the releases listing endpoint.

    Only the fields needed for pruning are kept; the API returns many more.
    """

    model_config = ConfigDict(extra="ignore")

    tag_name: str
    published_at: str | None = None

    @property
    def version(self) -> str:
        """Tag without its leading "v" (e.g. "v1.2.0" → "1.2.0")."""
        return self.tag_name[1:] if self.tag_name.startswith("v") else self.tag_name


class StripResult(BaseModel):
    """Counts reported by a front-matter stripping pass."""

    scanned: int = 0
    changed: int = 0


class PrunePlan(BaseModel):
    """Outcome of comparing published releases with the local registry.

    Attributes:
        all_releases: Every published release version, newest first.
        keep: The newest ``keep_last`` release versions.
        remove: Registry labels not in ``keep``, in registry order.
        retained: Registry labels in ``keep``, in registry order. This is
                  what the registry is rewritten to.
    """

    all_releases: list[str] = Field(default_factory=list)
    keep: list[str] = Field(default_factory=list)
    remove: list[str] = Field(default_factory=list)
    retained: list[str] = Field(default_factory=list)
