"""Version parsing, ordering and label validation.

Handles conversion between release tags and semver objects, with
special handling for incomplete version strings (e.g., "1.0" → "1.0.0").
"""

from __future__ import annotations

import re
from collections.abc import Iterable

import semver

LABEL_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
_LEADING_DIGITS = re.compile(r"\d+")


def parse_version(version_str: str) -> semver.Version:
    """Parse a version string into a semver.Version object.

    Handles incomplete versions by padding with zeros:
    - "1" → "1.0.0"
    - "1.2" → "1.2.0"
    - "1.2.3" → "1.2.3"

    Only the first 3 components are used (major.minor.patch), each read
    from its leading digits, so "2024.01.0" → 2024.1.0 and "1.2.3-rc1" →
    1.2.3. A minor or patch with no digits counts as 0.

    Raises:
        ValueError: If the major component has no leading digits.
    """
    parts = version_str.split(".")
    # Pad with zeros to ensure we have at least 3 parts
    while len(parts) < 3:
        parts.append("0")
    numbers = [_leading_int(part) for part in parts[:3]]
    if numbers[0] is None:
        raise ValueError(f"{version_str!r} is not a numeric version")
    major, minor, patch = (n or 0 for n in numbers)
    return semver.Version(major, minor, patch)


def _leading_int(part: str) -> int | None:
    match = _LEADING_DIGITS.match(part)
    return int(match.group()) if match else None


def version_key(version_str: str) -> tuple[int, int, int]:
    """Sort key comparing major, then minor, then patch numerically.

    Prerelease and build suffixes are ignored, so "1.2.3-rc1" and "1.2.3"
    compare equal.
    """
    v = parse_version(version_str)
    return (v.major, v.minor, v.patch)


def sort_versions_desc(versions: Iterable[str]) -> tuple[list[str], list[str]]:
    """Sort version strings newest first.

    Equal versions keep their input order.

    Returns:
        (sorted, skipped) where skipped holds strings that are not
        numeric versions, in input order.
    """
    keyed: list[tuple[tuple[int, int, int], str]] = []
    skipped: list[str] = []
    for v in versions:
        try:
            keyed.append((version_key(v), v))
        except ValueError:
            skipped.append(v)
    keyed.sort(key=lambda pair: pair[0], reverse=True)
    return [v for _, v in keyed], skipped


def is_valid_label(label: str) -> bool:
    """Check that a version label is safe to use in file names.

    Labels start with a letter or digit and contain only letters, digits,
    dots, underscores and hyphens, so they never escape the docs root.
    """
    return bool(LABEL_PATTERN.match(label)) and ".." not in label
