"""Front matter removal for versioned docs.

Versioned copies must not carry front matter: keys such as ``slug`` are
only valid for the current version and make Docusaurus warn (or collide)
when they appear in a snapshot.
"""

from __future__ import annotations

import re
from pathlib import Path

from .models import StripResult

# "---" line, any lines, "---" line; the closing marker may end the file.
FRONT_MATTER = re.compile(
    r"\A---[ \t]*\r?\n(?:.*?\r?\n)??---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL,
)


def strip_front_matter(text: str) -> str:
    """Remove a leading front matter block, if any.

    Examples:
        "---\\nslug: /\\n---\\n# Intro\\n" → "# Intro\\n"
        "# Intro\\n" → "# Intro\\n"
    """
    match = FRONT_MATTER.match(text)
    if not match:
        return text
    return text[match.end() :]


def find_markdown_files(root: Path) -> list[Path]:
    """Every ``*.md`` file under root, recursively, in sorted order."""
    return sorted(p for p in root.rglob("*.md") if p.is_file())


def strip_tree(root: Path) -> StripResult:
    """Strip front matter from every markdown file under root, in place.

    Only files whose content changes are rewritten. A missing root is not
    an error: there is simply nothing to fix.
    """
    if not root.is_dir():
        print(f"  No {root.name} directory found, nothing to fix")
        return StripResult()

    files = find_markdown_files(root)
    result = StripResult(scanned=len(files))
    if not files:
        print(f"  No markdown files found in {root.name}")
        return result

    print(f"  Found {len(files)} markdown file(s) in {root.name}")
    for path in files:
        # newline="" keeps CRLF files byte-identical apart from the block
        with path.open(encoding="utf-8", newline="") as fh:
            content = fh.read()
        fixed = strip_front_matter(content)
        if fixed != content:
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(fixed)
            print(f"  ✓ Fixed {path.relative_to(root)}")
            result.changed += 1

    return result
