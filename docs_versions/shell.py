"""Shell and git utilities.

Provides simple wrappers around subprocess calls for reading git
configuration and evaluating JavaScript sidebar modules, plus output
formatting helpers shared by every command.
"""

from __future__ import annotations

import subprocess
import sys


def git(*args: str, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "config", "--get", "...").
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., a missing
               config key).

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(["git", *args], capture_output=True, text=True, check=check)
    return result.stdout.strip()


def node(*args: str) -> str:
    """Run node and return stdout.

    Raises:
        FileNotFoundError: If node is not installed.
        subprocess.CalledProcessError: If the script fails.
    """
    result = subprocess.run(["node", *args], capture_output=True, text=True, check=True)
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate major phases of a command in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a non-fatal warning line; processing continues."""
    print(f"  ⚠ {msg}")


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the command.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
