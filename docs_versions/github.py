"""GitHub release listing.

A single unpaginated request to the releases endpoint. Errors are raised
as ReleaseFetchError carrying operator guidance (rate limits, auth,
connectivity); nothing is retried.
"""

from __future__ import annotations

import re
from typing import Any

import requests
from pydantic import ValidationError

from .models import Release
from .shell import git

API_URL = "https://api.github.com"
USER_AGENT = "docs-versions"

# https://github.com/owner/repo(.git), git@github.com:owner/repo(.git),
# ssh://git@github.com/owner/repo(.git)
_REMOTE_PATTERN = re.compile(r"github\.com[/:]([^/]+)/([^/]+?)(?:\.git)?/?$")


class ReleaseFetchError(RuntimeError):
    """Raised when the release list cannot be retrieved or understood."""


def parse_remote_url(url: str) -> str | None:
    """Extract "owner/repo" from a GitHub remote URL, or None."""
    match = _REMOTE_PATTERN.search(url.strip())
    if not match:
        return None
    return f"{match.group(1)}/{match.group(2)}"


def repository_from_remote(remote: str = "origin") -> str | None:
    """Infer "owner/repo" from the URL of a git remote in the current checkout."""
    url = git("config", "--get", f"remote.{remote}.url", check=False)
    if not url:
        return None
    return parse_remote_url(url)


def fetch_releases(
    repository: str,
    token: str | None = None,
    *,
    session: requests.Session | None = None,
    timeout: float = 30.0,
) -> list[Release]:
    """Fetch the release list for repository ("owner/repo").

    Raises:
        ReleaseFetchError: On connectivity failure, a non-200 response, or
            a body that is not a JSON array of releases.
    """
    url = f"{API_URL}/repos/{repository}/releases"
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"

    if session is None:
        with requests.Session() as owned:
            return fetch_releases(repository, token, session=owned, timeout=timeout)

    try:
        response = session.get(url, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise ReleaseFetchError(
            f"Error fetching releases: {exc}\nMake sure you have internet connectivity."
        ) from exc

    if response.status_code != 200:
        raise ReleaseFetchError(_status_message(response, repository))

    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise ReleaseFetchError(f"Error parsing releases data: {exc}") from exc

    if not isinstance(payload, list):
        raise ReleaseFetchError("Error parsing releases data: expected a JSON array")
    try:
        return [Release.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise ReleaseFetchError(f"Error parsing releases data: {exc}") from exc


def _status_message(response: requests.Response, repository: str) -> str:
    lines = [f"Error fetching releases: {response.status_code} {response.reason}"]
    if response.status_code == 404:
        lines.append(f"Repository not found: {repository}")
        lines.append("Make sure the repository exists and is accessible.")
    elif response.status_code == 401:
        lines.append(
            "Authentication failed. Set GITHUB_TOKEN for private repos or higher rate limits."
        )
    elif response.status_code == 403:
        lines.append(
            "Access forbidden or API rate limit exceeded. Set GITHUB_TOKEN to raise the limit."
        )
    return "\n".join(lines)
