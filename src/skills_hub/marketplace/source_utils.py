"""Shared source parsing helpers for GitHub-hosted skill repositories."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from skills_hub.core.exceptions import HostNotAllowedError, InvalidRepositoryError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

GITHUB_HOST = "github.com"
RAW_CONTENT_HOST = "raw.githubusercontent.com"
DEFAULT_BRANCH = "main"
CONTENT_HASH_ALGORITHM = "sha-256"

_RULES_BLOCK_START = re.compile(r"^rules:")
_RULES_LIST_ITEM = re.compile(r"^\s+-\s+(.+)")


@dataclass(frozen=True)
class GitHubRepository:
    owner: str
    repo: str
    branch: str = DEFAULT_BRANCH

    @property
    def repo_url(self) -> str:
        return f"https://{GITHUB_HOST}/{self.owner}/{self.repo}"

    @property
    def raw_base(self) -> str:
        return f"https://{RAW_CONTENT_HOST}/{self.owner}/{self.repo}/{self.branch}"

    def raw_url(self, *parts: str) -> str:
        suffix = "/".join(part.strip("/") for part in parts if part)
        return f"{self.raw_base}/{suffix}"


def parse_repository_reference(url: str, *, branch: str = DEFAULT_BRANCH) -> GitHubRepository:
    """Parse ``https://github.com/<owner>/<repo>`` into a :class:`GitHubRepository`.

    Only absolute http(s) URLs on exactly ``github.com`` are accepted, so a
    crafted reference cannot redirect downloads to another host.
    """
    reference = url.strip()
    parsed = urlparse(reference)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise HostNotAllowedError(reference, parsed.netloc, GITHUB_HOST)
    host = (parsed.hostname or "").lower()
    if host != GITHUB_HOST or parsed.port is not None or parsed.username or parsed.password:
        raise HostNotAllowedError(reference, parsed.netloc, GITHUB_HOST)

    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        raise InvalidRepositoryError(
            f"Invalid GitHub URL: {reference}",
            "Expected https://github.com/<owner>/<repo>",
        )
    owner, repo = parts[0], parts[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not owner or not repo or owner in {".", ".."} or repo in {".", ".."}:
        raise InvalidRepositoryError(f"Invalid GitHub URL: {reference}")
    return GitHubRepository(owner=owner, repo=repo, branch=branch or DEFAULT_BRANCH)


def format_repository_display_url(url: str) -> str:
    """Normalize a repository URL for concise display in lists."""
    parsed = urlparse(url)
    if parsed.netloc == RAW_CONTENT_HOST:
        parts = parsed.path.strip("/").split("/")
        if len(parts) >= 2:
            org, repo = parts[:2]
            return f"https://{GITHUB_HOST}/{org}/{repo}"
    if parsed.netloc in {GITHUB_HOST, f"www.{GITHUB_HOST}"}:
        parts = parsed.path.strip("/").split("/")
        if len(parts) >= 2:
            org, repo = parts[:2]
            return f"https://{GITHUB_HOST}/{org}/{repo.removesuffix('.git')}"
    return url


def parse_rules_from_yaml(content: str) -> list[str]:
    """Extract the ``rules:`` list from a ``skill.yaml`` document.

    Only the block form is recognised: a ``rules:`` line followed by indented
    ``- item`` lines. The block ends at the first non-blank unindented line.
    """
    rules: list[str] = []
    in_rules = False
    for line in content.splitlines():
        if _RULES_BLOCK_START.match(line):
            in_rules = True
            continue
        if not in_rules:
            continue
        match = _RULES_LIST_ITEM.match(line)
        if match:
            rules.append(_strip_quotes(match.group(1).strip()))
        elif line.strip() and not line[0].isspace():
            break
    return rules


def _strip_quotes(value: str) -> str:
    if value[:1] in {'"', "'"}:
        value = value[1:]
    if value[-1:] in {'"', "'"}:
        value = value[:-1]
    return value


def compute_content_hash(rule_paths: Sequence[str], rules_content: Mapping[str, str]) -> str:
    """SHA-256 hex digest of rule contents in resolution order, joined by newlines.

    Iteration order of ``rules_content`` is irrelevant; rules missing from the
    mapping (failed fetches) are skipped.
    """
    contents = [rules_content[path] for path in rule_paths if path in rules_content]
    return hashlib.sha256("\n".join(contents).encode("utf-8")).hexdigest()
