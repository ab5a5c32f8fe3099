"""Download skills from a GitHub-hosted skills repository."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from skills_hub.core.exceptions import FetchError, SkillNotFoundError, SuspiciousRulePathError
from skills_hub.core.logging.logger import get_logger
from skills_hub.marketplace import source_utils
from skills_hub.marketplace.fetch import MAX_RULES, BoundedFetcher
from skills_hub.marketplace.manifest import (
    Manifest,
    ManifestEntry,
    is_suspicious_rule_path,
    parse_manifest_text,
)

logger = get_logger(__name__)

MANIFEST_FILENAME = "manifest.json"
README_FILENAME = "README.md"
SKILL_DESCRIPTOR_FILENAME = "skill.yaml"


@dataclass(frozen=True)
class SkillDownload:
    metadata: ManifestEntry
    readme: str
    rules_content: dict[str, str]
    content_hash: str
    rule_paths: list[str] = field(default_factory=list)


class GitHubSkillSource:
    """Remote source client for ``https://github.com/<owner>/<repo>`` skill repositories.

    The repository reference is checked in the constructor, so an unsupported
    host fails before any request is made.
    """

    def __init__(
        self,
        repo_url: str,
        *,
        branch: str = source_utils.DEFAULT_BRANCH,
        fetcher: BoundedFetcher | None = None,
        max_rules: int = MAX_RULES,
    ) -> None:
        self.repository = source_utils.parse_repository_reference(repo_url, branch=branch)
        self.fetcher = fetcher or BoundedFetcher()
        self.max_rules = max_rules

    @property
    def repo_url(self) -> str:
        return self.repository.repo_url

    @property
    def raw_base(self) -> str:
        return self.repository.raw_base

    async def fetch_manifest(self) -> Manifest:
        url = self.repository.raw_url(MANIFEST_FILENAME)
        response = await self.fetcher.fetch(url)
        if not response.ok:
            raise FetchError(
                f"Failed to fetch manifest ({response.status_code}): {url}",
                url,
                status_code=response.status_code,
            )
        return parse_manifest_text(response.text)

    async def download_skill(self, skill_id: str) -> SkillDownload:
        manifest = await self.fetch_manifest()
        metadata = manifest.find(skill_id)
        if metadata is None:
            raise SkillNotFoundError(skill_id, manifest.skill_ids)

        readme = await self._fetch_optional(self._skill_url(skill_id, README_FILENAME)) or ""
        rule_paths = self._cap_rules(skill_id, await self.resolve_rules(skill_id, metadata))
        rules_content = await self._fetch_rules(skill_id, rule_paths)
        content_hash = source_utils.compute_content_hash(rule_paths, rules_content)

        logger.info(
            "Downloaded skill",
            data={
                "skill": skill_id,
                "rules_resolved": len(rule_paths),
                "rules_fetched": len(rules_content),
                "content_hash": content_hash,
            },
        )
        return SkillDownload(
            metadata=metadata,
            readme=readme,
            rules_content=rules_content,
            content_hash=content_hash,
            rule_paths=rule_paths,
        )

    async def resolve_rules(self, skill_id: str, metadata: ManifestEntry) -> list[str]:
        """Rule paths from the manifest entry, else from ``skill.yaml``.

        The two sources are never merged.
        """
        if metadata.rules:
            return list(metadata.rules)

        descriptor = await self._fetch_optional(
            self._skill_url(skill_id, SKILL_DESCRIPTOR_FILENAME)
        )
        if not descriptor:
            return []
        rules = source_utils.parse_rules_from_yaml(descriptor)
        for rule in rules:
            if is_suspicious_rule_path(rule):
                raise SuspiciousRulePathError(skill_id, rule)
        return rules

    def _cap_rules(self, skill_id: str, rule_paths: list[str]) -> list[str]:
        if len(rule_paths) <= self.max_rules:
            return rule_paths
        logger.warning(
            "Rule list truncated",
            data={"skill": skill_id, "resolved": len(rule_paths), "limit": self.max_rules},
        )
        return rule_paths[: self.max_rules]

    async def _fetch_rules(self, skill_id: str, rule_paths: list[str]) -> dict[str, str]:
        """Fetch every rule concurrently, keyed in resolution order.

        Unavailable rules are dropped. A security error in one fetch cancels
        the others and is raised as-is.
        """
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(
                        self._fetch_optional(self._skill_url(skill_id, path), missing=None)
                    )
                    for path in rule_paths
                ]
        except ExceptionGroup as errors:
            raise errors.exceptions[0] from None
        rules_content: dict[str, str] = {}
        for path, task in zip(rule_paths, tasks, strict=True):
            content = task.result()
            if content is not None:
                rules_content[path] = content
        return rules_content

    async def _fetch_optional(self, url: str, missing: str | None = "") -> str | None:
        try:
            response = await self.fetcher.fetch(url)
            if response.ok:
                return response.text
        except FetchError as exc:
            logger.debug("Optional fetch failed", data={"url": url, "error": str(exc)})
            return missing
        logger.debug(
            "Optional resource unavailable",
            data={"url": url, "status": response.status_code},
        )
        return missing

    def _skill_url(self, skill_id: str, relative_path: str) -> str:
        return self.repository.raw_url("skills", skill_id, relative_path)
