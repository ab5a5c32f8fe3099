from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from skills_hub.marketplace.github_client import SkillDownload
    from skills_hub.marketplace.manifest import PlatformConfig

Platform = Literal["claude", "cursor", "openai", "windsurf"]


@dataclass(frozen=True)
class Skill:
    """A fully hydrated skill, ready to be rendered by exactly one formatter."""

    id: str
    name: str
    version: str
    category: str = ""
    description: str = ""
    author: str | None = None
    subcategory: str | None = None
    tags: list[str] = field(default_factory=list)
    difficulty: str | None = None
    license: str | None = None
    rules: list[str] | None = None
    platforms: PlatformConfig = field(default_factory=dict)
    readme: str = ""
    rules_content: dict[str, str] = field(default_factory=dict)
    path: str = ""

    @classmethod
    def from_download(cls, download: SkillDownload) -> Skill:
        metadata = download.metadata
        return cls(
            id=metadata.id,
            name=metadata.name,
            version=metadata.version,
            category=metadata.category,
            description=metadata.description,
            author=metadata.author,
            subcategory=metadata.subcategory,
            tags=list(metadata.tags),
            difficulty=metadata.difficulty,
            license=metadata.license,
            rules=list(metadata.rules) if metadata.rules is not None else None,
            platforms=dict(metadata.platforms),
            readme=download.readme,
            rules_content=dict(download.rules_content),
            path=f"skills/{metadata.id}",
        )


@dataclass(frozen=True)
class InstallOptions:
    repo_url: str
    skill_id: str
    platform: str | None = None
    output_dir: str | Path = "."


@dataclass(frozen=True)
class InstallResult:
    skill_name: str
    version: str
    platform: Platform
    output_file: Path
    config_path: Path
    content_hash: str


@dataclass(frozen=True)
class RemoveResult:
    skill_id: str
    platform: Platform
    output_file: Path
    file_removed: bool
