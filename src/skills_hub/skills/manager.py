from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, cast

from skills_hub.config import Settings, get_settings
from skills_hub.core.exceptions import PlatformDetectionError, SkillNotInstalledError
from skills_hub.core.logging.logger import get_logger
from skills_hub.marketplace import formatting as marketplace_formatting
from skills_hub.marketplace.github_client import GitHubSkillSource
from skills_hub.marketplace.source_utils import CONTENT_HASH_ALGORITHM
from skills_hub.platforms.detector import PlatformDetector
from skills_hub.platforms.registry import FormatterRegistry, default_formatter_registry
from skills_hub.skills.models import (
    InstallOptions,
    InstallResult,
    Platform,
    RemoveResult,
    Skill,
)
from skills_hub.skills.paths import resolve_output_path
from skills_hub.skills.state import InstalledSkillRecord, SkillsStateStore

if TYPE_CHECKING:
    from skills_hub.marketplace.github_client import SkillDownload

logger = get_logger(__name__)


class SkillSource(Protocol):
    async def download_skill(self, skill_id: str) -> SkillDownload: ...


SourceFactory = Callable[[str], SkillSource]


class SkillManager:
    """Install, list and remove skills in a project directory.

    Install runs the whole pipeline: platform selection, download, render,
    output path guard, write, then the state record. Anything failing before
    the write leaves the filesystem untouched. The write and the state update
    are not transactional; reinstalling the same id repairs both.
    """

    def __init__(
        self,
        *,
        formatters: FormatterRegistry | None = None,
        state_store: SkillsStateStore | None = None,
        source_factory: SourceFactory | None = None,
        detector: PlatformDetector | None = None,
        settings: Settings | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.formatters = formatters or default_formatter_registry()
        self.state_store = state_store or SkillsStateStore(self.settings.resolve_state_path())
        self.source_factory: SourceFactory = source_factory or self._default_source
        self.detector = detector or PlatformDetector()
        self.clock = clock or (lambda: datetime.now(UTC))

    @property
    def config_path(self) -> Path:
        return self.state_store.path

    async def install(self, options: InstallOptions) -> InstallResult:
        if options.platform is not None:
            platform = self._validate_platform(options.platform)
        else:
            platform = self.detect_platform(options.repo_url, options.skill_id)
        formatter = self.formatters.get(platform)

        source = self.source_factory(options.repo_url)
        download = await source.download_skill(options.skill_id)
        skill = Skill.from_download(download)

        rendered = formatter.render(skill)
        output_file = resolve_output_path(options.output_dir, formatter.filename)

        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(rendered, encoding="utf-8")
        logger.info(
            "Wrote platform file",
            data={"skill": skill.id, "platform": platform, "path": str(output_file)},
        )

        self.state_store.add_installed_skill(
            InstalledSkillRecord(
                id=skill.id,
                version=skill.version,
                source=options.repo_url,
                installed_at=marketplace_formatting.format_installed_at(self.clock()),
                platform=platform,
                content_hash=download.content_hash,
                content_hash_algorithm=CONTENT_HASH_ALGORITHM,
            )
        )

        return InstallResult(
            skill_name=skill.name,
            version=skill.version,
            platform=platform,
            output_file=output_file,
            config_path=self.config_path,
            content_hash=download.content_hash,
        )

    def list_installed(self) -> list[InstalledSkillRecord]:
        return self.state_store.list_installed()

    def remove(self, skill_id: str, *, output_dir: str | Path = ".") -> RemoveResult:
        config = self.state_store.load()
        record = config.find(skill_id)
        if record is None:
            raise SkillNotInstalledError(
                skill_id, [installed.id for installed in config.installed_skills]
            )

        formatter = self.formatters.get(record.platform)
        output_file = resolve_output_path(output_dir, formatter.filename)
        file_removed = False
        if output_file.is_file():
            output_file.unlink()
            file_removed = True
            logger.info("Removed platform file", data={"path": str(output_file)})

        self.state_store.remove_installed_skill(skill_id)
        return RemoveResult(
            skill_id=skill_id,
            platform=record.platform,
            output_file=output_file,
            file_removed=file_removed,
        )

    def detect_platform(self, repo_url: str, skill_id: str) -> Platform:
        detection = self.detector.detect()
        if detection.platform is None:
            raise PlatformDetectionError(
                "Could not detect platform, specify it explicitly.",
                f"Example: skills add {repo_url} --skill {skill_id} --platform cursor",
            )
        logger.info(
            "Detected platform",
            data={"platform": detection.platform, "evidence": detection.evidence},
        )
        return detection.platform

    def _validate_platform(self, platform: str) -> Platform:
        # raises UnsupportedPlatformError naming every supported key
        self.formatters.get(platform)
        return cast("Platform", platform)

    def _default_source(self, repo_url: str) -> SkillSource:
        return GitHubSkillSource(repo_url, branch=self.settings.default_branch)
