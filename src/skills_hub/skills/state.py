"""The ``.skillsrc.json`` record of installed skills."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skills_hub.core.exceptions import StateFileError
from skills_hub.core.logging.logger import get_logger
from skills_hub.skills.models import Platform

logger = get_logger(__name__)


class InstalledSkillRecord(BaseModel):
    id: str
    version: str
    source: str
    installed_at: str = Field(alias="installedAt")
    platform: Platform
    content_hash: str | None = Field(default=None, alias="contentHash")
    content_hash_algorithm: Literal["sha-256"] | None = Field(
        default=None, alias="contentHashAlgorithm"
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class SkillsConfig(BaseModel):
    platform: Platform | Literal["auto"] = "auto"
    output_path: str = Field(default=".", alias="outputPath")
    installed_skills: list[InstalledSkillRecord] = Field(
        default_factory=list, alias="installedSkills"
    )

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def find(self, skill_id: str) -> InstalledSkillRecord | None:
        for record in self.installed_skills:
            if record.id == skill_id:
                return record
        return None


class SkillsStateStore:
    """Read and write the local state file.

    Reads are forgiving about optional fields and strict about corruption:
    a file that is not a JSON object cannot be repaired automatically, so the
    user is asked to delete it.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> SkillsConfig:
        if not self.path.exists():
            return SkillsConfig()

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise self._corrupt(f"could not be parsed ({exc})") from exc
        if not isinstance(payload, dict):
            raise self._corrupt("root must be a JSON object")

        payload = _apply_defaults(payload)
        try:
            return SkillsConfig.model_validate(payload)
        except ValidationError as exc:
            raise self._corrupt(f"contains invalid entries ({exc.error_count()} errors)") from exc

    def save(self, config: SkillsConfig) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = config.model_dump(mode="json", by_alias=True, exclude_none=True)
        self.path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    def list_installed(self) -> list[InstalledSkillRecord]:
        return list(self.load().installed_skills)

    def add_installed_skill(self, record: InstalledSkillRecord) -> None:
        """Insert ``record``, replacing any record with the same id."""
        config = self.load()
        config.installed_skills = [
            existing for existing in config.installed_skills if existing.id != record.id
        ]
        config.installed_skills.append(record)
        self.save(config)

    def remove_installed_skill(self, skill_id: str) -> bool:
        config = self.load()
        remaining = [record for record in config.installed_skills if record.id != skill_id]
        if len(remaining) == len(config.installed_skills):
            return False
        config.installed_skills = remaining
        self.save(config)
        return True

    def _corrupt(self, reason: str) -> StateFileError:
        return StateFileError(
            f"State file {self.path} {reason}",
            "Delete the file and retry.",
        )


def _apply_defaults(payload: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(payload)
    if not isinstance(normalized.get("installedSkills"), list):
        if "installedSkills" in normalized:
            logger.warning(
                "Ignoring non-list installedSkills in state file",
                data={"type": type(normalized["installedSkills"]).__name__},
            )
        normalized["installedSkills"] = []
    if not isinstance(normalized.get("platform"), str):
        normalized["platform"] = "auto"
    if not isinstance(normalized.get("outputPath"), str):
        normalized["outputPath"] = "."
    return normalized
