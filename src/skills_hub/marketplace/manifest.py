"""Validation of the untrusted ``manifest.json`` published by a skills repository.

:func:`validate_manifest` is the only defence against a compromised manifest
host. Structural checks run first and fail fast with a specific message; the
document is then converted into typed models. Unknown fields are kept
(``model_extra``) so nothing in the published document is silently changed.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from skills_hub.core.exceptions import ManifestValidationError, SuspiciousRulePathError


class PlatformSupport(BaseModel):
    enabled: bool = True
    adapter: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)


PlatformConfig = dict[str, PlatformSupport]


class ManifestEntry(BaseModel):
    id: str
    name: str
    version: str
    author: str | None = None
    category: str = ""
    subcategory: str | None = None
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    difficulty: str | None = None
    license: str | None = None
    platforms: PlatformConfig = Field(default_factory=dict)
    rules: list[str] | None = None
    rules_count: Any = Field(default=None, alias="rulesCount")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @field_validator("platforms", mode="before")
    @classmethod
    def _normalize_platforms(cls, value: Any) -> Any:
        return normalize_platforms(value)

    @field_validator(
        "category", "description", "author", "subcategory", "difficulty", "license", mode="before"
    )
    @classmethod
    def _display_text(cls, value: Any, info: ValidationInfo) -> Any:
        # None takes the field default; any other value is kept as text
        if value is None:
            return cls.model_fields[info.field_name].default
        return value if isinstance(value, str) else str(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            return []
        return [tag if isinstance(tag, str) else str(tag) for tag in value if tag is not None]


class Manifest(BaseModel):
    version: Any = None
    generated: Any = None
    repository: Any = None
    count: Any = None
    skills: list[ManifestEntry]

    model_config = ConfigDict(extra="allow")

    @property
    def skill_ids(self) -> list[str]:
        return [entry.id for entry in self.skills]

    def find(self, skill_id: str) -> ManifestEntry | None:
        for entry in self.skills:
            if entry.id == skill_id:
                return entry
        return None


def normalize_platforms(value: Any) -> dict[str, Any]:
    """Collapse the list and map forms of ``platforms`` into the map form.

    ``["cursor", "claude"]`` and ``{"cursor": {"enabled": true}, ...}`` both
    produce ``{"cursor": {"enabled": True, "adapter": None}, ...}``.
    """
    if value is None:
        return {}
    if isinstance(value, list):
        return {
            name: {"enabled": True, "adapter": None}
            for name in value
            if isinstance(name, str) and name
        }
    if isinstance(value, dict):
        normalized: dict[str, Any] = {}
        for name, config in value.items():
            if isinstance(config, bool):
                normalized[name] = {"enabled": config, "adapter": None}
            elif isinstance(config, dict):
                adapter = config.get("adapter")
                normalized[name] = {
                    "enabled": bool(config.get("enabled", False)),
                    "adapter": adapter if isinstance(adapter, str) else None,
                }
            else:
                normalized[name] = {"enabled": False, "adapter": None}
        return normalized
    return {}


def is_suspicious_rule_path(rule: str) -> bool:
    return ".." in rule or rule.startswith("/")


def parse_manifest_text(text: str) -> Manifest:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestValidationError("response is not valid JSON", str(exc)) from exc
    return validate_manifest(data)


def validate_manifest(data: Any) -> Manifest:
    _assert_object(data)
    skills = data.get("skills")
    if not isinstance(skills, list):
        raise ManifestValidationError('missing "skills" field (array)')
    for raw in skills:
        _validate_skill(raw)

    try:
        return Manifest.model_validate(data)
    except ValidationError as exc:
        raise ManifestValidationError("malformed skill entry", str(exc)) from exc


def _assert_object(data: Any) -> None:
    if not isinstance(data, dict):
        raise ManifestValidationError("response is not a JSON object")


def _validate_skill(raw: Any) -> None:
    if not isinstance(raw, dict):
        raise ManifestValidationError("skill with invalid shape")

    skill_id = raw.get("id")
    if not isinstance(skill_id, str) or not skill_id:
        raise ManifestValidationError('skill without a string "id" field')
    if not isinstance(raw.get("name"), str):
        raise ManifestValidationError(f'skill "{skill_id}" has no "name" field')
    if not isinstance(raw.get("version"), str):
        raise ManifestValidationError(f'skill "{skill_id}" has no "version" field')

    if "rules" in raw:
        _validate_rule_paths(skill_id, raw["rules"])


def _validate_rule_paths(skill_id: str, rules: Any) -> None:
    if not isinstance(rules, list):
        raise ManifestValidationError(f'"rules" in "{skill_id}" must be an array')
    for rule in rules:
        if not isinstance(rule, str):
            raise ManifestValidationError(f'rule path is not a string in "{skill_id}"')
        if is_suspicious_rule_path(rule):
            raise SuspiciousRulePathError(skill_id, rule)
