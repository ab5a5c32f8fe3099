"""Guess the target platform from marker files in a project directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from skills_hub.skills.models import Platform

Confidence = Literal["high", "medium", "low"]

PLATFORM_MARKERS: tuple[tuple[Platform, tuple[str, ...]], ...] = (
    ("cursor", (".cursorrules", ".cursor/rules")),
    ("windsurf", (".windsurfrules", ".windsurf/rules")),
    ("claude", (".claude/project.md", ".claude/instructions.md")),
)


@dataclass(frozen=True)
class PlatformDetection:
    platform: Platform | None
    confidence: Confidence
    evidence: list[str] = field(default_factory=list)


class PlatformDetector:
    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd or Path.cwd()

    def detect(self) -> PlatformDetection:
        for platform, markers in PLATFORM_MARKERS:
            evidence = [f"Found {marker}" for marker in markers if (self.cwd / marker).exists()]
            if evidence:
                return PlatformDetection(platform=platform, confidence="high", evidence=evidence)
        return PlatformDetection(
            platform=None,
            confidence="low",
            evidence=["No platform-specific files found"],
        )
