from __future__ import annotations

from typing import TYPE_CHECKING

from skills_hub.platforms.base import Formatter

if TYPE_CHECKING:
    from skills_hub.skills.models import Skill


class CursorFormatter(Formatter):
    """Plain-text ``.cursorrules``: concise rules, no metadata."""

    platform = "cursor"
    filename = ".cursorrules"

    def render(self, skill: Skill) -> str:
        return self.rules_only(skill)
