from __future__ import annotations

from typing import TYPE_CHECKING

from skills_hub.platforms.base import Formatter

if TYPE_CHECKING:
    from skills_hub.skills.models import Skill


class WindsurfFormatter(Formatter):
    platform = "windsurf"
    filename = ".windsurfrules"

    def render(self, skill: Skill) -> str:
        return self.rules_only(skill)
