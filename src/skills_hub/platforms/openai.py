from __future__ import annotations

from typing import TYPE_CHECKING

from skills_hub.platforms.base import Formatter

if TYPE_CHECKING:
    from skills_hub.skills.models import Skill


class OpenAIFormatter(Formatter):
    """Custom GPT instructions, framed as natural-language guidance."""

    platform = "openai"
    filename = "gpt-instructions.txt"

    def render(self, skill: Skill) -> str:
        return self.conversational(skill)
