from __future__ import annotations

from typing import TYPE_CHECKING

from skills_hub.platforms.base import Formatter, join_sections

if TYPE_CHECKING:
    from skills_hub.skills.models import Skill


class ClaudeFormatter(Formatter):
    """Markdown custom instructions with the full skill context."""

    platform = "claude"
    filename = ".claude/custom-instructions.md"

    def render(self, skill: Skill) -> str:
        sections = [
            f"# {skill.name}",
            "",
            f"**Version:** {skill.version}",
            f"**Category:** {skill.category}",
        ]
        if skill.author:
            sections.append(f"**Author:** {skill.author}")
        sections.extend(["", "## Description", "", skill.description, ""])

        if skill.tags:
            sections.extend(["## Tags", "", ", ".join(f"`{tag}`" for tag in skill.tags), ""])

        sections.extend(["## Guidelines", ""])
        for content in skill.rules_content.values():
            sections.append(content)
            sections.append("")

        return join_sections(sections)
