"""Base class shared by the per-platform skill formatters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Sequence

    from skills_hub.skills.models import Platform, Skill


class Formatter(ABC):
    """Render a :class:`Skill` into the configuration text of one platform.

    Formatters are pure: no I/O, and no failure for a well-formed skill.
    ``filename`` is relative to the output directory and is still passed
    through the output path guard before anything is written.
    """

    platform: ClassVar[Platform]
    filename: ClassVar[str]

    @abstractmethod
    def render(self, skill: Skill) -> str: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(platform={self.platform!r}, filename={self.filename!r})"

    def rules_only(self, skill: Skill) -> str:
        """Rule contents only, each followed by a blank line."""
        sections: list[str] = []
        for content in skill.rules_content.values():
            sections.append(content)
            sections.append("")
        return join_sections(sections)

    def conversational(self, skill: Skill) -> str:
        sections = [
            f"You are an expert in {skill.category}.",
            "",
            skill.description,
            "",
            "Follow these guidelines:",
            "",
        ]
        for content in skill.rules_content.values():
            sections.append(content)
            sections.append("")
        return join_sections(sections)


def join_sections(sections: Sequence[str]) -> str:
    if not sections:
        return ""
    return "\n".join(sections) + "\n"
