"""Immutable lookup from platform key to formatter."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

from skills_hub.core.exceptions import UnsupportedPlatformError
from skills_hub.platforms.claude import ClaudeFormatter
from skills_hub.platforms.cursor import CursorFormatter
from skills_hub.platforms.openai import OpenAIFormatter
from skills_hub.platforms.windsurf import WindsurfFormatter

if TYPE_CHECKING:
    from collections.abc import Iterable

    from skills_hub.platforms.base import Formatter


class FormatterRegistry:
    """A fixed set of formatters, built once and handed to the skill manager."""

    def __init__(self, formatters: Iterable[Formatter]) -> None:
        entries: dict[str, Formatter] = {}
        for formatter in formatters:
            if formatter.platform in entries:
                raise ValueError(f"Duplicate formatter for platform: {formatter.platform}")
            entries[formatter.platform] = formatter
        self._formatters = MappingProxyType(entries)

    @property
    def platforms(self) -> tuple[str, ...]:
        return tuple(self._formatters)

    def get(self, platform: str) -> Formatter:
        formatter = self._formatters.get(platform)
        if formatter is None:
            raise UnsupportedPlatformError(platform, self.platforms)
        return formatter

    def is_supported(self, platform: str) -> bool:
        return platform in self._formatters

    def list_all(self) -> list[Formatter]:
        return list(self._formatters.values())

    def __contains__(self, platform: object) -> bool:
        return platform in self._formatters

    def __len__(self) -> int:
        return len(self._formatters)


def default_formatter_registry() -> FormatterRegistry:
    return FormatterRegistry(
        [
            ClaudeFormatter(),
            CursorFormatter(),
            OpenAIFormatter(),
            WindsurfFormatter(),
        ]
    )
