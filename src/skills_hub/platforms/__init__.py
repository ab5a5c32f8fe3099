"""Per-platform formatters and platform detection."""

from skills_hub.platforms.base import Formatter
from skills_hub.platforms.detector import PlatformDetection, PlatformDetector
from skills_hub.platforms.registry import FormatterRegistry, default_formatter_registry

__all__ = [
    "Formatter",
    "FormatterRegistry",
    "PlatformDetection",
    "PlatformDetector",
    "default_formatter_registry",
]
