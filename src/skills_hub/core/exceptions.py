"""Exception hierarchy for skills-hub.

Errors fall into four families:

* security violations: never retried, always fatal;
* not-found errors: the message enumerates the valid alternatives;
* fetch errors: fatal for required resources, degraded to empty values for
  optional ones;
* local state and configuration errors: fatal with a remediation hint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class SkillsHubError(Exception):
    """Base class for every error raised by skills-hub."""

    def __init__(self, message: str, details: str = "") -> None:
        self.message = message
        self.details = details
        super().__init__(f"{message}\n{details}" if details else message)


class SecurityViolationError(SkillsHubError):
    """Untrusted input tried to cross a security boundary."""


class HostNotAllowedError(SecurityViolationError):
    def __init__(self, url: str, host: str, allowed_host: str) -> None:
        self.url = url
        self.host = host
        super().__init__(
            f"[Security] Host not allowed: {host or '(none)'}",
            f"Only {allowed_host} repositories are supported: {url}",
        )


class PathTraversalError(SecurityViolationError):
    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(f"[Security] {message}", details)


class ResponseTooLargeError(SecurityViolationError):
    def __init__(self, url: str, size: int, limit: int) -> None:
        self.url = url
        self.size = size
        self.limit = limit
        super().__init__(
            f"[Security] Response too large ({size:,} bytes, max {limit:,}): {url}"
        )


class ManifestValidationError(SecurityViolationError):
    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(f"[Security] Invalid manifest: {message}", details)


class SuspiciousRulePathError(ManifestValidationError):
    def __init__(self, skill_id: str, rule_path: str) -> None:
        self.skill_id = skill_id
        self.rule_path = rule_path
        SkillsHubError.__init__(
            self, f'[Security] Suspicious rule path in "{skill_id}": "{rule_path}"'
        )


class NotFoundError(SkillsHubError):
    """A requested item does not exist; the message lists what does."""


def _join_choices(choices: Iterable[str]) -> str:
    return ", ".join(choices) or "(none)"


class SkillNotFoundError(NotFoundError):
    def __init__(self, skill_id: str, available: Iterable[str]) -> None:
        self.skill_id = skill_id
        self.available = list(available)
        super().__init__(
            f'Skill "{skill_id}" not found in manifest.',
            f"Available: {_join_choices(self.available)}",
        )


class UnsupportedPlatformError(NotFoundError):
    def __init__(self, platform: str, supported: Iterable[str]) -> None:
        self.platform = platform
        self.supported = list(supported)
        super().__init__(
            f'Unsupported platform: "{platform}"',
            f"Supported: {_join_choices(self.supported)}",
        )


class SkillNotInstalledError(NotFoundError):
    def __init__(self, skill_id: str, installed: Iterable[str]) -> None:
        self.skill_id = skill_id
        self.installed = list(installed)
        super().__init__(
            f'Skill "{skill_id}" is not installed',
            f"Installed skills: {_join_choices(self.installed)}",
        )


class FetchError(SkillsHubError):
    """A network request failed or returned an unusable status."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class FetchTimeoutError(FetchError):
    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Request timed out after {timeout:g}s: {url}", url)


class InvalidRepositoryError(SkillsHubError):
    """The repository reference is not a usable owner/repo URL."""


class PlatformDetectionError(SkillsHubError):
    """No platform marker files were found in the working directory."""


class StateFileError(SkillsHubError):
    """The local state file exists but cannot be used."""


class ConfigFileError(SkillsHubError):
    """The configuration file or a ``SKILLS_HUB_*`` variable is invalid."""
