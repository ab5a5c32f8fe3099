"""Formatting helpers for installed-skill listings."""

from __future__ import annotations

from datetime import UTC, datetime


def format_content_hash_short(content_hash: str | None, *, length: int = 16) -> str:
    if content_hash is None:
        return "?"
    trimmed = content_hash.strip()
    if not trimmed:
        return "?"
    normalized = trimmed.lower()
    if len(normalized) > length and all(ch in "0123456789abcdef" for ch in normalized):
        return f"{trimmed[:length]}..."
    return trimmed


def format_installed_at_display(installed_at: str | None) -> str:
    if not installed_at:
        return "unknown"
    normalized = installed_at.strip()
    if not normalized:
        return "unknown"
    if normalized.endswith("Z"):
        normalized = f"{normalized[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        return installed_at
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%S")


def format_installed_at(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with a ``Z`` suffix, second precision."""
    return moment.astimezone(UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")
