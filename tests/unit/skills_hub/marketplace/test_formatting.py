from datetime import UTC, datetime, timedelta, timezone

from skills_hub.marketplace import formatting


def test_format_content_hash_short_for_sha256_digest() -> None:
    digest = "0123456789abcdef" * 4
    assert formatting.format_content_hash_short(digest) == "0123456789abcdef..."


def test_format_content_hash_short_for_missing_hash() -> None:
    assert formatting.format_content_hash_short(None) == "?"
    assert formatting.format_content_hash_short("  ") == "?"


def test_format_installed_at_display_with_z_suffix() -> None:
    assert (
        formatting.format_installed_at_display("2026-02-25T01:02:03Z")
        == "2026-02-25 01:02:03"
    )


def test_format_installed_at_display_with_millisecond_timestamp() -> None:
    assert (
        formatting.format_installed_at_display("2026-02-25T01:02:03.456Z")
        == "2026-02-25 01:02:03"
    )


def test_format_installed_at_display_keeps_unparseable_values() -> None:
    assert formatting.format_installed_at_display("yesterday") == "yesterday"
    assert formatting.format_installed_at_display(None) == "unknown"


def test_format_installed_at_normalizes_to_utc_seconds() -> None:
    moment = datetime(2026, 2, 25, 3, 2, 3, 999, tzinfo=timezone(timedelta(hours=2)))

    assert formatting.format_installed_at(moment) == "2026-02-25T01:02:03Z"
    assert formatting.format_installed_at(moment.astimezone(UTC)) == "2026-02-25T01:02:03Z"
