from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest
from click.utils import strip_ansi
from typer.testing import CliRunner

import skills_hub.config as config_module
from skills_hub import __version__
from skills_hub.cli.main import app
from skills_hub.core.logging.logger import ROOT_LOGGER_NAME

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


@pytest.fixture(autouse=True)
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    for name in ("SKILLS_HUB_STATE_FILE", "SKILLS_HUB_OUTPUT_DIR", "SKILLS_HUB_LOGGER__LEVEL"):
        monkeypatch.delenv(name, raising=False)
    config_module.reset_settings()
    root = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, propagate = list(root.handlers), root.propagate
    yield tmp_path
    root.handlers[:] = handlers
    root.propagate = propagate
    config_module.reset_settings()


def _write_state(root: Path, *records: dict) -> None:
    (root / ".skillsrc.json").write_text(
        json.dumps({"platform": "auto", "outputPath": ".", "installedSkills": list(records)}),
        encoding="utf-8",
    )


def _invoke(*args: str):
    result = runner.invoke(app, list(args))
    return result, strip_ansi(result.output)


def test_version_option() -> None:
    result, output = _invoke("--version")

    assert result.exit_code == 0
    assert f"skills {__version__}" in output


def test_list_without_state_file(workspace: Path) -> None:
    result, output = _invoke("list")

    assert result.exit_code == 0
    assert "No skills installed yet" in output
    assert not (workspace / ".skillsrc.json").exists()


def test_list_shows_installed_skills(workspace: Path) -> None:
    _write_state(
        workspace,
        {
            "id": "react-patterns",
            "version": "1.2.0",
            "source": "https://github.com/acme/skills.git",
            "installedAt": "2026-03-04T05:06:07Z",
            "platform": "cursor",
            "contentHash": "0123456789abcdef" * 4,
            "contentHashAlgorithm": "sha-256",
        },
    )

    result, output = _invoke("list")

    assert result.exit_code == 0
    assert "react-patterns" in output
    assert "v1.2.0" in output
    assert "https://github.com/acme/skills" in output
    assert "2026-03-04 05:06:07" in output
    assert "0123456789abcdef..." in output
    assert "Total: 1 skill(s)" in output


def test_list_with_corrupt_state_file_fails(workspace: Path) -> None:
    (workspace / ".skillsrc.json").write_text("{oops", encoding="utf-8")

    result, output = _invoke("list")

    assert result.exit_code == 1
    assert "Delete the file and retry." in output


def test_add_with_unknown_platform_fails(workspace: Path) -> None:
    result, output = _invoke(
        "add", "https://github.com/acme/skills", "--skill", "foo", "--platform", "nonexistent"
    )

    assert result.exit_code == 1
    assert 'Unsupported platform: "nonexistent"' in output
    assert "claude, cursor, openai, windsurf" in output
    assert list(workspace.iterdir()) == []


def test_add_with_foreign_host_fails(workspace: Path) -> None:
    result, output = _invoke(
        "add", "https://gitlab.com/acme/skills", "--skill", "foo", "--platform", "cursor"
    )

    assert result.exit_code == 1
    assert "[Security] Host not allowed: gitlab.com" in output
    assert list(workspace.iterdir()) == []


def test_remove_unknown_skill_fails(workspace: Path) -> None:
    _write_state(workspace)
    before = (workspace / ".skillsrc.json").read_bytes()

    result, output = _invoke("remove", "ghost")

    assert result.exit_code == 1
    assert 'Skill "ghost" is not installed' in output
    assert (workspace / ".skillsrc.json").read_bytes() == before


def test_remove_installed_skill(workspace: Path) -> None:
    _write_state(
        workspace,
        {
            "id": "foo",
            "version": "1.0.0",
            "source": "https://github.com/acme/skills",
            "installedAt": "2026-03-04T05:06:07Z",
            "platform": "cursor",
        },
    )
    (workspace / ".cursorrules").write_text("Use tabs.\n\n", encoding="utf-8")

    result, output = _invoke("remove", "foo")

    assert result.exit_code == 0
    assert "Removed skill: foo" in output
    assert not (workspace / ".cursorrules").exists()
    state = json.loads((workspace / ".skillsrc.json").read_text(encoding="utf-8"))
    assert state["installedSkills"] == []


def test_state_file_location_comes_from_config_file(workspace: Path) -> None:
    (workspace / "skills-hub.yaml").write_text("state_file: state/skills.json\n", encoding="utf-8")
    (workspace / "state").mkdir()
    (workspace / "state" / "skills.json").write_text("{oops", encoding="utf-8")

    result, output = _invoke("list")

    assert result.exit_code == 1
    assert "Delete the file and retry." in output


@pytest.mark.parametrize(
    "config_text",
    ["- just\n- a list\n", "logger: [unclosed\n", "logger:\n  level: loud\n"],
)
def test_invalid_config_file_is_reported_without_traceback(
    workspace: Path, config_text: str
) -> None:
    (workspace / "skills-hub.yaml").write_text(config_text, encoding="utf-8")

    result, output = _invoke("list")

    assert result.exit_code == 1
    assert "Invalid configuration" in output
    assert "Traceback" not in output
