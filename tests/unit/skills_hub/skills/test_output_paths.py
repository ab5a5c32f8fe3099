from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

from skills_hub.core.exceptions import PathTraversalError
from skills_hub.skills.paths import is_within_directory, resolve_output_path

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.parametrize(
    "filename",
    [
        ".cursorrules",
        ".claude/custom-instructions.md",
        "nested/dir/file.txt",
        "./gpt-instructions.txt",
    ],
)
def test_relative_filenames_stay_inside_output_dir(tmp_path: Path, filename: str) -> None:
    resolved = resolve_output_path(tmp_path, filename)

    assert resolved.is_absolute()
    assert str(resolved).startswith(str(tmp_path) + os.sep)
    assert not resolved.exists()


@pytest.mark.parametrize("filename", ["../evil", "a/../../evil", "../../etc/passwd"])
def test_traversal_segments_are_rejected(tmp_path: Path, filename: str) -> None:
    with pytest.raises(PathTraversalError) as exc_info:
        resolve_output_path(tmp_path, filename)

    assert "Invalid file name" in str(exc_info.value)


def test_inner_dot_dot_that_stays_inside_is_normalized(tmp_path: Path) -> None:
    assert resolve_output_path(tmp_path, "a/../b.txt") == tmp_path / "b.txt"


def test_absolute_filename_outside_dir_is_rejected(tmp_path: Path) -> None:
    outside = tmp_path.parent / "elsewhere" / "file.txt"

    with pytest.raises(PathTraversalError) as exc_info:
        resolve_output_path(tmp_path / "out", str(outside))

    assert "outside the allowed directory" in str(exc_info.value)
    assert str(outside) in exc_info.value.details


def test_filename_resolving_to_output_dir_itself_is_allowed(tmp_path: Path) -> None:
    assert resolve_output_path(tmp_path, ".") == tmp_path


def test_sibling_directory_with_shared_prefix_is_outside(tmp_path: Path) -> None:
    base = str(tmp_path / "out")

    assert not is_within_directory(base, base + "-other" + os.sep + "file")
    assert is_within_directory(base, base + os.sep + "file")
    assert is_within_directory(base, base)


def test_relative_output_dir_is_resolved_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_output_path(".", ".cursorrules") == tmp_path / ".cursorrules"
