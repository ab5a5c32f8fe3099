"""Keep generated files inside the requested output directory."""

from __future__ import annotations

import os
from pathlib import Path

from skills_hub.core.exceptions import PathTraversalError


def resolve_output_path(output_dir: str | os.PathLike[str], filename: str) -> Path:
    """Resolve ``filename`` against ``output_dir``, refusing to leave it.

    Pure path arithmetic: the filesystem is not consulted, so symlinks are not
    followed. The result is either ``output_dir`` itself or a path strictly
    below it.
    """
    normalized = os.path.normpath(filename)
    if ".." in Path(normalized).parts:
        raise PathTraversalError(
            f'Invalid file name: "{filename}" contains unsafe relative segments'
        )

    resolved_dir = os.path.abspath(os.fspath(output_dir))
    resolved_file = os.path.abspath(os.path.join(resolved_dir, normalized))
    if not is_within_directory(resolved_dir, resolved_file):
        raise PathTraversalError(
            "Path outside the allowed directory",
            f"Allowed:  {resolved_dir}\nReceived: {resolved_file}",
        )
    return Path(resolved_file)


def is_within_directory(directory: str, candidate: str) -> bool:
    if candidate == directory:
        return True
    prefix = directory if directory.endswith(os.sep) else directory + os.sep
    return candidate.startswith(prefix)
