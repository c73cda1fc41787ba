"""
Path helpers for diagnostic output.
"""

import os
from pathlib import Path


def relative_to_cwd(file: str) -> str:
    """
    Render a path relative to the current working directory.

    Paths outside the working directory, relative paths, pseudo-files such
    as "nofile" and paths that cannot be resolved are returned unchanged.
    """
    path = Path(file)
    if not path.is_absolute():
        return file

    try:
        cwd = Path(os.getcwd())
    except OSError:
        return file

    try:
        return path.relative_to(cwd).as_posix()
    except ValueError:
        pass

    # Symlinked working directories only compare equal once resolved
    try:
        return path.resolve().relative_to(cwd.resolve()).as_posix()
    except (OSError, ValueError, RuntimeError):
        return file
