"""
Existence checks that distinguish regular files from directories.
"""

import os
import stat


def file_exists(path: str) -> bool:
    """Return True only if `path` exists and is a regular file."""
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False


def dir_exists(path: str) -> bool:
    """Return True only if `path` exists and is a directory."""
    try:
        return stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError):
        return False
