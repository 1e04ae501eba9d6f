"""
Filesystem and text helper package.
"""

from .copy import copy_dir, copy_file
from .checks import file_exists, dir_exists
from .text import md5_hash, read_line

__all__ = ["copy_dir", "copy_file", "file_exists", "dir_exists", "md5_hash", "read_line"]
