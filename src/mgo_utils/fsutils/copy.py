"""
Directory and file copy helpers that preserve permission bits and mtimes.
"""

import os
import stat
import errno
import shutil
from typing import Optional
from mgo_utils.core import config
from mgo_utils.core.logger import Logger


def copy_file(source: str, destination: str) -> None:
    """Copy the contents of `source` into `destination`.

    The destination is created if missing and truncated otherwise. Data is
    flushed and fsynced before the source's permission bits and modification
    time are applied to the destination.
    """
    with open(source, "rb") as src_fh, open(destination, "wb") as dst_fh:
        shutil.copyfileobj(src_fh, dst_fh)
        dst_fh.flush()
        os.fsync(dst_fh.fileno())

    st = os.stat(source)
    os.chmod(destination, stat.S_IMODE(st.st_mode))
    os.utime(destination, ns=(st.st_mtime_ns, st.st_mtime_ns))


def copy_dir(source: str, destination: str, crush: bool = False,
             logger: Optional[Logger] = None) -> None:
    """Recursively copy the directory tree at `source` into `destination`.

    Args:
        source: Existing directory to copy.
        destination: Target directory. Created (with any missing parents) when
            absent.
        crush: Allow an existing destination; files at matching paths are
            overwritten.
        logger: Optional logger receiving a trace line per copied file.

    Symbolic links are skipped. The first error aborts the copy; entries
    already copied are left in place.

    Raises:
        NotADirectoryError: If `source` is not a directory.
        FileExistsError: If `destination` exists and `crush` is false.
        OSError: EINVAL if `destination` is `source` or lies inside it, or
            any underlying filesystem failure.
    """
    source = os.path.normpath(source)
    destination = os.path.normpath(destination)

    si = os.stat(source)
    if not stat.S_ISDIR(si.st_mode):
        raise NotADirectoryError(f"Source is not a directory: {source}")

    real_src = os.path.realpath(source)
    real_dst = os.path.realpath(destination)
    try:
        nested = os.path.commonpath([real_src, real_dst]) == real_src
    except ValueError:
        # different drives
        nested = False
    if nested:
        raise OSError(errno.EINVAL, "Destination is inside the source directory", destination)

    try:
        os.stat(destination)
    except FileNotFoundError:
        pass
    else:
        if not crush:
            raise FileExistsError(f"Destination already exists: {destination}")

    os.makedirs(destination, mode=stat.S_IMODE(si.st_mode), exist_ok=True)

    with os.scandir(source) as it:
        entries = list(it)
    if config.SORT_COPY_ENTRIES:
        entries.sort(key=lambda e: e.name)

    for entry in entries:
        src_path = os.path.join(source, entry.name)
        dst_path = os.path.join(destination, entry.name)

        if entry.is_symlink():
            continue
        if entry.is_dir(follow_symlinks=False):
            copy_dir(src_path, dst_path, crush, logger)
        else:
            copy_file(src_path, dst_path)
            if logger is not None:
                logger.trace(f"Copied {src_path} -> {dst_path}")
