"""Creating and removing directories, logging what goes wrong."""

from __future__ import annotations

import contextlib
import os
import stat

from confprobe.logs import error

_DIR_MODE = stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH


def create_dir(path: str | os.PathLike[str]) -> None:
    """Create the directory ``path`` (mode rwxr-xr--).

    Logs the failure and re-raises the ``OSError`` if it cannot be made.
    """
    try:
        os.mkdir(path, _DIR_MODE)
    except OSError as exc:
        error(f"create {os.fspath(path)} failed: {exc.strerror}.\n")
        raise


def delete_dir(path: str | os.PathLike[str]) -> None:
    """Remove ``path`` and everything below it.

    Symbolic links are removed, never followed. Only a failure to open
    ``path`` itself is raised; failures further down are logged or ignored.
    """
    try:
        entries = list(os.scandir(path))
    except OSError as exc:
        error(f"open {os.fspath(path)} failed: {exc.strerror}.\n")
        raise

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            with contextlib.suppress(OSError):
                delete_dir(entry.path)
        else:
            with contextlib.suppress(OSError):
                os.unlink(entry.path)

    with contextlib.suppress(OSError):
        os.rmdir(path)