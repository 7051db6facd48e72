"""Atomic manifest writer."""

from __future__ import annotations

import os
import stat
import tempfile

from errors import ManifestWriteError


def _target_mode(target: str) -> int:
    """Mode of the file being replaced, or the umask default for a new one."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_manifest(path: str, content: str) -> str:
    """Replace ``path`` with ``content`` in one step.

    The text goes to a temporary file in the target directory which is then
    moved over ``path``; a failure at any point leaves the previous file
    untouched and removes the temporary one. The result keeps the mode of
    the file it replaces.

    Raises:
        ManifestWriteError: when the directory or file cannot be written.
    """
    target = os.path.abspath(path)
    directory = os.path.dirname(target)
    tmp_path = None
    try:
        mode = _target_mode(target)
        fd, tmp_path = tempfile.mkstemp(
            prefix=".finddeps-", suffix=".tmp", dir=directory
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates the file 0600
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
        tmp_path = None
    except OSError as exc:
        raise ManifestWriteError(target, str(exc)) from exc
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)
    return target
