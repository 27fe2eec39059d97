"""Readers for the Linux process filesystem."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from procexplorer.errors import ProcRootError
from procexplorer.parser import decode_text

logger = logging.getLogger(__name__)

PROC_ROOT = "/proc"


def iter_pid_dirs(root: str | os.PathLike[str] = PROC_ROOT) -> Iterator[tuple[int, Path]]:
    """
    Yield ``(pid, path)`` for every numeric directory under the proc root.

    Entries are yielded lazily in the order the kernel lists them. Names that
    are not unsigned decimal integers (``self``, ``net``, ...) are skipped.

    Raises:
        ProcRootError: If the root itself cannot be opened.
    """
    try:
        entries = os.scandir(root)
    except OSError as exc:
        raise ProcRootError(os.fspath(root), exc) from exc

    with entries:
        for entry in entries:
            # str.isdigit() also accepts non-ASCII digits
            if not (entry.name.isascii() and entry.name.isdigit()):
                continue
            try:
                is_dir = entry.is_dir()
            except OSError as exc:
                logger.warning("Skipping %s: %s", entry.path, exc)
                continue
            if not is_dir:
                logger.debug("Skipping non-directory entry %s", entry.path)
                continue
            yield int(entry.name), Path(entry.path)


def read_cmdline(pid_dir: Path) -> str:
    """
    Read the argument vector of a process as a single line.

    NUL separators become spaces and trailing spaces are dropped, so kernel
    threads (whose cmdline file is empty) yield an empty string.
    """
    raw = (pid_dir / "cmdline").read_bytes()
    return decode_text(raw.replace(b"\x00", b" ").rstrip(b" "))


def read_stat(pid_dir: Path) -> bytes:
    """Read the raw contents of /proc/<pid>/stat."""
    return (pid_dir / "stat").read_bytes()
