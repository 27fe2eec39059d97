"""Snapshot builder: one pass over /proc into immutable process records."""

import logging
import os
import time
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

from procexplorer.errors import StatParseError
from procexplorer.models import Process
from procexplorer.parser import parse_stat
from procexplorer.procfs import PROC_ROOT, iter_pid_dirs, read_cmdline, read_stat

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class SkipDiagnostic:
    """Why a PID was left out of a snapshot."""

    pid: int
    reason: str


@dataclass(slots=True, frozen=True)
class Snapshot:
    """
    Immutable, ordered collection of processes taken at one point in time.

    Order follows the directory listing of the proc root, which the kernel
    does not specify. Refreshing means building a new Snapshot.
    """

    processes: tuple[Process, ...]
    skipped: tuple[SkipDiagnostic, ...] = ()
    build_seconds: float = field(default=0.0, compare=False)

    def __len__(self) -> int:
        return len(self.processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(self.processes)

    def __getitem__(self, index: int) -> Process:
        return self.processes[index]


def build_snapshot(root: str | os.PathLike[str] = PROC_ROOT) -> Snapshot:
    """
    Scan the proc root once and build a Snapshot.

    A PID whose files vanish or fail to parse is skipped and recorded in
    ``Snapshot.skipped``; the scan carries on with the remaining PIDs.

    Raises:
        ProcRootError: If the root cannot be enumerated.
    """
    started = time.perf_counter()
    processes: list[Process] = []
    skipped: list[SkipDiagnostic] = []

    for pid, pid_dir in iter_pid_dirs(root):
        try:
            process = _read_process(pid, pid_dir)
        except (OSError, StatParseError) as exc:
            # Processes routinely exit between listing and reading
            logger.warning("Skipping pid %d: %s", pid, exc)
            skipped.append(SkipDiagnostic(pid=pid, reason=str(exc)))
            continue
        processes.append(process)

    elapsed = time.perf_counter() - started
    logger.info(
        "Built snapshot of %d processes (%d skipped) in %.3fs",
        len(processes),
        len(skipped),
        elapsed,
    )
    return Snapshot(processes=tuple(processes), skipped=tuple(skipped), build_seconds=elapsed)


def _read_process(pid: int, pid_dir: Path) -> Process:
    """Read and assemble one Process from its /proc/<pid> directory."""
    cmdline = read_cmdline(pid_dir)
    stat_pid, stats = parse_stat(read_stat(pid_dir))
    if stat_pid != pid:
        raise StatParseError(f"stat reports pid {stat_pid}, directory is {pid}")
    return Process(pid=pid, cmdline=cmdline, stats=stats)
