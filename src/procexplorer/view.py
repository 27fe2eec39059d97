"""Search filter and the view adapter consumed by the UI."""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from procexplorer.models import Process
from procexplorer.snapshot import Snapshot

logger = logging.getLogger(__name__)


def matches(process: Process, needle: str) -> bool:
    """Check if the needle occurs in the pid, command line or command name."""
    return (
        needle in str(process.pid)
        or needle in process.cmdline
        or needle in process.stats.tcomm
    )


def filter_indices(processes: Sequence[Process], needle: str) -> tuple[int, ...]:
    """
    Return the positions of processes matching the needle, in order.

    Matching is a case-sensitive substring test; an empty needle matches
    every process.
    """
    if not needle:
        return tuple(range(len(processes)))
    return tuple(i for i, process in enumerate(processes) if matches(process, needle))


def filter_processes(processes: Sequence[Process], needle: str) -> list[Process]:
    """Return the matching processes themselves rather than their positions."""
    return [processes[i] for i in filter_indices(processes, needle)]


@dataclass(slots=True, frozen=True)
class RowView:
    """Presentation of one process: a title line plus labelled details."""

    header: str
    details: tuple[tuple[str, str], ...]

    @classmethod
    def from_process(cls, process: Process) -> "RowView":
        return cls(
            header=process.header,
            details=(
                ("Tcomm", process.stats.tcomm),
                ("State", process.stats.state.display),
            ),
        )


class ProcessView:
    """
    Filtered, randomly addressable view over a Snapshot.

    The matching indices are materialised whenever the search text changes, so
    ``row(i)`` is a constant time lookup and the index to record mapping stays
    fixed until the next ``set_search`` or ``replace_snapshot``.
    """

    def __init__(self, snapshot: Snapshot, search: str = "") -> None:
        self._snapshot = snapshot
        self._search = search
        self._indices: tuple[int, ...] = ()
        self._filter_seconds: float = 0.0
        self._refilter()

    @property
    def snapshot(self) -> Snapshot:
        """The snapshot currently being viewed."""
        return self._snapshot

    @property
    def search(self) -> str:
        """The current search text."""
        return self._search

    @property
    def filter_seconds(self) -> float:
        """Time taken by the most recent filter pass."""
        return self._filter_seconds

    def __len__(self) -> int:
        return len(self._indices)

    def process(self, i: int) -> Process:
        """Return the i-th visible process."""
        if not 0 <= i < len(self._indices):
            raise IndexError(f"row {i} out of range for {len(self._indices)} visible processes")
        return self._snapshot.processes[self._indices[i]]

    def row(self, i: int) -> RowView:
        """Return the presentation of the i-th visible process."""
        return RowView.from_process(self.process(i))

    def set_search(self, text: str) -> None:
        """Change the search text and recompute the visible rows."""
        if text == self._search:
            return
        self._search = text
        self._refilter()

    def replace_snapshot(self, snapshot: Snapshot) -> None:
        """Swap in a freshly built snapshot, keeping the current search."""
        self._snapshot = snapshot
        self._refilter()

    def _refilter(self) -> None:
        started = time.perf_counter()
        self._indices = filter_indices(self._snapshot.processes, self._search)
        self._filter_seconds = time.perf_counter() - started
        logger.debug(
            "Search %r matched %d of %d processes",
            self._search,
            len(self._indices),
            len(self._snapshot),
        )
