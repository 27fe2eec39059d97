"""Data models for procexplorer."""

from dataclasses import dataclass
from enum import Enum


class ProcessState(Enum):
    """Scheduler state of a process, keyed by its /proc/<pid>/stat code."""

    RUNNING = "R"
    SLEEPING = "S"
    UNINTERRUPTIBLE_SLEEPING = "D"
    STOPPED = "T"
    ZOMBIE = "Z"
    IDLE = "I"

    @property
    def display(self) -> str:
        """Human readable name shown in the detail view."""
        return _STATE_DISPLAY[self]

    def __str__(self) -> str:
        return self.display


_STATE_DISPLAY = {
    ProcessState.RUNNING: "Running",
    ProcessState.SLEEPING: "Sleeping",
    ProcessState.UNINTERRUPTIBLE_SLEEPING: "Uninterruptable Sleep",
    ProcessState.STOPPED: "Stopped",
    ProcessState.ZOMBIE: "Zombie",
    ProcessState.IDLE: "Idle",
}


@dataclass(slots=True, frozen=True)
class Stat:
    """Fields decoded from /proc/<pid>/stat."""

    tcomm: str
    state: ProcessState
    ppid: int | None = None  # not shown by the view


@dataclass(slots=True, frozen=True)
class Process:
    """Immutable record of one process."""

    pid: int
    cmdline: str
    stats: Stat

    @property
    def header(self) -> str:
        """Row title: pid followed by the command line."""
        return f"{self.pid} {self.cmdline}"
