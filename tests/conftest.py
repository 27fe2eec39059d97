"""Shared fixtures for procexplorer tests."""

from pathlib import Path

import pytest

from procexplorer.models import Process, ProcessState, Stat
from procexplorer.snapshot import Snapshot


class FakeProc:
    """A directory laid out like /proc, populated by the tests."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def add(self, pid: int, cmdline: bytes = b"", stat: bytes | None = None) -> Path:
        """Create /proc/<pid> with cmdline and stat files."""
        pid_dir = self.root / str(pid)
        pid_dir.mkdir()
        (pid_dir / "cmdline").write_bytes(cmdline)
        if stat is None:
            stat = f"{pid} (proc{pid}) S 1 {pid} {pid} 0 -1\n".encode()
        (pid_dir / "stat").write_bytes(stat)
        return pid_dir

    def add_entry(self, name: str, is_dir: bool = True) -> Path:
        """Create a non-process entry such as ``self`` or ``uptime``."""
        path = self.root / name
        if is_dir:
            path.mkdir()
        else:
            path.write_text("0.0 0.0\n")
        return path


@pytest.fixture
def fake_proc(tmp_path: Path) -> FakeProc:
    """An empty fake proc root."""
    root = tmp_path / "proc"
    root.mkdir()
    return FakeProc(root)


def _make_process(pid: int, cmdline: str, tcomm: str, state: ProcessState = ProcessState.SLEEPING) -> Process:
    """Build a Process without touching the filesystem."""
    return Process(pid=pid, cmdline=cmdline, stats=Stat(tcomm=tcomm, state=state))


@pytest.fixture
def make_process():
    """Factory for in-memory processes."""
    return _make_process


@pytest.fixture
def sample_snapshot() -> Snapshot:
    """Three processes in a fixed order."""
    return Snapshot(
        processes=(
            _make_process(10, "ssh", "ssh"),
            _make_process(101, "bash", "bash", ProcessState.RUNNING),
            _make_process(22, "nginx: worker", "nginx"),
        )
    )
