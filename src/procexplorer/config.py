"""Runtime settings read from the environment."""

import os
from collections.abc import Mapping
from dataclasses import dataclass

from procexplorer.procfs import PROC_ROOT


@dataclass(slots=True, frozen=True)
class Settings:
    """Settings for a procexplorer run."""

    proc_root: str = PROC_ROOT
    profiling: bool = False
    log_level: str = "WARNING"
    page_size: int = 200

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        """
        Build settings from environment variables.

        ``PROFILING`` enables the profiling overlay when set to any value,
        including an empty one.
        """
        return cls(
            proc_root=environ.get("PROCEXPLORER_PROC_ROOT") or PROC_ROOT,
            profiling="PROFILING" in environ,
            log_level=environ.get("PROCEXPLORER_LOG_LEVEL") or "WARNING",
        )
