"""Exception types for procexplorer."""


class ProcExplorerError(Exception):
    """Base class for procexplorer errors."""


class ProcRootError(ProcExplorerError):
    """The process filesystem root could not be enumerated."""

    def __init__(self, root: str, cause: OSError) -> None:
        super().__init__(f"cannot read process filesystem at {root}: {cause.strerror or cause}")
        self.root = root
        self.cause = cause


class StatParseError(ProcExplorerError, ValueError):
    """A /proc/<pid>/stat blob did not match the expected layout."""
