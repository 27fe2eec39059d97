"""Parser for the /proc/<pid>/stat line.

The line starts ``<pid> (<tcomm>) <state> <ppid> ...``. The command name is
bounded by the first ``(`` and the last ``)`` on the line, since the kernel
copies it verbatim and it may itself contain spaces and parentheses.
"""

from procexplorer.errors import StatParseError
from procexplorer.models import ProcessState, Stat

_STATES = {state.value.encode("ascii"): state for state in ProcessState}


def decode_text(raw: bytes) -> str:
    """Decode kernel supplied bytes, replacing invalid UTF-8 sequences."""
    return raw.decode("utf-8", errors="replace")


def parse_pid(raw: bytes) -> int:
    """Parse an unsigned decimal PID, rejecting signs and whitespace."""
    if not raw or not raw.isdigit():
        raise StatParseError(f"invalid pid field {raw!r}")
    return int(raw)


def parse_stat(data: bytes) -> tuple[int, Stat]:
    """
    Parse the contents of a /proc/<pid>/stat file.

    Args:
        data: Raw bytes of the stat file.

    Returns:
        The PID reported in the line and the decoded Stat record.

    Raises:
        StatParseError: If the line is truncated or the state code is unknown.
    """
    space = data.find(b" ")
    if space < 0:
        raise StatParseError("stat line has no field separator")
    pid = parse_pid(data[:space])

    left = data.find(b"(", space + 1)
    if left < 0:
        raise StatParseError("missing '(' before command name")
    right = data.rfind(b")", left + 1)
    if right < 0:
        raise StatParseError("missing ')' after command name")

    tcomm = decode_text(data[left + 1 : right])

    if data[right + 1 : right + 2] != b" ":
        raise StatParseError("missing separator after command name")
    code = data[right + 2 : right + 3]
    if not code:
        raise StatParseError("stat line truncated before state")
    try:
        state = _STATES[code]
    except KeyError:
        raise StatParseError(f"unknown process state {code!r}") from None

    return pid, Stat(tcomm=tcomm, state=state, ppid=_parse_ppid(data[right + 3 :]))


def _parse_ppid(rest: bytes) -> int | None:
    """Read the field after the state code if it is a plain decimal number."""
    if not rest.startswith(b" "):
        return None
    field = rest[1:].split(b" ", 1)[0].rstrip(b"\n")
    return int(field) if field.isdigit() else None
