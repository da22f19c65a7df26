"""
Session identity resolution.

A pid alone is not a stable identity: the kernel reuses pids, and a new
shell that happens to get an old pid would pick up a dead terminal's
scratch context. Pairing the pid with the process start time makes the
address unique to one lifetime of one process.
"""

import os
from pathlib import Path
from typing import Optional

from frs.config import Config
from frs.errors import ConfigurationError
from frs.logger import get_logger

logger = get_logger(__name__)

# /proc/<pid>/stat field 22 (starttime), counted from the first field after
# the parenthesised command name, which is field 3
_STARTTIME_INDEX = 22 - 3


class ProcessInfo:
    """Reads the parent pid and process start times from the OS."""

    def __init__(self, environ: Optional[dict] = None, proc_root: str = "/proc"):
        self.environ = os.environ if environ is None else environ
        self.proc_root = Path(proc_root)

    def parent_pid(self) -> int:
        override = self.environ.get(Config.TERM_PID_ENV)
        if override:
            try:
                return int(override)
            except ValueError:
                raise ConfigurationError(
                    f"${Config.TERM_PID_ENV} must be a process id, got {override!r}"
                )
        return os.getppid()

    def start_time(self, pid: int) -> int:
        stat_file = self.proc_root / str(pid) / "stat"
        try:
            stat = stat_file.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read start time of process {pid} from {stat_file}: {e}"
            ) from e

        # The command name may itself contain spaces and parentheses
        _, sep, rest = stat.rpartition(")")
        fields = rest.split()
        if not sep or len(fields) <= _STARTTIME_INDEX:
            raise ConfigurationError(f"Malformed process status record {stat_file}")
        try:
            return int(fields[_STARTTIME_INDEX])
        except ValueError:
            raise ConfigurationError(f"Malformed process status record {stat_file}")


def session_path(pid: int, start_time: int, session_dir: Path) -> Path:
    """Scratch file for one (pid, start time) pair."""
    return Path(session_dir) / f"{pid}.{start_time}.json"


class SessionResolver:
    """
    Resolves the current terminal's scratch file once and remembers it.

    The CLI builds one resolver per invocation and hands ``resolver.path``
    to the store.
    """

    def __init__(self, process_info: ProcessInfo, session_dir: Path):
        self.process_info = process_info
        self.session_dir = Path(session_dir)
        self._path: Optional[Path] = None

    @property
    def path(self) -> Path:
        if self._path is None:
            pid = self.process_info.parent_pid()
            start_time = self.process_info.start_time(pid)
            self._path = session_path(pid, start_time, self.session_dir)
            logger.debug(f"Session context for pid={pid} start={start_time}: {self._path}")
        return self._path
