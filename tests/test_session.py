"""Unit tests for session identity (frs.session.identity)."""

import os
from pathlib import Path

import pytest

from conftest import FakeProcessInfo
from frs.errors import ConfigurationError
from frs.session.identity import ProcessInfo, SessionResolver, session_path

STAT = (
    "1234 (my (odd) shell) S 1 1234 1234 34816 1234 4194560 100 0 0 0 1 2 0 0 "
    "20 0 1 0 987654 12345 67 18446744073709551615\n"
)


@pytest.fixture
def proc_root(tmp_path):
    root = tmp_path / "proc"
    (root / "1234").mkdir(parents=True)
    (root / "1234" / "stat").write_text(STAT)
    return root


class TestSessionPath:
    """Tests for session_path()."""

    def test_distinct_pairs_give_distinct_paths(self, tmp_path):
        assert session_path(100, 5, tmp_path) != session_path(100, 6, tmp_path)
        assert session_path(100, 5, tmp_path) != session_path(101, 5, tmp_path)
        assert session_path(12, 345, tmp_path) != session_path(123, 45, tmp_path)

    def test_same_pair_same_path(self, tmp_path):
        assert session_path(100, 5, tmp_path) == session_path(100, 5, tmp_path)

    def test_layout(self, tmp_path):
        assert session_path(100, 5, tmp_path) == tmp_path / "100.5.json"


class TestSessionResolver:
    """Tests for SessionResolver memoization."""

    def test_path_is_resolved_once(self, tmp_path):
        info = FakeProcessInfo(pid=7, start=99)
        resolver = SessionResolver(info, tmp_path)

        first = resolver.path
        second = resolver.path

        assert first == second == tmp_path / "7.99.json"
        assert info.calls == 1

    def test_different_sessions(self, tmp_path):
        a = SessionResolver(FakeProcessInfo(pid=7, start=99), tmp_path).path
        b = SessionResolver(FakeProcessInfo(pid=7, start=100), tmp_path).path
        assert a != b


class TestProcessInfo:
    """Tests for reading process facts."""

    def test_parent_pid_override(self):
        info = ProcessInfo(environ={"FRS_TERM_PID": "4321"})
        assert info.parent_pid() == 4321

    def test_parent_pid_defaults_to_ppid(self):
        assert ProcessInfo(environ={}).parent_pid() == os.getppid()

    def test_invalid_override(self):
        info = ProcessInfo(environ={"FRS_TERM_PID": "not-a-pid"})
        with pytest.raises(ConfigurationError, match="FRS_TERM_PID"):
            info.parent_pid()

    def test_start_time_from_stat(self, proc_root):
        info = ProcessInfo(environ={}, proc_root=str(proc_root))
        assert info.start_time(1234) == 987654

    def test_missing_process(self, proc_root):
        info = ProcessInfo(environ={}, proc_root=str(proc_root))
        with pytest.raises(ConfigurationError, match="Cannot read start time"):
            info.start_time(999999)

    def test_malformed_stat(self, proc_root):
        (proc_root / "1234" / "stat").write_text("1234 (sh) S 1\n")
        info = ProcessInfo(environ={}, proc_root=str(proc_root))
        with pytest.raises(ConfigurationError, match="Malformed"):
            info.start_time(1234)

    def test_resolver_with_override(self, proc_root, tmp_path):
        info = ProcessInfo(environ={"FRS_TERM_PID": "1234"}, proc_root=str(proc_root))
        resolver = SessionResolver(info, tmp_path)
        assert resolver.path == tmp_path / "1234.987654.json"

    @pytest.mark.skipif(not Path("/proc/self/stat").exists(), reason="requires procfs")
    def test_real_process(self):
        assert ProcessInfo(environ={}).start_time(os.getpid()) > 0
