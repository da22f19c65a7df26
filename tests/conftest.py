"""Shared pytest fixtures and configuration."""

import pytest

from frs.context.models import Context, Metadata
from frs.session.identity import ProcessInfo
from frs.store import ContextStore


class FakeProcessInfo(ProcessInfo):
    """ProcessInfo returning fixed values and counting lookups."""

    def __init__(self, pid: int = 4242, start: int = 987654):
        super().__init__(environ={})
        self.pid = pid
        self.start = start
        self.calls = 0

    def parent_pid(self) -> int:
        self.calls += 1
        return self.pid

    def start_time(self, pid: int) -> int:
        return self.start


@pytest.fixture
def process_info():
    return FakeProcessInfo()


@pytest.fixture
def store(tmp_path):
    """A store rooted in a temporary directory."""
    return ContextStore(tmp_path / "context", tmp_path / "session" / "4242.987654.json")


@pytest.fixture
def proj_context():
    """A clean saved-looking context named 'proj'."""
    return Context(
        meta=Metadata(namespace="default", name="proj", is_dirty=False),
        env={},
    )
