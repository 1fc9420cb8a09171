"""Shared test fixtures for commit graph tests."""

import pytest

from commitgraph.models import RepositoryState
from commitgraph.repo_utils import init, load_demo_scenario

START_MS = 1_700_000_000_000


class SequentialIds:
    """Deterministic stand-in for new_commit_id: 0000001, 0000002, ..."""

    def __init__(self, start: int = 0) -> None:
        self.count = start

    def __call__(self) -> str:
        self.count += 1
        return f"{self.count:07x}"


class SteppingClock:
    """Clock that advances one second per reading."""

    def __init__(self, start: int = START_MS, step: int = 1000) -> None:
        self.now = start - step
        self.step = step

    def __call__(self) -> int:
        self.now += self.step
        return self.now


@pytest.fixture
def new_id() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


@pytest.fixture
def repo(new_id: SequentialIds, clock: SteppingClock) -> RepositoryState:
    """Fresh repository whose root commit is 0000001."""
    return init(new_id=new_id, clock=clock)


@pytest.fixture
def demo() -> RepositoryState:
    return load_demo_scenario(clock=lambda: START_MS)


@pytest.fixture
def demo_ids() -> dict[str, str]:
    """Commit ids of the demo scenario keyed by message."""
    state = load_demo_scenario(clock=lambda: START_MS)
    return {c.message: c.id for c in state.commits.values()}


@pytest.fixture
def fresh_sources():
    """Factory for independent (new_id, clock) pairs that replay the same sequence."""
    return lambda: (SequentialIds(), SteppingClock())
