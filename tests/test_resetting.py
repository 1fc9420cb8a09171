import pytest

from commitgraph.commit_helpers import commit
from commitgraph.merging import merge
from commitgraph.models import Head, Stage
from commitgraph.resetting import reset


@pytest.fixture
def two_commits(repo, new_id, clock):
    state, _ = commit(repo, "second", new_id=new_id, clock=clock)
    state, _ = commit(state, "third", new_id=new_id, clock=clock)
    return state.model_copy(update={"stage": Stage(added=["notes.txt"])})


def test_soft_reset_keeps_stage(two_commits):
    state, result = reset(two_commits, "soft")
    assert result.success
    assert state.branches["main"].head == "0000002"
    assert state.stage == Stage(added=["notes.txt"])
    # the dropped commit stays in the commit map
    assert "0000003" in state.commits


def test_hard_reset_clears_stage(two_commits):
    state, result = reset(two_commits, "hard")
    assert result.success
    assert state.branches["main"].head == "0000002"
    assert state.stage.is_empty()


def test_reset_defaults_to_soft(two_commits):
    state, _ = reset(two_commits)
    assert not state.stage.is_empty()


def test_reset_past_root_fails(repo):
    state, result = reset(repo, "hard")
    assert not result.success
    assert result.error == "Cannot reset past the root commit"
    assert state is repo


def test_reset_detached_fails(two_commits):
    detached = two_commits.model_copy(update={"head": Head.detached_at("0000003")})
    _, result = reset(detached, "soft")
    assert result.error == "Cannot reset in detached HEAD state"


def test_reset_unknown_mode_fails(two_commits):
    _, result = reset(two_commits, "mixed")
    assert result.error == "Unknown reset mode 'mixed'"


def test_reset_follows_first_parent_of_merge(demo, demo_ids, new_id, clock):
    merged, _ = merge(demo, "feature", new_id=new_id, clock=clock)
    state, _ = reset(merged, "hard")
    assert state.branches["main"].head == demo_ids["Add tests"]
