"""Property-based tests driving random sequences of repository operations."""

import itertools

from hypothesis import given, settings, strategies as st

from commitgraph.branching import branch, checkout, delete_branch
from commitgraph.commit_helpers import commit, resolve_head_commit
from commitgraph.graph_utils import is_ancestor
from commitgraph.merging import merge, rebase
from commitgraph.models import RepositoryState
from commitgraph.repo_utils import init, load_demo_scenario
from commitgraph.resetting import reset
from commitgraph.staging_helpers import stage_path

# =============================================================================
# Strategies
# =============================================================================

branch_names = st.sampled_from(["main", "feature", "fix/bug", "bad name", ""])
messages = st.sampled_from(["Add README", "Fix bug", "  ", "Refactor"])

steps = st.one_of(
    st.tuples(st.just("commit"), messages),
    st.tuples(st.just("branch"), branch_names),
    st.tuples(st.just("checkout"), branch_names),
    st.tuples(st.just("merge"), branch_names),
    st.tuples(st.just("rebase"), branch_names),
    st.tuples(st.just("reset"), st.sampled_from(["soft", "hard"])),
    st.tuples(st.just("delete"), branch_names),
    st.tuples(st.just("stage"), st.sampled_from(["a.txt", "b.txt"])),
)


def sources():
    counter = itertools.count(1)
    ticks = itertools.count(1_000, 1_000)
    return (lambda: f"{next(counter):07x}"), (lambda: next(ticks))


def apply(state: RepositoryState, step: tuple[str, str], new_id, clock):
    op, arg = step
    if op == "commit":
        return commit(state, arg, new_id=new_id, clock=clock)
    if op == "branch":
        return branch(state, arg)
    if op == "checkout":
        return checkout(state, arg)
    if op == "merge":
        return merge(state, arg, new_id=new_id, clock=clock)
    if op == "rebase":
        return rebase(state, arg, new_id=new_id, clock=clock)
    if op == "reset":
        return reset(state, arg)
    if op == "delete":
        return delete_branch(state, arg)
    return stage_path(state, arg)


def assert_consistent(state: RepositoryState) -> None:
    for name, branch_info in state.branches.items():
        assert branch_info.name == name
        assert branch_info.head in state.commits
    if state.head.type == "branch":
        assert state.head.ref in state.branches
    assert resolve_head_commit(state) in state.commits
    for commit_info in state.commits.values():
        assert all(parent in state.commits for parent in commit_info.parents)
    staged = state.stage.added + state.stage.modified + state.stage.deleted
    assert len(staged) == len(set(staged))


# =============================================================================
# Properties
# =============================================================================


@settings(max_examples=150)
@given(start_demo=st.booleans(), plan=st.lists(steps, max_size=20))
def test_operations_keep_repository_consistent(start_demo: bool, plan: list[tuple[str, str]]) -> None:
    """Property: any sequence of operations leaves branches, HEAD and parents resolvable."""
    new_id, clock = sources()
    state = load_demo_scenario(clock=clock) if start_demo else init(new_id=new_id, clock=clock)
    for step in plan:
        snapshot = state.model_dump()
        new_state, result = apply(state, step, new_id, clock)
        assert state.model_dump() == snapshot
        if not result.success:
            assert new_state is state
            assert result.error
        else:
            assert set(state.commits) <= set(new_state.commits)
        state = new_state
        assert_consistent(state)


@given(plan=st.lists(steps, max_size=15))
def test_operations_are_reproducible(plan: list[tuple[str, str]]) -> None:
    """Property: replaying a plan with the same id and clock sources yields equal states."""

    def run() -> RepositoryState:
        new_id, clock = sources()
        state = load_demo_scenario(clock=clock)
        for step in plan:
            state, _ = apply(state, step, new_id, clock)
        return state

    assert run() == run()


@given(plan=st.lists(steps, max_size=15), source=st.sampled_from(["main", "feature"]))
def test_merge_outcome_matches_ancestry(plan: list[tuple[str, str]], source: str) -> None:
    """Property: merge fast-forwards, merges or refuses exactly as ancestry dictates."""
    new_id, clock = sources()
    state = load_demo_scenario(clock=clock)
    for step in plan:
        state, _ = apply(state, step, new_id, clock)
    current = state.current_branch()
    if current is None or source not in state.branches or source == current:
        return

    current_head = state.branches[current].head
    source_head = state.branches[source].head
    merged, result = merge(state, source, new_id=new_id, clock=clock)
    if is_ancestor(state.commits, source_head, current_head):
        assert not result.success
    elif is_ancestor(state.commits, current_head, source_head):
        assert merged.commits == state.commits
        assert merged.branches[current].head == source_head
    else:
        merge_commit = merged.commits[merged.branches[current].head]
        assert merge_commit.parents == (current_head, source_head)
        assert len(merged.commits) == len(state.commits) + 1
