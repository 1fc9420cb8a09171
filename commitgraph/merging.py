from .errors import ConsistencyError, LookupFailure, operation
from .commit_helpers import Clock, IdFactory, new_commit_id, now_ms, require_current_branch
from .graph_utils import ancestors_of, common_ancestor, is_ancestor
from .models import Commit, RepositoryState, Stage

REBASED_SUFFIX = " (rebased)"


def _branch_heads(state: RepositoryState, current: str, other: str, self_error: str) -> tuple[str, str]:
    if other not in state.branches:
        raise LookupFailure(f"Branch '{other}' does not exist")
    if other == current:
        raise ConsistencyError(self_error)
    if current not in state.branches:
        raise LookupFailure(f"Branch '{current}' does not exist")
    return state.branches[current].head, state.branches[other].head


def _set_branch_head(state: RepositoryState, branch_name: str, commit_id: str, **updates) -> RepositoryState:
    branches = dict(state.branches)
    branches[branch_name] = branches[branch_name].model_copy(update={"head": commit_id})
    return state.model_copy(update={"branches": branches, **updates})


@operation
def merge(
    state: RepositoryState,
    source_branch: str,
    *,
    new_id: IdFactory = new_commit_id,
    clock: Clock = now_ms,
) -> RepositoryState:
    source_branch = source_branch.strip()
    current = require_current_branch(state, "Cannot merge in detached HEAD state")
    current_head, source_head = _branch_heads(state, current, source_branch, "Cannot merge a branch into itself")

    if is_ancestor(state.commits, source_head, current_head):
        raise ConsistencyError("Already up to date")

    if is_ancestor(state.commits, current_head, source_head):
        # fast-forward, no new commit
        return _set_branch_head(state, current, source_head, stage=Stage())

    merge_commit = Commit(
        id=new_id(),
        message=f"Merge '{source_branch}' into '{current}'",
        parents=(current_head, source_head),
        timestamp=clock(),
    )
    commits = {**state.commits, merge_commit.id: merge_commit}
    return _set_branch_head(state, current, merge_commit.id, commits=commits, stage=Stage())


def replay_run(state: RepositoryState, head_id: str, ancestor_id: str, onto_id: str) -> list[Commit]:
    """First-parent commits from head_id back to, but excluding, ancestor_id; oldest first.

    When the ancestor sits behind a merge instead of on the first-parent
    chain, the walk stops at the first commit onto_id already contains.
    """
    contained = ancestors_of(state.commits, onto_id)
    run = []
    commit_id = head_id
    # the containment check only matters when the ancestor is off the first-parent chain
    while commit_id != ancestor_id and commit_id not in contained:
        commit = state.commits.get(commit_id)
        if commit is None:
            raise LookupFailure(f"commit {commit_id} does not exist")
        if not commit.parents:
            raise ConsistencyError("No common ancestor found")
        run.append(commit)
        commit_id = commit.parents[0]
    run.reverse()
    return run


@operation
def rebase(
    state: RepositoryState,
    target_branch: str,
    *,
    new_id: IdFactory = new_commit_id,
    clock: Clock = now_ms,
) -> RepositoryState:
    target_branch = target_branch.strip()
    current = require_current_branch(state, "Cannot rebase in detached HEAD state")
    current_head, target_head = _branch_heads(state, current, target_branch, "Cannot rebase a branch onto itself")

    ancestor = common_ancestor(state.commits, current_head, target_head)
    if ancestor is None:
        raise ConsistencyError("No common ancestor found")
    if ancestor == current_head:
        raise ConsistencyError("Nothing to rebase")

    run = replay_run(state, current_head, ancestor, target_head)
    if not run:
        raise ConsistencyError("Nothing to rebase")

    # originals stay in the commit map, only the branch pointer leaves them
    commits = dict(state.commits)
    parent_id = target_head
    timestamp = clock()
    for original in run:
        replayed = Commit(
            id=new_id(),
            message=original.message + REBASED_SUFFIX,
            parents=(parent_id,),
            timestamp=timestamp,
        )
        commits[replayed.id] = replayed
        parent_id = replayed.id

    return _set_branch_head(state, current, parent_id, commits=commits, stage=Stage())
