import hashlib
import random
import time
from typing import Callable

from .errors import PreconditionError, operation
from .models import Commit, Head, RepositoryState, Stage

COMMIT_ID_LENGTH = 7

type IdFactory = Callable[[], str]
type Clock = Callable[[], int]


def new_commit_id() -> str:
    # short and unpredictable, collisions are possible but not handled
    return hashlib.sha256(f"{time.time_ns()}-{random.random()}".encode()).hexdigest()[:COMMIT_ID_LENGTH]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def resolve_head_commit(state: RepositoryState) -> str | None:
    if state.head.type == "detached":
        return state.head.ref
    branch = state.branches.get(state.head.ref)
    return branch.head if branch else None


def require_head_commit(state: RepositoryState, reason: str) -> str:
    head_commit = resolve_head_commit(state)
    if head_commit is None:
        raise PreconditionError(reason)
    return head_commit


def require_current_branch(state: RepositoryState, reason: str) -> str:
    branch_name = state.current_branch()
    if branch_name is None:
        raise PreconditionError(reason)
    return branch_name


def move_head_to(state: RepositoryState, commit_id: str, **updates) -> RepositoryState:
    """Point whatever HEAD tracks at commit_id.

    A branch HEAD advances its branch pointer; a detached HEAD moves itself.
    Extra keyword arguments are applied to the copy as well.
    """
    if state.head.type == "branch":
        branch_name = state.head.ref
        branches = dict(state.branches)
        branches[branch_name] = branches[branch_name].model_copy(update={"head": commit_id})
        return state.model_copy(update={"branches": branches, **updates})
    return state.model_copy(update={"head": Head.detached_at(commit_id), **updates})


@operation
def commit(
    state: RepositoryState,
    message: str,
    *,
    new_id: IdFactory = new_commit_id,
    clock: Clock = now_ms,
) -> RepositoryState:
    parent_id = require_head_commit(state, "No HEAD to commit on")
    message = message.strip()
    if not message:
        raise PreconditionError("Commit message cannot be empty")

    new_commit = Commit(id=new_id(), message=message, parents=(parent_id,), timestamp=clock())
    commits = {**state.commits, new_commit.id: new_commit}
    return move_head_to(state, new_commit.id, commits=commits, stage=Stage())
