from typing import Literal

from .errors import ConsistencyError, LookupFailure, PreconditionError, operation
from .commit_helpers import require_current_branch
from .models import RepositoryState, Stage

type ResetMode = Literal["soft", "hard"]
RESET_MODES = ("soft", "hard")


@operation
def reset(state: RepositoryState, mode: ResetMode = "soft") -> RepositoryState:
    """Move the current branch back to the first parent of its head.

    A hard reset clears the stage, a soft one leaves it as it is.
    """
    if mode not in RESET_MODES:
        raise PreconditionError(f"Unknown reset mode '{mode}'")
    branch_name = require_current_branch(state, "Cannot reset in detached HEAD state")
    branch = state.branches.get(branch_name)
    if branch is None:
        raise LookupFailure(f"Branch '{branch_name}' does not exist")
    head_commit = state.commits.get(branch.head)
    if head_commit is None:
        raise LookupFailure(f"commit {branch.head} does not exist")
    if not head_commit.parents:
        raise ConsistencyError("Cannot reset past the root commit")

    branches = {**state.branches, branch_name: branch.model_copy(update={"head": head_commit.parents[0]})}
    updates = {"branches": branches}
    if mode == "hard":
        updates["stage"] = Stage()
    return state.model_copy(update=updates)
