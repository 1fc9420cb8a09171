import re

from .errors import ConsistencyError, LookupFailure, PreconditionError, operation
from .commit_helpers import require_head_commit
from .models import Branch, Head, RepositoryState

BRANCH_NAME_PATTERN = re.compile(r"[A-Za-z0-9_./-]+")


def get_current_branch(state: RepositoryState) -> Branch | None:
    name = state.current_branch()
    if name is None:
        return None
    return state.branches.get(name)


def find_commit_by_prefix(state: RepositoryState, ref: str) -> str | None:
    """Exact commit id, else the lexicographically smallest id starting with ref."""
    if ref in state.commits:
        return ref
    matches = sorted(commit_id for commit_id in state.commits if commit_id.startswith(ref))
    return matches[0] if matches else None


@operation
def branch(state: RepositoryState, name: str) -> RepositoryState:
    name = name.strip()
    if not name:
        raise PreconditionError("Branch name cannot be empty")
    if name in state.branches:
        raise ConsistencyError(f"Branch '{name}' already exists")
    if not BRANCH_NAME_PATTERN.fullmatch(name):
        raise PreconditionError("Invalid branch name characters")
    head_commit = require_head_commit(state, "No HEAD commit to branch from")

    branches = {**state.branches, name: Branch(name=name, head=head_commit)}
    return state.model_copy(update={"branches": branches})


@operation
def checkout(state: RepositoryState, ref: str) -> RepositoryState:
    ref = ref.strip()
    if ref in state.branches:
        return state.model_copy(update={"head": Head.on_branch(ref)})

    commit_id = find_commit_by_prefix(state, ref)
    if commit_id is None:
        raise LookupFailure(f"'{ref}' is not a branch or commit")
    return state.model_copy(update={"head": Head.detached_at(commit_id)})


@operation
def delete_branch(state: RepositoryState, name: str) -> RepositoryState:
    name = name.strip()
    if name not in state.branches:
        raise LookupFailure(f"Branch '{name}' does not exist")
    if state.current_branch() == name:
        raise ConsistencyError("Cannot delete the current checked out branch")
    branches = {k: v for k, v in state.branches.items() if k != name}
    return state.model_copy(update={"branches": branches})
