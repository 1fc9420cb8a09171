from .errors import LookupFailure, operation
from .commit_helpers import Clock, IdFactory, new_commit_id, now_ms
from .models import Branch, Commit, Head, RepoConfig, RepositoryState, Stage

DEFAULT_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "Initial commit"

# (id, message, parents, minutes after the root commit)
DEMO_COMMITS = [
    ("a1f0c3e", INITIAL_COMMIT_MESSAGE, (), 0),
    ("b7d21a4", "Add README", ("a1f0c3e",), 1),
    ("d4a8b61", "Add login page", ("b7d21a4",), 2),
    ("c3e9f02", "Add tests", ("b7d21a4",), 3),
    ("e5c7d90", "Add auth middleware", ("d4a8b61",), 4),
]
DEMO_BRANCHES = {"main": "c3e9f02", "feature": "e5c7d90"}


def init(*, new_id: IdFactory = new_commit_id, clock: Clock = now_ms) -> RepositoryState:
    root = Commit(id=new_id(), message=INITIAL_COMMIT_MESSAGE, parents=(), timestamp=clock())
    return RepositoryState(
        commits={root.id: root},
        branches={DEFAULT_BRANCH: Branch(name=DEFAULT_BRANCH, head=root.id)},
        head=Head.on_branch(DEFAULT_BRANCH),
        selected_commit_id=None,
        stage=Stage(),
        config=RepoConfig(),
    )


def load_demo_scenario(*, clock: Clock = now_ms) -> RepositoryState:
    """Root, README, then a fork: tests on main, login page and auth middleware on feature."""
    base = clock() - 5 * 60_000
    commits = {
        commit_id: Commit(id=commit_id, message=message, parents=parents, timestamp=base + minutes * 60_000)
        for commit_id, message, parents, minutes in DEMO_COMMITS
    }
    return RepositoryState(
        commits=commits,
        branches={name: Branch(name=name, head=head) for name, head in DEMO_BRANCHES.items()},
        head=Head.on_branch(DEFAULT_BRANCH),
    )


@operation
def select_commit(state: RepositoryState, commit_id: str | None) -> RepositoryState:
    """Select a commit for inspection; selecting the selected commit clears the selection."""
    if commit_id is not None and commit_id not in state.commits:
        raise LookupFailure(f"commit {commit_id} does not exist")
    if commit_id == state.selected_commit_id:
        commit_id = None
    return state.model_copy(update={"selected_commit_id": commit_id})


@operation
def toggle_theme(state: RepositoryState) -> RepositoryState:
    theme = "light" if state.config.theme == "dark" else "dark"
    return state.model_copy(update={"config": state.config.model_copy(update={"theme": theme})})
