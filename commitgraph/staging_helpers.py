from .errors import LookupFailure, PreconditionError, operation
from .models import RepositoryState, Stage, StageStatus

STAGE_STATUSES = ("added", "modified", "deleted")


def _without(stage: Stage, path: str) -> dict[str, list[str]]:
    return {status: [p for p in getattr(stage, status) if p != path] for status in STAGE_STATUSES}


@operation
def stage_path(state: RepositoryState, path: str, status: StageStatus = "added") -> RepositoryState:
    """Record a symbolic path under one status; it leaves any other status it was in."""
    path = path.strip()
    if not path:
        raise PreconditionError("Path cannot be empty")
    if status not in STAGE_STATUSES:
        raise PreconditionError(f"Unknown stage status '{status}'")
    lists = _without(state.stage, path)
    lists[status].append(path)
    return state.model_copy(update={"stage": Stage(**lists)})


@operation
def unstage_path(state: RepositoryState, path: str) -> RepositoryState:
    path = path.strip()
    if path not in {p for _, p in state.stage.entries()}:
        raise LookupFailure(f"'{path}' is not staged")
    return state.model_copy(update={"stage": Stage(**_without(state.stage, path))})
