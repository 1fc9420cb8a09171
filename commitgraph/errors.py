import logging
from functools import wraps
from typing import Callable

from .models import OperationResult, RepositoryState

logger = logging.getLogger(__name__)

type OperationOutcome = tuple[RepositoryState, OperationResult]


class GraphError(Exception):
    """Base class for every expected, user-facing failure of the commit graph."""


class PreconditionError(GraphError):
    """Blank input, invalid branch name, or a branch-only operation on a detached HEAD."""


class LookupFailure(GraphError):
    """A branch, commit or path reference does not exist."""


class ConsistencyError(GraphError):
    """The request contradicts the current history (self merge, nothing to replay, ...)."""


class CorruptStateError(GraphError):
    """A persisted snapshot is missing required fields or fails validation."""


class CommandError(GraphError):
    """A CLI command could not be carried out."""


def operation(func: Callable[..., RepositoryState]) -> Callable[..., OperationOutcome]:
    """Turn a state transform that raises GraphError into one returning (state, result).

    On failure the input state is handed back untouched, so callers never
    observe a partially applied operation.
    """
    @wraps(func)
    def wrapper(state: RepositoryState, *args, **kwargs) -> OperationOutcome:
        try:
            new_state = func(state, *args, **kwargs)
        except GraphError as e:
            logger.debug("%s rejected: %s", func.__name__, e)
            return state, OperationResult.fail(str(e))
        logger.debug("%s applied", func.__name__)
        return new_state, OperationResult.ok()

    return wrapper
