import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .errors import CorruptStateError
from .models import RepositoryState
from .repo_utils import init

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("commits", "branches", "head")


def parse_state(raw: str | bytes) -> RepositoryState:
    """Validate a serialized snapshot. Nothing is repaired: a bad snapshot is rejected whole."""
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except UnicodeDecodeError as e:
        raise CorruptStateError(f"snapshot is not valid UTF-8: {e.reason}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"snapshot is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise CorruptStateError("snapshot is not a JSON object")
    missing = [field for field in REQUIRED_FIELDS if data.get(field) is None]
    if missing:
        raise CorruptStateError(f"snapshot is missing {', '.join(missing)}")
    try:
        return RepositoryState.model_validate(data)
    except ValidationError as e:
        raise CorruptStateError(f"snapshot failed validation: {e.error_count()} errors") from e


def load_state(path: Path) -> RepositoryState | None:
    if not path.exists():
        return None
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.warning("cannot read saved state at %s: %s", path, e)
        return None
    try:
        return parse_state(raw)
    except CorruptStateError as e:
        logger.warning("ignoring saved state at %s: %s", path, e)
        return None


def load_or_init(path: Path) -> RepositoryState:
    state = load_state(path)
    if state is None:
        logger.info("no usable saved state at %s, starting a new repository", path)
        return init()
    return state


def save_state(path: Path, state: RepositoryState) -> None:
    path.write_text(json.dumps(state.model_dump(), indent=4))
    logger.debug("saved %d commits to %s", len(state.commits), path)


def clear_saved_state(path: Path) -> None:
    path.unlink(missing_ok=True)
