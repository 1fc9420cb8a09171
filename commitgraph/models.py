from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Commit(FrozenModel):
    id: str
    message: str
    parents: tuple[str, ...] = ()  # parents[0] is the mainline parent
    timestamp: int  # milliseconds since the epoch

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


class Branch(FrozenModel):
    name: str
    head: str


class Head(FrozenModel):
    type: Literal["branch", "detached"]
    ref: str  # branch name or commit id

    @classmethod
    def on_branch(cls, name: str) -> "Head":
        return cls(type="branch", ref=name)

    @classmethod
    def detached_at(cls, commit_id: str) -> "Head":
        return cls(type="detached", ref=commit_id)

    @property
    def is_detached(self) -> bool:
        return self.type == "detached"


type StageStatus = Literal["added", "modified", "deleted"]


class Stage(FrozenModel):
    added: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not (self.added or self.modified or self.deleted)

    def entries(self) -> list[tuple[StageStatus, str]]:
        return (
            [("added", p) for p in self.added]
            + [("modified", p) for p in self.modified]
            + [("deleted", p) for p in self.deleted]
        )


class RepoConfig(FrozenModel):
    theme: Literal["dark", "light"] = "dark"
    layout_mode: Literal["vertical"] = "vertical"


class RepositoryState(FrozenModel):
    commits: dict[str, Commit]
    branches: dict[str, Branch]
    head: Head
    selected_commit_id: str | None = None  # inspector selection, not part of history
    stage: Stage = Field(default_factory=Stage)
    config: RepoConfig = Field(default_factory=RepoConfig)

    def current_branch(self) -> str | None:
        if self.head.type == "branch":
            return self.head.ref
        return None


class OperationResult(FrozenModel):
    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "OperationResult":
        return cls(success=True)

    @classmethod
    def fail(cls, reason: str) -> "OperationResult":
        return cls(success=False, error=reason)
