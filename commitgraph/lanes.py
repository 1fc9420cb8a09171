from pydantic import BaseModel, ConfigDict

from .models import Branch, Commit, Head

TRUNK_BRANCH = "main"


class LaneAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    commit_lanes: dict[str, int]
    branch_lanes: dict[str, int]
    max_lane: int


def branch_lane_order(commits: dict[str, Commit], branches: dict[str, Branch]) -> list[str]:
    """main first, then the other branches by the timestamp of their tip commit."""
    def sort_key(name: str) -> tuple[int, int, str]:
        tip = commits.get(branches[name].head)
        return (0 if name == TRUNK_BRANCH else 1, tip.timestamp if tip else 0, name)

    return sorted(branches, key=sort_key)


def assign_lanes(
    topo_order: list[str],
    commits: dict[str, Commit],
    branches: dict[str, Branch],
    head: Head,
) -> LaneAssignment:
    """Map every commit and branch to a column.

    Each branch, in lane order, takes the next free lane and claims its
    first-parent chain until it meets a commit that an earlier branch already
    claimed. Commits no branch reaches inherit their first parent's lane or
    open a lane of their own. `head` is accepted for future use.
    """
    commit_lanes: dict[str, int] = {}
    branch_lanes: dict[str, int] = {}
    next_lane = 0

    for name in branch_lane_order(commits, branches):
        lane = next_lane
        next_lane += 1
        branch_lanes[name] = lane

        commit_id = branches[name].head
        while commit_id in commits and commit_id not in commit_lanes:
            commit_lanes[commit_id] = lane
            parents = commits[commit_id].parents
            commit_id = parents[0] if parents else None

    for commit_id in topo_order:
        if commit_id in commit_lanes:
            continue
        parents = commits[commit_id].parents
        if parents and parents[0] in commit_lanes:
            commit_lanes[commit_id] = commit_lanes[parents[0]]
        else:
            commit_lanes[commit_id] = next_lane
            next_lane += 1

    return LaneAssignment(
        commit_lanes=commit_lanes,
        branch_lanes=branch_lanes,
        max_lane=max(next_lane - 1, 0),
    )
