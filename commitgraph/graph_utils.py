import heapq
import logging
from collections import deque

from .models import Commit

logger = logging.getLogger(__name__)

type CommitMap = dict[str, Commit]


def ancestors_of(commits: CommitMap, start_id: str) -> set[str]:
    """Every commit reachable from start_id over any parent link, start_id included."""
    visited = set()
    queue = deque([start_id])
    while queue:
        commit_id = queue.popleft()
        if commit_id in visited:
            continue
        visited.add(commit_id)
        commit = commits.get(commit_id)
        if commit is None:
            continue
        for parent_id in commit.parents:
            if parent_id not in visited:
                queue.append(parent_id)
    return visited


def common_ancestor(commits: CommitMap, a: str, b: str) -> str | None:
    ancestors_a = ancestors_of(commits, a)
    visited = set()
    queue = deque([b])
    while queue:
        commit_id = queue.popleft()
        if commit_id in ancestors_a:
            return commit_id
        if commit_id in visited:
            continue
        visited.add(commit_id)
        commit = commits.get(commit_id)
        if commit is None:
            continue
        queue.extend(p for p in commit.parents if p not in visited)
    return None


def is_ancestor(commits: CommitMap, ancestor_id: str, descendant_id: str) -> bool:
    return ancestor_id in ancestors_of(commits, descendant_id)


def first_parent_log(commits: CommitMap, start_id: str | None, limit: int | None = None) -> list[Commit]:
    """Mainline history from start_id back to the root, newest first."""
    history = []
    commit_id = start_id
    while commit_id and commit_id in commits:
        if limit is not None and len(history) >= limit:
            break
        commit = commits[commit_id]
        history.append(commit)
        commit_id = commit.parents[0] if commit.parents else None
    return history


def topological_order(commits: CommitMap) -> list[str]:
    """Kahn's algorithm, roots first.

    Among commits that are ready at the same time the one with the smaller
    (timestamp, id) goes first, so a given DAG always yields the same order.
    Parent ids missing from the map do not count toward in-degree.
    """
    children: dict[str, list[str]] = {commit_id: [] for commit_id in commits}
    indegree = {commit_id: 0 for commit_id in commits}
    for commit in commits.values():
        for parent_id in commit.parents:
            if parent_id in children:
                children[parent_id].append(commit.id)
                indegree[commit.id] += 1

    ready = [(commits[cid].timestamp, cid) for cid, degree in indegree.items() if degree == 0]
    heapq.heapify(ready)
    order = []
    while ready:
        _, commit_id = heapq.heappop(ready)
        order.append(commit_id)
        for child_id in children[commit_id]:
            indegree[child_id] -= 1
            if indegree[child_id] == 0:
                heapq.heappush(ready, (commits[child_id].timestamp, child_id))

    if len(order) < len(commits):
        logger.warning("commit graph has a cycle; %d commits left unordered", len(commits) - len(order))
    return order
