from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .commit_helpers import resolve_head_commit
from .graph_utils import topological_order
from .lanes import assign_lanes
from .models import RepositoryState


class LayoutModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class LayoutConfig(LayoutModel):
    row_spacing: float = 80
    lane_spacing: float = 150
    padding_top: float = 60
    padding_left: float = 80
    padding_bottom: float = 60
    padding_right: float = 120
    label_offset_x: float = 24


class LayoutNode(LayoutModel):
    commit_id: str
    lane: int
    x: float
    y: float


class LayoutEdge(LayoutModel):
    from_commit_id: str  # child
    to_commit_id: str  # parent
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    is_merge_edge: bool

    @property
    def is_straight(self) -> bool:
        return self.from_x == self.to_x

    def control_points(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Cubic bezier control points of the S-curve joining two lanes."""
        mid_y = (self.from_y + self.to_y) / 2
        return (self.from_x, mid_y), (self.to_x, mid_y)

    def svg_path(self) -> str:
        start = f"M {self.from_x:g} {self.from_y:g}"
        if self.is_straight:
            return f"{start} L {self.to_x:g} {self.to_y:g}"
        (c1x, c1y), (c2x, c2y) = self.control_points()
        return f"{start} C {c1x:g} {c1y:g}, {c2x:g} {c2y:g}, {self.to_x:g} {self.to_y:g}"


class BranchLabel(LayoutModel):
    branch_name: str
    commit_id: str
    x: float
    y: float
    is_head: bool


class LayoutResult(LayoutModel):
    nodes: list[LayoutNode]
    edges: list[LayoutEdge]
    branch_labels: list[BranchLabel]
    head_commit_id: str | None
    total_width: float
    total_height: float

    def node(self, commit_id: str) -> LayoutNode | None:
        return next((n for n in self.nodes if n.commit_id == commit_id), None)

    def labels_by_commit(self) -> dict[str, list[BranchLabel]]:
        grouped: dict[str, list[BranchLabel]] = {}
        for label in self.branch_labels:
            grouped.setdefault(label.commit_id, []).append(label)
        return grouped


EMPTY_LAYOUT = LayoutResult(
    nodes=[], edges=[], branch_labels=[], head_commit_id=None, total_width=0, total_height=0
)


def compute_layout(state: RepositoryState, config: LayoutConfig | None = None) -> LayoutResult:
    """Place every commit of the state on a grid.

    Rows follow topological order so history reads top to bottom; columns
    come from lane assignment. Recomputed from scratch on every call.
    """
    if not state.commits:
        return EMPTY_LAYOUT
    config = config or LayoutConfig()

    topo_order = topological_order(state.commits)
    lanes = assign_lanes(topo_order, state.commits, state.branches, state.head)

    nodes = [
        LayoutNode(
            commit_id=commit_id,
            lane=lanes.commit_lanes[commit_id],
            x=config.padding_left + lanes.commit_lanes[commit_id] * config.lane_spacing,
            y=config.padding_top + row * config.row_spacing,
        )
        for row, commit_id in enumerate(topo_order)
    ]
    positions = {n.commit_id: (n.x, n.y) for n in nodes}

    edges = []
    for commit_id in topo_order:
        from_x, from_y = positions[commit_id]
        for index, parent_id in enumerate(state.commits[commit_id].parents):
            if parent_id not in positions:
                continue
            to_x, to_y = positions[parent_id]
            edges.append(LayoutEdge(
                from_commit_id=commit_id,
                to_commit_id=parent_id,
                from_x=from_x,
                from_y=from_y,
                to_x=to_x,
                to_y=to_y,
                is_merge_edge=index > 0,
            ))

    tracked = state.current_branch()
    branch_labels = []
    for branch in state.branches.values():
        x, y = positions.get(branch.head, (0, 0))
        branch_labels.append(BranchLabel(
            branch_name=branch.name,
            commit_id=branch.head,
            x=x + config.label_offset_x,
            y=y,
            is_head=branch.name == tracked,
        ))

    return LayoutResult(
        nodes=nodes,
        edges=edges,
        branch_labels=branch_labels,
        head_commit_id=resolve_head_commit(state),
        total_width=config.padding_left + (lanes.max_lane + 1) * config.lane_spacing + config.padding_right,
        total_height=config.padding_top + len(topo_order) * config.row_spacing + config.padding_bottom,
    )
