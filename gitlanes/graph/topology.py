"""
Graph topology calculation for commit history visualization.

Assigns lanes (x-positions) and colors to commits based on branch structure,
in one pass over commits ordered newest first:
1. Each commit takes the lane reserved for it by a child, or the lowest free lane
2. The first parent continues on the same lane; further parents of a merge
   branch out to an adjacent lane
3. Colors are assigned per lane
4. Lanes are reused once the branch on them ends
"""

import logging
from collections.abc import Sequence

from gitlanes.graph.connections import ConnectionResolver
from gitlanes.graph.index import CommitIndex
from gitlanes.graph.lanes import LaneAllocator
from gitlanes.graph.passing import compute_passing_lanes
from gitlanes.graph.types import CommitNode, CommitRecord, GraphTopology, PassingLane

logger = logging.getLogger(__name__)


def calculate_topology(commits: Sequence[CommitRecord]) -> GraphTopology:
    """Calculate the full graph topology for an ordered commit list.

    Pure function of its input: the same list always yields the same topology,
    and nothing is shared between calls.
    """
    if not commits:
        return GraphTopology()

    index = CommitIndex(commits)
    lanes = LaneAllocator()
    resolver = ConnectionResolver(index, lanes)

    placements: list[tuple[int, int]] = []
    for row, commit in enumerate(commits):
        lane = lanes.take_lane(commit.hash)
        placements.append((lane, lanes.color_of(lane)))
        resolver.resolve(row, commit, lane)

    incoming, from_above = resolver.derive_incoming()

    rows: list[CommitNode] = []
    nodes: dict[str, CommitNode] = {}
    for row, (commit, (lane, color_index)) in enumerate(zip(commits, placements)):
        node = CommitNode(
            hash=commit.hash,
            lane=lane,
            color_index=color_index,
            parent_connections=resolver.parent_connections(row),
            incoming_connections=tuple(incoming.get(commit.hash, ())),
            has_line_from_above=commit.hash in from_above,
        )
        rows.append(node)
        nodes[commit.hash] = node

    max_lanes = _max_lanes(rows)
    passing_lanes_by_row = compute_passing_lanes(rows, index)

    logger.debug(
        "Topology: %d rows, %d lanes, %d connections, %d lane transfers",
        len(rows),
        max_lanes,
        len(resolver.records),
        resolver.patch_count,
    )

    return GraphTopology(
        nodes=nodes,
        max_lanes=max_lanes,
        passing_lanes_by_row=passing_lanes_by_row,
        commit_index_by_hash=index.as_dict(),
    )


def get_passing_lanes(topology: GraphTopology, row: int) -> list[PassingLane]:
    """Lanes that pass through a row without a node on it (O(1) lookup)."""
    return topology.passing_lanes_by_row.get(row, [])


def _max_lanes(rows: Sequence[CommitNode]) -> int:
    max_lanes = 1
    for node in rows:
        max_lanes = max(max_lanes, node.lane + 1)
        for conn in node.parent_connections:
            max_lanes = max(max_lanes, conn.to_lane + 1)
    return max_lanes
