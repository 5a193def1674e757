"""
Pre-computation of lanes that pass through each row.

A connection from row i to row j keeps its destination lane busy on every row
strictly between them. Walking the rows once while keeping the live intervals
per lane makes every later "what crosses row N" lookup O(1) instead of
re-scanning all earlier connections at render time.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from gitlanes.graph.index import CommitIndex
from gitlanes.graph.types import CommitNode, PassingLane


@dataclass
class _Interval:
    color_index: int
    end_row: int


def compute_passing_lanes(
    rows: Sequence[CommitNode], index: CommitIndex
) -> dict[int, list[PassingLane]]:
    """Map each row to the lanes crossing it, ordered by lane.

    ``rows`` holds the node placed on each row, in input order.
    """
    passing_by_row: dict[int, list[PassingLane]] = {}
    active: dict[int, list[_Interval]] = {}

    for row, node in enumerate(rows):
        passing: list[PassingLane] = []
        for lane in sorted(active):
            if lane == node.lane:
                continue
            for interval in active[lane]:
                if row < interval.end_row:
                    passing.append(PassingLane(lane=lane, color_index=interval.color_index))
                    break
        passing_by_row[row] = passing

        for conn in node.parent_connections:
            parent_row = index.row_of(conn.parent_hash)
            if parent_row is not None and parent_row > row:
                active.setdefault(conn.to_lane, []).append(
                    _Interval(color_index=conn.color_index, end_row=parent_row)
                )

        # Drop intervals that end on this row
        for lane in list(active):
            remaining = [interval for interval in active[lane] if interval.end_row > row]
            if remaining:
                active[lane] = remaining
            else:
                del active[lane]

    return passing_by_row
