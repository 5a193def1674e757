"""
Row geometry for drawing a computed topology.

Turns lanes and color indices into cell-local coordinates and colors. Each row
is its own cell: y runs from 0 at the top edge to ``row_height`` at the bottom,
with the commit node centered vertically.

COORDINATE SYSTEM NOTE:
Children (newer commits) are above their parents, so every line is drawn
downwards, from a lower y in the child's row to a higher y in the parent's.
A cross-lane line bends inside the row it starts from and then runs straight
down its destination lane.
"""

from dataclasses import dataclass, field

from PySide6.QtCore import QLineF, QPointF
from PySide6.QtGui import QColor

from gitlanes.config.settings import GraphSettings
from gitlanes.constants import MIN_GRAPH_WIDTH
from gitlanes.graph.topology import get_passing_lanes
from gitlanes.graph.types import CommitRecord, GraphTopology


@dataclass
class Segment:
    """A straight line within one row cell."""

    line: QLineF
    color: QColor


@dataclass
class RowGeometry:
    """Everything needed to paint one row of the graph."""

    center: QPointF
    radius: float
    color: QColor
    is_merge: bool
    incoming: list[Segment] = field(default_factory=list)
    outgoing: list[Segment] = field(default_factory=list)
    passing: list[Segment] = field(default_factory=list)


class GraphGeometry:
    """Lane-to-pixel mapping configured from graph settings."""

    def __init__(self, settings: GraphSettings | None = None) -> None:
        if settings is None:
            settings = GraphSettings()
        self.lane_width = settings.get_lane_width()
        self.row_height = settings.get_row_height()
        self.node_radius = settings.get_node_radius()
        self.palette = [QColor(color) for color in settings.get_palette()]

    def lane_x(self, lane: int) -> float:
        """Horizontal center of a lane."""
        return self.lane_width / 2 + lane * self.lane_width

    def graph_width(self, max_lanes: int) -> int:
        """Width of the graph column needed for ``max_lanes`` lanes."""
        return max(self.lane_width * (max_lanes + 1), MIN_GRAPH_WIDTH)

    def lane_color(self, color_index: int) -> QColor:
        return self.palette[color_index % len(self.palette)]

    def row_geometry(self, topology: GraphTopology, row: int, commit: CommitRecord) -> RowGeometry:
        """Node marker and line segments for the commit shown on ``row``."""
        node = topology.nodes[commit.hash]
        center_y = self.row_height / 2
        node_x = self.lane_x(node.lane)

        geometry = RowGeometry(
            center=QPointF(node_x, center_y),
            radius=self.node_radius,
            color=self.lane_color(node.color_index),
            is_merge=commit.is_merge,
        )

        node_top = center_y - self.node_radius
        node_bottom = center_y + self.node_radius

        for incoming in node.incoming_connections:
            line = QLineF(self.lane_x(incoming.from_lane), 0, node_x, node_top)
            geometry.incoming.append(Segment(line, self.lane_color(incoming.color_index)))

        for conn in node.parent_connections:
            parent_row = topology.commit_index_by_hash.get(conn.parent_hash)
            if parent_row is None or parent_row <= row:
                continue
            line = QLineF(node_x, node_bottom, self.lane_x(conn.to_lane), self.row_height)
            geometry.outgoing.append(Segment(line, self.lane_color(conn.color_index)))

        for passing in get_passing_lanes(topology, row):
            x = self.lane_x(passing.lane)
            line = QLineF(x, 0, x, self.row_height)
            geometry.passing.append(Segment(line, self.lane_color(passing.color_index)))

        return geometry
