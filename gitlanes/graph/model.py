"""Graph model - holds the commit list and publishes its topology."""

import logging
from collections.abc import Sequence

from PySide6.QtCore import QObject, Signal

from gitlanes.config.settings import GraphSettings
from gitlanes.graph.geometry import GraphGeometry, RowGeometry
from gitlanes.graph.stash import merge_stash_rows
from gitlanes.graph.topology import calculate_topology
from gitlanes.graph.types import CommitNode, CommitRecord, GraphTopology, StashEntry

logger = logging.getLogger(__name__)


class GraphModel(QObject):
    """
    Current rows of the graph and the topology computed for them.

    Any change to the commits or stashes rebuilds the topology from scratch.
    The new topology replaces the old one in a single assignment, after the
    build has finished, so a renderer never sees a half-built layout.
    """

    topology_changed = Signal()

    def __init__(self, settings: GraphSettings | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.settings = settings if settings is not None else GraphSettings()
        self.geometry = GraphGeometry(self.settings)
        self._commits: list[CommitRecord] = []
        self._stashes: list[StashEntry] = []
        self._rows: list[CommitRecord] = []
        self._topology = GraphTopology()

    @property
    def commits(self) -> list[CommitRecord]:
        return self._commits

    @property
    def stashes(self) -> list[StashEntry]:
        return self._stashes

    @property
    def rows(self) -> list[CommitRecord]:
        """Commits with stash rows merged in, in display order."""
        return self._rows

    @property
    def topology(self) -> GraphTopology:
        return self._topology

    def set_commits(self, commits: Sequence[CommitRecord]) -> None:
        """Replace the commit list, keeping at most the configured number of rows."""
        max_commits = self.settings.get_max_commits()
        if len(commits) > max_commits:
            logger.info("Truncating commit list from %d to %d rows", len(commits), max_commits)
            commits = commits[:max_commits]
        self._commits = list(commits)
        self._rebuild()

    def set_stashes(self, stashes: Sequence[StashEntry]) -> None:
        self._stashes = list(stashes)
        self._rebuild()

    def row_count(self) -> int:
        return len(self._rows)

    def node_at(self, row: int) -> tuple[CommitRecord, CommitNode]:
        commit = self._rows[row]
        return commit, self._topology.nodes[commit.hash]

    def row_geometry(self, row: int) -> RowGeometry:
        return self.geometry.row_geometry(self._topology, row, self._rows[row])

    def graph_width(self) -> int:
        return self.geometry.graph_width(self._topology.max_lanes)

    def _rebuild(self) -> None:
        rows = merge_stash_rows(self._commits, self._stashes)
        topology = calculate_topology(rows)
        self._rows = rows
        self._topology = topology
        self.topology_changed.emit()
