"""Commit graph topology and its render geometry."""

from gitlanes.graph.topology import calculate_topology, get_passing_lanes
from gitlanes.graph.types import (
    CommitNode,
    CommitRecord,
    GraphTopology,
    IncomingConnection,
    ParentConnection,
    PassingLane,
    RefInfo,
    RefType,
    StashEntry,
)

__all__ = [
    "calculate_topology",
    "get_passing_lanes",
    "CommitNode",
    "CommitRecord",
    "GraphTopology",
    "IncomingConnection",
    "ParentConnection",
    "PassingLane",
    "RefInfo",
    "RefType",
    "StashEntry",
]
