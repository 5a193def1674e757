"""Types for commit graph topology."""

from dataclasses import dataclass, field
from enum import Enum


class RefType(str, Enum):
    """Kind of ref decorating a commit row.

    Inherits from str so refs compare and serialize as plain strings.
    """

    HEAD = "head"
    BRANCH = "branch"
    REMOTE = "remote"
    TAG = "tag"
    STASH = "stash"


@dataclass(frozen=True)
class RefInfo:
    """A branch, tag or stash label shown next to a commit."""

    name: str
    type: RefType
    remote: str | None = None


@dataclass(frozen=True)
class CommitRecord:
    """A commit as handed to the topology engine.

    Only ``hash`` and ``parents`` take part in layout; the rest is display data.
    The first parent is the primary ancestor.
    """

    hash: str
    parents: tuple[str, ...] = ()
    abbreviated_hash: str = ""
    author: str = ""
    author_email: str = ""
    author_date: int = 0  # epoch milliseconds
    subject: str = ""
    refs: tuple[RefInfo, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers but store tuples so records stay hashable
        object.__setattr__(self, "parents", tuple(self.parents))
        object.__setattr__(self, "refs", tuple(self.refs))
        if not self.abbreviated_hash:
            object.__setattr__(self, "abbreviated_hash", self.hash[:7])

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


@dataclass(frozen=True)
class StashEntry:
    """A saved-but-uncommitted snapshot, shown as a synthetic row."""

    index: int
    hash: str
    parent_hash: str
    message: str
    date: int = 0  # epoch milliseconds


@dataclass(frozen=True)
class ParentConnection:
    """Line drawn from a commit's row down to the lane its parent arrives on."""

    parent_hash: str
    from_lane: int
    to_lane: int
    color_index: int


@dataclass(frozen=True)
class IncomingConnection:
    """Line arriving into a commit's row from a child rendered above it."""

    from_lane: int
    color_index: int


@dataclass(frozen=True)
class PassingLane:
    """A lane whose line crosses a row without a node on that row."""

    lane: int
    color_index: int


@dataclass(frozen=True)
class CommitNode:
    """A commit with its computed lane, color and connections."""

    hash: str
    lane: int
    color_index: int
    parent_connections: tuple[ParentConnection, ...] = ()
    incoming_connections: tuple[IncomingConnection, ...] = ()
    has_line_from_above: bool = False


@dataclass(frozen=True)
class GraphTopology:
    """Complete layout for one ordered commit list.

    Rebuilt wholesale whenever the commit list changes; consumers must treat it
    as read-only.
    """

    nodes: dict[str, CommitNode] = field(default_factory=dict)
    max_lanes: int = 0
    passing_lanes_by_row: dict[int, list[PassingLane]] = field(default_factory=dict)
    commit_index_by_hash: dict[str, int] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.nodes
