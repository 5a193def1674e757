"""
Connection records between commits and their parents.

Connections are kept in an arena while the forward pass runs, because a later
row can move a parent's reservation to a lower lane and the records that were
already written for that parent must follow it. Each pending parent hash maps
to the arena slots still waiting on it, so such a patch is a direct update.
"""

import logging
from dataclasses import dataclass

from gitlanes.graph.index import CommitIndex
from gitlanes.graph.lanes import LaneAllocator
from gitlanes.graph.types import CommitRecord, IncomingConnection, ParentConnection

logger = logging.getLogger(__name__)


@dataclass
class ConnectionRecord:
    """Mutable connection while the pass is running."""

    parent_hash: str
    source_row: int
    from_lane: int
    to_lane: int
    color_index: int
    source_is_merge: bool
    # False when the parent was already placed above the source row
    reaches_down: bool = True

    @property
    def is_same_lane(self) -> bool:
        return self.from_lane == self.to_lane

    def freeze(self) -> ParentConnection:
        return ParentConnection(
            parent_hash=self.parent_hash,
            from_lane=self.from_lane,
            to_lane=self.to_lane,
            color_index=self.color_index,
        )


class ConnectionResolver:
    """Turns each commit's parent list into connection records."""

    def __init__(self, index: CommitIndex, lanes: LaneAllocator) -> None:
        self._index = index
        self._lanes = lanes
        self._arena: list[ConnectionRecord] = []
        self._slots_by_row: dict[int, list[int]] = {}
        # hash -> slots whose line ends on that hash's current reservation
        self._pending: dict[str, list[int]] = {}
        # hash -> lane of commits already placed
        self._placed: dict[str, int] = {}
        self.patch_count = 0

    @property
    def records(self) -> list[ConnectionRecord]:
        return self._arena

    def resolve(self, row: int, commit: CommitRecord, lane: int) -> None:
        """Record the connections of a commit just placed on ``lane``."""
        self._placed[commit.hash] = lane
        self._pending.pop(commit.hash, None)
        self._slots_by_row[row] = []

        for position, parent_hash in enumerate(commit.parents):
            if not self._index.is_visible(parent_hash):
                # Filtered out or beyond the window: leave a dangling line end
                continue
            if not self._index.is_below(parent_hash, row):
                self._connect_placed(row, commit, parent_hash, lane)
            elif position == 0:
                self._connect_primary(row, commit, parent_hash, lane)
            else:
                self._connect_secondary(row, commit, parent_hash, lane)

    def parent_connections(self, row: int) -> tuple[ParentConnection, ...]:
        return tuple(self._arena[slot].freeze() for slot in self._slots_by_row.get(row, []))

    def derive_incoming(self) -> tuple[dict[str, list[IncomingConnection]], set[str]]:
        """Incoming lines per parent hash, plus the hashes with a same-lane line from above.

        A same-lane line and a merge's cross-lane line both arrive vertically
        on the destination lane, so they are recorded on the parent row. A
        non-merge commit's cross-lane line bends on its own row and needs no
        incoming record.
        """
        incoming: dict[str, list[IncomingConnection]] = {}
        from_above: set[str] = set()

        for record in self._arena:
            if not record.reaches_down:
                continue
            if not record.is_same_lane and not record.source_is_merge:
                continue
            if record.is_same_lane:
                from_above.add(record.parent_hash)
            incoming.setdefault(record.parent_hash, []).append(
                IncomingConnection(from_lane=record.to_lane, color_index=record.color_index)
            )

        return incoming, from_above

    def _connect_primary(self, row: int, commit: CommitRecord, parent_hash: str, lane: int) -> None:
        existing = self._lanes.reserved_lane(parent_hash)
        color_index = self._lanes.color_of(lane)

        if existing is None:
            self._lanes.reserve(parent_hash, lane)
            self._add(row, commit, parent_hash, lane, lane, color_index)
        elif lane < existing and self._can_transfer(parent_hash, lane):
            # Lower lane wins the shared parent
            self._transfer(parent_hash, existing, lane)
            self._add(row, commit, parent_hash, lane, lane, color_index)
        else:
            self._add(row, commit, parent_hash, lane, existing, self._lanes.color_of(existing))

    def _connect_secondary(self, row: int, commit: CommitRecord, parent_hash: str, lane: int) -> None:
        existing = self._lanes.reserved_lane(parent_hash)
        if existing is not None:
            self._add(row, commit, parent_hash, lane, existing, self._lanes.color_of(existing))
            return

        branch_lane = self._lanes.find_adjacent_lane(lane)
        self._lanes.reserve(parent_hash, branch_lane)
        self._add(row, commit, parent_hash, lane, branch_lane, self._lanes.color_of(branch_lane))

    def _connect_placed(self, row: int, commit: CommitRecord, parent_hash: str, lane: int) -> None:
        """Parent already sits above this row; point at its lane without reserving."""
        if parent_hash == commit.hash:
            return
        parent_lane = self._placed[parent_hash]
        logger.debug("Parent %s of %s is not below row %d", parent_hash[:7], commit.hash[:7], row)
        color_index = self._lanes.color_of(parent_lane)
        self._add(row, commit, parent_hash, lane, parent_lane, color_index, waiting=False)

    def _can_transfer(self, parent_hash: str, new_lane: int) -> bool:
        """True if the parent's waiting lines can all be repointed to ``new_lane``.

        A line that starts on ``new_lane`` would collapse into a same-lane
        line, and a merge that already sends another line to ``new_lane``
        would end up with two parents on one lane. Either case keeps the
        parent where it is.
        """
        for slot in self._pending.get(parent_hash, []):
            record = self._arena[slot]
            if record.from_lane == new_lane:
                return False
            for sibling in self._slots_by_row[record.source_row]:
                if sibling != slot and self._arena[sibling].to_lane == new_lane:
                    return False
        return True

    def _transfer(self, parent_hash: str, old_lane: int, new_lane: int) -> None:
        """Move a parent's reservation to a lower lane and repoint its waiting records."""
        self._lanes.release(parent_hash)
        self._lanes.reserve(parent_hash, new_lane)
        color_index = self._lanes.color_of(new_lane)
        for slot in self._pending.get(parent_hash, []):
            record = self._arena[slot]
            record.to_lane = new_lane
            record.color_index = color_index
        self.patch_count += 1
        logger.debug("Moved %s from lane %d to lane %d", parent_hash[:7], old_lane, new_lane)

    def _add(
        self,
        row: int,
        commit: CommitRecord,
        parent_hash: str,
        from_lane: int,
        to_lane: int,
        color_index: int,
        waiting: bool = True,
    ) -> int:
        slot = len(self._arena)
        self._arena.append(
            ConnectionRecord(
                parent_hash=parent_hash,
                source_row=row,
                from_lane=from_lane,
                to_lane=to_lane,
                color_index=color_index,
                source_is_merge=commit.is_merge,
                reaches_down=waiting,
            )
        )
        self._slots_by_row[row].append(slot)
        if waiting:
            self._pending.setdefault(parent_hash, []).append(slot)
        return slot
