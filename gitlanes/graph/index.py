"""Hash to row lookup for one commit batch."""

import logging
from collections.abc import Sequence

from gitlanes.graph.types import CommitRecord

logger = logging.getLogger(__name__)


class CommitIndex:
    """Maps each commit hash to its row in the ordered input.

    Built once per input batch. Duplicate hashes are a caller contract
    violation: the last occurrence wins and a warning is logged.
    """

    def __init__(self, commits: Sequence[CommitRecord]) -> None:
        self._rows: dict[str, int] = {}
        duplicates = 0
        for row, commit in enumerate(commits):
            if commit.hash in self._rows:
                duplicates += 1
            self._rows[commit.hash] = row

        self.duplicate_count = duplicates
        if duplicates:
            logger.warning("Commit list contains %d duplicate hash(es); last occurrence wins", duplicates)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, commit_hash: object) -> bool:
        return commit_hash in self._rows

    def row_of(self, commit_hash: str) -> int | None:
        """Row of a commit, or None if it is not in the batch."""
        return self._rows.get(commit_hash)

    def is_visible(self, commit_hash: str) -> bool:
        return commit_hash in self._rows

    def is_below(self, commit_hash: str, row: int) -> bool:
        """True if the commit is in the batch on a row after ``row``."""
        parent_row = self._rows.get(commit_hash)
        return parent_row is not None and parent_row > row

    def as_dict(self) -> dict[str, int]:
        return dict(self._rows)
