"""Synthetic stash rows interleaved into a commit list before layout."""

import re
from collections.abc import Sequence

from gitlanes.constants import STASH_REF_PREFIX
from gitlanes.graph.types import CommitRecord, RefInfo, RefType, StashEntry

_STASH_INDEX_RE = re.compile(r"\{(\d+)\}")


def stash_to_commit(stash: StashEntry) -> CommitRecord:
    """Represent a stash as an ordinary single-parent commit row."""
    return CommitRecord(
        hash=stash.hash,
        parents=(stash.parent_hash,) if stash.parent_hash else (),
        abbreviated_hash=stash.hash[:7],
        author_date=stash.date,
        subject=stash.message,
        refs=(RefInfo(name=f"{STASH_REF_PREFIX}{{{stash.index}}}", type=RefType.STASH),),
    )


def merge_stash_rows(
    commits: Sequence[CommitRecord], stashes: Sequence[StashEntry]
) -> list[CommitRecord]:
    """
    Return a new commit list with a row for each stash.

    Each stash row goes directly above the commit it was saved on, so the
    stash's line is one row long. Stashes whose base commit is not in the list
    go to the top. Several stashes on the same base keep stash order, newest
    (lowest index) first.
    """
    if not stashes:
        return list(commits)

    visible = {commit.hash for commit in commits}
    by_base: dict[str, list[StashEntry]] = {}
    orphans: list[StashEntry] = []
    for stash in sorted(stashes, key=lambda s: s.index):
        if stash.parent_hash in visible:
            by_base.setdefault(stash.parent_hash, []).append(stash)
        else:
            orphans.append(stash)

    merged = [stash_to_commit(stash) for stash in orphans]
    for commit in commits:
        for stash in by_base.pop(commit.hash, []):
            merged.append(stash_to_commit(stash))
        merged.append(commit)
    return merged


def is_stash_row(commit: CommitRecord) -> bool:
    return any(ref.type == RefType.STASH for ref in commit.refs)


def stash_index(commit: CommitRecord) -> int:
    """Stash number from a row's ``stash@{n}`` ref, 0 if there is none."""
    for ref in commit.refs:
        if ref.type == RefType.STASH:
            match = _STASH_INDEX_RE.search(ref.name)
            if match:
                return int(match.group(1))
    return 0
