"""Tests for merging stash snapshots into the commit list."""

from gitlanes.graph.stash import is_stash_row, merge_stash_rows, stash_index, stash_to_commit
from gitlanes.graph.topology import calculate_topology
from gitlanes.graph.types import CommitRecord, RefInfo, RefType, StashEntry


def _commit(commit_hash: str, *parents: str) -> CommitRecord:
    return CommitRecord(hash=commit_hash, parents=parents)


def _stash(index: int, base: str) -> StashEntry:
    return StashEntry(index=index, hash=f"stash{index}hash", parent_hash=base, message=f"WIP {index}")


class TestStashToCommit:
    """Test the synthetic row built for a stash."""

    def test_single_parent_row(self):
        """A stash becomes a one-parent commit with a stash ref."""
        row = stash_to_commit(_stash(2, "base"))
        assert row.parents == ("base",)
        assert row.subject == "WIP 2"
        assert row.abbreviated_hash == "stash2h"
        assert row.refs == (RefInfo(name="stash@{2}", type=RefType.STASH),)
        assert is_stash_row(row)
        assert stash_index(row) == 2

    def test_plain_commit_is_not_stash(self):
        """Ordinary commits are not stash rows and report index 0."""
        commit = CommitRecord(hash="abc", refs=[RefInfo(name="main", type=RefType.BRANCH)])
        assert not is_stash_row(commit)
        assert stash_index(commit) == 0


class TestMergeStashRows:
    """Test where stash rows are interleaved."""

    def test_no_stashes(self):
        """Without stashes the list is copied unchanged."""
        commits = [_commit("b", "a"), _commit("a")]
        merged = merge_stash_rows(commits, [])
        assert merged == commits
        assert merged is not commits

    def test_inserted_above_base(self):
        """A stash row goes directly above the commit it was saved on."""
        commits = [_commit("c3", "c2"), _commit("c2", "c1"), _commit("c1")]
        merged = merge_stash_rows(commits, [_stash(0, "c2")])
        assert [c.hash for c in merged] == ["c3", "stash0hash", "c2", "c1"]

    def test_orphans_go_on_top(self):
        """Stashes whose base is not listed are shown first."""
        merged = merge_stash_rows([_commit("a")], [_stash(0, "elsewhere")])
        assert [c.hash for c in merged] == ["stash0hash", "a"]

    def test_stash_order_on_same_base(self):
        """Several stashes on one base keep newest first."""
        merged = merge_stash_rows([_commit("a")], [_stash(1, "a"), _stash(0, "a")])
        assert [c.hash for c in merged] == ["stash0hash", "stash1hash", "a"]

    def test_inputs_untouched(self):
        """The caller's lists are not modified."""
        commits = [_commit("a")]
        stashes = [_stash(0, "a")]
        merge_stash_rows(commits, stashes)
        assert commits == [_commit("a")]
        assert stashes == [_stash(0, "a")]


class TestStashLayout:
    """Test that stash rows lay out like ordinary commits."""

    def test_stash_branches_off_base(self):
        """A stash above a busy lane gets its own lane and joins its base."""
        commits = [_commit("c3", "c2"), _commit("c2", "c1"), _commit("c1")]
        merged = merge_stash_rows(commits, [_stash(0, "c2")])
        topology = calculate_topology(merged)

        stash_node = topology.nodes["stash0hash"]
        assert topology.nodes["c2"].lane == 0
        assert stash_node.lane == 1
        assert [(c.from_lane, c.to_lane) for c in stash_node.parent_connections] == [(1, 0)]
        assert topology.max_lanes == 2
