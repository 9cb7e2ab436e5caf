"""Unit tests for the in-memory ledger."""
from pathlib import Path

import pytest

from governance_agent.core.errors import LedgerRejectedError, ProposalNotFoundError
from governance_agent.models.proposal import VotingStats
from governance_agent.services.ledger.memory import InMemoryLedger

NOW_MS = 1_700_000_000_000
DAY_MS = 86_400_000
SEED_PATH = Path(__file__).resolve().parents[3] / "config" / "seed_proposals.yaml"


class TestSeedLoading:
    """Test loading seed proposals from YAML."""

    async def test_repository_seed_file(self):
        ledger = InMemoryLedger.from_yaml(str(SEED_PATH), now_ms=NOW_MS)
        proposals = await ledger.fetch_proposals()

        assert [p.id for p in proposals] == [0, 1]
        assert [(p.votes_for, p.votes_against) for p in proposals] == [(15, 3), (8, 12)]
        assert proposals[0].timestamp == NOW_MS - DAY_MS
        assert proposals[1].timestamp == NOW_MS - 2 * DAY_MS

    async def test_missing_file_gives_empty_ledger(self, tmp_path):
        ledger = InMemoryLedger.from_yaml(str(tmp_path / "absent.yaml"))

        assert await ledger.fetch_proposals() == []
        assert await ledger.fetch_stats() == VotingStats()

    async def test_custom_seed(self, tmp_path):
        seed = tmp_path / "seed.yaml"
        seed.write_text(
            "proposals:\n"
            "  - id: 5\n"
            "    title: Fund audits\n"
            "    description: Pay for a security audit\n"
            "    proposer: carol.icp\n"
            "    status: closed\n"
            "    age_ms: 3600000\n",
            encoding="utf-8",
        )
        ledger = InMemoryLedger.from_yaml(str(seed), now_ms=NOW_MS)

        proposals = await ledger.fetch_proposals()
        assert proposals[0].timestamp == NOW_MS - 3_600_000
        assert not proposals[0].is_active
        assert await ledger.submit_proposal("t", "d", "p") == 6


class TestStats:
    async def test_seed_stats(self, memory_ledger):
        stats = await memory_ledger.fetch_stats()
        assert stats == VotingStats(total_proposals=2, active_proposals=2, total_votes=38)

    async def test_stats_follow_votes(self, memory_ledger):
        await memory_ledger.submit_vote(0, "dave.icp", False)
        stats = await memory_ledger.fetch_stats()
        assert stats.total_votes == 39


class TestSubmit:
    """Test proposal creation and voting."""

    async def test_submit_proposal_assigns_next_id(self, memory_ledger):
        new_id = await memory_ledger.submit_proposal("Fund audits", "Security audit", "carol.icp")

        assert new_id == 2
        proposals = await memory_ledger.fetch_proposals()
        assert proposals[-1].id == 2
        assert proposals[-1].votes_for == 0

    async def test_submit_proposal_requires_fields(self, memory_ledger):
        with pytest.raises(LedgerRejectedError):
            await memory_ledger.submit_proposal("", "d", "p")

    async def test_vote_updates_tally(self, memory_ledger):
        assert await memory_ledger.submit_vote(0, "current-user.icp", True) is True

        proposals = await memory_ledger.fetch_proposals()
        assert (proposals[0].votes_for, proposals[0].votes_against) == (16, 3)
        assert memory_ledger.votes == [(0, "current-user.icp", True)]

    async def test_repeated_votes_are_recorded(self, memory_ledger):
        await memory_ledger.submit_vote(1, "current-user.icp", False)
        await memory_ledger.submit_vote(1, "current-user.icp", False)

        proposals = await memory_ledger.fetch_proposals()
        assert proposals[1].votes_against == 14

    async def test_vote_on_unknown_proposal(self, memory_ledger):
        with pytest.raises(ProposalNotFoundError) as exc_info:
            await memory_ledger.submit_vote(99, "current-user.icp", True)
        assert exc_info.value.proposal_id == 99

    async def test_vote_on_closed_proposal(self, memory_ledger):
        await memory_ledger.close_proposal(0)

        with pytest.raises(LedgerRejectedError):
            await memory_ledger.submit_vote(0, "current-user.icp", True)
        stats = await memory_ledger.fetch_stats()
        assert stats.active_proposals == 1

    async def test_fetch_returns_copy(self, memory_ledger):
        proposals = await memory_ledger.fetch_proposals()
        proposals.clear()
        assert len(await memory_ledger.fetch_proposals()) == 2
