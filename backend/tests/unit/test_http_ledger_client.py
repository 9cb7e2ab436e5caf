"""Unit tests for the HTTP ledger client."""
import json

import httpx
import pytest

from governance_agent.core.errors import (
    ErrorCategory,
    LedgerError,
    LedgerRejectedError,
    ProposalNotFoundError,
)
from governance_agent.models.proposal import VotingStats
from governance_agent.services.ledger.http_client import HttpLedgerClient

BASE_URL = "http://ledger.test/api"

PROPOSALS_PAYLOAD = [
    {
        "id": 0,
        "title": "Increase Treasury Allocation for Development",
        "description": "Allocate tokens for grants",
        "proposer": "alice.icp",
        "votesFor": 15,
        "votesAgainst": 3,
        "status": "active",
        "timestamp": 1_700_000_000_000,
    },
    {
        "id": 1,
        "title": "Implement New Governance Token Distribution",
        "description": "Reward long-term holders",
        "proposer": "bob.icp",
        "votesFor": 8,
        "votesAgainst": 12,
        "status": "active",
        "timestamp": 1_699_900_000_000,
    },
]


def make_client(handler) -> HttpLedgerClient:
    transport = httpx.MockTransport(handler)
    return HttpLedgerClient(
        BASE_URL,
        client=httpx.AsyncClient(transport=transport, base_url=BASE_URL),
    )


class TestReads:
    """Test proposal and stats retrieval."""

    async def test_fetch_proposals_keeps_order(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path == "/api/proposals"
            return httpx.Response(200, json=PROPOSALS_PAYLOAD)

        client = make_client(handler)
        proposals = await client.fetch_proposals()

        assert [p.id for p in proposals] == [0, 1]
        assert proposals[1].votes_against == 12
        await client.aclose()

    async def test_fetch_stats(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/stats"
            return httpx.Response(200, json={"totalProposals": 2, "activeProposals": 2, "totalVotes": 38})

        client = make_client(handler)
        assert await client.fetch_stats() == VotingStats(total_proposals=2, active_proposals=2, total_votes=38)

    async def test_malformed_proposals(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[{"id": 0, "votesFor": -1}])

        client = make_client(handler)
        with pytest.raises(LedgerError):
            await client.fetch_proposals()

    async def test_invalid_json(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"not json")

        client = make_client(handler)
        with pytest.raises(LedgerError, match="invalid JSON"):
            await client.fetch_stats()


class TestWrites:
    """Test proposal creation and voting."""

    async def test_submit_proposal(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path == "/api/proposals"
            assert json.loads(request.content) == {
                "title": "Fund audits",
                "description": "Security audit",
                "proposer": "carol.icp",
            }
            return httpx.Response(201, json={"id": 7})

        client = make_client(handler)
        assert await client.submit_proposal("Fund audits", "Security audit", "carol.icp") == 7

    async def test_submit_proposal_without_id(self):
        client = make_client(lambda request: httpx.Response(201, json={}))
        with pytest.raises(LedgerError, match="missing"):
            await client.submit_proposal("t", "d", "p")

    async def test_submit_vote(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/proposals/0/votes"
            assert json.loads(request.content) == {"voter": "current-user.icp", "vote": True}
            return httpx.Response(200, json={"accepted": True})

        client = make_client(handler)
        assert await client.submit_vote(0, "current-user.icp", True) is True

    async def test_vote_not_accepted(self):
        client = make_client(lambda request: httpx.Response(200, json={"accepted": False, "reason": "closed"}))
        with pytest.raises(LedgerRejectedError, match="closed"):
            await client.submit_vote(0, "current-user.icp", True)


class TestErrors:
    """Test error mapping."""

    async def test_not_found(self):
        client = make_client(lambda request: httpx.Response(404))
        with pytest.raises(ProposalNotFoundError) as exc_info:
            await client.submit_vote(42, "current-user.icp", False)
        assert exc_info.value.proposal_id == 42

    async def test_client_error_is_permanent(self):
        client = make_client(lambda request: httpx.Response(400, text="bad request"))
        with pytest.raises(LedgerRejectedError) as exc_info:
            await client.submit_proposal("t", "d", "p")
        assert exc_info.value.category == ErrorCategory.PERMANENT
        assert exc_info.value.details["status_code"] == 400

    async def test_server_error_is_transient(self):
        client = make_client(lambda request: httpx.Response(503))
        with pytest.raises(LedgerError) as exc_info:
            await client.fetch_proposals()
        assert exc_info.value.category == ErrorCategory.TRANSIENT

    async def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)
        with pytest.raises(LedgerError) as exc_info:
            await client.fetch_stats()
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)
