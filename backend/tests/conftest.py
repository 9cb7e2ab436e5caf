"""Pytest configuration and fixtures."""
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from governance_agent.core.resilience import reset_circuit_breakers
from governance_agent.models.proposal import Proposal, VotingStats
from governance_agent.services.advisor.advisor import CannedAdvisor
from governance_agent.services.gateway import GovernanceGateway
from governance_agent.services.ledger.memory import InMemoryLedger
from governance_agent.workflow.controller import WorkflowController

NOW_MS = 1_700_000_000_000
DAY_MS = 86_400_000


@pytest.fixture(autouse=True)
def _fresh_circuit_breakers():
    """Breakers are process-wide; start every test from CLOSED."""
    reset_circuit_breakers()
    yield
    reset_circuit_breakers()


# =============================================================================
# Model Fixtures
# =============================================================================
@pytest.fixture
def sample_proposals() -> list[Proposal]:
    """The two proposals the ledger is seeded with."""
    return [
        Proposal(
            id=0,
            title="Increase Treasury Allocation for Development",
            description="Proposal to allocate 50,000 ICP tokens from treasury for dApp development grants",
            proposer="alice.icp",
            votes_for=15,
            votes_against=3,
            status="active",
            timestamp=NOW_MS - DAY_MS,
        ),
        Proposal(
            id=1,
            title="Implement New Governance Token Distribution",
            description="Change the token distribution mechanism to reward long-term holders",
            proposer="bob.icp",
            votes_for=8,
            votes_against=12,
            status="active",
            timestamp=NOW_MS - 2 * DAY_MS,
        ),
    ]


@pytest.fixture
def sample_stats() -> VotingStats:
    return VotingStats(total_proposals=2, active_proposals=2, total_votes=38)


# =============================================================================
# Collaborator Fixtures
# =============================================================================
@pytest.fixture
def fake_backend(sample_proposals, sample_stats):
    """GovernanceBackend double recording every call."""
    backend = AsyncMock(spec=GovernanceGateway)
    backend.fetch_proposals.return_value = list(sample_proposals)
    backend.fetch_stats.return_value = sample_stats
    backend.submit_proposal.return_value = 2
    backend.submit_vote.return_value = True
    backend.request_analysis.return_value = "AI Analysis for Proposal 0"
    backend.request_recommendations.return_value = "Current Governance Recommendations"
    return backend


@pytest.fixture
def controller(fake_backend) -> WorkflowController:
    return WorkflowController(fake_backend, voter_identity="current-user.icp")


@pytest.fixture
def memory_ledger(sample_proposals) -> InMemoryLedger:
    return InMemoryLedger(sample_proposals)


@pytest.fixture
def memory_gateway(memory_ledger) -> GovernanceGateway:
    return GovernanceGateway(memory_ledger, CannedAdvisor())


# =============================================================================
# HTTP Client Fixtures
# =============================================================================
@pytest.fixture
async def live_controller(memory_gateway) -> WorkflowController:
    """Controller over the in-memory ledger, after the startup load."""
    controller = WorkflowController(memory_gateway, voter_identity="current-user.icp")
    await controller.load_all()
    return controller


@pytest.fixture
async def api_client(live_controller) -> AsyncGenerator[AsyncClient]:
    """
    Async HTTP client bound to the app.

    ASGITransport does not run the lifespan, so the controller dependency is
    overridden with ``live_controller``.
    """
    from governance_agent.api.deps import get_controller
    from governance_agent.main import app

    app.dependency_overrides[get_controller] = lambda: live_controller
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
