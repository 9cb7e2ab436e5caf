"""Combines the ledger and the advisor behind one collaborator interface."""
from typing import List, Optional

from governance_agent.core.config import Settings, get_settings
from governance_agent.core.logging import get_logger
from governance_agent.core.resilience import get_circuit_breaker
from governance_agent.models.proposal import Proposal, ProposalId, VotingStats
from governance_agent.services.advisor.advisor import CannedAdvisor, LLMAdvisor
from governance_agent.services.advisor.llm_client import LLMClientFactory
from governance_agent.services.ledger.base import Advisor, LedgerBackend
from governance_agent.services.ledger.http_client import HttpLedgerClient
from governance_agent.services.ledger.memory import InMemoryLedger

logger = get_logger(__name__)


class GovernanceGateway:
    """GovernanceBackend made of a ledger and an advisor."""

    def __init__(self, ledger: LedgerBackend, advisor: Advisor):
        self.ledger = ledger
        self.advisor = advisor

    async def fetch_proposals(self) -> List[Proposal]:
        return await self.ledger.fetch_proposals()

    async def fetch_stats(self) -> VotingStats:
        return await self.ledger.fetch_stats()

    async def submit_proposal(self, title: str, description: str, proposer: str) -> ProposalId:
        return await self.ledger.submit_proposal(title, description, proposer)

    async def submit_vote(self, proposal_id: ProposalId, voter: str, vote_choice: bool) -> bool:
        return await self.ledger.submit_vote(proposal_id, voter, vote_choice)

    async def request_analysis(self, proposal_id: ProposalId) -> str:
        return await self.advisor.request_analysis(proposal_id)

    async def request_recommendations(self) -> str:
        return await self.advisor.request_recommendations()

    async def aclose(self) -> None:
        close = getattr(self.ledger, "aclose", None)
        if close is not None:
            await close()


def build_ledger(settings: Settings) -> LedgerBackend:
    if settings.backend_mode == "memory":
        return InMemoryLedger.from_yaml(settings.seed_data_path, latency=settings.simulated_latency)
    elif settings.backend_mode == "http":
        return HttpLedgerClient(settings.ledger_base_url, timeout=settings.ledger_timeout)
    raise ValueError(f"Unsupported backend mode: {settings.backend_mode}")


def build_advisor(settings: Settings, ledger: LedgerBackend) -> Advisor:
    if settings.advisor_provider == "canned":
        return CannedAdvisor(latency=settings.simulated_latency)

    client = LLMClientFactory.create_client(settings)
    breaker = get_circuit_breaker(
        "llm",
        failure_threshold=settings.circuit_breaker_failure_threshold,
        recovery_timeout=settings.circuit_breaker_recovery_timeout,
    )
    return LLMAdvisor(
        ledger,
        client,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        circuit_breaker=breaker,
    )


def build_gateway(settings: Optional[Settings] = None) -> GovernanceGateway:
    """Wire the collaborators selected by the settings."""
    settings = settings or get_settings()
    ledger = build_ledger(settings)
    advisor = build_advisor(settings, ledger)
    logger.info(
        "gateway_built",
        backend_mode=settings.backend_mode,
        advisor_provider=settings.advisor_provider,
    )
    return GovernanceGateway(ledger, advisor)
