"""AI advisor collaborators: LLM-backed and canned."""
import asyncio
from typing import Any, Optional

from governance_agent.core.errors import BaseServiceError, LLMError, ProposalNotFoundError
from governance_agent.core.logging import get_logger
from governance_agent.core.resilience import CircuitBreaker, get_circuit_breaker
from governance_agent.models.proposal import Proposal, ProposalId
from governance_agent.services.advisor.prompts import (
    build_analysis_messages,
    build_recommendation_messages,
)
from governance_agent.services.ledger.base import LedgerBackend

logger = get_logger(__name__)


class LLMAdvisor:
    """Generates analysis and recommendations with a chat-completion model."""

    def __init__(
        self,
        ledger: LedgerBackend,
        client: Any,
        temperature: float = 0.3,
        max_tokens: int = 1000,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Args:
            ledger: Source of the proposal text fed into the prompts
            client: OpenAIClient or OllamaClient
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
            circuit_breaker: Breaker guarding the model (default: shared "llm")
        """
        self._ledger = ledger
        self._client = client
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._circuit_breaker = circuit_breaker or get_circuit_breaker("llm")

    async def _lookup(self, proposal_id: ProposalId) -> Proposal:
        for proposal in await self._ledger.fetch_proposals():
            if proposal.id == proposal_id:
                return proposal
        raise ProposalNotFoundError(proposal_id, operation="request_analysis")

    async def _complete(
        self,
        messages: list[dict[str, str]],
        operation: str,
        proposal_id: Optional[ProposalId] = None,
    ) -> str:
        try:
            return await self._circuit_breaker.call(
                self._client.generate_completion,
                messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except BaseServiceError:
            raise
        except Exception as e:
            raise LLMError(
                message=f"Completion failed: {e}",
                operation=operation,
                proposal_id=proposal_id,
                original_error=e,
            ) from e

    async def request_analysis(self, proposal_id: ProposalId) -> str:
        proposal = await self._lookup(proposal_id)
        text = await self._complete(
            build_analysis_messages(proposal),
            operation="request_analysis",
            proposal_id=proposal_id,
        )
        logger.info("analysis_generated", proposal_id=proposal_id, length=len(text))
        return text

    async def request_recommendations(self) -> str:
        proposals = await self._ledger.fetch_proposals()
        stats = await self._ledger.fetch_stats()
        text = await self._complete(
            build_recommendation_messages(proposals, stats),
            operation="request_recommendations",
        )
        logger.info("recommendations_generated", proposals=len(proposals), length=len(text))
        return text


CANNED_ANALYSIS = """AI Analysis for Proposal {proposal_id}:

**Benefits:**
- Could accelerate ecosystem development
- Provides clear funding mechanism for developers
- Aligns with DAO's growth objectives

**Risks:**
- Large treasury allocation might impact token value
- Need robust oversight mechanisms
- Potential for fund misuse without proper governance

**Recommendations:**
- Implement milestone-based funding releases
- Establish clear success metrics
- Consider smaller initial allocation with expansion based on results"""

CANNED_RECOMMENDATIONS = """Current Governance Recommendations:

**Priority Items:**
1. The treasury allocation proposal shows strong support - consider fast-tracking
2. Token distribution proposal is controversial - needs more community discussion

**Strategic Insights:**
- Both proposals impact tokenomics significantly
- Consider combining proposals for holistic approach
- Community sentiment suggests growth-focused priorities

**Action Items:**
- Schedule community call for token distribution debate
- Create detailed implementation timeline for treasury allocation
- Consider governance parameter adjustments for better participation"""


class CannedAdvisor:
    """Offline advisor returning fixed texts, for demos and tests."""

    def __init__(self, latency: float = 0.0):
        self._latency = latency

    async def request_analysis(self, proposal_id: ProposalId) -> str:
        if self._latency > 0:
            await asyncio.sleep(self._latency)
        return CANNED_ANALYSIS.format(proposal_id=proposal_id)

    async def request_recommendations(self) -> str:
        if self._latency > 0:
            await asyncio.sleep(self._latency)
        return CANNED_RECOMMENDATIONS
