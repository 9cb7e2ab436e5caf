"""Interfaces of the external collaborators the workflow talks to."""
from typing import List, Protocol, runtime_checkable

from governance_agent.models.proposal import Proposal, ProposalId, VotingStats


@runtime_checkable
class LedgerBackend(Protocol):
    """Service of record for proposals, votes and aggregate stats."""

    async def fetch_proposals(self) -> List[Proposal]: ...

    async def fetch_stats(self) -> VotingStats: ...

    async def submit_proposal(self, title: str, description: str, proposer: str) -> ProposalId: ...

    async def submit_vote(self, proposal_id: ProposalId, voter: str, vote_choice: bool) -> bool: ...


@runtime_checkable
class Advisor(Protocol):
    """Opaque AI text generator."""

    async def request_analysis(self, proposal_id: ProposalId) -> str: ...

    async def request_recommendations(self) -> str: ...


@runtime_checkable
class GovernanceBackend(LedgerBackend, Advisor, Protocol):
    """Everything the WorkflowController needs from the outside world."""
