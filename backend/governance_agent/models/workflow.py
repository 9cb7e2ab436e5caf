"""Workflow state models."""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from governance_agent.models.proposal import Proposal, ProposalDraft, ProposalId, VotingStats


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ActiveView(str, Enum):
    """Which panel the presentation layer shows."""
    PROPOSALS = "proposals"
    CREATE_DRAFT = "create-draft"
    ANALYSIS = "analysis"
    RECOMMENDATIONS = "recommendations"


class OperationKind(str, Enum):
    """Operations that go through the busy gate."""
    LOAD_PROPOSALS = "load_proposals"
    LOAD_STATS = "load_stats"
    CREATE_PROPOSAL = "create_proposal"
    CAST_VOTE = "cast_vote"
    ANALYZE_PROPOSAL = "analyze_proposal"
    REQUEST_RECOMMENDATIONS = "request_recommendations"


class OperationOutcome(str, Enum):
    """How a triggered operation ended."""
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED_BUSY = "rejected_busy"          # another operation held the gate
    PRECONDITION_FAILED = "precondition_failed"  # rejected before any call


class AnalysisResult(BaseModel):
    """AI analysis text for one proposal."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    proposal_id: ProposalId
    text: str
    generated_at: datetime = Field(default_factory=_utcnow)


class RecommendationResult(BaseModel):
    """AI governance recommendations across all proposals."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    text: str
    generated_at: datetime = Field(default_factory=_utcnow)


class GovernanceSnapshot(BaseModel):
    """Read-only view of the whole state at one instant."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    proposals: Tuple[Proposal, ...] = ()
    stats: VotingStats = Field(default_factory=VotingStats)
    draft: ProposalDraft = Field(default_factory=ProposalDraft)
    busy: bool = False
    active_view: ActiveView = ActiveView.PROPOSALS
    analysis: Optional[AnalysisResult] = None
    recommendations: Optional[RecommendationResult] = None
    last_error: Optional[dict[str, Any]] = None
