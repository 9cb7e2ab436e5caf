"""Domain models."""
from governance_agent.models.proposal import (
    DraftUpdate,
    Proposal,
    ProposalCard,
    ProposalDraft,
    ProposalId,
    ProposalStatus,
    VotingStats,
)
from governance_agent.models.workflow import (
    ActiveView,
    AnalysisResult,
    GovernanceSnapshot,
    OperationKind,
    OperationOutcome,
    RecommendationResult,
)

__all__ = [
    "ActiveView",
    "AnalysisResult",
    "DraftUpdate",
    "GovernanceSnapshot",
    "OperationKind",
    "OperationOutcome",
    "Proposal",
    "ProposalCard",
    "ProposalDraft",
    "ProposalId",
    "ProposalStatus",
    "RecommendationResult",
    "VotingStats",
]
