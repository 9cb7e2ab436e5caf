"""In-memory governance state: the last snapshot fetched from collaborators."""
from typing import Any, Iterable, Optional, Tuple

from governance_agent.models.proposal import (
    DraftUpdate,
    Proposal,
    ProposalDraft,
    ProposalId,
    VotingStats,
)
from governance_agent.models.workflow import (
    ActiveView,
    AnalysisResult,
    GovernanceSnapshot,
    RecommendationResult,
)


class GovernanceState:
    """
    Last-fetched proposals, stats and AI text plus the workflow flags.

    Every write replaces a whole value; nothing is patched in place, so a
    reader never observes a half-applied update. The owning
    WorkflowController is the only writer.
    """

    def __init__(self) -> None:
        self._proposals: Tuple[Proposal, ...] = ()
        self._stats = VotingStats()
        self._analysis: Optional[AnalysisResult] = None
        self._recommendations: Optional[RecommendationResult] = None
        self._draft = ProposalDraft()
        self._busy = False
        self._active_view = ActiveView.PROPOSALS
        self._last_error: Optional[dict[str, Any]] = None

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------
    @property
    def proposals(self) -> Tuple[Proposal, ...]:
        return self._proposals

    @property
    def stats(self) -> VotingStats:
        return self._stats

    @property
    def analysis(self) -> Optional[AnalysisResult]:
        return self._analysis

    @property
    def analysis_subject(self) -> Optional[ProposalId]:
        """Proposal whose analysis is currently displayed."""
        return self._analysis.proposal_id if self._analysis else None

    @property
    def recommendations(self) -> Optional[RecommendationResult]:
        return self._recommendations

    @property
    def draft(self) -> ProposalDraft:
        return self._draft

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def active_view(self) -> ActiveView:
        return self._active_view

    @property
    def last_error(self) -> Optional[dict[str, Any]]:
        return self._last_error

    def find_proposal(self, proposal_id: ProposalId) -> Optional[Proposal]:
        for proposal in self._proposals:
            if proposal.id == proposal_id:
                return proposal
        return None

    def resolve_proposal_id(self, raw: str) -> ProposalId:
        """Map an id received as text to a ledger id.

        Cached proposals are matched first, then an ASCII all-digit id is
        taken as an integer ledger id (the cache may lag the ledger).
        Anything else is passed through unchanged; the ledger decides.
        """
        for proposal in self._proposals:
            if str(proposal.id) == raw:
                return proposal.id
        if raw.isascii() and raw.isdigit():
            return int(raw)
        return raw

    def snapshot(self) -> GovernanceSnapshot:
        return GovernanceSnapshot(
            proposals=self._proposals,
            stats=self._stats,
            draft=self._draft,
            busy=self._busy,
            active_view=self._active_view,
            analysis=self._analysis,
            recommendations=self._recommendations,
            last_error=self._last_error,
        )

    # ------------------------------------------------------------------
    # Whole-value writes
    # ------------------------------------------------------------------
    def replace_proposals(self, proposals: Iterable[Proposal]) -> None:
        """Swap in a new list, keeping the ledger's order. Empty is fine."""
        self._proposals = tuple(proposals)

    def replace_stats(self, stats: VotingStats) -> None:
        self._stats = stats

    def set_analysis(self, proposal_id: ProposalId, text: str) -> None:
        self._analysis = AnalysisResult(proposal_id=proposal_id, text=text)

    def set_recommendations(self, text: str) -> None:
        self._recommendations = RecommendationResult(text=text)

    def update_draft(self, update: DraftUpdate) -> None:
        self._draft = self._draft.merge(update)

    def clear_draft(self) -> None:
        self._draft = ProposalDraft()

    def set_busy(self, busy: bool) -> None:
        self._busy = busy

    def set_active_view(self, view: ActiveView) -> None:
        self._active_view = view

    def set_last_error(self, error: Optional[dict[str, Any]]) -> None:
        self._last_error = error
