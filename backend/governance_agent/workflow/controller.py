"""Workflow controller: sequences collaborator calls behind one busy gate."""
from typing import Any, Awaitable, Callable, List, Optional

from governance_agent.core.errors import BaseServiceError, TransientError
from governance_agent.core.logging import get_logger, log_error, workflow_context
from governance_agent.models.proposal import DraftUpdate, ProposalId
from governance_agent.models.workflow import ActiveView, OperationKind, OperationOutcome
from governance_agent.services.ledger.base import GovernanceBackend
from governance_agent.state.store import GovernanceState

logger = get_logger(__name__)

Listener = Callable[[GovernanceState], None]


class WorkflowController:
    """
    Single writer of a GovernanceState.

    Every operation that calls a collaborator holds the busy gate for its
    whole duration. While the gate is held, new requests are rejected, not
    queued, so state writes happen strictly one operation at a time. The
    gate check and the gate set run without a suspension point in between,
    which makes them atomic on a single event loop.

    A failed call leaves the previous snapshot in place and is recorded as
    ``last_error``; the gate is released on every path.
    """

    def __init__(
        self,
        backend: GovernanceBackend,
        state: Optional[GovernanceState] = None,
        voter_identity: str = "current-user.icp",
    ):
        """
        Args:
            backend: Ledger and advisor collaborator
            state: State container to own (a fresh one by default)
            voter_identity: Identity sent with every vote
        """
        self._backend = backend
        self._state = state or GovernanceState()
        self._voter_identity = voter_identity
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def state(self) -> GovernanceState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state.busy

    @property
    def voter_identity(self) -> str:
        return self._voter_identity

    @property
    def last_error(self) -> Optional[dict[str, Any]]:
        return self._state.last_error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` after every state change; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as e:
                logger.error("listener_failed", listener=repr(listener), error=str(e))

    # ------------------------------------------------------------------
    # Gate
    # ------------------------------------------------------------------
    async def _run(
        self,
        operation: OperationKind,
        action: Callable[[], Awaitable[None]],
        **context: Any,
    ) -> OperationOutcome:
        if self._state.busy:
            logger.info("operation_rejected_busy", operation=operation.value, **context)
            return OperationOutcome.REJECTED_BUSY

        self._state.set_busy(True)
        self._notify()
        with workflow_context(operation.value, **context):
            logger.info("operation_started")
            try:
                await action()
            except Exception as e:
                error = self._as_service_error(e, operation, context.get("proposal_id"))
                self._state.set_last_error(error.to_dict())
                log_error(logger, error)
                return OperationOutcome.FAILED
            else:
                self._state.set_last_error(None)
                logger.info("operation_completed")
                return OperationOutcome.COMPLETED
            finally:
                self._state.set_busy(False)
                self._notify()

    @staticmethod
    def _as_service_error(
        error: Exception,
        operation: OperationKind,
        proposal_id: Optional[ProposalId],
    ) -> BaseServiceError:
        if isinstance(error, BaseServiceError):
            return error
        return TransientError(
            message=str(error) or type(error).__name__,
            service="backend",
            operation=operation.value,
            proposal_id=proposal_id,
            original_error=error,
        )

    async def _reload_proposals(self) -> None:
        proposals = await self._backend.fetch_proposals()
        self._state.replace_proposals(proposals)

    # ------------------------------------------------------------------
    # Gated operations
    # ------------------------------------------------------------------
    async def load_proposals(self) -> OperationOutcome:
        return await self._run(OperationKind.LOAD_PROPOSALS, self._reload_proposals)

    async def load_stats(self) -> OperationOutcome:
        async def action() -> None:
            stats = await self._backend.fetch_stats()
            self._state.replace_stats(stats)

        return await self._run(OperationKind.LOAD_STATS, action)

    async def load_all(self) -> tuple[OperationOutcome, OperationOutcome]:
        """Startup/refresh: proposals, then stats, each under the gate."""
        proposals_outcome = await self.load_proposals()
        stats_outcome = await self.load_stats()
        return proposals_outcome, stats_outcome

    async def create_proposal(self) -> OperationOutcome:
        """Submit the current draft, then reload the authoritative list."""
        draft = self._state.draft
        missing = draft.missing_fields()
        if missing:
            logger.info("create_proposal_incomplete_draft", missing_fields=missing)
            return OperationOutcome.PRECONDITION_FAILED

        async def action() -> None:
            proposal_id = await self._backend.submit_proposal(
                draft.title, draft.description, draft.proposer
            )
            logger.info("proposal_submitted", proposal_id=proposal_id)
            self._state.clear_draft()
            await self._reload_proposals()
            self._state.set_active_view(ActiveView.PROPOSALS)

        return await self._run(OperationKind.CREATE_PROPOSAL, action)

    async def cast_vote(self, proposal_id: ProposalId, vote_choice: bool) -> OperationOutcome:
        """Send a vote, then take the tally from a fresh reload."""
        async def action() -> None:
            await self._backend.submit_vote(proposal_id, self._voter_identity, vote_choice)
            await self._reload_proposals()

        return await self._run(
            OperationKind.CAST_VOTE, action, proposal_id=proposal_id, vote=vote_choice
        )

    async def analyze_proposal(self, proposal_id: ProposalId) -> OperationOutcome:
        async def action() -> None:
            text = await self._backend.request_analysis(proposal_id)
            self._state.set_analysis(proposal_id, text)
            self._state.set_active_view(ActiveView.ANALYSIS)

        return await self._run(OperationKind.ANALYZE_PROPOSAL, action, proposal_id=proposal_id)

    async def request_recommendations(self) -> OperationOutcome:
        async def action() -> None:
            text = await self._backend.request_recommendations()
            self._state.set_recommendations(text)
            self._state.set_active_view(ActiveView.RECOMMENDATIONS)

        return await self._run(OperationKind.REQUEST_RECOMMENDATIONS, action)

    # ------------------------------------------------------------------
    # Local actions (no collaborator call, no gate)
    # ------------------------------------------------------------------
    def update_draft(self, **fields: Optional[str]) -> None:
        self._state.update_draft(DraftUpdate(**fields))
        self._notify()

    def discard_draft(self) -> None:
        self._state.clear_draft()
        self._notify()

    def switch_view(self, view: ActiveView) -> None:
        self._state.set_active_view(view)
        self._notify()
