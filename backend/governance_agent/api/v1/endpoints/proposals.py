"""Proposal, vote and analysis endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from governance_agent.api.deps import (
    get_controller,
    get_current_request_id,
    outcome_response,
    respond,
)
from governance_agent.core.api import ApiResponse
from governance_agent.core.logging import get_logger
from governance_agent.models.proposal import ProposalCard
from governance_agent.views.formatting import current_time_ms
from governance_agent.workflow.controller import WorkflowController

logger = get_logger(__name__)
router = APIRouter()


class VoteRequest(BaseModel):
    vote: bool


@router.get("")
async def list_proposals(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Cached proposals in ledger order, with age and support labels."""
    now_ms = current_time_ms()
    cards = [ProposalCard.from_proposal(p, now_ms) for p in controller.state.proposals]
    return respond(ApiResponse.success_response(data=cards, request_id=request_id))


@router.get("/stats")
async def get_stats(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    return respond(ApiResponse.success_response(data=controller.state.stats, request_id=request_id))


@router.post("/{proposal_id}/votes")
async def cast_vote(
    proposal_id: str,
    body: VoteRequest,
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Cast a yes/no vote as the configured voter identity."""
    resolved_id = controller.state.resolve_proposal_id(proposal_id)
    outcome = await controller.cast_vote(resolved_id, body.vote)
    logger.info("vote_request_handled", proposal_id=resolved_id, outcome=outcome.value)
    return outcome_response(outcome, controller, request_id)


@router.post("/{proposal_id}/analysis")
async def analyze_proposal(
    proposal_id: str,
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Request AI analysis of one proposal."""
    resolved_id = controller.state.resolve_proposal_id(proposal_id)
    outcome = await controller.analyze_proposal(resolved_id)
    return outcome_response(outcome, controller, request_id, data=lambda: controller.state.analysis)
