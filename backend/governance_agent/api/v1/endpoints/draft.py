"""Proposal draft endpoints."""
from fastapi import APIRouter, Depends

from governance_agent.api.deps import (
    get_controller,
    get_current_request_id,
    outcome_response,
    respond,
)
from governance_agent.core.api import ApiResponse
from governance_agent.models.proposal import DraftUpdate
from governance_agent.workflow.controller import WorkflowController

router = APIRouter()


@router.get("")
async def get_draft(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    return respond(ApiResponse.success_response(data=controller.state.draft, request_id=request_id))


@router.patch("")
async def update_draft(
    body: DraftUpdate,
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Merge the supplied fields into the draft."""
    controller.update_draft(**body.model_dump(exclude_none=True))
    return respond(ApiResponse.success_response(data=controller.state.draft, request_id=request_id))


@router.delete("")
async def discard_draft(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    controller.discard_draft()
    return respond(ApiResponse.success_response(data=controller.state.draft, request_id=request_id))


@router.post("/submit")
async def submit_draft(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Create a proposal from the draft."""
    outcome = await controller.create_proposal()
    return outcome_response(outcome, controller, request_id)
