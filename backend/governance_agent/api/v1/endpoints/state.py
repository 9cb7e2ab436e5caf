"""Whole-state endpoints."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from governance_agent.api.deps import (
    get_controller,
    get_current_request_id,
    outcome_response,
    respond,
)
from governance_agent.core.api import ApiResponse
from governance_agent.models.workflow import ActiveView, OperationOutcome
from governance_agent.workflow.controller import WorkflowController

router = APIRouter()


class ViewChangeRequest(BaseModel):
    view: ActiveView


@router.get("")
async def get_state(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Current snapshot: proposals, stats, draft, flags and AI text."""
    return respond(ApiResponse.success_response(data=controller.state.snapshot(), request_id=request_id))


@router.post("/reload")
async def reload_state(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Reload proposals and stats from the ledger."""
    outcomes = await controller.load_all()
    # Report the first non-completed outcome, if any
    outcome = next((o for o in outcomes if o != OperationOutcome.COMPLETED), OperationOutcome.COMPLETED)
    return outcome_response(outcome, controller, request_id)


@router.put("/view")
async def change_view(
    body: ViewChangeRequest,
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    controller.switch_view(body.view)
    return respond(ApiResponse.success_response(data=controller.state.snapshot(), request_id=request_id))
