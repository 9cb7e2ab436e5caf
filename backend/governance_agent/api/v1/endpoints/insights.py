"""AI recommendation endpoints."""
from fastapi import APIRouter, Depends

from governance_agent.api.deps import (
    get_controller,
    get_current_request_id,
    outcome_response,
    respond,
)
from governance_agent.core.api import ApiResponse
from governance_agent.workflow.controller import WorkflowController

router = APIRouter()


@router.post("/recommendations")
async def request_recommendations(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    outcome = await controller.request_recommendations()
    return outcome_response(
        outcome, controller, request_id, data=lambda: controller.state.recommendations
    )


@router.get("/insights")
async def get_insights(
    controller: WorkflowController = Depends(get_controller),
    request_id: str = Depends(get_current_request_id),
):
    """Latest analysis and recommendations, if any."""
    state = controller.state
    data = {
        "analysis": state.analysis.model_dump(mode="json", by_alias=True) if state.analysis else None,
        "recommendations": (
            state.recommendations.model_dump(mode="json", by_alias=True) if state.recommendations else None
        ),
    }
    return respond(ApiResponse.success_response(data=data, request_id=request_id))
