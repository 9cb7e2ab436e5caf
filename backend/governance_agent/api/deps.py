"""API dependencies and response helpers."""
from typing import Any, Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from governance_agent.core.api import ApiResponse
from governance_agent.core.errors import ErrorCategory, ErrorCode, ProposalNotFoundError
from governance_agent.core.middleware import get_request_id
from governance_agent.models.workflow import OperationOutcome
from governance_agent.workflow.controller import WorkflowController


def get_controller(request: Request) -> WorkflowController:
    """WorkflowController created by the application lifespan."""
    return request.app.state.controller


async def get_current_request_id(request: Request) -> str:
    """현재 요청의 Request ID를 가져옵니다."""
    return await get_request_id(request)


def respond(response: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", by_alias=True),
    )


def outcome_response(
    outcome: OperationOutcome,
    controller: WorkflowController,
    request_id: str,
    data: Optional[Callable[[], Any]] = None,
) -> JSONResponse:
    """
    Translate an operation outcome into an HTTP response.

    completed -> 200, rejected_busy -> 409, precondition_failed -> 422,
    failed -> 404 (unknown proposal), 422 (other permanent refusal) or
    502 (transient), carrying the recorded collaborator error.
    """
    if outcome == OperationOutcome.COMPLETED:
        payload = data() if data is not None else controller.state.snapshot()
        return respond(ApiResponse.success_response(data=payload, request_id=request_id))

    if outcome == OperationOutcome.REJECTED_BUSY:
        return respond(
            ApiResponse.error_response(
                code=ErrorCode.OPERATION_IN_PROGRESS,
                message="Another operation is in progress",
                request_id=request_id,
            ),
            409,
        )

    if outcome == OperationOutcome.PRECONDITION_FAILED:
        return respond(
            ApiResponse.error_response(
                code=ErrorCode.MISSING_REQUIRED_FIELD,
                message="Draft is incomplete",
                details={"missing_fields": controller.state.draft.missing_fields()},
                request_id=request_id,
            ),
            422,
        )

    error = controller.last_error or {}
    code, status_code = _failure_status(error)
    return respond(
        ApiResponse.error_response(
            code=code,
            message=error.get("message", "Operation failed"),
            details=error,
            request_id=request_id,
        ),
        status_code,
    )


def _failure_status(error: dict[str, Any]) -> tuple[ErrorCode, int]:
    """Error code and HTTP status for a recorded collaborator failure."""
    if error.get("category") == ErrorCategory.PERMANENT.value:
        if error.get("error_type") == ProposalNotFoundError.__name__:
            return ErrorCode.NOT_FOUND, 404
        return ErrorCode.OPERATION_REJECTED, 422
    return ErrorCode.SERVICE_UNAVAILABLE, 502
