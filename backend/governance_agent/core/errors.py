"""Error categories and exception hierarchy for collaborator calls."""
from typing import Any, Optional
from enum import Enum
from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standard API error codes."""

    # Validation errors (1xx)
    VALIDATION_ERROR = "VALIDATION_001"
    INVALID_INPUT = "VALIDATION_002"
    MISSING_REQUIRED_FIELD = "VALIDATION_003"

    # Not found errors (2xx)
    NOT_FOUND = "NOT_FOUND_002"

    # Workflow errors (3xx)
    OPERATION_IN_PROGRESS = "WORKFLOW_001"
    OPERATION_REJECTED = "WORKFLOW_002"

    # Internal errors (5xx)
    INTERNAL_ERROR = "INTERNAL_005"
    SERVICE_UNAVAILABLE = "INTERNAL_007"


class ErrorResponse(BaseModel):
    """Standard error payload."""

    code: ErrorCode = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    details: dict[str, Any] = Field(default_factory=dict, description="추가 에러 상세 정보")


class ErrorCategory(Enum):
    """Error category for handling decisions."""

    TRANSIENT = "transient"  # 다시 시도하면 성공할 수 있는 일시적 오류
    PERMANENT = "permanent"  # 같은 요청으로는 다시 성공할 수 없는 오류
    DEGRADED = "degraded"    # 대체 응답으로 처리 가능한 오류


class BaseServiceError(Exception):
    """Base exception for all collaborator errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        service: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize service error.

        Args:
            message: Error message
            category: Error category for handling
            service: Service name (e.g., "ledger", "llm")
            operation: Operation being performed (e.g., "submit_vote")
            proposal_id: Optional proposal ID for context
            details: Additional error details
            original_error: Original exception that caused this error
        """
        self.message = message
        self.category = category
        self.service = service
        self.operation = operation
        self.proposal_id = proposal_id
        self.details = details or {}
        self.original_error = original_error
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "service": self.service,
            "operation": self.operation,
            "proposal_id": self.proposal_id,
            "details": self.details,
        }


class TransientError(BaseServiceError):
    """일시적 오류 (사용자가 다시 요청할 수 있음)."""

    def __init__(
        self,
        message: str,
        service: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.TRANSIENT,
            service=service,
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )


class PermanentError(BaseServiceError):
    """영구적 오류."""

    def __init__(
        self,
        message: str,
        service: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.PERMANENT,
            service=service,
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )


class DegradedError(BaseServiceError):
    """대체 응답 사용 가능한 성능 저하 오류."""

    def __init__(
        self,
        message: str,
        service: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            category=ErrorCategory.DEGRADED,
            service=service,
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )


# Service-specific errors

class LedgerError(TransientError):
    """Ledger backend unreachable or failing."""

    def __init__(
        self,
        message: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="ledger",
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )


class LedgerRejectedError(PermanentError):
    """Ledger refused the request (closed proposal, malformed input)."""

    def __init__(
        self,
        message: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="ledger",
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )


class ProposalNotFoundError(LedgerRejectedError):
    """The ledger has no proposal with the given id."""

    def __init__(self, proposal_id: Any, operation: str):
        super().__init__(
            message=f"Proposal not found: {proposal_id}",
            operation=operation,
            proposal_id=proposal_id,
        )


class LLMError(TransientError):
    """LLM 서비스 오류."""

    def __init__(
        self,
        message: str,
        operation: str,
        proposal_id: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="llm",
            operation=operation,
            proposal_id=proposal_id,
            details=details,
            original_error=original_error,
        )
