"""Standard API response envelope."""
from typing import Generic, TypeVar, Optional, Any
from pydantic import BaseModel, Field
from datetime import datetime, timezone
from uuid import uuid4

from governance_agent.core.errors import ErrorCode, ErrorResponse


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """
    표준 API 응답 포맷.

    모든 API 엔드포인트는 이 포맷을 사용하여 응답합니다.
    """

    success: bool = Field(..., description="요청 성공 여부")
    data: Optional[T] = Field(None, description="응답 데이터")
    error: Optional[ErrorResponse] = Field(None, description="에러 정보 (실패 시)")
    request_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="요청 추적 ID"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="응답 생성 시간"
    )

    @classmethod
    def success_response(
        cls,
        data: T,
        request_id: Optional[str] = None,
    ) -> "ApiResponse[T]":
        """
        성공 응답 생성.

        Args:
            data: 응답 데이터
            request_id: 요청 ID (없으면 자동 생성)
        """
        return cls(
            success=True,
            data=data,
            request_id=request_id or str(uuid4()),
        )

    @classmethod
    def error_response(
        cls,
        code: ErrorCode,
        message: str,
        details: Optional[dict[str, Any]] = None,
        request_id: Optional[str] = None,
    ) -> "ApiResponse[None]":
        """
        에러 응답 생성.

        Args:
            code: 에러 코드
            message: 에러 메시지
            details: 추가 에러 상세 정보
            request_id: 요청 ID (없으면 자동 생성)
        """
        return cls(
            success=False,
            error=ErrorResponse(
                code=code,
                message=message,
                details=details or {},
            ),
            request_id=request_id or str(uuid4()),
        )
