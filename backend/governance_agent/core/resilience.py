"""Circuit breaker for the AI advisor."""
import asyncio
import inspect
import time
from typing import Any, Callable, Optional

from governance_agent.core.errors import TransientError
from governance_agent.core.logging import get_logger

logger = get_logger(__name__)


class CircuitBreaker:
    """
    Circuit Breaker 패턴 구현.

    States:
    - CLOSED: 정상 작동, 요청 통과
    - OPEN: 장애 감지, 요청 차단 (failure_threshold 도달)
    - HALF_OPEN: 복구 시도, 요청 한 번 통과 (recovery_timeout 후)
    """

    def __init__(
        self,
        service_name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        expected_exception: type[Exception] = Exception,
    ):
        """
        Args:
            service_name: 서비스 이름 (로깅용)
            failure_threshold: 회로 차단 실패 횟수
            recovery_timeout: 복구 대기 시간 (초)
            expected_exception: 회로 차단을 트리거할 예외 타입
        """
        self.service_name = service_name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception

        self._failure_count = 0
        self._last_failure_time: Optional[float] = None
        self._state = "CLOSED"  # CLOSED, OPEN, HALF_OPEN
        self._lock = asyncio.Lock()

    @property
    def state(self) -> str:
        """현재 회로 상태."""
        if self._state == "OPEN":
            if self._last_failure_time and (time.time() - self._last_failure_time) >= self.recovery_timeout:
                self._state = "HALF_OPEN"
                logger.info(
                    "circuit_breaker_state_changed",
                    service=self.service_name,
                    from_state="OPEN",
                    to_state="HALF_OPEN",
                )
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def _record_success(self) -> None:
        async with self._lock:
            if self._state == "HALF_OPEN":
                logger.info(
                    "circuit_breaker_recovered",
                    service=self.service_name,
                    state="CLOSED",
                )
            self._state = "CLOSED"
            self._failure_count = 0

    async def _record_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            self._last_failure_time = time.time()

            if self._state == "HALF_OPEN" or self._failure_count >= self.failure_threshold:
                old_state = self._state
                self._state = "OPEN"
                logger.warning(
                    "circuit_breaker_opened",
                    service=self.service_name,
                    from_state=old_state,
                    failure_count=self._failure_count,
                    threshold=self.failure_threshold,
                )

    async def call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Circuit Breaker를 통한 함수 실행.

        Raises:
            TransientError: 회로가 OPEN 상태인 경우
        """
        if self.state == "OPEN":
            logger.warning(
                "circuit_breaker_rejected",
                service=self.service_name,
                state="OPEN",
                operation=getattr(func, "__name__", "call"),
            )
            raise TransientError(
                message=f"Circuit breaker is OPEN for {self.service_name}",
                service=self.service_name,
                operation=getattr(func, "__name__", "call"),
            )

        try:
            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except self.expected_exception:
            await self._record_failure()
            raise
        await self._record_success()
        return result


_circuit_breakers: dict[str, CircuitBreaker] = {}


def get_circuit_breaker(
    service_name: str,
    failure_threshold: int = 5,
    recovery_timeout: float = 60.0,
) -> CircuitBreaker:
    """서비스용 Circuit Breaker 인스턴스 가져오기."""
    if service_name not in _circuit_breakers:
        _circuit_breakers[service_name] = CircuitBreaker(
            service_name=service_name,
            failure_threshold=failure_threshold,
            recovery_timeout=recovery_timeout,
        )
    return _circuit_breakers[service_name]


def reset_circuit_breakers() -> None:
    """Drop all registered breakers."""
    _circuit_breakers.clear()
