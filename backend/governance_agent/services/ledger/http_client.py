"""HTTP client for a remote governance ledger."""
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from governance_agent.core.errors import (
    LedgerError,
    LedgerRejectedError,
    ProposalNotFoundError,
)
from governance_agent.core.logging import get_logger
from governance_agent.models.proposal import Proposal, ProposalId, VotingStats

logger = get_logger(__name__)


class HttpLedgerClient:
    """
    Ledger collaborator reached over JSON/HTTP.

    Endpoints (relative to ``base_url``):
        GET  /proposals                -> [Proposal, ...]
        GET  /stats                    -> VotingStats
        POST /proposals                -> {"id": ...}
        POST /proposals/{id}/votes     -> {"accepted": true}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            base_url: Ledger API root
            timeout: Per-request timeout in seconds
            client: Preconfigured httpx client (tests inject a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        logger.info("ledger_client_initialized", base_url=self.base_url)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        proposal_id: Optional[ProposalId] = None,
        json: Optional[dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise LedgerError(
                message=f"Ledger request failed: {e}",
                operation=operation,
                proposal_id=proposal_id,
                original_error=e,
            ) from e

        if response.status_code == 404 and proposal_id is not None:
            raise ProposalNotFoundError(proposal_id, operation=operation)
        if 400 <= response.status_code < 500:
            raise LedgerRejectedError(
                message=f"Ledger rejected request: {response.status_code}",
                operation=operation,
                proposal_id=proposal_id,
                details={"status_code": response.status_code, "body": response.text[:500]},
            )
        if response.status_code >= 500:
            raise LedgerError(
                message=f"Ledger unavailable: {response.status_code}",
                operation=operation,
                proposal_id=proposal_id,
                details={"status_code": response.status_code},
            )

        try:
            return response.json()
        except ValueError as e:
            raise LedgerError(
                message="Ledger returned invalid JSON",
                operation=operation,
                proposal_id=proposal_id,
                original_error=e,
            ) from e

    async def fetch_proposals(self) -> List[Proposal]:
        payload = await self._request("GET", "/proposals", operation="fetch_proposals")
        try:
            return [Proposal.model_validate(item) for item in payload]
        except (TypeError, ValidationError) as e:
            raise LedgerError(
                message="Ledger returned malformed proposals",
                operation="fetch_proposals",
                original_error=e,
            ) from e

    async def fetch_stats(self) -> VotingStats:
        payload = await self._request("GET", "/stats", operation="fetch_stats")
        try:
            return VotingStats.model_validate(payload)
        except ValidationError as e:
            raise LedgerError(
                message="Ledger returned malformed stats",
                operation="fetch_stats",
                original_error=e,
            ) from e

    async def submit_proposal(self, title: str, description: str, proposer: str) -> ProposalId:
        payload = await self._request(
            "POST",
            "/proposals",
            operation="submit_proposal",
            json={"title": title, "description": description, "proposer": proposer},
        )
        if not isinstance(payload, dict) or "id" not in payload:
            raise LedgerError(
                message="Ledger response is missing the new proposal id",
                operation="submit_proposal",
            )
        return payload["id"]

    async def submit_vote(self, proposal_id: ProposalId, voter: str, vote_choice: bool) -> bool:
        payload = await self._request(
            "POST",
            f"/proposals/{proposal_id}/votes",
            operation="submit_vote",
            proposal_id=proposal_id,
            json={"voter": voter, "vote": vote_choice},
        )
        if isinstance(payload, dict) and payload.get("accepted") is False:
            raise LedgerRejectedError(
                message=payload.get("reason") or "Vote was not accepted",
                operation="submit_vote",
                proposal_id=proposal_id,
            )
        return True
