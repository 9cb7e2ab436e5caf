"""In-process ledger used for local runs and tests."""
import asyncio
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from governance_agent.core.errors import LedgerRejectedError, ProposalNotFoundError
from governance_agent.core.logging import get_logger
from governance_agent.models.proposal import Proposal, ProposalId, ProposalStatus, VotingStats
from governance_agent.views.formatting import current_time_ms

logger = get_logger(__name__)


class InMemoryLedger:
    """
    Append-only proposal and vote storage kept in process memory.

    Stands in for the real ledger: ids are assigned sequentially, tallies
    only grow, and nothing is ever deleted. Repeated votes by the same voter
    are recorded like any other vote.
    """

    def __init__(self, proposals: Iterable[Proposal] = (), latency: float = 0.0):
        """
        Args:
            proposals: Seed proposals, in display order
            latency: Seconds to sleep before answering each call
        """
        self._proposals: Dict[ProposalId, Proposal] = {}
        for proposal in proposals:
            self._proposals[proposal.id] = proposal
        self._votes: List[Tuple[ProposalId, str, bool]] = []
        self._latency = latency
        self._next_id = self._first_free_id()

    def _first_free_id(self) -> int:
        int_ids = [pid for pid in self._proposals if isinstance(pid, int)]
        return max(int_ids) + 1 if int_ids else 0

    @classmethod
    def from_yaml(cls, path: str, latency: float = 0.0, now_ms: Optional[int] = None) -> "InMemoryLedger":
        """
        Build a ledger from a seed file.

        Each entry carries the proposal fields plus ``age_ms``, the age of the
        proposal relative to load time. A missing file yields an empty ledger.
        """
        seed_path = Path(path)
        if not seed_path.exists():
            logger.warning("seed_file_missing", path=str(seed_path))
            return cls(latency=latency)

        with open(seed_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        now = now_ms if now_ms is not None else current_time_ms()
        proposals = [cls._proposal_from_seed(entry, now) for entry in data.get("proposals", [])]
        logger.info("seed_loaded", path=str(seed_path), proposals=len(proposals))
        return cls(proposals, latency=latency)

    @staticmethod
    def _proposal_from_seed(entry: Dict[str, Any], now_ms: int) -> Proposal:
        fields = dict(entry)
        age_ms = int(fields.pop("age_ms", 0))
        fields.setdefault("timestamp", now_ms - age_ms)
        return Proposal(**fields)

    async def _simulate_latency(self) -> None:
        if self._latency > 0:
            await asyncio.sleep(self._latency)

    @property
    def votes(self) -> List[Tuple[ProposalId, str, bool]]:
        """Recorded votes as (proposal_id, voter, vote_choice)."""
        return list(self._votes)

    async def fetch_proposals(self) -> List[Proposal]:
        await self._simulate_latency()
        return list(self._proposals.values())

    async def fetch_stats(self) -> VotingStats:
        await self._simulate_latency()
        proposals = self._proposals.values()
        return VotingStats(
            total_proposals=len(self._proposals),
            active_proposals=sum(1 for p in proposals if p.is_active),
            total_votes=sum(p.total_votes for p in proposals),
        )

    async def submit_proposal(self, title: str, description: str, proposer: str) -> ProposalId:
        await self._simulate_latency()
        if not (title and description and proposer):
            raise LedgerRejectedError(
                message="title, description and proposer are required",
                operation="submit_proposal",
            )

        proposal_id = self._next_id
        self._next_id += 1
        self._proposals[proposal_id] = Proposal(
            id=proposal_id,
            title=title,
            description=description,
            proposer=proposer,
            timestamp=current_time_ms(),
        )
        logger.info("proposal_recorded", proposal_id=proposal_id, proposer=proposer)
        return proposal_id

    async def submit_vote(self, proposal_id: ProposalId, voter: str, vote_choice: bool) -> bool:
        await self._simulate_latency()
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id, operation="submit_vote")
        if not proposal.is_active:
            raise LedgerRejectedError(
                message=f"Proposal {proposal_id} is closed",
                operation="submit_vote",
                proposal_id=proposal_id,
            )

        self._votes.append((proposal_id, voter, vote_choice))
        if vote_choice:
            updated = proposal.model_copy(update={"votes_for": proposal.votes_for + 1})
        else:
            updated = proposal.model_copy(update={"votes_against": proposal.votes_against + 1})
        self._proposals[proposal_id] = updated
        logger.info("vote_recorded", proposal_id=proposal_id, voter=voter, vote=vote_choice)
        return True

    async def close_proposal(self, proposal_id: ProposalId) -> None:
        """Mark a proposal closed; further votes are refused."""
        proposal = self._proposals.get(proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id, operation="close_proposal")
        self._proposals[proposal_id] = proposal.model_copy(update={"status": ProposalStatus.CLOSED})
