"""Proposal and voting models."""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from governance_agent.views.formatting import format_time_ago, support_percentage

ProposalId = Union[int, str]

DRAFT_FIELDS = ("title", "description", "proposer")


class ProposalStatus(str, Enum):
    """Ledger-assigned proposal status."""
    ACTIVE = "active"
    CLOSED = "closed"


class Proposal(BaseModel):
    """A governance item and its tally as reported by the ledger."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: ProposalId
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    proposer: str = Field(min_length=1)
    votes_for: int = Field(default=0, ge=0)
    votes_against: int = Field(default=0, ge=0)
    status: ProposalStatus = ProposalStatus.ACTIVE
    timestamp: int = Field(description="Creation instant (epoch ms)", ge=0)

    @property
    def total_votes(self) -> int:
        return self.votes_for + self.votes_against

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)

    @property
    def is_active(self) -> bool:
        return self.status == ProposalStatus.ACTIVE


class VotingStats(BaseModel):
    """Aggregate counters fetched from the ledger."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    total_proposals: int = Field(default=0, ge=0)
    active_proposals: int = Field(default=0, ge=0)
    total_votes: int = Field(default=0, ge=0)


class DraftUpdate(BaseModel):
    """Partial edit of the proposal draft; unset fields are left alone."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    proposer: Optional[str] = None


class ProposalDraft(BaseModel):
    """Scratch record edited before a proposal is submitted."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    proposer: str = ""

    def missing_fields(self) -> List[str]:
        return [name for name in DRAFT_FIELDS if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def merge(self, update: DraftUpdate) -> "ProposalDraft":
        return self.model_copy(update=update.model_dump(exclude_none=True))


class ProposalCard(BaseModel):
    """Proposal plus the labels a list view shows next to it."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    proposal: Proposal
    age_label: str
    support_percentage: float

    @classmethod
    def from_proposal(cls, proposal: Proposal, now_ms: Optional[int] = None) -> "ProposalCard":
        return cls(
            proposal=proposal,
            age_label=format_time_ago(proposal.timestamp, now_ms),
            support_percentage=support_percentage(proposal),
        )
