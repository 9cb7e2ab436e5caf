"""Prompt builders for proposal analysis and governance recommendations."""
from typing import Iterable

from governance_agent.models.proposal import Proposal, VotingStats
from governance_agent.views.formatting import support_percentage

ANALYSIS_SYSTEM_PROMPT = """You are a governance analyst for a decentralized autonomous organization (DAO).

Analyze the proposal you are given for the DAO's members. Structure the answer as:

**Benefits:**
- ...

**Risks:**
- ...

**Recommendations:**
- ...

Keep each list to at most five short bullet points. Base the analysis only on the
proposal text and the current vote tally."""

RECOMMENDATIONS_SYSTEM_PROMPT = """You are a governance advisor for a decentralized autonomous organization (DAO).

Review all open proposals and the voting statistics, then advise the community. Structure the answer as:

**Priority Items:**
1. ...

**Strategic Insights:**
- ...

**Action Items:**
- ...

Point out proposals with strong support that could be fast-tracked and contested
proposals that need more discussion."""


def describe_proposal(proposal: Proposal) -> str:
    return (
        f"Proposal {proposal.id}: {proposal.title}\n"
        f"Proposer: {proposal.proposer}\n"
        f"Status: {proposal.status.value}\n"
        f"Description: {proposal.description}\n"
        f"Votes: {proposal.votes_for} for, {proposal.votes_against} against "
        f"({support_percentage(proposal)}% support)"
    )


def build_analysis_messages(proposal: Proposal) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
        {"role": "user", "content": describe_proposal(proposal)},
    ]


def build_recommendation_messages(
    proposals: Iterable[Proposal],
    stats: VotingStats,
) -> list[dict[str, str]]:
    proposals = list(proposals)
    lines = [
        f"Total proposals: {stats.total_proposals}",
        f"Active proposals: {stats.active_proposals}",
        f"Total votes cast: {stats.total_votes}",
        "",
    ]
    if proposals:
        lines.extend(describe_proposal(p) + "\n" for p in proposals)
    else:
        lines.append("There are no proposals yet.")

    return [
        {"role": "system", "content": RECOMMENDATIONS_SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join(lines)},
    ]
